"""Phase automations registry: per-workspace team members auto-assigned on phase entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.domain.entities.task import Person
from phaseboard.infrastructure.persistence.models.activity import PhaseAutomation
from phaseboard.infrastructure.persistence.models.board import Board, TaskGroup
from phaseboard.infrastructure.persistence.models.team_member import TeamMember
from phaseboard.infrastructure.persistence.repositories.base import SessionScopedRepository
from phaseboard.infrastructure.persistence.repositories.team_member_repo import to_person

if TYPE_CHECKING:
    from phaseboard.domain.entities.task import TaskEntity
    from phaseboard.domain.phases import Phase


class SqlPhaseAssignmentPolicy(SessionScopedRepository):
    """Picks the earliest-registered automation member. Implements IPhaseAssignmentPolicy."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        internal_email_domain: str,
    ) -> None:
        super().__init__(session_factory)
        self.internal_email_domain = internal_email_domain

    async def assignee_for(self, task: TaskEntity, phase: Phase) -> Person | None:
        """Return the first team member registered for phase in the task's workspace."""
        async with self._transaction("assignee_for", task.id) as session:
            workspace_id = await session.scalar(
                select(Board.workspace_id)
                .join(TaskGroup, TaskGroup.board_id == Board.id)
                .where(TaskGroup.id == task.group_id)
            )
            if workspace_id is None:
                return None
            member = await session.scalar(
                select(TeamMember)
                .join(PhaseAutomation, PhaseAutomation.team_member_id == TeamMember.id)
                .where(
                    PhaseAutomation.workspace_id == workspace_id,
                    PhaseAutomation.phase == phase.value,
                )
                .order_by(PhaseAutomation.created_at, PhaseAutomation.id)
                .limit(1)
            )
            if member is None:
                return None
            return to_person(member, self.internal_email_domain)

    async def register(self, workspace_id: str, phase: Phase, team_member_id: str) -> str:
        """Add a team member to the automation list for phase; return the row id."""
        async with self._transaction("register_phase_automation") as session:
            row = PhaseAutomation(
                workspace_id=workspace_id, phase=phase.value, team_member_id=team_member_id
            )
            session.add(row)
            await session.flush()
            return row.id
