"""Task persistence backed by SQLAlchemy. Implements ITaskPersistence."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.application.dtos.task import AuditEntry, ColumnValues, TaskColumn
from phaseboard.application.services.field_mapping import role_column
from phaseboard.domain.entities.task import Person, TaskEntity
from phaseboard.domain.enums import AuditRecordType, RoleField, TaskStatus
from phaseboard.domain.exceptions import PersistenceException
from phaseboard.domain.phases import Phase, board_matches_phase, branch_prefix_for_board_name
from phaseboard.infrastructure.persistence.models.activity import ActivityLog
from phaseboard.infrastructure.persistence.models.board import Board, TaskGroup
from phaseboard.infrastructure.persistence.models.task import Task, TaskPerson, TaskViewer
from phaseboard.infrastructure.persistence.repositories.base import SessionScopedRepository
from phaseboard.infrastructure.persistence.repositories.team_member_repo import load_people
from phaseboard.shared.telemetry.logging import get_logger
from phaseboard.shared.utils.datetime import ensure_utc, utc_today

logger = get_logger(__name__)

COPY_SUFFIX = " (Copy)"

# Task attributes held in TaskEntity.metadata rather than typed fields.
_METADATA_COLUMNS: tuple[TaskColumn, ...] = (
    TaskColumn.PHASE_DUE_DATE,
    TaskColumn.ENTREGA_MIAMI_START,
    TaskColumn.ENTREGA_MIX_RETAKES,
    TaskColumn.ENTREGA_SESIONES,
    TaskColumn.BRANCH,
    TaskColumn.CLIENT_NAME,
    TaskColumn.WORK_ORDER_NUMBER,
    TaskColumn.CANTIDAD_EPISODIOS,
    TaskColumn.LOCKED_RUNTIME,
    TaskColumn.FINAL_RUNTIME,
    TaskColumn.AOR_NEEDED,
    TaskColumn.AOR_COMPLETE,
    TaskColumn.STUDIO,
    TaskColumn.PREMIX_RETAKE_LIST,
    TaskColumn.MIX_RETAKE_LIST,
    TaskColumn.DELIVERY_COMMENT,
)

# Copied verbatim by duplicate_task; id and timestamps are regenerated.
_NOT_COPIED = frozenset({"id", "created_at", "updated_at"})


def _column_values(values: ColumnValues) -> dict[str, Any]:
    return {column.value: value for column, value in values.items()}


def _audit_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, date | datetime):
        return value.isoformat()
    return str(value)


def _to_entity(
    t: Task,
    board_name: str,
    people_by_id: dict[str, Person],
    people_ids: list[str],
    viewer_ids: list[str],
) -> TaskEntity:
    """Map Task ORM (plus loaded relations) to TaskEntity."""
    roles: dict[RoleField, Person] = {}
    for role_field in RoleField:
        member_id = getattr(t, role_column(role_field).value)
        if member_id and member_id in people_by_id:
            roles[role_field] = people_by_id[member_id]
    return TaskEntity(
        id=t.id,
        name=t.name,
        group_id=t.group_id,
        board_name=board_name,
        status=t.status,
        fase=t.fase,
        started_at=ensure_utc(t.started_at),
        completed_at=ensure_utc(t.completed_at),
        date_delivered=t.date_delivered,
        roles=roles,
        people=[people_by_id[pid] for pid in people_ids if pid in people_by_id],
        is_private=t.is_private,
        viewer_ids=set(viewer_ids),
        date_assigned=t.date_assigned,
        guest_due_date=t.guest_due_date,
        miami_due_date=t.entrega_miami_end,
        client_due_date=t.entrega_cliente,
        prueba_de_voz=t.prueba_de_voz,
        metadata={column.value: getattr(t, column.value) for column in _METADATA_COLUMNS},
    )


class SqlTaskPersistence(SessionScopedRepository):
    """Task repository. Implements ITaskPersistence."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        internal_email_domain: str,
    ) -> None:
        super().__init__(session_factory)
        self.internal_email_domain = internal_email_domain

    async def get_task(self, task_id: str) -> TaskEntity | None:
        """Return the task with roles, people and viewers, or None if not found."""
        async with self._transaction("get_task", task_id) as session:
            row = (
                await session.execute(
                    select(Task, Board.name)
                    .join(TaskGroup, TaskGroup.id == Task.group_id)
                    .join(Board, Board.id == TaskGroup.board_id)
                    .where(Task.id == task_id)
                )
            ).one_or_none()
            if row is None:
                return None
            task, board_name = row
            people_ids = list(
                (
                    await session.execute(
                        select(TaskPerson.team_member_id)
                        .where(TaskPerson.task_id == task_id)
                        .order_by(TaskPerson.created_at)
                    )
                ).scalars()
            )
            viewer_ids = list(
                (
                    await session.execute(
                        select(TaskViewer.team_member_id).where(TaskViewer.task_id == task_id)
                    )
                ).scalars()
            )
            role_ids = [getattr(task, role_column(r).value) for r in RoleField]
            people_by_id = await load_people(
                session, [*people_ids, *role_ids], self.internal_email_domain
            )
            return _to_entity(task, board_name, people_by_id, people_ids, viewer_ids)

    async def update_task(self, task_id: str, values: ColumnValues) -> None:
        """Write columns on one task. Raises PersistenceException if the task is missing."""
        if not values:
            return
        async with self._transaction("update_task", task_id) as session:
            result = await session.execute(
                update(Task).where(Task.id == task_id).values(**_column_values(values))
            )
            if result.rowcount == 0:
                raise PersistenceException("update_task", "task not found", task_id)

    async def batch_update_tasks(self, task_ids: list[str], values: ColumnValues) -> None:
        """Write the same columns on all task_ids in one statement."""
        if not task_ids or not values:
            return
        async with self._transaction("batch_update_tasks") as session:
            await session.execute(
                update(Task).where(Task.id.in_(task_ids)).values(**_column_values(values))
            )

    async def replace_task_people(self, task_id: str, person_ids: list[str]) -> None:
        async with self._transaction("replace_task_people", task_id) as session:
            await session.execute(delete(TaskPerson).where(TaskPerson.task_id == task_id))
            for person_id in dict.fromkeys(person_ids):
                session.add(TaskPerson(task_id=task_id, team_member_id=person_id))

    async def insert_audit_record(self, entry: AuditEntry) -> None:
        async with self._transaction("insert_audit_record", entry.task_id) as session:
            session.add(
                ActivityLog(
                    task_id=entry.task_id,
                    type=entry.record_type.value,
                    field=entry.field,
                    old_value=_audit_text(entry.old_value),
                    new_value=_audit_text(entry.new_value),
                    user_id=entry.actor_id,
                )
            )

    async def insert_viewer(self, task_id: str, person_id: str) -> None:
        """Add a viewer; an existing viewer row is left as is."""
        async with self._transaction("insert_viewer", task_id) as session:
            existing = await session.scalar(
                select(TaskViewer.id).where(
                    TaskViewer.task_id == task_id, TaskViewer.team_member_id == person_id
                )
            )
            if existing is None:
                session.add(TaskViewer(task_id=task_id, team_member_id=person_id))

    async def list_viewers(self, task_id: str) -> list[str]:
        async with self._transaction("list_viewers", task_id) as session:
            result = await session.execute(
                select(TaskViewer.team_member_id).where(TaskViewer.task_id == task_id)
            )
            return list(result.scalars())

    async def delete_viewers(self, task_id: str) -> list[str]:
        async with self._transaction("delete_viewers", task_id) as session:
            result = await session.execute(
                select(TaskViewer.team_member_id).where(TaskViewer.task_id == task_id)
            )
            removed = list(result.scalars())
            await session.execute(delete(TaskViewer).where(TaskViewer.task_id == task_id))
            return removed

    async def duplicate_task(self, task_id: str) -> str:
        """Copy the task row into the same group; the copy is named '<name> (Copy)'."""
        async with self._transaction("duplicate_task", task_id) as session:
            source = await session.get(Task, task_id)
            if source is None:
                raise PersistenceException("duplicate_task", "task not found", task_id)
            data = {
                column.key: getattr(source, column.key)
                for column in Task.__table__.columns
                if column.key not in _NOT_COPIED
            }
            data["name"] = f"{source.name}{COPY_SUFFIX}"
            copy = Task(**data)
            session.add(copy)
            await session.flush()
            logger.debug("Duplicated task %s as %s", task_id, copy.id)
            return copy.id

    async def delete_task(self, task_id: str) -> None:
        """Delete the task with its people, viewers and activity rows."""
        async with self._transaction("delete_task", task_id) as session:
            for dependent in (TaskPerson, TaskViewer, ActivityLog):
                await session.execute(delete(dependent).where(dependent.task_id == task_id))
            result = await session.execute(delete(Task).where(Task.id == task_id))
            if result.rowcount == 0:
                raise PersistenceException("delete_task", "task not found", task_id)

    async def move_task_to_phase(self, task_id: str, phase: Phase, actor_id: str | None) -> str:
        """Move the task onto the first group of its branch's board for phase.

        The target board shares the source board's branch prefix and is not an
        HQ board; an empty board gets a default 'Tasks' group. date_delivered is
        stamped on the way out, then reset together with status and fase for
        the new board, and a phase_change activity is recorded.

        Returns:
            Name of the board the task now lives on.
        """
        async with self._transaction("move_task_to_phase", task_id) as session:
            row = (
                await session.execute(
                    select(Board)
                    .join(TaskGroup, TaskGroup.board_id == Board.id)
                    .join(Task, Task.group_id == TaskGroup.id)
                    .where(Task.id == task_id)
                )
            ).scalar_one_or_none()
            if row is None:
                raise PersistenceException("move_task_to_phase", "task not found", task_id)
            source_board: Board = row

            prefix = branch_prefix_for_board_name(source_board.name)
            candidates = (
                await session.execute(
                    select(Board)
                    .where(
                        Board.workspace_id == source_board.workspace_id,
                        Board.is_hq.is_(False),
                    )
                    .order_by(Board.name)
                )
            ).scalars()
            target = next(
                (b for b in candidates if board_matches_phase(b.name, phase, prefix)), None
            )
            if target is None:
                raise PersistenceException(
                    "move_task_to_phase", f"Board not found for phase: {phase.label}", task_id
                )

            group_id = await session.scalar(
                select(TaskGroup.id)
                .where(TaskGroup.board_id == target.id)
                .order_by(TaskGroup.sort_order)
                .limit(1)
            )
            if group_id is None:
                group = TaskGroup(board_id=target.id)
                session.add(group)
                await session.flush()
                group_id = group.id

            today = utc_today()
            await session.execute(
                update(Task)
                .where(Task.id == task_id)
                .values(
                    group_id=group_id,
                    status=TaskStatus.NOT_STARTED.value,
                    fase=phase.label,
                    date_assigned=today,
                    date_delivered=None,
                )
            )
            session.add(
                ActivityLog(
                    task_id=task_id,
                    type=AuditRecordType.PHASE_CHANGE.value,
                    field="fase",
                    old_value=source_board.name,
                    new_value=phase.label,
                    user_id=actor_id,
                )
            )
            logger.info("Moved task %s from %s to %s", task_id, source_board.name, target.name)
            return target.name
