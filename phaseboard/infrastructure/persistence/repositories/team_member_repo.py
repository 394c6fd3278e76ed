"""Team member lookups: guest classification and Person mapping."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.domain.entities.task import Person
from phaseboard.infrastructure.persistence.models.team_member import TeamMember
from phaseboard.infrastructure.persistence.repositories.base import SessionScopedRepository
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def is_guest_email(email: str | None, internal_email_domain: str) -> bool:
    """Return True unless email belongs to the internal domain (case-insensitive)."""
    if not email:
        return True
    return not email.strip().lower().endswith(internal_email_domain.lower())


def to_person(member: TeamMember, internal_email_domain: str) -> Person:
    """Map TeamMember ORM to Person."""
    return Person(
        id=member.id,
        name=member.name,
        is_guest=is_guest_email(member.email, internal_email_domain),
    )


async def load_people(
    session: AsyncSession, member_ids: Iterable[str], internal_email_domain: str
) -> dict[str, Person]:
    """Load Persons for member_ids in one query; unknown ids are omitted."""
    ids = {member_id for member_id in member_ids if member_id}
    if not ids:
        return {}
    result = await session.execute(select(TeamMember).where(TeamMember.id.in_(ids)))
    return {
        member.id: to_person(member, internal_email_domain)
        for member in result.scalars().all()
    }


class SqlPersonLookup(SessionScopedRepository):
    """Person lookup backed by team_members. Implements IPersonLookup."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        internal_email_domain: str,
    ) -> None:
        super().__init__(session_factory)
        self.internal_email_domain = internal_email_domain

    async def is_guest(self, person_id: str) -> bool:
        """Return True if the member's email is outside the internal domain.

        Unknown members are reported as not guests (there is nobody to expose).
        """
        async with self._transaction("is_guest") as session:
            member = await session.get(TeamMember, person_id)
        if member is None:
            logger.warning("Guest lookup for unknown team member %s", person_id)
            return False
        return is_guest_email(member.email, self.internal_email_domain)
