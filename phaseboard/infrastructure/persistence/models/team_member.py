"""Team member ORM model. Table: team_members."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from phaseboard.infrastructure.persistence.database import Base
from phaseboard.infrastructure.persistence.models.mixins import EntityModel


class TeamMember(EntityModel, Base):
    """Staff member or external collaborator.

    role holds the stored role name (god, admin, team_member, guest, or a
    legacy value); see MemberTier.from_stored_role.
    """

    __tablename__ = "team_members"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    initials: Mapped[str | None] = mapped_column(String(8), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
