"""Activity log, notification and phase automation ORM models."""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from phaseboard.infrastructure.persistence.database import Base
from phaseboard.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    WorkspaceModel,
)


class ActivityLog(CuidMixin, CreatedAtMixin, Base):
    """Append-only task activity record. Table: activity_log."""

    __tablename__ = "activity_log"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    field: Mapped[str | None] = mapped_column(String(64), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("team_members.id", ondelete="SET NULL"), nullable=True
    )


class Notification(CuidMixin, CreatedAtMixin, Base):
    """In-app notification shown in the recipient's inbox. Table: notifications."""

    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    task_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True
    )
    triggered_by_id: Mapped[str | None] = mapped_column(String, nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "is_read"),)


class PhaseAutomation(WorkspaceModel, Base):
    """Team member auto-assigned when a task enters a phase. Table: phase_automations.

    phase stores the normalized phase key (see normalize_phase_key).
    """

    __tablename__ = "phase_automations"

    phase: Mapped[str] = mapped_column(String(64), nullable=False)
    team_member_id: Mapped[str] = mapped_column(
        String, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("workspace_id", "phase", "team_member_id", name="uq_phase_automation"),
    )
