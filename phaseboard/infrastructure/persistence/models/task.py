"""Task ORM model and its people/viewer association tables.

Column names match TaskColumn values; the repository writes column maps
straight through.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from phaseboard.infrastructure.persistence.database import Base
from phaseboard.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
)


def _member_fk() -> Mapped[str | None]:
    return mapped_column(
        String, ForeignKey("team_members.id", ondelete="SET NULL"), nullable=True
    )


class Task(EntityModel, Base):
    """Work order on a phase board. Table: tasks."""

    __tablename__ = "tasks"

    group_id: Mapped[str] = mapped_column(
        String, ForeignKey("task_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(
        String(64), nullable=False, default="not_started", server_default="not_started"
    )
    fase: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    project_manager_id: Mapped[str | None] = _member_fk()
    director_id: Mapped[str | None] = _member_fk()
    tecnico_id: Mapped[str | None] = _member_fk()
    qc_1_id: Mapped[str | None] = _member_fk()
    qc_retakes_id: Mapped[str | None] = _member_fk()
    mixer_bogota_id: Mapped[str | None] = _member_fk()
    mixer_miami_id: Mapped[str | None] = _member_fk()
    qc_mix_id: Mapped[str | None] = _member_fk()
    traductor_id: Mapped[str | None] = _member_fk()
    adaptador_id: Mapped[str | None] = _member_fk()

    date_assigned: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_delivered: Mapped[date | None] = mapped_column(Date, nullable=True)
    guest_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phase_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    entrega_miami_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    entrega_miami_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    entrega_cliente: Mapped[date | None] = mapped_column(Date, nullable=True)
    entrega_mix_retakes: Mapped[date | None] = mapped_column(Date, nullable=True)
    entrega_sesiones: Mapped[date | None] = mapped_column(Date, nullable=True)

    branch: Mapped[str | None] = mapped_column(String(64), nullable=True)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    work_order_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    cantidad_episodios: Mapped[int | None] = mapped_column(Integer, nullable=True)
    locked_runtime: Mapped[str | None] = mapped_column(String(32), nullable=True)
    final_runtime: Mapped[str | None] = mapped_column(String(32), nullable=True)
    prueba_de_voz: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    aor_needed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    aor_complete: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    studio: Mapped[str | None] = mapped_column(String(255), nullable=True)
    premix_retake_list: Mapped[str | None] = mapped_column(Text, nullable=True)
    mix_retake_list: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_tasks_group_status", "group_id", "status"),)


class TaskPerson(CuidMixin, CreatedAtMixin, Base):
    """Many-to-many task people (no role semantics). Table: task_people."""

    __tablename__ = "task_people"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    team_member_id: Mapped[str] = mapped_column(
        String, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("task_id", "team_member_id", name="uq_task_people"),)


class TaskViewer(CuidMixin, CreatedAtMixin, Base):
    """Person granted visibility on a private task. Table: task_viewers."""

    __tablename__ = "task_viewers"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    team_member_id: Mapped[str] = mapped_column(
        String, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("task_id", "team_member_id", name="uq_task_viewers"),)
