"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, WorkspaceMixin, TimestampMixin, CreatedAtMixin and the
combined EntityModel and WorkspaceModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from phaseboard.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class WorkspaceMixin:
    """Mixin for workspace-scoped models. Provides workspace_id FK with CASCADE delete."""

    @declared_attr
    def workspace_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("workspaces.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class CreatedAtMixin:
    """Mixin for append-only rows (server default, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class EntityModel(CuidMixin, TimestampMixin):
    """Combined mixin: CUID + created_at/updated_at."""

    __abstract__ = True


class WorkspaceModel(CuidMixin, WorkspaceMixin, TimestampMixin):
    """Combined mixin: CUID + workspace_id + created_at/updated_at."""

    __abstract__ = True
