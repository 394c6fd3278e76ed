"""Workspace, board and task group ORM models.

A board is one phase of one branch ('Col-Translation'); HQ boards aggregate a
phase across branches and are never the target of a move.
"""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from phaseboard.infrastructure.persistence.database import Base
from phaseboard.infrastructure.persistence.models.mixins import EntityModel, WorkspaceModel

DEFAULT_GROUP_NAME = "Tasks"
DEFAULT_GROUP_COLOR = "hsl(209, 100%, 46%)"


class Workspace(EntityModel, Base):
    """Workspace (one show/client account). Table: workspaces."""

    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Board(WorkspaceModel, Base):
    """Phase board. Table: boards."""

    __tablename__ = "boards"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_hq: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_boards_workspace_name", "workspace_id", "name"),)


class TaskGroup(EntityModel, Base):
    """Group of tasks on a board. Table: task_groups."""

    __tablename__ = "task_groups"

    board_id: Mapped[str] = mapped_column(
        String, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_GROUP_NAME)
    color: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_GROUP_COLOR)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_collapsed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
