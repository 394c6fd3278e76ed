"""Persistence models: ORM entities and mixins."""

from phaseboard.infrastructure.persistence.models.activity import (
    ActivityLog,
    Notification,
    PhaseAutomation,
)
from phaseboard.infrastructure.persistence.models.board import Board, TaskGroup, Workspace
from phaseboard.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
    TimestampMixin,
    WorkspaceMixin,
    WorkspaceModel,
)
from phaseboard.infrastructure.persistence.models.task import Task, TaskPerson, TaskViewer
from phaseboard.infrastructure.persistence.models.team_member import TeamMember

__all__ = [
    "ActivityLog",
    "Board",
    "CreatedAtMixin",
    "CuidMixin",
    "EntityModel",
    "Notification",
    "PhaseAutomation",
    "Task",
    "TaskGroup",
    "TaskPerson",
    "TaskViewer",
    "TeamMember",
    "TimestampMixin",
    "Workspace",
    "WorkspaceMixin",
    "WorkspaceModel",
]
