"""Persistence repositories. Re-exports for dependency injection."""

from phaseboard.infrastructure.persistence.repositories.base import SessionScopedRepository
from phaseboard.infrastructure.persistence.repositories.phase_automation_repo import (
    SqlPhaseAssignmentPolicy,
)
from phaseboard.infrastructure.persistence.repositories.task_repo import SqlTaskPersistence
from phaseboard.infrastructure.persistence.repositories.team_member_repo import (
    SqlPersonLookup,
    is_guest_email,
)

__all__ = [
    "SessionScopedRepository",
    "SqlPersonLookup",
    "SqlPhaseAssignmentPolicy",
    "SqlTaskPersistence",
    "is_guest_email",
]
