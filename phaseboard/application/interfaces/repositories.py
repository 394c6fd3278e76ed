"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
Implementations raise PersistenceException on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from phaseboard.application.dtos.task import AuditEntry, ColumnValues
    from phaseboard.domain.entities.task import Person, TaskEntity
    from phaseboard.domain.phases import Phase


# Task persistence interface
class ITaskPersistence(Protocol):
    """Protocol for task storage used by the update and bulk pipelines (DIP)."""

    async def get_task(self, task_id: str) -> TaskEntity | None:
        """Return the task with its role assignments, people and viewers, or None."""

    async def update_task(self, task_id: str, values: ColumnValues) -> None:
        """Write the given columns on one task."""

    async def batch_update_tasks(self, task_ids: list[str], values: ColumnValues) -> None:
        """Write the same columns on many tasks in one statement."""

    async def replace_task_people(self, task_id: str, person_ids: list[str]) -> None:
        """Replace the task's people list (delete all, insert given ids)."""

    async def insert_audit_record(self, entry: AuditEntry) -> None:
        """Append one activity log record."""

    async def insert_viewer(self, task_id: str, person_id: str) -> None:
        """Grant a person visibility on a private task."""

    async def list_viewers(self, task_id: str) -> list[str]:
        """Return person ids of the task's viewers."""

    async def delete_viewers(self, task_id: str) -> list[str]:
        """Remove every viewer of the task; return the removed person ids."""

    async def duplicate_task(self, task_id: str) -> str:
        """Copy a task into the same group as '<name> (Copy)'; return the new id."""

    async def delete_task(self, task_id: str) -> None:
        """Delete a task and its dependent rows."""

    async def move_task_to_phase(self, task_id: str, phase: Phase, actor_id: str | None) -> str:
        """Move the task onto the phase board of its branch; return the new board name."""


# Team member lookup interface
class IPersonLookup(Protocol):
    """Protocol for classifying team members (internal staff vs. guest)."""

    async def is_guest(self, person_id: str) -> bool:
        """Return True if the person is an external collaborator."""


# Phase assignment policy interface (phase automations registry)
class IPhaseAssignmentPolicy(Protocol):
    """Protocol for choosing who takes a task when it enters a phase."""

    async def assignee_for(self, task: TaskEntity, phase: Phase) -> Person | None:
        """Return the configured assignee for phase, or None when nobody is configured."""
