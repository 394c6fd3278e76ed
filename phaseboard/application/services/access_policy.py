"""Column-level edit authorization for tasks.

Rules are evaluated in order on every call; nothing is cached because the
task's phase, its project manager and the actor can all change independently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from phaseboard.domain.exceptions import AuthorizationException
from phaseboard.domain.phases import is_initial_phase

if TYPE_CHECKING:
    from phaseboard.domain.entities.task import TaskEntity
    from phaseboard.domain.value_objects import ActorContext

# Columns a team member (not the PM) may still edit once a task has left kickoff.
# Entries are TaskField values.
POST_KICKOFF_EDITABLE_COLUMNS: frozenset[str] = frozenset(
    {
        "status",
        "people",
        "phaseDueDate",
        "dateAssigned",
        "dateDelivered",
        "premixRetakeList",
        "mixRetakeList",
        "aorComplete",
        "finalRuntime",
        "studio",
        "traductor",
        "adaptador",
        "mixerBogota",
        "qc1",
        "qcRetakes",
        "mixerMiami",
        "qcMix",
    }
)


class AccessPolicy:
    """Decides whether an actor may edit a column on a task."""

    def __init__(self, editable_columns: frozenset[str] | None = None) -> None:
        self.editable_columns = (
            editable_columns if editable_columns is not None else POST_KICKOFF_EDITABLE_COLUMNS
        )

    def can_edit(self, column_id: str, task: TaskEntity, actor: ActorContext) -> bool:
        """Return True if actor may edit column_id on task.

        1. Guests never edit.
        2. God/admin edit everything.
        3. While the task is in its initial phases anyone else may edit.
        4. The task's project manager keeps full rights.
        5. Otherwise only the post-kickoff allow-list is editable.
        """
        if actor.is_guest:
            return False
        if actor.is_admin_or_above:
            return True
        if is_initial_phase(task.fase):
            return True
        if actor.is_project_manager_of(task):
            return True
        return column_id in self.editable_columns

    def can_edit_tasks(self, actor: ActorContext) -> bool:
        return not actor.is_guest

    def can_delete_tasks(self, actor: ActorContext) -> bool:
        return actor.is_admin_or_above

    def require_bulk_permission(self, operation_name: str, actor: ActorContext) -> None:
        """Raise AuthorizationException if actor may not run the bulk operation."""
        if not self.can_edit_tasks(actor):
            raise AuthorizationException(resource="task", action=operation_name)
        if operation_name == "delete" and not self.can_delete_tasks(actor):
            raise AuthorizationException(resource="task", action=operation_name)
