"""Domain value objects for phaseboard.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from phaseboard.domain.enums import MemberTier, TaskField

if TYPE_CHECKING:
    from phaseboard.domain.entities.task import TaskEntity

T = TypeVar("T")


@dataclass(frozen=True)
class ActorContext:
    """Who is acting on a request: identity plus membership tier.

    Passed explicitly into every policy and coordinator call. Whether the actor
    is a task's project manager is derived from the task, not stored here.
    """

    person_id: str
    tier: MemberTier

    def __post_init__(self) -> None:
        if not self.person_id:
            raise ValueError("Actor person_id must be a non-empty string")

    @property
    def is_guest(self) -> bool:
        return self.tier is MemberTier.GUEST

    @property
    def is_admin_or_above(self) -> bool:
        return self.tier in (MemberTier.GOD, MemberTier.ADMIN)

    def is_project_manager_of(self, task: TaskEntity) -> bool:
        """Return whether this actor is the task's assigned project manager."""
        pm = task.project_manager
        return pm is not None and pm.id == self.person_id


class _ChangeMarker(Enum):
    UNCHANGED = "unchanged"
    CLEARED = "cleared"

    def __repr__(self) -> str:
        return self.name


UNCHANGED = _ChangeMarker.UNCHANGED
CLEARED = _ChangeMarker.CLEARED


@dataclass(frozen=True)
class SetTo(Generic[T]):
    """A field change that assigns a concrete value."""

    value: T


FieldChange = _ChangeMarker | SetTo[Any]


class TaskChanges:
    """Proposed partial update to a task: one tri-state change per TaskField.

    Fields not mentioned are UNCHANGED. A field is either set to a value
    (SetTo) or explicitly CLEARED; there is no ambiguity between "absent" and
    "null".
    """

    def __init__(self, changes: Mapping[TaskField, FieldChange] | None = None) -> None:
        self._changes: dict[TaskField, FieldChange] = {
            task_field: change
            for task_field, change in (changes or {}).items()
            if change is not UNCHANGED
        }

    @classmethod
    def from_values(cls, values: Mapping[TaskField, Any]) -> TaskChanges:
        """Build changes from plain values: None means CLEARED, anything else SetTo."""
        return cls(
            {
                task_field: CLEARED if value is None else SetTo(value)
                for task_field, value in values.items()
            }
        )

    def get(self, task_field: TaskField) -> FieldChange:
        return self._changes.get(task_field, UNCHANGED)

    def is_changed(self, task_field: TaskField) -> bool:
        return task_field in self._changes

    def is_set(self, task_field: TaskField) -> bool:
        return isinstance(self._changes.get(task_field), SetTo)

    def new_value(self, task_field: TaskField) -> Any:
        """Return the proposed value (None when CLEARED).

        Raises:
            KeyError: If the field is UNCHANGED.
        """
        change = self._changes[task_field]
        return change.value if isinstance(change, SetTo) else None

    def effective(self, task_field: TaskField, current: Any) -> Any:
        """Return the value the field will have after this change is applied."""
        if not self.is_changed(task_field):
            return current
        return self.new_value(task_field)

    def __iter__(self) -> Iterator[TaskField]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __bool__(self) -> bool:
        return bool(self._changes)

    def __repr__(self) -> str:
        return f"TaskChanges({self._changes!r})"
