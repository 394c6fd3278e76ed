"""Domain value objects and shared value types."""

from phaseboard.domain.value_objects.core import (
    CLEARED,
    UNCHANGED,
    ActorContext,
    FieldChange,
    SetTo,
    TaskChanges,
)

__all__ = [
    "ActorContext",
    "CLEARED",
    "FieldChange",
    "SetTo",
    "TaskChanges",
    "UNCHANGED",
]
