"""DTOs for bulk task operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from phaseboard.domain.enums import TaskField
from phaseboard.domain.phases import Phase


@dataclass(frozen=True)
class Duplicate:
    name: ClassVar[str] = "duplicate"


@dataclass(frozen=True)
class Delete:
    name: ClassVar[str] = "delete"


@dataclass(frozen=True)
class MoveToPhase:
    """Move every selected task onto the board for phase (same branch)."""

    name: ClassVar[str] = "move_to_phase"

    phase: Phase


@dataclass(frozen=True)
class SetField:
    """Set one field on every selected task through the single-task pipeline.

    A value of None clears the field.
    """

    name: ClassVar[str] = "set_field"

    field: TaskField
    value: Any


@dataclass(frozen=True)
class MarkDone:
    name: ClassVar[str] = "mark_done"


BulkOperation = Duplicate | Delete | MoveToPhase | SetField | MarkDone


@dataclass(frozen=True)
class BulkOutcome:
    """Aggregate result of a bulk operation."""

    operation: str
    requested: int
    succeeded: int
    failed_ids: tuple[str, ...]
    message: str
    ok: bool
