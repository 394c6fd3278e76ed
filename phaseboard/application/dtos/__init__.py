"""Application DTOs (no ORM dependency)."""

from phaseboard.application.dtos.bulk import (
    BulkOperation,
    BulkOutcome,
    Delete,
    Duplicate,
    MarkDone,
    MoveToPhase,
    SetField,
)
from phaseboard.application.dtos.task import (
    AdvanceResult,
    AuditEntry,
    ColumnValues,
    OutcomeKind,
    PhaseEntered,
    TaskColumn,
    UpdateOutcome,
)

__all__ = [
    "AdvanceResult",
    "AuditEntry",
    "BulkOperation",
    "BulkOutcome",
    "ColumnValues",
    "Delete",
    "Duplicate",
    "MarkDone",
    "MoveToPhase",
    "OutcomeKind",
    "PhaseEntered",
    "SetField",
    "TaskColumn",
    "UpdateOutcome",
]
