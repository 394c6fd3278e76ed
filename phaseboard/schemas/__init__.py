"""Pydantic request/response schemas for the API."""

from phaseboard.schemas.health import HealthResponse
from phaseboard.schemas.task import (
    BulkOutcomeResponse,
    BulkRequest,
    ColumnPermissionResponse,
    PersonPayload,
    PhaseResponse,
    TaskUpdateRequest,
    UpdateOutcomeResponse,
)

__all__ = [
    "BulkOutcomeResponse",
    "BulkRequest",
    "ColumnPermissionResponse",
    "HealthResponse",
    "PersonPayload",
    "PhaseResponse",
    "TaskUpdateRequest",
    "UpdateOutcomeResponse",
]
