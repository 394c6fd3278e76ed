"""Domain exceptions for phaseboard.

Defines domain-level exceptions that represent business rule violations and
collaborator failures. These exceptions are independent of infrastructure
concerns. The task pipelines turn the routine ones (validation, status lock,
persistence, phase advance) into structured outcomes; the presentation layer
maps anything that escapes to HTTP responses in exception handlers.
"""

from typing import Any


class PhaseboardException(Exception):
    """Base exception for all phaseboard errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, task_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PhaseboardException):
    """Raised when a proposed change violates a field or cross-field constraint."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class StatusLockException(PhaseboardException):
    """Raised when a non-admin actor tries to move a task out of 'done'."""

    def __init__(self, task_id: str, requested_status: str) -> None:
        super().__init__(
            "Task is done; only an admin can change its status",
            "STATUS_LOCKED",
            {"task_id": task_id, "requested_status": requested_status},
        )


class AuthorizationException(PhaseboardException):
    """Raised when the actor lacks the tier required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'column').
            action: Optional action that was attempted (e.g. 'delete', 'edit').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PhaseboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'board').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class PersistenceException(PhaseboardException):
    """Raised by persistence adapters when a write or read fails."""

    def __init__(self, operation: str, cause: str, task_id: str | None = None) -> None:
        """Initialize with the failing operation and its cause.

        Args:
            operation: Persistence operation name (e.g. 'update_task').
            cause: Underlying error description.
            task_id: Optional task the operation targeted.
        """
        details: dict[str, Any] = {"operation": operation, "cause": cause}
        if task_id:
            details["task_id"] = task_id
        super().__init__(f"{operation} failed: {cause}", "PERSISTENCE_ERROR", details)


class PhaseAdvanceException(PhaseboardException):
    """Raised by the advance-phase adapter when the call itself fails (network, SQL)."""

    def __init__(self, task_id: str, cause: str) -> None:
        super().__init__(
            f"Could not advance task {task_id}: {cause}",
            "PHASE_ADVANCE_ERROR",
            {"task_id": task_id, "cause": cause},
        )
