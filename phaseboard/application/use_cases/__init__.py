"""Application use cases: one entry point per workflow."""

from phaseboard.application.use_cases.tasks import (
    BulkMutationCoordinator,
    TaskMutationCoordinator,
)

__all__ = [
    "BulkMutationCoordinator",
    "TaskMutationCoordinator",
]
