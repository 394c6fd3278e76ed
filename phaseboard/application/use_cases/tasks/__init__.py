"""Task use cases: single-task update pipeline and bulk operations."""

from phaseboard.application.use_cases.tasks.bulk_operations import BulkMutationCoordinator
from phaseboard.application.use_cases.tasks.update_task import TaskMutationCoordinator

__all__ = [
    "BulkMutationCoordinator",
    "TaskMutationCoordinator",
]
