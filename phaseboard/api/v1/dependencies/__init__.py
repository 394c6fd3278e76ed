"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
"""

from ._composition import TaskServices, build_task_services
from .actor import get_actor
from .tasks import get_task_services

__all__ = [
    "TaskServices",
    "build_task_services",
    "get_actor",
    "get_task_services",
]
