"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from phaseboard.domain.entities.task import Person, TaskEntity

__all__ = [
    "Person",
    "TaskEntity",
]
