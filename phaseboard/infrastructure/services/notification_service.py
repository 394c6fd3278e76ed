"""Assignment notifications: in-app inbox rows, or log-only when no store is wired."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.infrastructure.persistence.models.activity import Notification
from phaseboard.infrastructure.persistence.repositories.base import SessionScopedRepository
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ASSIGNMENT_NOTIFICATION_TYPE = "assignment"
ASSIGNMENT_TITLE = "New task assigned"


class InAppNotificationService(SessionScopedRepository):
    """INotificationService that writes a row to the recipient's notifications inbox."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        triggered_by_id: str | None = None,
    ) -> None:
        super().__init__(session_factory)
        self.triggered_by_id = triggered_by_id

    async def notify_assignment(self, person_id: str, task_id: str, message: str) -> None:
        """Insert an unread assignment notification for person_id."""
        async with self._transaction("notify_assignment", task_id) as session:
            session.add(
                Notification(
                    user_id=person_id,
                    type=ASSIGNMENT_NOTIFICATION_TYPE,
                    task_id=task_id,
                    triggered_by_id=self.triggered_by_id,
                    title=ASSIGNMENT_TITLE,
                    message=message,
                )
            )
        logger.info("Assignment notification queued for %s (task=%s)", person_id, task_id)


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of delivering.

    Use when no notification store is configured.
    """

    async def notify_assignment(self, person_id: str, task_id: str, message: str) -> None:
        """Log the notification; nothing is delivered."""
        logger.info(
            "Assignment notify: would notify %s about task %s (message=%r)",
            person_id,
            task_id,
            (message or "")[:80],
        )
