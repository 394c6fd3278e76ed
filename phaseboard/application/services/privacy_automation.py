"""Guest-viewer exposure and the make-public cleanup for private tasks.

A private task is only visible to internal staff and its explicit viewers.
Assigning a guest to a role on such a task grants them viewer access and
starts their due-date clock; turning privacy off revokes every viewer and
the role bindings that only made sense for them.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from phaseboard.application.dtos.task import ColumnValues, TaskColumn
from phaseboard.application.services.field_mapping import role_column
from phaseboard.shared.telemetry.logging import get_logger
from phaseboard.shared.utils.business_calendar import next_business_day
from phaseboard.shared.utils.datetime import utc_today

if TYPE_CHECKING:
    from phaseboard.application.interfaces.repositories import (
        IPersonLookup,
        ITaskPersistence,
    )
    from phaseboard.application.interfaces.services import INotificationService
    from phaseboard.domain.entities.task import Person, TaskEntity
    from phaseboard.domain.enums import RoleField

logger = get_logger(__name__)

GUEST_DUE_OFFSET_DAYS = 1


class PrivacyAutomation:
    """Applies viewer and due-date side effects of role assignment on private tasks."""

    def __init__(
        self,
        persistence: ITaskPersistence,
        person_lookup: IPersonLookup,
        notifications: INotificationService,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.persistence = persistence
        self.person_lookup = person_lookup
        self.notifications = notifications
        self.today = today
        self._pending_notifications: set[asyncio.Task[None]] = set()

    async def maybe_expose_guest_viewer(
        self,
        task: TaskEntity,
        person: Person,
        *,
        becoming_private: bool = False,
    ) -> bool:
        """Grant a newly assigned guest viewer access on a private task.

        Acts only when the task is private (or being made private in the same
        update) and the person is a guest. Idempotent: an existing viewer is
        left alone and no second row, date stamp or notification is produced.

        Args:
            task: Task as loaded before the current update.
            person: The person just assigned to a role.
            becoming_private: True if the current update sets is_private.

        Returns:
            True if the person was added as a viewer.

        Raises:
            PersistenceException: If a viewer or date write fails.
        """
        if not (task.is_private or becoming_private):
            return False
        if not await self.person_lookup.is_guest(person.id):
            return False

        viewers = await self.persistence.list_viewers(task.id)
        if person.id in viewers:
            logger.debug("Person %s already views task %s", person.id, task.id)
            return False

        await self.persistence.insert_viewer(task.id, person.id)
        today = self.today()
        due = next_business_day(today, GUEST_DUE_OFFSET_DAYS)
        await self.persistence.update_task(
            task.id,
            {TaskColumn.DATE_ASSIGNED: today, TaskColumn.GUEST_DUE_DATE: due},
        )
        task.viewer_ids.add(person.id)
        task.date_assigned = today
        task.guest_due_date = due
        logger.info(
            "Exposed task %s to guest %s (due %s)", task.id, person.id, due.isoformat()
        )

        self._dispatch_notification(
            person.id, task.id, f"You have been assigned to {task.name}, due {due.isoformat()}"
        )
        return True

    async def make_task_public(self, task: TaskEntity) -> set[RoleField]:
        """Drop all viewers and clear role fields held by them; persist is_private=False.

        Returns:
            The role fields that were cleared.

        Raises:
            PersistenceException: If a write fails.
        """
        removed = set(await self.persistence.delete_viewers(task.id))
        former_viewers = removed | task.viewer_ids
        cleared = {
            role_field
            for role_field, person in task.roles.items()
            if person.id in former_viewers
        }
        values: ColumnValues = {TaskColumn.IS_PRIVATE: False}
        for role_field in cleared:
            values[role_column(role_field)] = None
        await self.persistence.update_task(task.id, values)

        task.is_private = False
        task.viewer_ids.clear()
        for role_field in cleared:
            task.roles.pop(role_field, None)
        logger.info(
            "Task %s made public; removed %d viewers, cleared roles %s",
            task.id,
            len(former_viewers),
            sorted(r.value for r in cleared),
        )
        return cleared

    def _dispatch_notification(self, person_id: str, task_id: str, message: str) -> None:
        """Send the assignment notice in the background; failures are logged only."""
        notice = asyncio.create_task(self._notify(person_id, task_id, message))
        self._pending_notifications.add(notice)
        notice.add_done_callback(self._pending_notifications.discard)

    async def _notify(self, person_id: str, task_id: str, message: str) -> None:
        try:
            await self.notifications.notify_assignment(person_id, task_id, message)
        except Exception:
            logger.exception(
                "Assignment notification failed (person=%s, task=%s)", person_id, task_id
            )

    async def drain_notifications(self) -> None:
        """Wait for in-flight assignment notices (used at shutdown and in tests)."""
        if self._pending_notifications:
            await asyncio.gather(*self._pending_notifications)
