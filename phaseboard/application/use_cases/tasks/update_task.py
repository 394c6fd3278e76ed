"""Single-task update pipeline.

Steps run strictly in order for one task:
validation -> status guard -> field mapping -> privacy automation ->
people reconciliation -> persist -> phase advancement -> view invalidation.
Routine failures are returned as UpdateOutcome values, never raised.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from phaseboard.application.dtos.task import (
    AdvanceResult,
    AuditEntry,
    PhaseEntered,
    TaskColumn,
    UpdateOutcome,
)
from phaseboard.application.services.field_mapping import (
    map_changes,
    role_for_task_field,
    status_side_effects,
)
from phaseboard.domain.enums import AuditRecordType, TaskField, TaskStatus, ViewScope
from phaseboard.domain.exceptions import (
    PersistenceException,
    PhaseAdvanceException,
    StatusLockException,
    ValidationException,
)
from phaseboard.shared.telemetry.logging import get_logger
from phaseboard.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from phaseboard.application.interfaces.repositories import ITaskPersistence
    from phaseboard.application.interfaces.services import (
        IPhaseAdvancer,
        IViewInvalidator,
    )
    from phaseboard.application.services.phase_events import PhaseEventBus
    from phaseboard.application.services.privacy_automation import PrivacyAutomation
    from phaseboard.domain.entities.task import Person, TaskEntity
    from phaseboard.domain.value_objects import ActorContext, TaskChanges

logger = get_logger(__name__)


def _people_label(people: list[Person]) -> str:
    return ", ".join(person.name or person.id for person in people)


class TaskMutationCoordinator:
    """Applies a partial change to one task with guards and automations."""

    def __init__(
        self,
        persistence: ITaskPersistence,
        advancer: IPhaseAdvancer,
        privacy: PrivacyAutomation,
        phase_events: PhaseEventBus,
        invalidator: IViewInvalidator,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self.persistence = persistence
        self.advancer = advancer
        self.privacy = privacy
        self.phase_events = phase_events
        self.invalidator = invalidator
        self.now = now

    async def apply_update(
        self,
        task: TaskEntity,
        changes: TaskChanges,
        actor: ActorContext,
        *,
        invalidate: bool = True,
    ) -> UpdateOutcome:
        """Validate, persist and follow up a change to task.

        Args:
            task: Task as currently stored.
            changes: Proposed tri-state field changes.
            actor: Who is making the change.
            invalidate: Refresh board views afterwards; bulk callers pass False
                and invalidate once for the whole batch.

        Returns:
            APPLIED, REJECTED_VALIDATION, REJECTED_STATUS_LOCK, PERSIST_FAILED or
            PHASE_ADVANCE_FAILED (changes persisted, task not advanced).
        """
        try:
            self._validate_due_dates(task, changes)
            self._guard_status(task, changes, actor)
        except ValidationException as exc:
            logger.info("Rejected update on task %s: %s", task.id, exc.message)
            return UpdateOutcome.rejected_validation(task.id, exc.message)
        except StatusLockException as exc:
            logger.warning(
                "Status lock: actor %s (%s) tried to move done task %s to %r",
                actor.person_id,
                actor.tier.value,
                task.id,
                exc.details.get("requested_status"),
            )
            return UpdateOutcome.rejected_status_lock(task.id, exc.message)

        values = map_changes(changes)
        new_status = changes.new_value(TaskField.STATUS) if changes.is_set(TaskField.STATUS) else None
        if new_status is not None:
            values.update(status_side_effects(task, new_status, self.now()))

        try:
            made_public, exposed = await self._apply_privacy_rules(task, changes)
            if made_public:
                values.pop(TaskColumn.IS_PRIVATE, None)
            people_written = await self._reconcile_people(task, changes, actor)
            if values:
                await self.persistence.update_task(task.id, values)
        except PersistenceException as exc:
            logger.error("Persisting update on task %s failed: %s", task.id, exc.message)
            # earlier steps may already have written
            if invalidate:
                await self.invalidator.invalidate(ViewScope.BOARDS)
            return UpdateOutcome.persist_failed(task.id, exc.message)
        wrote = made_public or exposed or people_written or bool(values)

        outcome = UpdateOutcome.applied(task.id)
        if new_status == TaskStatus.DONE.value:
            outcome = await self._advance_after_done(task.id, actor)

        if invalidate and wrote:
            await self.invalidator.invalidate(ViewScope.BOARDS)
        return outcome

    async def advance(self, task_id: str, actor_id: str | None) -> AdvanceResult:
        """Call the advance-phase service; transport failures become success=False."""
        try:
            return await self.advancer.advance_phase(task_id, actor_id)
        except PhaseAdvanceException as exc:
            return AdvanceResult(success=False, error=exc.message)

    async def _advance_after_done(self, task_id: str, actor: ActorContext) -> UpdateOutcome:
        result = await self.advance(task_id, actor.person_id)
        if not result.success:
            cause = result.error or "advance-phase service reported failure"
            logger.warning("Task %s marked done but not advanced: %s", task_id, cause)
            return UpdateOutcome.phase_advance_failed(task_id, cause)
        if result.new_phase:
            await self.phase_events.publish(
                PhaseEntered(task_id=task_id, new_phase=result.new_phase, actor_id=actor.person_id)
            )
        else:
            logger.warning("Advance of task %s succeeded without reporting a phase", task_id)
        return UpdateOutcome.applied(task_id, new_phase=result.new_phase)

    def _validate_due_dates(self, task: TaskEntity, changes: TaskChanges) -> None:
        """Miami due date may not fall after the Client due date."""
        if not (
            changes.is_changed(TaskField.MIAMI_DUE_DATE)
            or changes.is_changed(TaskField.CLIENT_DUE_DATE)
        ):
            return
        miami = changes.effective(TaskField.MIAMI_DUE_DATE, task.miami_due_date)
        client = changes.effective(TaskField.CLIENT_DUE_DATE, task.client_due_date)
        if miami is not None and client is not None and miami > client:
            if changes.is_changed(TaskField.MIAMI_DUE_DATE):
                raise ValidationException(
                    "Miami due date cannot be later than the Client due date",
                    field=TaskField.MIAMI_DUE_DATE.value,
                )
            raise ValidationException(
                "Client due date cannot be earlier than the Miami due date",
                field=TaskField.CLIENT_DUE_DATE.value,
            )

    def _guard_status(self, task: TaskEntity, changes: TaskChanges, actor: ActorContext) -> None:
        if not changes.is_changed(TaskField.STATUS):
            return
        new_status = changes.new_value(TaskField.STATUS)
        if not new_status:
            raise ValidationException("Status cannot be cleared", field=TaskField.STATUS.value)
        if task.is_done and new_status != TaskStatus.DONE.value and not actor.is_admin_or_above:
            raise StatusLockException(task.id, new_status)

    async def _apply_privacy_rules(
        self, task: TaskEntity, changes: TaskChanges
    ) -> tuple[bool, bool]:
        """Run make-public or guest exposure.

        Returns:
            (made_public, exposed): made_public means is_private was already
            persisted; exposed means at least one guest viewer was added.
        """
        privacy_changed = changes.is_changed(TaskField.IS_PRIVATE)
        wants_private = (
            bool(changes.new_value(TaskField.IS_PRIVATE)) if privacy_changed else task.is_private
        )

        if task.is_private and not wants_private:
            await self.privacy.make_task_public(task)
            return True, False

        becoming_private = wants_private and not task.is_private
        exposed = False
        for task_field in changes:
            if role_for_task_field(task_field) is None or not changes.is_set(task_field):
                continue
            person: Person = changes.new_value(task_field)
            if await self.privacy.maybe_expose_guest_viewer(
                task, person, becoming_private=becoming_private
            ):
                exposed = True
        return False, exposed

    async def _reconcile_people(
        self, task: TaskEntity, changes: TaskChanges, actor: ActorContext
    ) -> bool:
        """Replace the people list and audit the change; no-op when the set is equal."""
        if not changes.is_changed(TaskField.PEOPLE):
            return False
        new_people: list[Person] = list(
            {person.id: person for person in changes.new_value(TaskField.PEOPLE) or []}.values()
        )
        old_ids = task.people_ids()
        new_ids = {person.id for person in new_people}
        if new_ids == old_ids:
            return False

        await self.persistence.replace_task_people(task.id, [person.id for person in new_people])

        added = [person for person in new_people if person.id not in old_ids]
        removed = [person for person in task.people if person.id not in new_ids]
        if new_ids > old_ids:
            entry = AuditEntry(
                task.id, AuditRecordType.PEOPLE_ADDED, "people", None, _people_label(added), actor.person_id
            )
        elif new_ids < old_ids:
            entry = AuditEntry(
                task.id, AuditRecordType.PEOPLE_REMOVED, "people", _people_label(removed), None, actor.person_id
            )
        else:
            entry = AuditEntry(
                task.id,
                AuditRecordType.FIELD_CHANGE,
                "people",
                _people_label(task.people),
                _people_label(new_people),
                actor.person_id,
            )
        await self.persistence.insert_audit_record(entry)
        task.people = new_people
        return True
