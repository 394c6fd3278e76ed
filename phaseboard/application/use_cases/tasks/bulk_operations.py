"""Bulk task operations over a selection of task ids.

Per-task work fans out concurrently; one task's failure never aborts the
batch. Views are invalidated once per bulk call, not once per task.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from phaseboard.application.dtos.bulk import (
    BulkOperation,
    BulkOutcome,
    Delete,
    Duplicate,
    MarkDone,
    MoveToPhase,
    SetField,
)
from phaseboard.application.dtos.task import AdvanceResult, PhaseEntered, TaskColumn
from phaseboard.domain.enums import TaskStatus, ViewScope
from phaseboard.domain.exceptions import PersistenceException
from phaseboard.domain.value_objects import TaskChanges
from phaseboard.shared.telemetry.logging import get_logger
from phaseboard.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from phaseboard.application.interfaces.repositories import ITaskPersistence
    from phaseboard.application.interfaces.services import IViewInvalidator
    from phaseboard.application.services.access_policy import AccessPolicy
    from phaseboard.application.services.phase_events import PhaseEventBus
    from phaseboard.application.use_cases.tasks.update_task import TaskMutationCoordinator
    from phaseboard.domain.value_objects import ActorContext

logger = get_logger(__name__)


def _plural(count: int) -> str:
    return "task" if count == 1 else "tasks"


class BulkMutationCoordinator:
    """Runs one semantic operation across many tasks and aggregates the results."""

    def __init__(
        self,
        persistence: ITaskPersistence,
        updater: TaskMutationCoordinator,
        access_policy: AccessPolicy,
        phase_events: PhaseEventBus,
        invalidator: IViewInvalidator,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self.persistence = persistence
        self.updater = updater
        self.access_policy = access_policy
        self.phase_events = phase_events
        self.invalidator = invalidator
        self.now = now

    async def apply_bulk(
        self,
        operation: BulkOperation,
        task_ids: Sequence[str],
        actor: ActorContext,
    ) -> BulkOutcome:
        """Apply operation to every id in task_ids.

        Duplicate ids are collapsed. Returns an aggregate outcome; per-task
        failures are logged with their ids.

        Raises:
            AuthorizationException: Guests may not run bulk operations and
                only admins may bulk delete.
        """
        self.access_policy.require_bulk_permission(operation.name, actor)
        ids = list(dict.fromkeys(task_ids))
        if not ids:
            return BulkOutcome(operation.name, 0, 0, (), "No tasks selected", True)

        if isinstance(operation, MarkDone):
            outcome = await self._mark_done(ids, actor)
        elif isinstance(operation, Duplicate):
            outcome = await self._fan_out(operation, ids, self.persistence.duplicate_task)
        elif isinstance(operation, Delete):
            outcome = await self._fan_out(operation, ids, self.persistence.delete_task)
        elif isinstance(operation, MoveToPhase):
            outcome = await self._move_to_phase(operation, ids, actor)
        elif isinstance(operation, SetField):
            outcome = await self._set_field(operation, ids, actor)
        else:
            raise TypeError(f"Unsupported bulk operation: {operation!r}")

        await self.invalidator.invalidate(ViewScope.BOARDS)
        return outcome

    async def _gather_per_task(
        self,
        operation_name: str,
        ids: list[str],
        call: Callable[[str], Awaitable[Any]],
    ) -> tuple[list[str], list[str]]:
        """Run call for every id concurrently; return (succeeded, failed) ids.

        A result of False counts as a failure, as does any exception.
        """
        results = await asyncio.gather(*(call(task_id) for task_id in ids), return_exceptions=True)
        succeeded: list[str] = []
        failed: list[str] = []
        for task_id, result in zip(ids, results, strict=True):
            if isinstance(result, BaseException):
                logger.error("Bulk %s failed for task %s: %s", operation_name, task_id, result)
                failed.append(task_id)
            elif result is False:
                failed.append(task_id)
            else:
                succeeded.append(task_id)
        if failed:
            logger.warning(
                "Bulk %s: %d of %d tasks failed: %s",
                operation_name,
                len(failed),
                len(ids),
                ", ".join(failed),
            )
        return succeeded, failed

    def _outcome(
        self, operation_name: str, ids: list[str], succeeded: list[str], failed: list[str], message: str
    ) -> BulkOutcome:
        return BulkOutcome(
            operation=operation_name,
            requested=len(ids),
            succeeded=len(succeeded),
            failed_ids=tuple(failed),
            message=message,
            ok=not failed,
        )

    async def _fan_out(
        self,
        operation: Duplicate | Delete,
        ids: list[str],
        call: Callable[[str], Awaitable[Any]],
    ) -> BulkOutcome:
        succeeded, failed = await self._gather_per_task(operation.name, ids, call)
        verb = "Duplicated" if isinstance(operation, Duplicate) else "Deleted"
        message = f"{verb} {len(succeeded)} of {len(ids)} {_plural(len(ids))}"
        return self._outcome(operation.name, ids, succeeded, failed, message)

    async def _move_to_phase(
        self, operation: MoveToPhase, ids: list[str], actor: ActorContext
    ) -> BulkOutcome:
        async def move(task_id: str) -> str:
            return await self.persistence.move_task_to_phase(task_id, operation.phase, actor.person_id)

        succeeded, failed = await self._gather_per_task(operation.name, ids, move)
        await self.phase_events.publish_many(
            PhaseEntered(task_id=task_id, new_phase=operation.phase.label, actor_id=actor.person_id)
            for task_id in succeeded
        )
        message = f"Moved {len(succeeded)} of {len(ids)} {_plural(len(ids))} to {operation.phase.label}"
        return self._outcome(operation.name, ids, succeeded, failed, message)

    async def _set_field(self, operation: SetField, ids: list[str], actor: ActorContext) -> BulkOutcome:
        changes = TaskChanges.from_values({operation.field: operation.value})

        async def update(task_id: str) -> bool:
            task = await self.persistence.get_task(task_id)
            if task is None:
                logger.warning("Bulk %s: task %s not found", operation.name, task_id)
                return False
            if not self.access_policy.can_edit(operation.field.value, task, actor):
                logger.warning(
                    "Bulk %s: %s may not edit %s on task %s",
                    operation.name,
                    actor.person_id,
                    operation.field.value,
                    task_id,
                )
                return False
            outcome = await self.updater.apply_update(task, changes, actor, invalidate=False)
            if not outcome.ok:
                logger.warning(
                    "Bulk %s on task %s: %s (%s)",
                    operation.name,
                    task_id,
                    outcome.kind.value,
                    outcome.reason,
                )
            return outcome.ok

        succeeded, failed = await self._gather_per_task(operation.name, ids, update)
        message = (
            f"Updated {operation.field.value} on {len(succeeded)} of {len(ids)} {_plural(len(ids))}"
        )
        return self._outcome(operation.name, ids, succeeded, failed, message)

    async def _mark_done(self, ids: list[str], actor: ActorContext) -> BulkOutcome:
        """Batch status=done, then advance every task concurrently.

        Tasks whose advance fails stay done on their current board; the batch
        write is never rolled back.
        """
        try:
            await self.persistence.batch_update_tasks(
                ids,
                {TaskColumn.STATUS: TaskStatus.DONE.value, TaskColumn.COMPLETED_AT: self.now()},
            )
        except PersistenceException as exc:
            logger.error("Bulk mark_done batch write failed for %d tasks: %s", len(ids), exc.message)
            return BulkOutcome(
                operation=MarkDone.name,
                requested=len(ids),
                succeeded=0,
                failed_ids=tuple(ids),
                message=f"Failed to mark {len(ids)} {_plural(len(ids))} done",
                ok=False,
            )

        raw_results = await asyncio.gather(
            *(self.updater.advance(task_id, actor.person_id) for task_id in ids),
            return_exceptions=True,
        )
        results = [
            AdvanceResult(success=False, error=str(result))
            if isinstance(result, BaseException)
            else result
            for result in raw_results
        ]
        advanced = [
            (task_id, result) for task_id, result in zip(ids, results, strict=True) if result.success
        ]
        failed = [task_id for task_id, result in zip(ids, results, strict=True) if not result.success]
        if failed:
            logger.warning(
                "Bulk mark_done: %d tasks left done without advancing: %s",
                len(failed),
                ", ".join(failed),
            )

        await self.phase_events.publish_many(
            PhaseEntered(task_id=task_id, new_phase=result.new_phase, actor_id=actor.person_id)
            for task_id, result in advanced
            if result.new_phase
        )
        message = f"Moved {len(advanced)} of {len(ids)} tasks to next phase"
        return self._outcome(MarkDone.name, ids, [task_id for task_id, _ in advanced], failed, message)
