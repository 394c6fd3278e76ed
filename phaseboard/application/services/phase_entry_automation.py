"""Phase-entry automation: re-run guest exposure for a phase's canonical assignee.

Subscribed to the PhaseEventBus. Who gets assigned is decided elsewhere (an
operator, or the phase automations registry); this handler guarantees the
assignee gets the same viewer and due-date treatment as an inline role edit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from phaseboard.application.services.field_mapping import role_column
from phaseboard.domain.phases import resolve_phase, role_field_for_phase
from phaseboard.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from phaseboard.application.dtos.task import PhaseEntered
    from phaseboard.application.interfaces.repositories import (
        IPhaseAssignmentPolicy,
        ITaskPersistence,
    )
    from phaseboard.application.services.phase_events import PhaseEventBus
    from phaseboard.application.services.privacy_automation import PrivacyAutomation

logger = get_logger(__name__)


class PhaseEntryAutomation:
    """Handles PhaseEntered events."""

    def __init__(
        self,
        persistence: ITaskPersistence,
        privacy: PrivacyAutomation,
        assignment_policy: IPhaseAssignmentPolicy | None = None,
    ) -> None:
        self.persistence = persistence
        self.privacy = privacy
        self.assignment_policy = assignment_policy

    def register(self, bus: PhaseEventBus) -> None:
        bus.subscribe(self.on_phase_entered)

    async def on_phase_entered(self, event: PhaseEntered) -> None:
        """Populate the phase's role field if configured, then expose the assignee.

        Phases without a role field are ignored. An assignee that was already
        set before the phase was entered is exposed as well.
        """
        phase = resolve_phase(event.new_phase)
        role_field = role_field_for_phase(phase)
        if phase is None or role_field is None:
            logger.debug(
                "No phase automation for task %s entering %r", event.task_id, event.new_phase
            )
            return

        task = await self.persistence.get_task(event.task_id)
        if task is None:
            logger.warning("Task %s vanished before phase-entry automation", event.task_id)
            return

        assignee = task.role(role_field)
        if assignee is None and self.assignment_policy is not None:
            assignee = await self.assignment_policy.assignee_for(task, phase)
            if assignee is not None:
                await self.persistence.update_task(
                    task.id, {role_column(role_field): assignee.id}
                )
                task.roles[role_field] = assignee
                logger.info(
                    "Assigned %s as %s on task %s entering %s",
                    assignee.id,
                    role_field.value,
                    task.id,
                    phase.label,
                )

        if assignee is None:
            return
        await self.privacy.maybe_expose_guest_viewer(task, assignee)
