"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from phaseboard.application.dtos.task import AdvanceResult
    from phaseboard.domain.enums import ViewScope


# Advance-phase service interface (server-side transactional operation)
class IPhaseAdvancer(Protocol):
    """Protocol for moving a task to the phase after its current one."""

    async def advance_phase(self, task_id: str, actor_id: str | None) -> AdvanceResult:
        """Advance the task atomically; success=False carries the reason in error.

        Raises PhaseAdvanceException when the call itself fails.
        """


# Notification service interface (assignment notices)
class INotificationService(Protocol):
    """Protocol for notifying a team member about an assignment."""

    async def notify_assignment(self, person_id: str, task_id: str, message: str) -> None:
        """Send an assignment notice. Callers treat this as fire-and-forget."""


# View invalidation interface
class IViewInvalidator(Protocol):
    """Protocol for signalling dependent views to refresh."""

    async def invalidate(self, scope: ViewScope) -> None:
        """Signal that cached views in scope are stale. Must not raise."""
