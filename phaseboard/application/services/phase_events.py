"""In-process event bus for phase transitions.

Publishing awaits every subscriber concurrently; a failing subscriber is
logged and never affects the publisher or the other subscribers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable

from phaseboard.application.dtos.task import PhaseEntered
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

PhaseEnteredHandler = Callable[[PhaseEntered], Awaitable[None]]


class PhaseEventBus:
    """Fan-out of PhaseEntered events to registered handlers."""

    def __init__(self) -> None:
        self._handlers: list[PhaseEnteredHandler] = []

    def subscribe(self, handler: PhaseEnteredHandler) -> None:
        self._handlers.append(handler)

    async def publish(self, event: PhaseEntered) -> None:
        """Deliver event to all handlers; exceptions are logged, not raised."""
        if not self._handlers:
            return
        results = await asyncio.gather(
            *(handler(event) for handler in self._handlers),
            return_exceptions=True,
        )
        for handler, result in zip(self._handlers, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(
                    "Phase-entered handler %s failed for task %s (phase=%s)",
                    getattr(handler, "__qualname__", repr(handler)),
                    event.task_id,
                    event.new_phase,
                    exc_info=result,
                )

    async def publish_many(self, events: Iterable[PhaseEntered]) -> None:
        """Publish several events concurrently (no ordering between them)."""
        await asyncio.gather(*(self.publish(event) for event in events))
