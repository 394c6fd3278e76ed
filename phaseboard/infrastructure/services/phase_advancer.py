"""Advance-phase adapter: calls the server-side transactional function."""

from __future__ import annotations

import json
import re
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.application.dtos.task import AdvanceResult
from phaseboard.domain.exceptions import PhaseAdvanceException
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_FUNCTION_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


def parse_advance_payload(payload: Any) -> AdvanceResult:
    """Map the function's JSON result to AdvanceResult.

    Accepts a dict or a JSON string; new_phase may arrive as 'new_phase' or
    'newPhase'. A missing or malformed payload is an unsuccessful result.
    """
    if isinstance(payload, str | bytes):
        try:
            payload = json.loads(payload)
        except ValueError:
            return AdvanceResult(False, error="Malformed advance-phase response")
    if not isinstance(payload, dict):
        return AdvanceResult(False, error="Empty advance-phase response")
    success = bool(payload.get("success"))
    new_phase = payload.get("new_phase") or payload.get("newPhase")
    error = payload.get("error")
    if success and not new_phase:
        return AdvanceResult(False, error=error or "Advance-phase response without new phase")
    return AdvanceResult(success, new_phase=new_phase, error=None if success else error)


class SqlPhaseAdvancer:
    """IPhaseAdvancer backed by a database function (default move_task_to_next_phase).

    The function computes the next phase, validates prerequisites and moves
    the task in one transaction; this adapter only forwards the call.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        function_name: str = "move_task_to_next_phase",
    ) -> None:
        if not _FUNCTION_NAME_RE.match(function_name):
            raise ValueError(f"Invalid advance-phase function name: {function_name!r}")
        self.session_factory = session_factory
        self._statement = text(f"SELECT {function_name}(:p_task_id, :p_user_id)")

    async def advance_phase(self, task_id: str, actor_id: str | None) -> AdvanceResult:
        """Advance task_id; raises PhaseAdvanceException if the call fails."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    payload = await session.scalar(
                        self._statement, {"p_task_id": task_id, "p_user_id": actor_id}
                    )
        except SQLAlchemyError as exc:
            logger.error("advance_phase failed for task %s: %s", task_id, exc)
            raise PhaseAdvanceException(task_id, str(exc)) from exc
        result = parse_advance_payload(payload)
        if result.success:
            logger.info("Task %s advanced to %s", task_id, result.new_phase)
        else:
            logger.warning("Task %s not advanced: %s", task_id, result.error)
        return result
