"""Task pipeline dependencies."""

from __future__ import annotations

from fastapi import Request

from ._composition import TaskServices


async def get_task_services(request: Request) -> TaskServices:
    """Return the TaskServices built at startup (see core.lifespan)."""
    return request.app.state.task_services
