"""Health check endpoint. Used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from phaseboard.infrastructure.persistence.database import get_session_factory
from phaseboard.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the database answers; 503 otherwise.

    Also reports whether view invalidation is published over Redis.
    """
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                status="not_ready", message="Database unreachable"
            ).model_dump(),
        )
    invalidator = getattr(request.app.state, "view_invalidator", None)
    is_available = getattr(invalidator, "is_available", None)
    return ReadinessResponse(redis=bool(is_available and is_available()))
