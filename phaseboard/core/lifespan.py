"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, schema, view
invalidation, task pipelines, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from phaseboard.core.config import get_settings
from phaseboard.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, SQLite schema (if SQLite), view invalidator
    (Redis if enabled), task services. Shutdown order: pending assignment
    notifications, Redis disconnect, SQL engine dispose.

    Tests may pre-populate app.state.task_services; it is then left as is.
    """
    settings = get_settings()
    setup_logging()

    from phaseboard.infrastructure.persistence import database

    # ---- Startup ----
    if settings.database_url.startswith("sqlite"):
        await database.create_schema()

    if settings.redis_enabled:
        from phaseboard.infrastructure.messaging import RedisViewInvalidator

        invalidator = RedisViewInvalidator(settings=settings)
        await invalidator.connect()
    else:
        from phaseboard.infrastructure.messaging import LogOnlyViewInvalidator

        invalidator = LogOnlyViewInvalidator()
    app.state.view_invalidator = invalidator

    if getattr(app.state, "task_services", None) is None:
        from phaseboard.api.v1.dependencies import build_task_services

        app.state.task_services = build_task_services(
            database.get_session_factory(), settings, invalidator
        )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    services = getattr(app.state, "task_services", None)
    if services is not None:
        await services.privacy.drain_notifications()

    if hasattr(invalidator, "disconnect"):
        await invalidator.disconnect()

    await database.dispose_engine()
    logger.info("Database engine disposed")
