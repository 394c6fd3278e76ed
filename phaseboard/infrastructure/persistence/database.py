"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Engine and session factory are created lazily on first use so import does
not trigger Settings validation. Adapters take the session factory rather
than a session: each adapter call opens its own session and transaction, so
concurrent calls from a bulk fan-out never share an AsyncSession.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from phaseboard.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def build_engine(database_url: str, echo: bool = False, **pool_options: Any) -> AsyncEngine:
    """Create an async engine; pool sizing is ignored for SQLite."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        **pool_options,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 20
    max_overflow = settings.db_max_overflow if settings.db_max_overflow is not None else 30
    engine = build_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
    )
    AsyncSessionLocal = build_session_factory(engine)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine if needed."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def create_schema() -> None:
    """Create all tables (development and SQLite deployments)."""
    _ensure_engine()
    assert engine is not None
    # Import models so they register on Base.metadata.
    from phaseboard.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def dispose_engine() -> None:
    """Dispose the engine (lifespan shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None
