"""Base repository: one session and transaction per call, errors mapped to PersistenceException."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.domain.exceptions import PersistenceException
from phaseboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SessionScopedRepository:
    """Base for adapters that may be called concurrently.

    Each public method opens its own session via _transaction, commits on
    success and rolls back on error, so concurrent calls never share an
    AsyncSession.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _transaction(
        self, operation: str, task_id: str | None = None
    ) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction.

        Raises:
            PersistenceException: If the database raises SQLAlchemyError.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            logger.error("%s failed (task=%s): %s", operation, task_id, exc)
            raise PersistenceException(operation, str(exc), task_id) from exc
