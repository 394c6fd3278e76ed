"""View invalidation over Redis Pub/Sub.

After each logical task operation the pipelines call invalidate(scope) once;
board views subscribed to the channel refetch. Invalidation is best effort:
when Redis is unavailable the signal is logged and dropped.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

import redis.asyncio as redis

from phaseboard.core.config import Settings, get_settings
from phaseboard.domain.enums import ViewScope
from phaseboard.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


@dataclass
class ViewInvalidationEvent:
    """Invalidation payload published to Redis."""

    scope: ViewScope
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON publish."""
        data = asdict(self)
        data["scope"] = self.scope.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewInvalidationEvent:
        """Deserialize from Redis message."""
        data = dict(data)
        data["scope"] = ViewScope(data["scope"])
        return cls(**data)


class RedisViewInvalidator:
    """Publishes invalidation events to one Redis channel. Implements IViewInvalidator."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.channel = self.settings.view_invalidation_channel
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=(
                        self.settings.redis_password.get_secret_value()
                        if self.settings.redis_password
                        else None
                    ),
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis view invalidation connected (channel=%s)", self.channel)
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis view invalidation connection failed: %s", e)
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis view invalidation disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None

    async def invalidate(self, scope: ViewScope) -> None:
        """Publish an invalidation for scope. Never raises."""
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, dropping %s invalidation", scope.value)
            return
        event = ViewInvalidationEvent(scope=scope, timestamp=utc_now().isoformat())
        try:
            await self.redis.publish(self.channel, json.dumps(event.to_dict()))
            logger.debug("Published %s invalidation to %s", scope.value, self.channel)
        except Exception:
            logger.exception("Failed to publish view invalidation")


class LogOnlyViewInvalidator:
    """IViewInvalidator used when Redis is disabled: logs the signal only."""

    async def invalidate(self, scope: ViewScope) -> None:
        logger.debug("View invalidation (%s) with no subscribers configured", scope.value)
