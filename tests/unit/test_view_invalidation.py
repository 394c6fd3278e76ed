"""Tests for Redis view invalidation."""

import json
from unittest.mock import AsyncMock

import redis.asyncio as redis

from phaseboard.core.config import Settings
from phaseboard.domain.enums import ViewScope
from phaseboard.infrastructure.messaging import (
    LogOnlyViewInvalidator,
    RedisViewInvalidator,
    ViewInvalidationEvent,
)

SETTINGS = Settings(view_invalidation_channel="test:invalidate")


async def test_invalidate_publishes_scope() -> None:
    client = AsyncMock()
    invalidator = RedisViewInvalidator(redis_client=client, settings=SETTINGS)
    await invalidator.invalidate(ViewScope.BOARDS)
    client.publish.assert_awaited_once()
    channel, payload = client.publish.await_args.args
    assert channel == "test:invalidate"
    data = json.loads(payload)
    assert data["scope"] == "boards"
    assert ViewInvalidationEvent.from_dict(data).scope is ViewScope.BOARDS


async def test_unavailable_redis_drops_signal() -> None:
    invalidator = RedisViewInvalidator(settings=SETTINGS)
    assert not invalidator.is_available()
    await invalidator.invalidate(ViewScope.TASK)


async def test_publish_error_is_logged_not_raised(caplog) -> None:
    client = AsyncMock()
    client.publish.side_effect = redis.ConnectionError("connection lost")
    invalidator = RedisViewInvalidator(redis_client=client, settings=SETTINGS)
    await invalidator.invalidate(ViewScope.BOARDS)
    assert "Failed to publish view invalidation" in caplog.text


async def test_disconnect_closes_client() -> None:
    client = AsyncMock()
    invalidator = RedisViewInvalidator(redis_client=client, settings=SETTINGS)
    await invalidator.disconnect()
    client.aclose.assert_awaited_once()
    assert not invalidator.is_available()


async def test_log_only_invalidator() -> None:
    await LogOnlyViewInvalidator().invalidate(ViewScope.BOARDS)
