"""Messaging: view invalidation over Redis Pub/Sub."""

from phaseboard.infrastructure.messaging.view_invalidation import (
    LogOnlyViewInvalidator,
    RedisViewInvalidator,
    ViewInvalidationEvent,
)

__all__ = [
    "LogOnlyViewInvalidator",
    "RedisViewInvalidator",
    "ViewInvalidationEvent",
]
