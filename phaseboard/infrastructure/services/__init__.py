"""Infrastructure implementations of application service interfaces."""

from phaseboard.infrastructure.services.notification_service import (
    InAppNotificationService,
    LogOnlyNotificationService,
)
from phaseboard.infrastructure.services.phase_advancer import (
    SqlPhaseAdvancer,
    parse_advance_payload,
)

__all__ = [
    "InAppNotificationService",
    "LogOnlyNotificationService",
    "SqlPhaseAdvancer",
    "parse_advance_payload",
]
