"""Shared utilities: datetime, business calendar, generators."""

from phaseboard.shared.utils.business_calendar import (
    add_business_days,
    business_days_between,
    format_duration,
    is_business_day,
    next_business_day,
)
from phaseboard.shared.utils.datetime import ensure_utc, utc_now, utc_today
from phaseboard.shared.utils.generators import generate_cuid

__all__ = [
    "add_business_days",
    "business_days_between",
    "format_duration",
    "is_business_day",
    "next_business_day",
    "generate_cuid",
    "utc_now",
    "utc_today",
    "ensure_utc",
]
