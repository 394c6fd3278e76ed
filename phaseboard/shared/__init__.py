"""Shared utilities: logging, date helpers, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from phaseboard.shared.utils import (
    add_business_days,
    ensure_utc,
    format_duration,
    generate_cuid,
    next_business_day,
    utc_now,
    utc_today,
)

__all__ = [
    "add_business_days",
    "ensure_utc",
    "format_duration",
    "generate_cuid",
    "next_business_day",
    "utc_now",
    "utc_today",
]
