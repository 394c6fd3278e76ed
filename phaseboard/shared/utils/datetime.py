"""
UTC datetime utilities for consistent timezone handling.

All timestamps stored on tasks (started_at, completed_at) are timezone-aware
UTC. Calendar fields (date_assigned, date_delivered, guest_due_date) are plain
dates taken from the UTC day. Use these helpers instead of datetime.now(),
datetime.utcnow() or date.today().
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def utc_today() -> date:
    """Return the current UTC calendar date (used for date_assigned / date_delivered)."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite returns naive values even for timezone-aware columns).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
