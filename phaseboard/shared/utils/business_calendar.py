"""Business-day arithmetic and duration formatting.

Weekends are Saturday and Sunday; there is no holiday calendar. All
functions are pure and accept plain dates (or datetimes for durations).
"""

from datetime import date, datetime, timedelta

from phaseboard.shared.utils.datetime import ensure_utc, utc_now

# date.weekday(): Monday == 0 ... Saturday == 5, Sunday == 6
_WEEKEND = frozenset({5, 6})


def is_business_day(day: date) -> bool:
    """Return True if day falls Monday through Friday."""
    return day.weekday() not in _WEEKEND


def next_business_day(start: date, offset_days: int = 1) -> date:
    """Move forward offset_days calendar days, then past any weekend.

    Used for guest due dates: an assignment on Friday is due Monday, an
    assignment on Tuesday is due Wednesday.

    Args:
        start: Day the count starts from (not itself included).
        offset_days: Calendar days to skip before the weekend check.

    Returns:
        The first business day on or after start + offset_days.
    """
    result = start + timedelta(days=offset_days)
    while not is_business_day(result):
        result += timedelta(days=1)
    return result


def add_business_days(start: date, days: int) -> date:
    """Return the date that is `days` business days after start (weekends skipped)."""
    result = start
    added = 0
    while added < days:
        result += timedelta(days=1)
        if is_business_day(result):
            added += 1
    return result


def business_days_between(start: date, end: date) -> int:
    """Count business days in (start, end]. Zero when end is not after start."""
    count = 0
    current = start
    while current < end:
        current += timedelta(days=1)
        if is_business_day(current):
            count += 1
    return count


def format_duration(start: datetime, end: datetime | None = None) -> str:
    """Format elapsed time compactly: '2d 3h', '4h 12m' or '35m'.

    Args:
        start: Start of the interval.
        end: End of the interval; defaults to now (UTC).
    """
    start_utc = ensure_utc(start)
    end_utc = ensure_utc(end) if end is not None else utc_now()
    total_minutes = int((end_utc - start_utc).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    days, remaining_hours = divmod(hours, 24)
    if days > 0:
        return f"{days}d {remaining_hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{total_minutes}m"
