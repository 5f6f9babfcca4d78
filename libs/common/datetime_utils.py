"""Date and time helpers shared by the booking engine.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

import calendar
from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of ``day``'s month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def month_label(day: date) -> str:
    """Format a date as its month label, e.g. ``"March 2025"``."""
    return f"{calendar.month_name[day.month]} {day.year}"


def parse_clock(value: str) -> time:
    """Parse ``HH:mm`` or ``HH:mm:ss`` into a ``time``."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time value: {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    return time(hour, minute, second)


def format_clock(value: time) -> str:
    """Format a ``time`` as ``HH:mm:ss``."""
    return value.strftime("%H:%M:%S")
