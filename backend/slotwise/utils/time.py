"""Weekday and clock-time helpers shared by the scoring and learning code.

Weekdays follow the 0 = Sunday ... 6 = Saturday convention used by the
booking history feeds, which differs from ``datetime.weekday()``.
"""

import re
from datetime import datetime, timezone

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-4]):([0-5]\d)$")


def day_of_week(dt: datetime) -> int:
    """Return the weekday of ``dt`` with Sunday as 0."""
    return dt.isoweekday() % 7


def parse_hhmm(value: str) -> tuple[int, int]:
    """Split an ``HH:MM`` string into hours and minutes.

    Raises:
        ValueError: If the value is not a valid clock time (24:00 allowed
            as an end-of-day marker).
    """
    match = HHMM_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours == 24 and minutes != 0:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return hours, minutes


def format_hour(hour: int) -> str:
    """Format an integer hour as ``HH:00``."""
    return f"{hour:02d}:00"


def minute_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def align_awareness(reference: datetime, value: datetime) -> datetime:
    """Return ``reference`` with the same tz-awareness as ``value``.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None and reference.tzinfo is not None:
        return reference.astimezone(timezone.utc).replace(tzinfo=None)
    if value.tzinfo is not None and reference.tzinfo is None:
        return reference.replace(tzinfo=timezone.utc)
    return reference
