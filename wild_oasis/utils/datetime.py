"""UTC datetime utilities and day-boundary helpers."""

from datetime import datetime, time, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser

from wild_oasis.errors import InvalidInputError


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This function should be used instead of datetime.now() or datetime.utcnow()
    to ensure all timestamps are timezone-aware and stored in UTC.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 string into a UTC datetime.

    Date-only strings ("2025-01-10") resolve to midnight UTC, and strings
    without an offset are read as UTC.

    Args:
        value: Raw ISO-8601 string

    Returns:
        Timezone-aware datetime, or None when the string is not ISO-8601
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return as_utc(date_parser.isoparse(value.strip()))
    except (ValueError, OverflowError):
        return None


def require_iso_datetime(value: Optional[str], field: str = "date") -> datetime:
    """Like parse_iso_datetime but raises InvalidInputError for missing or bad input."""
    if not value:
        raise InvalidInputError(f"{field} query parameter is required")
    parsed = parse_iso_datetime(value)
    if parsed is None:
        raise InvalidInputError(f"Invalid {field} format, expected ISO-8601")
    return parsed


def day_bounds(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Return the UTC boundaries of the calendar day containing `now`.

    Returns:
        (start, end) where start is 00:00:00.000 and end is 23:59:59.999 UTC

    Example:
        >>> day_bounds(datetime(2025, 1, 10, 15, 30, tzinfo=timezone.utc))[0].isoformat()
        '2025-01-10T00:00:00+00:00'
    """
    current = as_utc(now) if now else utc_now()
    start = datetime.combine(current.date(), time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end
