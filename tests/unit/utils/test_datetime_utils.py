"""
Unit tests for UTC datetime helpers.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from wild_oasis.errors import InvalidInputError
from wild_oasis.utils.datetime import (
    as_utc,
    day_bounds,
    parse_iso_datetime,
    require_iso_datetime,
    utc_now,
)


@pytest.mark.unit
def test_utc_now_is_timezone_aware() -> None:
    assert utc_now().tzinfo == timezone.utc


@pytest.mark.unit
def test_as_utc_converts_offsets_and_tags_naive_values() -> None:
    naive = datetime(2025, 1, 10, 12)
    plus_two = datetime(2025, 1, 10, 14, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(naive) == datetime(2025, 1, 10, 12, tzinfo=timezone.utc)
    assert as_utc(plus_two) == datetime(2025, 1, 10, 12, tzinfo=timezone.utc)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-01-10", datetime(2025, 1, 10, tzinfo=timezone.utc)),
        ("2025-01-10T08:30:00Z", datetime(2025, 1, 10, 8, 30, tzinfo=timezone.utc)),
        ("2025-01-10T08:30:00+02:00", datetime(2025, 1, 10, 6, 30, tzinfo=timezone.utc)),
        ("2025-01-10T08:30:00.250", datetime(2025, 1, 10, 8, 30, 0, 250000, tzinfo=timezone.utc)),
    ],
)
def test_parse_iso_datetime_accepts_iso_8601(value: str, expected: datetime) -> None:
    assert parse_iso_datetime(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, "", "yesterday", "10/01/2025", "2025-13-01"])
def test_parse_iso_datetime_returns_none_for_bad_input(value: object) -> None:
    assert parse_iso_datetime(value) is None  # type: ignore[arg-type]


@pytest.mark.unit
def test_require_iso_datetime_messages() -> None:
    with pytest.raises(InvalidInputError, match="date query parameter is required"):
        require_iso_datetime(None)
    with pytest.raises(InvalidInputError, match="Invalid date format, expected ISO-8601"):
        require_iso_datetime("soon")


@pytest.mark.unit
def test_day_bounds_cover_the_whole_utc_day() -> None:
    """Start is 00:00:00.000 and end is 23:59:59.999 of the UTC day."""
    start, end = day_bounds(datetime(2025, 1, 10, 15, 45, tzinfo=timezone.utc))

    assert start == datetime(2025, 1, 10, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 10, 23, 59, 59, 999000, tzinfo=timezone.utc)


@pytest.mark.unit
def test_day_bounds_use_utc_calendar_for_offset_clocks() -> None:
    """01:00 at UTC+3 is still the previous day in UTC."""
    local = datetime(2025, 1, 11, 1, tzinfo=timezone(timedelta(hours=3)))

    start, _ = day_bounds(local)

    assert start == datetime(2025, 1, 10, tzinfo=timezone.utc)
