"""
Date-based booking queries for the dashboard.

Every query works on the UTC calendar. "Today" spans 00:00:00.000 to
23:59:59.999 UTC of the current day. Each function accepts `now` so callers
and tests can pin the clock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Connection

from wild_oasis.db.readers.bookings import (
    activity_between,
    booking_dates_for_cabin,
    bookings_created_between,
    bookings_for_guest,
    stays_started_between,
)
from wild_oasis.db.readers.guests import guest_exists
from wild_oasis.errors import NotFoundError
from wild_oasis.services.bookings import BookingStatus, expand_bookings
from wild_oasis.utils.datetime import day_bounds, require_iso_datetime
from wild_oasis.utils.identifiers import require_valid_id

logger = structlog.get_logger(__name__)

STAY_STATUSES = (BookingStatus.CHECKED_IN.value, BookingStatus.CHECKED_OUT.value)
ARRIVAL_STATUSES = (BookingStatus.UNCONFIRMED.value, BookingStatus.CONFIRMED.value)


def bookings_created_after(
    conn: Connection, date: Optional[str], now: Optional[datetime] = None
) -> list[dict[str, Any]]:
    """
    Bookings created between `date` and the end of today.

    Args:
        conn: Database connection
        date: ISO-8601 lower bound, inclusive
        now: Clock override

    Raises:
        InvalidInputError: Missing or non ISO-8601 date
    """
    since = require_iso_datetime(date)
    _, today_end = day_bounds(now)
    return bookings_created_between(conn, since, today_end)


def stays_after(
    conn: Connection, date: Optional[str], now: Optional[datetime] = None
) -> list[dict[str, Any]]:
    """
    Checked-in or checked-out bookings that started on or after `date` and
    before today.

    Raises:
        InvalidInputError: Missing or non ISO-8601 date
    """
    since = require_iso_datetime(date)
    today_start, _ = day_bounds(now)
    return stays_started_between(conn, since, today_start, STAY_STATUSES)


def today_activity(conn: Connection, now: Optional[datetime] = None) -> list[dict[str, Any]]:
    """
    Today's arrivals and departures, each with its guest attached.

    Arrivals: unconfirmed or confirmed bookings starting today.
    Departures: checked-in bookings ending today.
    """
    today_start, today_end = day_bounds(now)
    rows = activity_between(
        conn,
        today_start,
        today_end,
        arrival_statuses=ARRIVAL_STATUSES,
        departure_status=BookingStatus.CHECKED_IN.value,
    )
    logger.debug("today_activity_loaded", day=today_start.date().isoformat(), count=len(rows))
    return expand_bookings(conn, rows, with_cabin=False)


def reservations_for_guest(conn: Connection, guest_id: str) -> list[dict[str, Any]]:
    """
    A guest's pending reservations (bookings still unconfirmed).

    Raises:
        InvalidInputError: Malformed guest id
        NotFoundError: Guest does not exist
    """
    require_valid_id(guest_id, "guest")
    if not guest_exists(conn, guest_id):
        raise NotFoundError("Guest not found")
    return bookings_for_guest(conn, guest_id, status=BookingStatus.UNCONFIRMED.value)


def guest_bookings(conn: Connection, guest_id: str) -> list[dict[str, Any]]:
    """All bookings of a guest, newest first, with cabins attached."""
    require_valid_id(guest_id, "guest")
    if not guest_exists(conn, guest_id):
        raise NotFoundError("Guest not found")
    return expand_bookings(conn, bookings_for_guest(conn, guest_id), with_guest=False)


def dates_for_cabin(conn: Connection, cabin_id: str) -> list[dict[str, Any]]:
    """
    Start/end pairs of every booking of a cabin, for availability calendars.

    Raises:
        InvalidInputError: Malformed cabin id
    """
    require_valid_id(cabin_id, "cabin")
    return booking_dates_for_cabin(conn, cabin_id)
