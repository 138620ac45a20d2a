"""
Read queries over the bookings table.

All datetime arguments are expected to be timezone-aware UTC values; the
UTCDateTime column type normalizes them for the active dialect.
"""

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.engine import Connection

from wild_oasis.metrics import db_query_duration
from wild_oasis.models.bookings import Booking


def get_booking(conn: Connection, booking_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch a single booking by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        booking_id (str): Booking identifier.

    Returns:
        Optional[dict[str, Any]]: Booking row or None if not found.
    """
    row = conn.execute(select(Booking).where(Booking.id == booking_id)).mappings().fetchone()
    return dict(row) if row else None


def list_bookings(
    conn: Connection,
    status: Optional[str],
    sort_column: str,
    descending: bool,
    offset: int,
    limit: int,
) -> tuple[list[dict[str, Any]], int]:
    """
    Fetch one page of bookings plus the total count of matching rows.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        status (Optional[str]): Only bookings with this status, if given.
        sort_column (str): Booking column name to order by.
        descending (bool): Sort direction.
        offset (int): Rows to skip.
        limit (int): Page size.

    Returns:
        tuple[list[dict], int]: (page rows, total matching rows)
    """
    with db_query_duration.labels(query="list_bookings").time():
        filters = []
        if status:
            filters.append(Booking.status == status)

        total = conn.execute(select(func.count()).select_from(Booking).where(*filters)).scalar_one()

        column = getattr(Booking, sort_column)
        order = column.desc() if descending else column.asc()
        stmt = (
            select(Booking)
            .where(*filters)
            .order_by(order, Booking.id.asc())
            .offset(offset)
            .limit(limit)
        )
        rows = conn.execute(stmt).mappings().all()

    return [dict(row) for row in rows], total


def find_overlapping_bookings(
    conn: Connection, cabin_id: str, start: datetime, end: datetime
) -> list[dict[str, Any]]:
    """
    Find bookings of a cabin whose [start_date, end_date) intersects [start, end).

    Back-to-back stays (one ends when the next starts) do not overlap.
    """
    stmt = select(Booking).where(
        Booking.cabin_id == cabin_id,
        Booking.start_date < end,
        Booking.end_date > start,
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def bookings_created_between(
    conn: Connection, start: datetime, end: datetime
) -> list[dict[str, Any]]:
    """Bookings whose created_at lies in the closed interval [start, end]."""
    with db_query_duration.labels(query="bookings_created_between").time():
        stmt = (
            select(Booking)
            .where(Booking.created_at >= start, Booking.created_at <= end)
            .order_by(Booking.created_at.asc())
        )
        rows = conn.execute(stmt).mappings().all()
    return [dict(row) for row in rows]


def stays_started_between(
    conn: Connection, start: datetime, end: datetime, statuses: Sequence[str]
) -> list[dict[str, Any]]:
    """Bookings in one of `statuses` whose start_date lies in [start, end)."""
    with db_query_duration.labels(query="stays_started_between").time():
        stmt = (
            select(Booking)
            .where(
                Booking.status.in_(statuses),
                Booking.start_date >= start,
                Booking.start_date < end,
            )
            .order_by(Booking.start_date.asc())
        )
        rows = conn.execute(stmt).mappings().all()
    return [dict(row) for row in rows]


def activity_between(
    conn: Connection,
    start: datetime,
    end: datetime,
    arrival_statuses: Sequence[str],
    departure_status: str,
) -> list[dict[str, Any]]:
    """
    Arrivals and departures inside the closed interval [start, end].

    Arrivals are bookings in `arrival_statuses` starting in the interval;
    departures are bookings in `departure_status` ending in it.
    """
    with db_query_duration.labels(query="activity_between").time():
        arrivals = and_(
            Booking.status.in_(arrival_statuses),
            Booking.start_date >= start,
            Booking.start_date <= end,
        )
        departures = and_(
            Booking.status == departure_status,
            Booking.end_date >= start,
            Booking.end_date <= end,
        )
        stmt = select(Booking).where(or_(arrivals, departures)).order_by(Booking.created_at.asc())
        rows = conn.execute(stmt).mappings().all()
    return [dict(row) for row in rows]


def bookings_for_guest(
    conn: Connection, guest_id: str, status: Optional[str] = None
) -> list[dict[str, Any]]:
    stmt = select(Booking).where(Booking.guest_id == guest_id)
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    stmt = stmt.order_by(Booking.created_at.desc())
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def booking_dates_for_cabin(conn: Connection, cabin_id: str) -> list[dict[str, Any]]:
    """Return start/end dates of every booking of a cabin, earliest first."""
    stmt = (
        select(Booking.start_date, Booking.end_date)
        .where(Booking.cabin_id == cabin_id)
        .order_by(Booking.start_date.asc())
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]
