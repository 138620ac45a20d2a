from typing import Any

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from wild_oasis.metrics import db_operations
from wild_oasis.models.bookings import Booking
from wild_oasis.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def insert_booking(conn: Connection, data: dict[str, Any]) -> None:
    """
    Insert a validated booking row.

    Args:
        conn (Connection): SQLAlchemy DB connection (inside a transaction).
        data (dict[str, Any]): Column values including id; created_at and
            updated_at are filled in when absent.
    """
    now = utc_now()
    row = {"created_at": now, "updated_at": now, **data}

    conn.execute(insert(Booking).values(**row))
    db_operations.labels(operation="insert", table="bookings").inc()


def update_booking(conn: Connection, booking_id: str, data: dict[str, Any]) -> bool:
    """
    Update fields of an existing booking.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        booking_id (str): Booking identifier.
        data (dict): Fields to update (only the ones being changed)

    Returns:
        bool: True if a row was updated, False if the booking does not exist.
    """
    values = {**data, "updated_at": utc_now()}

    result = conn.execute(update(Booking).where(Booking.id == booking_id).values(**values))
    db_operations.labels(operation="update", table="bookings").inc()
    return result.rowcount > 0


def delete_booking(conn: Connection, booking_id: str) -> bool:
    """
    Permanently delete a booking.

    Returns:
        bool: True if a row was deleted.
    """
    result = conn.execute(delete(Booking).where(Booking.id == booking_id))
    db_operations.labels(operation="delete", table="bookings").inc()
    return result.rowcount > 0


def delete_bookings_for_cabin(conn: Connection, cabin_id: str) -> int:
    result = conn.execute(delete(Booking).where(Booking.cabin_id == cabin_id))
    db_operations.labels(operation="delete", table="bookings").inc()
    logger.info("cabin_bookings_deleted", cabin_id=cabin_id, count=result.rowcount)
    return result.rowcount


def delete_bookings_for_guest(conn: Connection, guest_id: str) -> int:
    result = conn.execute(delete(Booking).where(Booking.guest_id == guest_id))
    db_operations.labels(operation="delete", table="bookings").inc()
    logger.info("guest_bookings_deleted", guest_id=guest_id, count=result.rowcount)
    return result.rowcount
