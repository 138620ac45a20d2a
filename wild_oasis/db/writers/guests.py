from typing import Any

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from wild_oasis.db.writers.bookings import delete_bookings_for_guest
from wild_oasis.metrics import db_operations
from wild_oasis.models.guests import Guest
from wild_oasis.utils.datetime import utc_now


def insert_guest(conn: Connection, data: dict[str, Any]) -> None:
    now = utc_now()
    conn.execute(insert(Guest).values(**{"created_at": now, "updated_at": now, **data}))
    db_operations.labels(operation="insert", table="guests").inc()


def update_guest(conn: Connection, guest_id: str, data: dict[str, Any]) -> bool:
    values = {**data, "updated_at": utc_now()}
    result = conn.execute(update(Guest).where(Guest.id == guest_id).values(**values))
    db_operations.labels(operation="update", table="guests").inc()
    return result.rowcount > 0


def delete_guest_with_bookings(conn: Connection, guest_id: str) -> bool:
    """
    Delete a guest together with the guest's bookings, dependents first.

    Returns:
        bool: True if the guest existed and was deleted.
    """
    delete_bookings_for_guest(conn, guest_id)
    result = conn.execute(delete(Guest).where(Guest.id == guest_id))
    db_operations.labels(operation="delete", table="guests").inc()
    return result.rowcount > 0
