from typing import Any

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from wild_oasis.db.writers.bookings import delete_bookings_for_cabin
from wild_oasis.metrics import db_operations
from wild_oasis.models.cabins import Cabin
from wild_oasis.utils.datetime import utc_now


def insert_cabin(conn: Connection, data: dict[str, Any]) -> None:
    now = utc_now()
    conn.execute(insert(Cabin).values(**{"created_at": now, "updated_at": now, **data}))
    db_operations.labels(operation="insert", table="cabins").inc()


def update_cabin(conn: Connection, cabin_id: str, data: dict[str, Any]) -> bool:
    """
    Update cabin fields for an existing cabin.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        cabin_id (str): Cabin identifier.
        data (dict): Fields to update (only non-None values)

    Returns:
        bool: True if the cabin existed and was updated.
    """
    values = {**data, "updated_at": utc_now()}
    result = conn.execute(update(Cabin).where(Cabin.id == cabin_id).values(**values))
    db_operations.labels(operation="update", table="cabins").inc()
    return result.rowcount > 0


def delete_cabin_with_bookings(conn: Connection, cabin_id: str) -> bool:
    """
    Delete a cabin together with every booking that references it.

    Dependents are removed first, then the cabin. Run this inside a single
    transaction (engine.begin()) so both steps commit or roll back together.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        cabin_id (str): Cabin identifier.

    Returns:
        bool: True if the cabin existed and was deleted.
    """
    delete_bookings_for_cabin(conn, cabin_id)
    result = conn.execute(delete(Cabin).where(Cabin.id == cabin_id))
    db_operations.labels(operation="delete", table="cabins").inc()
    return result.rowcount > 0
