from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from wild_oasis.models.guests import Guest


def get_guest(conn: Connection, guest_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch a single guest by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        guest_id (str): Guest identifier.

    Returns:
        Optional[dict[str, Any]]: Guest row or None if not found.
    """
    row = conn.execute(select(Guest).where(Guest.id == guest_id)).mappings().fetchone()
    return dict(row) if row else None


def guest_exists(conn: Connection, guest_id: str) -> bool:
    result = conn.execute(select(Guest.id).where(Guest.id == guest_id))
    return result.fetchone() is not None


def get_guest_by_email(
    conn: Connection, email: str, exclude_id: Optional[str] = None
) -> Optional[dict[str, Any]]:
    """
    Look up a guest by email address.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        email (str): Email to match exactly.
        exclude_id (Optional[str]): Ignore this guest (used when a guest changes email).

    Returns:
        Optional[dict[str, Any]]: Guest row or None.
    """
    stmt = select(Guest).where(Guest.email == email)
    if exclude_id is not None:
        stmt = stmt.where(Guest.id != exclude_id)
    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def get_guests_by_ids(conn: Connection, guest_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
    ids = set(guest_ids)
    if not ids:
        return {}
    rows = conn.execute(select(Guest).where(Guest.id.in_(ids))).mappings().all()
    return {row["id"]: dict(row) for row in rows}


def list_guests(conn: Connection) -> list[dict[str, Any]]:
    rows = conn.execute(select(Guest).order_by(Guest.full_name)).mappings().all()
    return [dict(row) for row in rows]
