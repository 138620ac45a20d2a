from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from wild_oasis.models.cabins import Cabin


def get_cabin(conn: Connection, cabin_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch a single cabin by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        cabin_id (str): Cabin identifier.

    Returns:
        Optional[dict[str, Any]]: Cabin row or None if not found.
    """
    row = conn.execute(select(Cabin).where(Cabin.id == cabin_id)).mappings().fetchone()
    return dict(row) if row else None


def get_cabins_by_ids(conn: Connection, cabin_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
    """
    Fetch several cabins at once, keyed by id.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        cabin_ids (Iterable[str]): Cabin identifiers; duplicates are fine.

    Returns:
        dict[str, dict]: Mapping of cabin id to cabin row for ids that exist.
    """
    ids = set(cabin_ids)
    if not ids:
        return {}
    rows = conn.execute(select(Cabin).where(Cabin.id.in_(ids))).mappings().all()
    return {row["id"]: dict(row) for row in rows}


def list_cabins(conn: Connection) -> list[dict[str, Any]]:
    rows = conn.execute(select(Cabin).order_by(Cabin.name)).mappings().all()
    return [dict(row) for row in rows]
