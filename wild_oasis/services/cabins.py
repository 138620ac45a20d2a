"""Cabin records: lookups, validated create/update and cascading delete."""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.engine import Connection

from wild_oasis.db.readers.cabins import get_cabin as read_cabin
from wild_oasis.db.writers.cabins import delete_cabin_with_bookings, insert_cabin, update_cabin as write_cabin
from wild_oasis.errors import InvalidInputError, NotFoundError
from wild_oasis.utils.identifiers import new_id, require_valid_id

logger = structlog.get_logger(__name__)


def validate_cabin(values: dict[str, Any]) -> None:
    """
    Check a complete cabin record.

    Raises:
        InvalidInputError: On the first rule that fails
    """
    required = ("name", "description", "regular_price", "max_capacity", "image")
    missing = [field for field in required if values.get(field) in (None, "")]
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")
    if values["regular_price"] < 0:
        raise InvalidInputError("Regular price must be a positive number")
    if values["max_capacity"] < 1:
        raise InvalidInputError("Maximum capacity must be at least 1")
    if (values.get("discount") or 0) < 0:
        raise InvalidInputError("Discount cannot be negative")


def get_cabin(conn: Connection, cabin_id: str) -> dict[str, Any]:
    require_valid_id(cabin_id, "cabin")
    cabin = read_cabin(conn, cabin_id)
    if cabin is None:
        raise NotFoundError("Cabin not found")
    return cabin


def create_cabin(conn: Connection, data: dict[str, Any]) -> dict[str, Any]:
    values = {"discount": 0, **data}
    validate_cabin(values)
    cabin_id = new_id()
    insert_cabin(conn, {"id": cabin_id, **values})
    logger.info("cabin_created", cabin_id=cabin_id, name=values["name"])
    return get_cabin(conn, cabin_id)


def update_cabin(conn: Connection, cabin_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """
    Update a cabin; the merged record is validated before writing.

    Raises:
        InvalidInputError: Malformed id or merged record invalid
        NotFoundError: Cabin missing
    """
    existing = get_cabin(conn, cabin_id)
    validate_cabin({**existing, **changes})
    if changes:
        write_cabin(conn, cabin_id, changes)
    logger.info("cabin_updated", cabin_id=cabin_id, fields=sorted(changes))
    return get_cabin(conn, cabin_id)


def delete_cabin(conn: Connection, cabin_id: str) -> None:
    """
    Delete a cabin and its bookings in the caller's transaction.

    Raises:
        InvalidInputError: Malformed id
        NotFoundError: Cabin missing
    """
    require_valid_id(cabin_id, "cabin")
    if not delete_cabin_with_bookings(conn, cabin_id):
        raise NotFoundError("Cabin not found")
    logger.info("cabin_deleted", cabin_id=cabin_id)
