"""Guest records: lookups, validated create/update and cascading delete."""

from __future__ import annotations

import re
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from wild_oasis.db.readers.guests import get_guest as read_guest
from wild_oasis.db.readers.guests import get_guest_by_email
from wild_oasis.db.writers.guests import delete_guest_with_bookings, insert_guest, update_guest as write_guest
from wild_oasis.errors import ConflictError, InvalidInputError, NotFoundError
from wild_oasis.utils.identifiers import new_id, require_valid_id

logger = structlog.get_logger(__name__)

PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{8,}$")

DUPLICATE_EMAIL = "A guest with this email already exists"


def validate_phone_number(phone_number: Optional[str]) -> None:
    """
    Empty phone numbers are allowed; anything else needs 8+ digits, spaces or hyphens.

    Raises:
        InvalidInputError: Phone number does not match
    """
    if phone_number and not PHONE_PATTERN.match(phone_number):
        raise InvalidInputError(
            "Invalid phone number format. Must be at least 8 digits "
            "and may include +, spaces, or hyphens"
        )


def get_guest(conn: Connection, guest_id: str) -> dict[str, Any]:
    require_valid_id(guest_id, "guest")
    guest = read_guest(conn, guest_id)
    if guest is None:
        raise NotFoundError("Guest not found")
    return guest


def find_guest_by_email(conn: Connection, email: str) -> dict[str, Any]:
    guest = get_guest_by_email(conn, email)
    if guest is None:
        raise NotFoundError("Guest not found")
    return guest


def create_guest(conn: Connection, data: dict[str, Any]) -> dict[str, Any]:
    """
    Create a guest with a unique email.

    Raises:
        InvalidInputError: Bad phone number
        ConflictError: Email already registered
    """
    validate_phone_number(data.get("phone_number"))
    if get_guest_by_email(conn, data["email"]) is not None:
        raise ConflictError(DUPLICATE_EMAIL)

    guest_id = new_id()
    values = {"phone_number": "", "address": "", **data, "id": guest_id}
    try:
        insert_guest(conn, values)
    except IntegrityError:
        raise ConflictError(DUPLICATE_EMAIL) from None

    logger.info("guest_created", guest_id=guest_id)
    return get_guest(conn, guest_id)


def update_guest(conn: Connection, guest_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """
    Update a guest. A changed email must not belong to another guest.

    Raises:
        InvalidInputError: Malformed id or bad phone number
        NotFoundError: Guest missing
        ConflictError: Email taken by another guest
    """
    existing = get_guest(conn, guest_id)
    if "email" in changes and changes["email"] != existing["email"]:
        if get_guest_by_email(conn, changes["email"], exclude_id=guest_id) is not None:
            raise ConflictError(DUPLICATE_EMAIL)
    if "phone_number" in changes:
        validate_phone_number(changes["phone_number"])

    if changes:
        try:
            write_guest(conn, guest_id, changes)
        except IntegrityError:
            raise ConflictError(DUPLICATE_EMAIL) from None

    logger.info("guest_updated", guest_id=guest_id, fields=sorted(changes))
    return get_guest(conn, guest_id)


def delete_guest(conn: Connection, guest_id: str) -> None:
    """
    Delete a guest and the guest's bookings in the caller's transaction.

    Raises:
        InvalidInputError: Malformed id
        NotFoundError: Guest missing
    """
    require_valid_id(guest_id, "guest")
    if not delete_guest_with_bookings(conn, guest_id):
        raise NotFoundError("Guest not found")
    logger.info("guest_deleted", guest_id=guest_id)
