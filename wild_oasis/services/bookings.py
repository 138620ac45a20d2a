"""
Booking lifecycle: creation, generic updates, status and payment transitions,
deletion and paginated listing.

Statuses move through unconfirmed -> confirmed -> checked-in -> checked-out.
There is no cancelled state; cancelling a booking deletes it.

The transition policy is explicit. PERMISSIVE allows any enumerated status to
follow any other (the dashboard relies on this to correct mistakes). STRICT
only allows a single step forward, plus re-applying the current status.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Optional

import structlog
from sqlalchemy.engine import Connection

from wild_oasis.db.readers.bookings import find_overlapping_bookings, get_booking as read_booking
from wild_oasis.db.readers.bookings import list_bookings as read_bookings_page
from wild_oasis.db.readers.cabins import get_cabin, get_cabins_by_ids
from wild_oasis.db.readers.guests import get_guest, get_guests_by_ids
from wild_oasis.db.writers.bookings import delete_booking as remove_booking
from wild_oasis.db.writers.bookings import insert_booking, update_booking as write_booking
from wild_oasis.errors import (
    ConflictError,
    HotelError,
    InvalidInputError,
    InvalidStatusError,
    NotFoundError,
)
from wild_oasis.metrics import booking_operations, bookings_priced, status_transitions
from wild_oasis.services.pricing import DEFAULT_BREAKFAST_PRICE, PricingMode, validate_and_price
from wild_oasis.utils.datetime import parse_iso_datetime
from wild_oasis.utils.identifiers import new_id, require_valid_id

logger = structlog.get_logger(__name__)


class BookingStatus(str, Enum):
    UNCONFIRMED = "unconfirmed"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class TransitionPolicy(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


STRICT_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.UNCONFIRMED: frozenset({BookingStatus.CONFIRMED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CHECKED_IN}),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT}),
    BookingStatus.CHECKED_OUT: frozenset(),
}

# camelCase sort keys accepted by list_bookings -> booking column
SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "startDate": "start_date",
    "endDate": "end_date",
    "totalPrice": "total_price",
    "numGuests": "num_guests",
    "numNights": "num_nights",
    "status": "status",
}

# Generic update: fields whose value is re-checked before writing
_DATE_FIELDS = ("start_date", "end_date")


def parse_status(value: Any) -> BookingStatus:
    """
    Convert a raw status value to BookingStatus.

    Raises:
        InvalidStatusError: If value is missing or not one of the four statuses
    """
    try:
        return BookingStatus(value)
    except ValueError:
        raise InvalidStatusError("Invalid status value") from None


def check_transition(
    current: BookingStatus, new: BookingStatus, policy: TransitionPolicy
) -> None:
    """
    Ensure a status change is allowed under the given policy.

    Re-applying the current status is always allowed.

    Raises:
        InvalidStatusError: If STRICT policy forbids current -> new
    """
    if policy == TransitionPolicy.PERMISSIVE or current == new:
        return
    if new not in STRICT_TRANSITIONS[current]:
        raise InvalidStatusError(f"Cannot change booking status from {current.value} to {new.value}")


@contextmanager
def _tracked(operation: str) -> Iterator[None]:
    try:
        yield
    except HotelError as e:
        booking_operations.labels(operation=operation, outcome=type(e).__name__).inc()
        raise
    booking_operations.labels(operation=operation, outcome="success").inc()


def expand_bookings(
    conn: Connection,
    rows: list[dict[str, Any]],
    with_cabin: bool = True,
    with_guest: bool = True,
) -> list[dict[str, Any]]:
    """
    Attach the referenced cabin and guest records to each booking row.

    A reference that no longer resolves is attached as None.
    """
    cabins = get_cabins_by_ids(conn, (r["cabin_id"] for r in rows)) if with_cabin else {}
    guests = get_guests_by_ids(conn, (r["guest_id"] for r in rows)) if with_guest else {}
    expanded = []
    for row in rows:
        item = dict(row)
        if with_cabin:
            item["cabin"] = cabins.get(row["cabin_id"])
        if with_guest:
            item["guest"] = guests.get(row["guest_id"])
        expanded.append(item)
    return expanded


def get_booking(conn: Connection, booking_id: str) -> dict[str, Any]:
    """
    Fetch one booking with its cabin and guest expanded.

    Raises:
        InvalidInputError: Malformed id
        NotFoundError: No booking with that id
    """
    require_valid_id(booking_id, "booking")
    row = read_booking(conn, booking_id)
    if row is None:
        raise NotFoundError("Booking not found")
    return expand_bookings(conn, [row])[0]


def list_bookings(
    conn: Connection,
    status: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> dict[str, Any]:
    """
    Return one page of bookings, newest first unless another sort is requested.

    Args:
        conn: Database connection
        status: Only bookings in this status
        sort_by: camelCase field name from SORTABLE_FIELDS
        sort_order: "desc" for descending, anything else ascending
        page: 1-based page number
        limit: Page size

    Returns:
        dict: bookings, total, page, limit, totalPages
    """
    if status is not None:
        status = parse_status(status).value
    if page < 1:
        raise InvalidInputError("Invalid page number")
    if limit < 1:
        raise InvalidInputError("Invalid limit")

    if sort_by:
        if sort_by not in SORTABLE_FIELDS:
            raise InvalidInputError(f"Cannot sort bookings by {sort_by}")
        sort_column = SORTABLE_FIELDS[sort_by]
        descending = sort_order == "desc"
    else:
        sort_column, descending = "created_at", True

    rows, total = read_bookings_page(
        conn,
        status=status,
        sort_column=sort_column,
        descending=descending,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return {
        "bookings": expand_bookings(conn, rows),
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if total else 0,
    }


def create_booking(
    conn: Connection,
    payload: dict[str, Any],
    mode: PricingMode = PricingMode.TRUST,
    breakfast_price: float = DEFAULT_BREAKFAST_PRICE,
    strict_overlap: bool = False,
) -> dict[str, Any]:
    """
    Validate, price and persist a new booking.

    Args:
        conn: Connection inside a transaction
        payload: Booking fields in column naming
        mode: Pricing mode (see services.pricing)
        breakfast_price: Breakfast rate for DERIVE mode
        strict_overlap: Reject bookings overlapping another booking of the same cabin

    Returns:
        dict: The stored booking with cabin and guest expanded

    Raises:
        HotelError: Any validation failure from the pricing engine, a malformed
            id, a bad status, or an overlap in strict mode
    """
    with _tracked("create"):
        cabin_id = payload.get("cabin_id")
        guest_id = payload.get("guest_id")
        if not cabin_id or not guest_id:
            raise InvalidInputError("Missing required fields: cabinId, guestId")
        try:
            require_valid_id(cabin_id, "cabin")
            require_valid_id(guest_id, "guest")
        except InvalidInputError:
            raise InvalidInputError("Invalid cabin or guest ID format") from None

        status = parse_status(payload.get("status") or BookingStatus.UNCONFIRMED.value)

        cabin = get_cabin(conn, cabin_id)
        guest = get_guest(conn, guest_id)
        priced = validate_and_price(payload, cabin, guest, mode, breakfast_price)
        bookings_priced.labels(mode=mode.value).inc()

        if strict_overlap:
            clashes = find_overlapping_bookings(
                conn, cabin_id, priced["start_date"], priced["end_date"]
            )
            if clashes:
                raise ConflictError("Cabin is already booked for some of the requested dates")

        booking_id = new_id()
        insert_booking(
            conn,
            {
                "id": booking_id,
                "cabin_id": cabin_id,
                "guest_id": guest_id,
                "start_date": priced["start_date"],
                "end_date": priced["end_date"],
                "num_nights": priced["num_nights"],
                "num_guests": priced["num_guests"],
                "cabin_price": priced["cabin_price"],
                "extras_price": priced["extras_price"],
                "total_price": priced["total_price"],
                "status": status.value,
                "has_breakfast": priced["has_breakfast"],
                "is_paid": bool(payload.get("is_paid", False)),
                "payment_intent_id": payload.get("payment_intent_id"),
                "observations": payload.get("observations"),
            },
        )

    logger.info(
        "booking_created",
        booking_id=booking_id,
        cabin_id=cabin_id,
        guest_id=guest_id,
        pricing_mode=mode.value,
        total_price=priced["total_price"],
    )
    return get_booking(conn, booking_id)


def update_booking(conn: Connection, booking_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update to a booking.

    Changed cabin_id/guest_id values are checked for format and existence.
    Status must be one of the enumerated values, but no transition rule
    applies here. Date order and capacity are not re-checked.

    Raises:
        InvalidInputError: Malformed ids or dates
        InvalidStatusError: Unknown status
        NotFoundError: Booking, cabin or guest missing
    """
    with _tracked("update"):
        require_valid_id(booking_id, "booking")
        if read_booking(conn, booking_id) is None:
            raise NotFoundError("Booking not found")

        values = dict(changes)
        if "cabin_id" in values:
            require_valid_id(values["cabin_id"], "cabin")
            if get_cabin(conn, values["cabin_id"]) is None:
                raise NotFoundError("Cabin not found")
        if "guest_id" in values:
            require_valid_id(values["guest_id"], "guest")
            if get_guest(conn, values["guest_id"]) is None:
                raise NotFoundError("Guest not found")
        if "status" in values:
            values["status"] = parse_status(values["status"]).value
        for field in _DATE_FIELDS:
            if field in values:
                parsed = parse_iso_datetime(values[field])
                if parsed is None:
                    raise InvalidInputError("Invalid date format")
                values[field] = parsed

        if values:
            write_booking(conn, booking_id, values)

    logger.info("booking_updated", booking_id=booking_id, fields=sorted(values))
    return get_booking(conn, booking_id)


def update_status(
    conn: Connection,
    booking_id: str,
    status: Any,
    policy: TransitionPolicy = TransitionPolicy.PERMISSIVE,
) -> dict[str, Any]:
    """
    Move a booking to a new status.

    Setting the status a booking already has is a no-op write and returns the
    same booking.

    Raises:
        InvalidInputError: Malformed id
        InvalidStatusError: Unknown status or transition refused by policy
        NotFoundError: Booking missing
    """
    with _tracked("update_status"):
        require_valid_id(booking_id, "booking")
        new_status = parse_status(status)
        current = read_booking(conn, booking_id)
        if current is None:
            raise NotFoundError("Booking not found")

        old_status = BookingStatus(current["status"])
        check_transition(old_status, new_status, policy)
        write_booking(conn, booking_id, {"status": new_status.value})

    status_transitions.labels(from_status=old_status.value, to_status=new_status.value).inc()
    logger.info(
        "booking_status_updated",
        booking_id=booking_id,
        from_status=old_status.value,
        to_status=new_status.value,
    )
    return get_booking(conn, booking_id)


def update_payment_status(
    conn: Connection,
    booking_id: str,
    is_paid: Optional[bool] = None,
    payment_intent_id: Optional[str] = None,
    status: Optional[str] = None,
    policy: TransitionPolicy = TransitionPolicy.PERMISSIVE,
) -> dict[str, Any]:
    """
    Record payment information on a booking.

    Only the arguments that are not None are written.

    Raises:
        InvalidInputError: Malformed id
        InvalidStatusError: Unknown status or transition refused by policy
        NotFoundError: Booking missing
    """
    with _tracked("update_payment_status"):
        require_valid_id(booking_id, "booking")
        current = read_booking(conn, booking_id)
        if current is None:
            raise NotFoundError("Booking not found")

        values: dict[str, Any] = {}
        if is_paid is not None:
            values["is_paid"] = is_paid
        if payment_intent_id is not None:
            values["payment_intent_id"] = payment_intent_id
        if status is not None:
            new_status = parse_status(status)
            check_transition(BookingStatus(current["status"]), new_status, policy)
            values["status"] = new_status.value

        if values:
            write_booking(conn, booking_id, values)

    logger.info("booking_payment_updated", booking_id=booking_id, fields=sorted(values))
    return get_booking(conn, booking_id)


def delete_booking(conn: Connection, booking_id: str) -> None:
    """
    Permanently delete a booking, whatever its status.

    Raises:
        InvalidInputError: Malformed id
        NotFoundError: Booking missing
    """
    with _tracked("delete"):
        require_valid_id(booking_id, "booking")
        if not remove_booking(conn, booking_id):
            raise NotFoundError("Booking not found")

    logger.info("booking_deleted", booking_id=booking_id)
