"""
Unit tests for route helper functions.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from wild_oasis.errors import (
    CapacityExceededError,
    ConflictError,
    InvalidDateRangeError,
    InvalidStatusError,
    NotFoundError,
)
from wild_oasis.routes._helpers import changed_fields, dump, to_http_exception
from wild_oasis.schemas.bookings import (
    BOOKING_CLEARABLE_FIELDS,
    BookingDates,
    BookingUpdatePayload,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, status_code",
    [
        (NotFoundError("Booking not found"), 404),
        (InvalidDateRangeError("End date must be after start date"), 400),
        (CapacityExceededError("too many"), 400),
        (InvalidStatusError("Invalid status value"), 400),
        (ConflictError("A guest with this email already exists"), 409),
    ],
)
def test_to_http_exception_uses_error_status(error: Exception, status_code: int) -> None:
    exc = to_http_exception(error)  # type: ignore[arg-type]

    assert exc.status_code == status_code
    assert exc.detail == str(error)


@pytest.mark.unit
def test_changed_fields_keeps_only_sent_non_null_values() -> None:
    payload = BookingUpdatePayload.model_validate(
        {"numGuests": 3, "observations": None, "isPaid": False}
    )

    assert changed_fields(payload) == {"num_guests": 3, "is_paid": False}


@pytest.mark.unit
def test_changed_fields_keeps_null_for_clearable_fields() -> None:
    payload = BookingUpdatePayload.model_validate({"observations": None, "numGuests": None})

    assert changed_fields(payload, BOOKING_CLEARABLE_FIELDS) == {"observations": None}


@pytest.mark.unit
def test_dump_produces_camel_case_json() -> None:
    row = {
        "start_date": datetime(2025, 1, 10, tzinfo=timezone.utc),
        "end_date": datetime(2025, 1, 15, tzinfo=timezone.utc),
    }

    body = dump(BookingDates, row)

    assert body == {"startDate": "2025-01-10T00:00:00Z", "endDate": "2025-01-15T00:00:00Z"}
