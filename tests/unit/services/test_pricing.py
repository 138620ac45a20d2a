"""
Unit tests for the availability and pricing engine.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from wild_oasis.errors import (
    CapacityExceededError,
    InvalidDateRangeError,
    InvalidInputError,
    InvalidQuantityError,
    NotFoundError,
)
from wild_oasis.services.pricing import PricingMode, count_nights, quote_stay, validate_and_price

CABIN = {"id": "c", "regular_price": 200.0, "discount": 20.0, "max_capacity": 4}
GUEST = {"id": "g", "email": "ana@example.com"}


def candidate(**overrides: Any) -> dict[str, Any]:
    return {
        "start_date": "2025-01-10T00:00:00Z",
        "end_date": "2025-01-15T00:00:00Z",
        "num_guests": 2,
        "num_nights": 5,
        "cabin_price": 900.0,
        "total_price": 900.0,
        **overrides,
    }


@pytest.mark.unit
def test_count_nights_uses_calendar_days() -> None:
    """Check-in and check-out times within a day do not change the night count."""
    start = datetime(2025, 1, 10, 15, tzinfo=timezone.utc)
    end = datetime(2025, 1, 15, 11, tzinfo=timezone.utc)

    assert count_nights(start, end) == 5


@pytest.mark.unit
def test_quote_stay_applies_discount_and_breakfast() -> None:
    """Test cabin price is nights * (price - discount) and breakfast is per guest per night."""
    quote = quote_stay(
        CABIN,
        datetime(2025, 1, 10, tzinfo=timezone.utc),
        datetime(2025, 1, 15, tzinfo=timezone.utc),
        num_guests=2,
        has_breakfast=True,
        breakfast_price=15.0,
    )

    assert quote.num_nights == 5
    assert quote.cabin_price == 900.0
    assert quote.extras_price == 150.0
    assert quote.total_price == 1050.0


@pytest.mark.unit
def test_derive_mode_computes_cabin_price_from_dates() -> None:
    """Test derive mode ignores caller prices and recomputes from the cabin rate."""
    result = validate_and_price(
        candidate(num_nights=None, cabin_price=1.0, total_price=None),
        CABIN,
        GUEST,
        mode=PricingMode.DERIVE,
    )

    assert result["num_nights"] == 5
    assert result["cabin_price"] == 900.0
    assert result["extras_price"] == 0.0
    assert result["total_price"] == 900.0


@pytest.mark.unit
def test_trust_mode_keeps_caller_prices() -> None:
    """Test trust mode stores the supplied values and defaults extras to 0."""
    result = validate_and_price(
        candidate(num_nights=4, cabin_price=500.0, total_price=520.0), CABIN, GUEST
    )

    assert result["num_nights"] == 4
    assert result["cabin_price"] == 500.0
    assert result["total_price"] == 520.0
    assert result["extras_price"] == 0.0
    assert result["start_date"] == datetime(2025, 1, 10, tzinfo=timezone.utc)


@pytest.mark.unit
def test_trust_mode_requires_price_fields() -> None:
    """Test missing numNights/totalPrice are named in camelCase."""
    with pytest.raises(InvalidInputError) as exc_info:
        validate_and_price(candidate(num_nights=None, total_price=None), CABIN, GUEST)

    assert exc_info.value.message == "Missing required fields: numNights, totalPrice"


@pytest.mark.unit
def test_missing_cabin_is_not_found() -> None:
    with pytest.raises(NotFoundError, match="Cabin not found"):
        validate_and_price(candidate(), None, GUEST)


@pytest.mark.unit
def test_missing_guest_is_not_found() -> None:
    with pytest.raises(NotFoundError, match="Guest not found"):
        validate_and_price(candidate(), CABIN, None)


@pytest.mark.unit
def test_capacity_is_checked_before_guest_existence() -> None:
    """A party too large for the cabin is reported even when the guest is missing."""
    with pytest.raises(CapacityExceededError):
        validate_and_price(candidate(num_guests=5), CABIN, None)


@pytest.mark.unit
def test_num_guests_equal_to_capacity_is_accepted() -> None:
    result = validate_and_price(candidate(num_guests=4), CABIN, GUEST)

    assert result["num_guests"] == 4


@pytest.mark.unit
@pytest.mark.parametrize(
    "start, end, message",
    [
        ("not-a-date", "2025-01-15", "Invalid date format"),
        ("2025-01-10", None, "Invalid date format"),
        ("2025-01-15", "2025-01-10", "End date must be after start date"),
        ("2025-01-10T00:00:00Z", "2025-01-10T00:00:00Z", "End date must be after start date"),
    ],
)
def test_invalid_date_ranges(start: str, end: str, message: str) -> None:
    with pytest.raises(InvalidDateRangeError) as exc_info:
        validate_and_price(candidate(start_date=start, end_date=end), CABIN, GUEST)

    assert exc_info.value.message == message


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"num_nights": 0},
        {"num_guests": 0},
        {"cabin_price": -1.0},
        {"total_price": -5.0},
        {"extras_price": -0.5},
    ],
)
def test_out_of_range_quantities_are_rejected(overrides: dict[str, Any]) -> None:
    with pytest.raises(InvalidQuantityError, match="Invalid numeric values"):
        validate_and_price(candidate(**overrides), CABIN, GUEST)


@pytest.mark.unit
def test_derive_mode_rejects_same_day_stay() -> None:
    """A stay inside one calendar day derives zero nights."""
    with pytest.raises(InvalidQuantityError):
        validate_and_price(
            candidate(start_date="2025-01-10T08:00:00Z", end_date="2025-01-10T20:00:00Z"),
            CABIN,
            GUEST,
            mode=PricingMode.DERIVE,
        )


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"cabin_price": float("nan")},
        {"total_price": float("inf")},
        {"extras_price": float("nan")},
    ],
)
def test_non_finite_prices_are_rejected(overrides: dict[str, Any]) -> None:
    with pytest.raises(InvalidQuantityError, match="Invalid numeric values"):
        validate_and_price(candidate(**overrides), CABIN, GUEST)
