"""
Availability and pricing engine for bookings.

validate_and_price() checks a booking candidate against its cabin and guest
and returns a normalized copy ready to persist. It never touches the database:
callers resolve the cabin and guest records beforehand.

Two pricing modes are supported:

- TRUST: num_nights, cabin_price and total_price come from the caller and are
  only range-checked. This is what the dashboard's create form uses.
- DERIVE: nights and prices are recomputed from the dates and the cabin, and
  any caller-supplied values for them are ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from wild_oasis.errors import (
    CapacityExceededError,
    InvalidDateRangeError,
    InvalidInputError,
    InvalidQuantityError,
    NotFoundError,
)
from wild_oasis.utils.datetime import as_utc, parse_iso_datetime

# Per guest, per night. Independent of the settings record; pass the
# settings value explicitly to price with it.
DEFAULT_BREAKFAST_PRICE = 15.0

TRUSTED_FIELDS = ("num_nights", "cabin_price", "total_price")


class PricingMode(str, Enum):
    TRUST = "trust"
    DERIVE = "derive"


@dataclass(frozen=True)
class StayQuote:
    """Nights and prices for one stay."""

    num_nights: int
    cabin_price: float
    extras_price: float
    total_price: float


def count_nights(start: datetime, end: datetime) -> int:
    """
    Number of nights between two timestamps, counted in UTC calendar days.

    Example:
        >>> from datetime import timezone
        >>> count_nights(datetime(2025, 1, 10, 15, tzinfo=timezone.utc),
        ...              datetime(2025, 1, 15, 11, tzinfo=timezone.utc))
        5
    """
    return (as_utc(end).date() - as_utc(start).date()).days


def quote_stay(
    cabin: dict[str, Any],
    start: datetime,
    end: datetime,
    num_guests: int,
    has_breakfast: bool,
    breakfast_price: float = DEFAULT_BREAKFAST_PRICE,
) -> StayQuote:
    """
    Price a stay from its dates and the cabin's nightly rate.

    cabin_price = nights * (regular_price - discount)
    extras_price = nights * breakfast_price * num_guests when breakfast is included

    Args:
        cabin: Cabin row with regular_price and discount
        start: Stay start
        end: Stay end
        num_guests: Number of guests
        has_breakfast: Whether breakfast is included
        breakfast_price: Per-guest, per-night breakfast rate

    Returns:
        StayQuote: nights and the three prices
    """
    nights = count_nights(start, end)
    nightly_rate = float(cabin["regular_price"]) - float(cabin.get("discount") or 0)
    cabin_price = nights * nightly_rate
    extras_price = nights * float(breakfast_price) * num_guests if has_breakfast else 0.0
    return StayQuote(
        num_nights=nights,
        cabin_price=cabin_price,
        extras_price=extras_price,
        total_price=cabin_price + extras_price,
    )


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return as_utc(value)
    return parse_iso_datetime(value)


def validate_and_price(
    candidate: dict[str, Any],
    cabin: Optional[dict[str, Any]],
    guest: Optional[dict[str, Any]],
    mode: PricingMode = PricingMode.TRUST,
    breakfast_price: float = DEFAULT_BREAKFAST_PRICE,
) -> dict[str, Any]:
    """
    Validate a booking candidate and return it normalized for persistence.

    Args:
        candidate: Booking fields in column naming (start_date, num_guests, ...)
        cabin: The referenced cabin row, or None if it does not exist
        guest: The referenced guest row, or None if it does not exist
        mode: TRUST to keep caller prices, DERIVE to recompute them
        breakfast_price: Breakfast rate used by DERIVE mode

    Returns:
        dict: Copy of candidate with parsed UTC dates and numeric fields filled in

    Raises:
        NotFoundError: Cabin or guest missing
        CapacityExceededError: num_guests above the cabin's max_capacity
        InvalidInputError: Required TRUST-mode fields missing
        InvalidDateRangeError: Unparseable dates or end not after start
        InvalidQuantityError: Nights, guests or prices out of range
    """
    if cabin is None:
        raise NotFoundError("Cabin not found")

    num_guests = candidate.get("num_guests")
    if num_guests is None:
        raise InvalidInputError("Missing required fields: numGuests")
    if num_guests > cabin["max_capacity"]:
        raise CapacityExceededError(
            "Number of guests exceeds the maximum capacity of the cabin"
        )

    if guest is None:
        raise NotFoundError("Guest not found")

    if mode == PricingMode.TRUST:
        missing = [field for field in TRUSTED_FIELDS if candidate.get(field) is None]
        if missing:
            names = ", ".join(_camel(field) for field in missing)
            raise InvalidInputError(f"Missing required fields: {names}")

    start = _coerce_datetime(candidate.get("start_date"))
    end = _coerce_datetime(candidate.get("end_date"))
    if start is None or end is None:
        raise InvalidDateRangeError("Invalid date format")
    if end <= start:
        raise InvalidDateRangeError("End date must be after start date")

    has_breakfast = bool(candidate.get("has_breakfast", False))
    normalized = {**candidate, "start_date": start, "end_date": end, "has_breakfast": has_breakfast}

    if mode == PricingMode.DERIVE:
        quote = quote_stay(cabin, start, end, num_guests, has_breakfast, breakfast_price)
        normalized.update(
            num_nights=quote.num_nights,
            cabin_price=quote.cabin_price,
            extras_price=quote.extras_price,
            total_price=quote.total_price,
        )
    else:
        normalized["extras_price"] = candidate.get("extras_price") or 0.0

    prices = (normalized["cabin_price"], normalized["extras_price"], normalized["total_price"])
    if (
        normalized["num_nights"] < 1
        or num_guests < 1
        or not all(math.isfinite(price) and price >= 0 for price in prices)
    ):
        raise InvalidQuantityError("Invalid numeric values")

    return normalized


def _camel(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.title() for part in rest)
