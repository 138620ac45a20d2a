from datetime import datetime
from typing import Optional

from pydantic import Field

from wild_oasis.schemas.base import CamelModel
from wild_oasis.schemas.cabins import CabinRead
from wild_oasis.schemas.guests import GuestRead


class BookingCreatePayload(CamelModel):
    """
    Schema for creating a booking.

    Dates are ISO-8601 strings; they are parsed by the pricing engine so that a
    bad date is reported as an invalid date range. num_nights, cabin_price and
    total_price are required when pricing mode is "trust" and ignored when it
    is "derive".
    """

    cabin_id: Optional[str] = Field(None, description="Cabin being booked")
    guest_id: Optional[str] = Field(None, description="Guest holding the booking")
    start_date: Optional[str] = Field(None, description="Stay start, ISO-8601")
    end_date: Optional[str] = Field(None, description="Stay end, ISO-8601")
    num_nights: Optional[int] = None
    num_guests: Optional[int] = None
    cabin_price: Optional[float] = None
    extras_price: Optional[float] = None
    total_price: Optional[float] = None
    status: Optional[str] = Field(None, description="Initial status, defaults to unconfirmed")
    has_breakfast: bool = False
    is_paid: bool = False
    payment_intent_id: Optional[str] = Field(None, description="Payment provider intent id")
    observations: Optional[str] = None


# Optional columns a PATCH may clear by sending null
BOOKING_CLEARABLE_FIELDS = ("payment_intent_id", "observations")


class BookingUpdatePayload(CamelModel):
    """
    Schema for a generic booking update. All fields are optional; null clears
    the fields in BOOKING_CLEARABLE_FIELDS and is ignored for the rest.
    """

    cabin_id: Optional[str] = None
    guest_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    num_nights: Optional[int] = Field(None, ge=1)
    num_guests: Optional[int] = Field(None, ge=1)
    cabin_price: Optional[float] = Field(None, ge=0)
    extras_price: Optional[float] = Field(None, ge=0)
    total_price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None
    has_breakfast: Optional[bool] = None
    is_paid: Optional[bool] = None
    payment_intent_id: Optional[str] = None
    observations: Optional[str] = None


class BookingStatusPayload(CamelModel):
    status: Optional[str] = None


class PaymentStatusPayload(CamelModel):
    """Partial payment update: only supplied fields are written."""

    is_paid: Optional[bool] = None
    payment_intent_id: Optional[str] = None
    status: Optional[str] = None


class BookingRead(CamelModel):
    id: str
    cabin_id: str
    guest_id: str
    start_date: datetime
    end_date: datetime
    num_nights: int
    num_guests: int
    cabin_price: float
    extras_price: float
    total_price: float
    status: str
    has_breakfast: bool
    is_paid: bool
    payment_intent_id: Optional[str] = None
    observations: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    cabin: Optional[CabinRead] = None
    guest: Optional[GuestRead] = None


class BookingDates(CamelModel):
    start_date: datetime
    end_date: datetime
