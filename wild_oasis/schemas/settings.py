from typing import Literal, Optional

from pydantic import Field

from wild_oasis.schemas.base import CamelModel


class SettingsPayload(CamelModel):
    """Schema for creating settings. Cross-field rules are checked by the service."""

    min_booking_length: int = Field(..., description="Minimum nights per booking")
    max_booking_length: int = Field(..., description="Maximum nights per booking")
    max_guests_per_booking: int = Field(..., description="Maximum guests per booking")
    breakfast_price: float = Field(..., description="Breakfast price per guest per night")


class SettingsUpdatePayload(CamelModel):
    """Schema for updating settings. All fields are optional."""

    min_booking_length: Optional[int] = None
    max_booking_length: Optional[int] = None
    max_guests_per_booking: Optional[int] = None
    breakfast_price: Optional[float] = None


class SettingsRead(CamelModel):
    min_booking_length: int
    max_booking_length: int
    max_guests_per_booking: int
    breakfast_price: float
    source: Literal["persisted", "default"]
