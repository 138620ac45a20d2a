from datetime import datetime
from typing import Optional

from pydantic import Field

from wild_oasis.schemas.base import CamelModel


class CabinCreatePayload(CamelModel):
    """
    Schema for creating a cabin. The image is a URL; uploads are handled elsewhere.
    """

    name: str = Field(..., min_length=1, description="Cabin name")
    description: str = Field(..., min_length=1, description="Cabin description")
    regular_price: float = Field(..., ge=0, description="Price per night before discount")
    max_capacity: int = Field(..., ge=1, description="Maximum number of guests")
    discount: float = Field(0, ge=0, description="Discount per night")
    image: str = Field(..., min_length=1, description="Image URL")


class CabinUpdatePayload(CamelModel):
    """Schema for updating a cabin. All fields are optional."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    regular_price: Optional[float] = Field(None, ge=0)
    max_capacity: Optional[int] = Field(None, ge=1)
    discount: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)


class CabinRead(CamelModel):
    id: str
    name: str
    description: str
    regular_price: float
    max_capacity: int
    discount: float
    image: str
    created_at: datetime
    updated_at: datetime
