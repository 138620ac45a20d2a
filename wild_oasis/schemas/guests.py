from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from wild_oasis.schemas.base import CamelModel


class GuestCreatePayload(CamelModel):
    """
    Schema for creating a guest. Email must be unique across guests.
    """

    full_name: str = Field(..., min_length=1, description="Guest full name")
    email: EmailStr = Field(..., description="Guest email address")
    nationality: Optional[str] = Field(None, description="Nationality")
    national_id: Optional[str] = Field(None, alias="nationalID", description="National ID")
    country_flag: Optional[str] = Field(None, description="Country flag image URL")
    phone_number: str = Field("", description="Phone number, 8+ digits")
    address: str = Field("", description="Postal address")
    image: Optional[str] = Field(None, description="Avatar URL")


GUEST_CLEARABLE_FIELDS = ("nationality", "national_id", "country_flag", "image")


class GuestUpdatePayload(CamelModel):
    """
    Schema for updating a guest. All fields are optional; null clears
    GUEST_CLEARABLE_FIELDS and is ignored for the rest.
    """

    full_name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    nationality: Optional[str] = None
    national_id: Optional[str] = Field(None, alias="nationalID")
    country_flag: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    image: Optional[str] = None


class GuestRead(CamelModel):
    id: str
    full_name: str
    email: str
    nationality: Optional[str] = None
    national_id: Optional[str] = Field(None, alias="nationalID")
    country_flag: Optional[str] = None
    phone_number: str = ""
    address: str = ""
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
