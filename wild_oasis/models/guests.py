"""SQLAlchemy model for hotel guests."""

from sqlalchemy import Column, String

from wild_oasis.models.base import Base, UTCDateTime


class Guest(Base):
    """ORM model for a guest. Email is unique across all guests."""

    __tablename__ = "guests"

    id = Column(String(36), primary_key=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    nationality = Column(String, nullable=True)
    national_id = Column(String, nullable=True)
    country_flag = Column(String, nullable=True)
    phone_number = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    image = Column(String, nullable=True)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
