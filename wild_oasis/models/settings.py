"""SQLAlchemy model for the singleton business-settings record."""

from sqlalchemy import CheckConstraint, Column, Float, Integer

from wild_oasis.models.base import Base, UTCDateTime

SETTINGS_ROW_ID = 1


class Setting(Base):
    """
    ORM model for booking-length and pricing policy.

    The primary key is pinned to SETTINGS_ROW_ID, so the table can never hold
    more than one row. A concurrent second insert fails on the primary key.
    """

    __tablename__ = "settings"
    __table_args__ = (
        CheckConstraint(f"id = {SETTINGS_ROW_ID}", name="ck_settings_singleton"),
        CheckConstraint("min_booking_length >= 1", name="ck_settings_min_length"),
        CheckConstraint(
            "max_booking_length >= min_booking_length", name="ck_settings_max_length"
        ),
        CheckConstraint("max_guests_per_booking >= 1", name="ck_settings_max_guests"),
        CheckConstraint("breakfast_price >= 0", name="ck_settings_breakfast_price"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False, default=SETTINGS_ROW_ID)
    min_booking_length = Column(Integer, nullable=False)
    max_booking_length = Column(Integer, nullable=False)
    max_guests_per_booking = Column(Integer, nullable=False)
    breakfast_price = Column(Float, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
