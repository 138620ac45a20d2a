"""SQLAlchemy model for rentable cabins."""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String, Text

from wild_oasis.models.base import Base, UTCDateTime


class Cabin(Base):
    """
    ORM model for a rentable cabin.

    Pricing is per night: regular_price minus discount. max_capacity bounds
    the number of guests a booking may bring at creation time.
    """

    __tablename__ = "cabins"
    __table_args__ = (
        CheckConstraint("regular_price >= 0", name="ck_cabins_regular_price"),
        CheckConstraint("max_capacity >= 1", name="ck_cabins_max_capacity"),
        CheckConstraint("discount >= 0", name="ck_cabins_discount"),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    regular_price = Column(Float, nullable=False)
    max_capacity = Column(Integer, nullable=False)
    discount = Column(Float, nullable=False, default=0)
    image = Column(String, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
