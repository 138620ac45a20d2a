# models/bookings.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, ForeignKey, Integer, String, Text

from wild_oasis.models.base import Base, UTCDateTime

BOOKING_STATUSES = ("unconfirmed", "confirmed", "checked-in", "checked-out")


class Booking(Base):
    """
    ORM model for a reservation of a cabin by a guest over a date range.

    cabin_id and guest_id are references by identifier. Deleting a cabin or a
    guest removes its bookings in the same transaction (see db.writers), and
    the foreign keys cascade as well on databases that enforce them.

    Prices are stored as supplied or derived at creation; they are not
    recomputed when dates change later.
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("num_nights >= 1", name="ck_bookings_num_nights"),
        CheckConstraint("num_guests >= 1", name="ck_bookings_num_guests"),
        CheckConstraint("cabin_price >= 0", name="ck_bookings_cabin_price"),
        CheckConstraint("extras_price >= 0", name="ck_bookings_extras_price"),
        CheckConstraint("total_price >= 0", name="ck_bookings_total_price"),
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in BOOKING_STATUSES) + ")",
            name="ck_bookings_status",
        ),
    )

    id = Column(String(36), primary_key=True)
    cabin_id = Column(
        String(36), ForeignKey("cabins.id", ondelete="CASCADE"), nullable=False, index=True
    )
    guest_id = Column(
        String(36), ForeignKey("guests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(UTCDateTime, nullable=False, index=True)
    end_date = Column(UTCDateTime, nullable=False, index=True)
    num_nights = Column(Integer, nullable=False, default=1)
    num_guests = Column(Integer, nullable=False)
    cabin_price = Column(Float, nullable=False)
    extras_price = Column(Float, nullable=False, default=0)
    total_price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="unconfirmed", index=True)
    has_breakfast = Column(Boolean, nullable=False, default=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    payment_intent_id = Column(String, nullable=True)
    observations = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, nullable=False, index=True)
    updated_at = Column(UTCDateTime, nullable=False)
