"""Create cabins, guests, bookings and settings tables

Revision ID: 3b9d2c61a7f0
Revises:
Create Date: 2025-10-02 09:14:27.118204

"""

import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3b9d2c61a7f0"
down_revision = None
branch_labels = None
depends_on = None

STATUSES = "'unconfirmed', 'confirmed', 'checked-in', 'checked-out'"


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "cabins",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("regular_price", sa.Float(), nullable=False),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("discount", sa.Float(), nullable=False),
        sa.Column("image", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("regular_price >= 0", name="ck_cabins_regular_price"),
        sa.CheckConstraint("max_capacity >= 1", name="ck_cabins_max_capacity"),
        sa.CheckConstraint("discount >= 0", name="ck_cabins_discount"),
    )

    op.create_table(
        "guests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("nationality", sa.String(), nullable=True),
        sa.Column("national_id", sa.String(), nullable=True),
        sa.Column("country_flag", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_guests_email", "guests", ["email"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "cabin_id",
            sa.String(36),
            sa.ForeignKey("cabins.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "guest_id",
            sa.String(36),
            sa.ForeignKey("guests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("num_nights", sa.Integer(), nullable=False),
        sa.Column("num_guests", sa.Integer(), nullable=False),
        sa.Column("cabin_price", sa.Float(), nullable=False),
        sa.Column("extras_price", sa.Float(), nullable=False),
        sa.Column("total_price", sa.Float(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("has_breakfast", sa.Boolean(), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False),
        sa.Column("payment_intent_id", sa.String(), nullable=True),
        sa.Column("observations", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("num_nights >= 1", name="ck_bookings_num_nights"),
        sa.CheckConstraint("num_guests >= 1", name="ck_bookings_num_guests"),
        sa.CheckConstraint("cabin_price >= 0", name="ck_bookings_cabin_price"),
        sa.CheckConstraint("extras_price >= 0", name="ck_bookings_extras_price"),
        sa.CheckConstraint("total_price >= 0", name="ck_bookings_total_price"),
        sa.CheckConstraint(f"status IN ({STATUSES})", name="ck_bookings_status"),
    )
    for column in ("cabin_id", "guest_id", "start_date", "end_date", "status", "created_at"):
        op.create_index(f"ix_bookings_{column}", "bookings", [column])

    op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("min_booking_length", sa.Integer(), nullable=False),
        sa.Column("max_booking_length", sa.Integer(), nullable=False),
        sa.Column("max_guests_per_booking", sa.Integer(), nullable=False),
        sa.Column("breakfast_price", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("id = 1", name="ck_settings_singleton"),
        sa.CheckConstraint("min_booking_length >= 1", name="ck_settings_min_length"),
        sa.CheckConstraint(
            "max_booking_length >= min_booking_length", name="ck_settings_max_length"
        ),
        sa.CheckConstraint("max_guests_per_booking >= 1", name="ck_settings_max_guests"),
        sa.CheckConstraint("breakfast_price >= 0", name="ck_settings_breakfast_price"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("settings")
    for column in ("cabin_id", "guest_id", "start_date", "end_date", "status", "created_at"):
        op.drop_index(f"ix_bookings_{column}", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_table("guests")
    op.drop_table("cabins")
