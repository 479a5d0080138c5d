"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the booking core tables:
- Users and properties (owned by other services, mirrored here)
- Bookings, with an exclusion constraint keeping pending and confirmed
  stays on one property from overlapping
- Payouts, at most one per booking
"""

from typing import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all database tables."""

    # btree_gist lets the exclusion constraint mix = on UUID with && on ranges
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    # ==================== USERS ====================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        sa.Column("profile_photo_url", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== PROPERTIES ====================
    op.create_table(
        "properties",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "host_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("address_line1", sa.String(255)),
        sa.Column("city", sa.String(100), nullable=False, index=True),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), server_default="pending_review", index=True),
        sa.Column("monthly_price_cents", sa.Integer, nullable=False),
        sa.Column("cleaning_fee_cents", sa.Integer, server_default="0"),
        sa.Column("security_deposit_cents", sa.Integer),
        sa.Column("minimum_stay_weeks", sa.Integer, server_default="2"),
        sa.Column("maximum_stay_months", sa.Integer, server_default="12"),
        sa.Column("max_guests", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("monthly_price_cents >= 0", name="ck_properties_price_non_negative"),
    )

    op.create_table(
        "property_photos",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "property_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("properties.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("photo_url", sa.Text, nullable=False),
        sa.Column("caption", sa.String(255)),
        sa.Column("display_order", sa.Integer, server_default="0"),
    )

    # ==================== BOOKINGS ====================
    op.create_table(
        "bookings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "property_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("properties.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("guest_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("host_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("check_in_date", sa.Date, nullable=False),
        sa.Column("check_out_date", sa.Date, nullable=False),
        sa.Column("nights", sa.Integer, nullable=False),
        sa.Column("guest_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("purpose_of_stay", sa.String(100)),
        sa.Column("special_requests", sa.Text),
        sa.Column("subtotal_cents", sa.Integer, nullable=False),
        sa.Column("service_fee_cents", sa.Integer, nullable=False),
        sa.Column("cleaning_fee_cents", sa.Integer, nullable=False, server_default="0"),
        sa.Column("security_deposit_cents", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_cents", sa.Integer, nullable=False),
        sa.Column("booking_status", sa.String(20), server_default="pending", index=True),
        sa.Column("payment_status", sa.String(20), server_default="pending"),
        sa.Column("cancellation_reason", sa.Text),
        sa.Column("cancelled_by", postgresql.UUID(as_uuid=True)),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("check_out_date > check_in_date", name="ck_bookings_dates_ordered"),
        sa.CheckConstraint(
            "booking_status IN ('pending', 'confirmed', 'cancelled', 'completed')",
            name="ck_bookings_status",
        ),
    )
    op.create_index(
        "ix_bookings_property_dates",
        "bookings",
        ["property_id", "check_in_date", "check_out_date"],
    )

    # Pending and confirmed stays on a property never overlap ([) ranges)
    op.execute(
        """
        ALTER TABLE bookings
        ADD CONSTRAINT ex_bookings_no_overlap
        EXCLUDE USING gist (
            property_id WITH =,
            daterange(check_in_date, check_out_date, '[)') WITH &&
        )
        WHERE (booking_status IN ('pending', 'confirmed'))
        """
    )

    # ==================== PAYOUTS ====================
    op.create_table(
        "payouts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("host_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("amount_cents", sa.Integer, nullable=False),
        sa.Column("platform_fee_cents", sa.Integer, nullable=False),
        sa.Column("net_amount_cents", sa.Integer, nullable=False),
        sa.Column("payout_status", sa.String(20), server_default="pending", index=True),
        sa.Column("payout_method_id", sa.String(100)),
        sa.Column("scheduled_for", sa.Date, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("booking_id", name="uq_payouts_booking_id"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("payouts")
    op.execute("ALTER TABLE bookings DROP CONSTRAINT IF EXISTS ex_bookings_no_overlap")
    op.drop_index("ix_bookings_property_dates", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("property_photos")
    op.drop_table("properties")
    op.drop_table("users")
