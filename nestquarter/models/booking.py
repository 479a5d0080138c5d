"""Booking database model."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from nestquarter.database import Base


class Booking(Base):
    """Booking model.

    Pricing columns are written once at creation and never updated.
    """

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_property_dates", "property_id", "check_in_date", "check_out_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True
    )
    guest_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    host_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )

    # Dates (half-open: the check-out day is free for the next guest)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    nights: Mapped[int] = mapped_column(Integer, nullable=False)

    # Guests
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    purpose_of_stay: Mapped[str | None] = mapped_column(String(100))
    special_requests: Mapped[str | None] = mapped_column(Text)

    # Pricing (in cents)
    subtotal_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    service_fee_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    cleaning_fee_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    security_deposit_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False)

    # Status
    booking_status: Mapped[str] = mapped_column(
        String(20), default="pending", index=True
    )  # pending, confirmed, cancelled, completed
    payment_status: Mapped[str] = mapped_column(
        String(20), default="pending"
    )  # pending, completed, refunded, partial

    # Cancellation (a host decline is a cancellation by the host)
    cancellation_reason: Mapped[str | None] = mapped_column(Text)
    cancelled_by: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Timestamps
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
