"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nestquarter.schemas.common import PropertySummary, UserSummary


class BookingBase(BaseModel):
    """Base booking schema."""

    property_id: UUID
    check_in_date: date
    check_out_date: date
    guest_count: int = Field(default=1, ge=1, le=20)

    @field_validator("check_out_date")
    @classmethod
    def validate_checkout(cls, v: date, info) -> date:
        check_in = info.data.get("check_in_date")
        if check_in and v <= check_in:
            raise ValueError("check_out_date must be after check_in_date")
        return v


class BookingCreate(BookingBase):
    """Schema for creating a booking request."""

    purpose_of_stay: str | None = Field(None, max_length=100)
    special_requests: str | None = Field(None, max_length=1000)


class BookingCalculateRequest(BookingBase):
    """Schema for pricing a stay without creating a booking."""


class BookingPriceBreakdown(BaseModel):
    """Schema for booking price breakdown."""

    nights: int
    subtotal_cents: int
    service_fee_cents: int
    cleaning_fee_cents: int
    security_deposit_cents: int
    total_cents: int


class BookingCalculateResponse(BaseModel):
    """Schema for booking price calculation response."""

    available: bool
    price_breakdown: BookingPriceBreakdown | None = None
    unavailable_reason: str | None = None


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    property_id: UUID
    guest_id: UUID
    host_id: UUID

    # Dates
    check_in_date: date
    check_out_date: date
    nights: int

    # Guests
    guest_count: int
    purpose_of_stay: str | None
    special_requests: str | None

    # Pricing
    subtotal_cents: int
    service_fee_cents: int
    cleaning_fee_cents: int
    security_deposit_cents: int
    total_cents: int

    # Status
    booking_status: str
    payment_status: str

    # Cancellation
    cancellation_reason: str | None
    cancelled_by: UUID | None
    cancelled_at: datetime | None

    # Timestamps
    confirmed_at: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class BookingDetailResponse(BookingResponse):
    """Booking with display data; related records may be null."""

    property: PropertySummary | None = None
    guest: UserSummary | None = None
    host: UserSummary | None = None


class BookingListResponse(BaseModel):
    """Schema for paginated booking list."""

    bookings: list[BookingDetailResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class BookingListFilters(BaseModel):
    """Filters for listing a user's bookings."""

    role: Literal["guest", "host"] | None = None
    status: Literal["pending", "confirmed", "cancelled", "completed"] | None = None
    property_id: UUID | None = None
    upcoming: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class BookingDeclineRequest(BaseModel):
    """Schema for a host declining a booking request."""

    reason: str | None = Field(None, max_length=1000)


class BookingCancelRequest(BaseModel):
    """Schema for canceling a booking."""

    reason: str | None = Field(None, max_length=1000)


class PaymentStatusUpdate(BaseModel):
    """Payment gateway callback payload."""

    payment_status: Literal["pending", "completed", "refunded", "partial"]


class BookingInvoice(BaseModel):
    """Invoice view of a booking."""

    booking_id: UUID
    booking_status: str
    payment_status: str
    created_at: datetime
    confirmed_at: datetime | None

    guest: UserSummary | None
    property: PropertySummary | None

    check_in_date: date
    check_out_date: date
    nights: int
    guest_count: int

    pricing: BookingPriceBreakdown
