"""Pydantic schemas for API validation."""

from nestquarter.schemas.booking import (
    BookingCalculateRequest,
    BookingCalculateResponse,
    BookingCancelRequest,
    BookingCreate,
    BookingDeclineRequest,
    BookingDetailResponse,
    BookingInvoice,
    BookingListFilters,
    BookingListResponse,
    BookingResponse,
    PaymentStatusUpdate,
)
from nestquarter.schemas.common import PropertySummary, UserSummary
from nestquarter.schemas.payout import (
    PayoutDetailResponse,
    PayoutListResponse,
    PayoutRequest,
    PayoutResponse,
    PayoutSummary,
)
from nestquarter.schemas.property import (
    PropertyAvailability,
    PropertySearchFilters,
    PropertySearchResponse,
)

__all__ = [
    # Booking
    "BookingCalculateRequest",
    "BookingCalculateResponse",
    "BookingCancelRequest",
    "BookingCreate",
    "BookingDeclineRequest",
    "BookingDetailResponse",
    "BookingInvoice",
    "BookingListFilters",
    "BookingListResponse",
    "BookingResponse",
    "PaymentStatusUpdate",
    # Payout
    "PayoutDetailResponse",
    "PayoutListResponse",
    "PayoutRequest",
    "PayoutResponse",
    "PayoutSummary",
    # Property
    "PropertyAvailability",
    "PropertySearchFilters",
    "PropertySearchResponse",
    # Shared
    "PropertySummary",
    "UserSummary",
]
