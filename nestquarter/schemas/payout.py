"""Payout-related Pydantic schemas."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from nestquarter.schemas.common import PropertySummary, UserSummary


class PayoutRequest(BaseModel):
    """Schema for a host requesting a payout."""

    booking_ids: list[UUID] | None = None
    payout_method_id: str | None = Field(None, max_length=100)


class PayoutResponse(BaseModel):
    """Schema for payout response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    host_id: UUID
    booking_id: UUID
    amount_cents: int
    platform_fee_cents: int
    net_amount_cents: int
    payout_status: str
    payout_method_id: str | None
    scheduled_for: date
    created_at: datetime
    updated_at: datetime


class PayoutBookingSummary(BaseModel):
    id: UUID
    check_in_date: date
    check_out_date: date
    nights: int
    total_cents: int
    property: PropertySummary | None = None
    guest: UserSummary | None = None


class PayoutDetailResponse(PayoutResponse):
    """Payout with the booking it pays out; the booking may be null."""

    booking: PayoutBookingSummary | None = None


class PayoutListResponse(BaseModel):
    payouts: list[PayoutDetailResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class PayoutListFilters(BaseModel):
    status: Literal["pending", "processing", "completed", "failed"] | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class PayoutSummary(BaseModel):
    """Result of a payout request."""

    total_payouts: int
    total_amount_cents: int
    platform_fee_cents: int
    net_payout_cents: int
    scheduled_for: date
    payouts: list[PayoutResponse]
