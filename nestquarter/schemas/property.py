"""Property search and availability schemas."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nestquarter.schemas.common import PhotoSummary


class PropertySearchFilters(BaseModel):
    """Query parameters for property search."""

    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    min_price: int | None = Field(None, ge=0)
    max_price: int | None = Field(None, ge=0)
    guests: int | None = Field(None, ge=1, le=20)
    check_in: date | None = None
    check_out: date | None = None
    sort_by: Literal["created_at", "price_asc", "price_desc"] = "created_at"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @model_validator(mode="after")
    def validate_ranges(self) -> "PropertySearchFilters":
        if (self.check_in is None) != (self.check_out is None):
            raise ValueError("check_in and check_out must be given together")
        if self.check_in and self.check_out and self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("min_price cannot exceed max_price")
        return self


class PropertySearchResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    host_id: UUID
    title: str
    city: str | None
    country: str | None
    monthly_price_cents: int
    cleaning_fee_cents: int
    minimum_stay_weeks: int
    maximum_stay_months: int
    max_guests: int
    created_at: datetime
    photos: list[PhotoSummary] = []


class PropertySearchResponse(BaseModel):
    properties: list[PropertySearchResult]
    total: int
    page: int
    limit: int
    total_pages: int


class BookedRange(BaseModel):
    """Half-open date range held by a booking."""

    start_date: date
    end_date: date
    status: str


class PropertyAvailability(BaseModel):
    property_id: UUID
    booked_dates: list[BookedRange]
    check_in: date | None = None
    check_out: date | None = None
    available: bool | None = None
