"""Property search and availability endpoints (public)."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.api.deps import get_db
from nestquarter.core.exceptions import BadRequestError
from nestquarter.schemas.property import (
    PropertyAvailability,
    PropertySearchFilters,
    PropertySearchResponse,
)
from nestquarter.services.property_service import property_service

router = APIRouter()


@router.get("/search", response_model=PropertySearchResponse)
async def search_properties(
    filters: Annotated[PropertySearchFilters, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Search active properties, optionally only those free for a date range."""
    return await property_service.search_properties(db, filters)


@router.get("/{property_id}/availability", response_model=PropertyAvailability)
async def get_property_availability(
    property_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    check_in: date | None = Query(default=None),
    check_out: date | None = Query(default=None),
) -> dict:
    """Booked ranges of a property; with a range, also whether it is free."""
    if check_in and check_out and check_out <= check_in:
        raise BadRequestError("check_out must be after check_in")
    return await property_service.get_availability(db, property_id, check_in, check_out)
