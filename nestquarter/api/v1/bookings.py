"""Booking endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.api.deps import CurrentUserId, get_db
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
)
from nestquarter.services.booking_service import booking_service

router = APIRouter()


@router.post("/calculate", response_model=BookingCalculateResponse)
async def calculate_booking_price(
    request: BookingCalculateRequest,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Calculate booking price without creating a booking."""
    return await booking_service.quote(db, current_user_id, request)


@router.post("/", response_model=BookingDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Request a booking; it stays pending until the host accepts."""
    booking = await booking_service.create_booking(db, current_user_id, booking_data)
    return await booking_service.to_detail(db, booking)


@router.get("/", response_model=BookingListResponse)
async def get_my_bookings(
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    filters: Annotated[BookingListFilters, Query()],
) -> dict:
    """Get bookings where the current user is guest or host."""
    return await booking_service.get_bookings(db, current_user_id, filters)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    return await booking_service.get_booking(db, booking_id, current_user_id)


@router.get("/{booking_id}/invoice", response_model=BookingInvoice)
async def get_booking_invoice(
    booking_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    return await booking_service.get_booking_invoice(db, booking_id, current_user_id)


@router.post("/{booking_id}/accept", response_model=BookingDetailResponse)
async def accept_booking(
    booking_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Accept a pending booking (host only)."""
    booking = await booking_service.accept_booking(db, booking_id, current_user_id)
    return await booking_service.to_detail(db, booking)


@router.post("/{booking_id}/decline", response_model=BookingDetailResponse)
async def decline_booking(
    booking_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    request: BookingDeclineRequest | None = None,
) -> dict:
    """Decline a pending booking (host only)."""
    reason = request.reason if request else None
    booking = await booking_service.decline_booking(db, booking_id, current_user_id, reason)
    return await booking_service.to_detail(db, booking)


@router.post("/{booking_id}/cancel", response_model=BookingDetailResponse)
async def cancel_booking(
    booking_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    request: BookingCancelRequest | None = None,
) -> dict:
    """Cancel a pending or confirmed booking (guest or host)."""
    reason = request.reason if request else None
    booking = await booking_service.cancel_booking(db, booking_id, current_user_id, reason)
    return await booking_service.to_detail(db, booking)
