"""Payout endpoints for hosts."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.api.deps import CurrentUserId, get_db
from nestquarter.schemas.payout import (
    PayoutDetailResponse,
    PayoutListFilters,
    PayoutListResponse,
    PayoutRequest,
    PayoutSummary,
)
from nestquarter.services.payout_service import payout_service

router = APIRouter()


@router.get("/", response_model=PayoutListResponse)
async def get_my_payouts(
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    filters: Annotated[PayoutListFilters, Query()],
) -> dict:
    """Get host's payout history."""
    return await payout_service.get_host_payouts(
        db, current_user_id, status=filters.status, page=filters.page, limit=filters.limit
    )


@router.get("/{payout_id}", response_model=PayoutDetailResponse)
async def get_payout(
    payout_id: UUID,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    return await payout_service.get_payout(db, payout_id, current_user_id)


@router.post("/request", response_model=PayoutSummary, status_code=status.HTTP_201_CREATED)
async def request_payout(
    request: PayoutRequest,
    current_user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Request payouts for completed, paid bookings not yet paid out."""
    return await payout_service.request_payout(
        db,
        current_user_id,
        booking_ids=request.booking_ids,
        payout_method_id=request.payout_method_id,
    )
