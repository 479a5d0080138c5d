"""Internal endpoints for the payment gateway and operators.

Guarded by the shared ``X-Internal-Token`` header instead of user tokens.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.api.deps import get_db, require_internal_token
from nestquarter.schemas.booking import BookingResponse, PaymentStatusUpdate
from nestquarter.services.booking_service import booking_service

router = APIRouter(dependencies=[Depends(require_internal_token)])


class CompletionSweepResponse(BaseModel):
    """Result of a completion sweep."""

    completed: int
    booking_ids: list[UUID]


@router.post("/bookings/{booking_id}/payment-status", response_model=BookingResponse)
async def update_payment_status(
    booking_id: UUID,
    update: PaymentStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record the payment state reported by the payment gateway."""
    return await booking_service.record_payment_status(db, booking_id, update.payment_status)


@router.post("/bookings/complete-due", response_model=CompletionSweepResponse)
async def complete_due_bookings(
    db: Annotated[AsyncSession, Depends(get_db)],
    today: date | None = Query(default=None),
) -> CompletionSweepResponse:
    """Run the completion sweep now (normally run daily by the worker)."""
    completed = await booking_service.complete_due_bookings(db, today)
    return CompletionSweepResponse(
        completed=len(completed),
        booking_ids=[b.id for b in completed],
    )
