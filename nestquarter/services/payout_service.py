"""Host payout service.

Turns completed, fully paid bookings into pending payout records. A booking
contributes to at most one payout; the store enforces this with a unique
constraint on ``payouts.booking_id``.
"""

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.config import settings
from nestquarter.core.exceptions import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
)
from nestquarter.domain.payout_state import PayoutStatus
from nestquarter.models.payout import Payout
from nestquarter.repositories.booking_repository import BookingRepository
from nestquarter.repositories.payout_repository import PayoutRepository
from nestquarter.repositories.user_repository import UserRepository
from nestquarter.schemas.common import total_pages
from nestquarter.schemas.payout import PayoutResponse
from nestquarter.services.enrichment import booking_summary
from nestquarter.services.pricing_service import PricingService, pricing_service

logger = logging.getLogger(__name__)


class PayoutService:
    """Service for host payouts."""

    def __init__(self, pricing: PricingService | None = None) -> None:
        self.pricing = pricing or pricing_service

    async def request_payout(
        self,
        db: AsyncSession,
        host_id: UUID,
        booking_ids: list[UUID] | None = None,
        payout_method_id: str | None = None,
    ) -> dict:
        """Create one pending payout per eligible booking.

        Args:
            db: Database session
            host_id: Host requesting the payout
            booking_ids: Restrict to these bookings (None or empty means all)
            payout_method_id: Destination chosen by the host

        Returns:
            dict: Aggregate totals and the created payouts

        Raises:
            NotFoundError: Host does not exist
            BadRequestError: Nothing eligible, or nothing to pay
            ConflictError: A concurrent request already paid out a booking
        """
        if await UserRepository(db).get(host_id) is None:
            raise NotFoundError("User", str(host_id))

        payout_repo = PayoutRepository(db)
        candidates = await BookingRepository(db).list_completed_paid(host_id, booking_ids)
        already_paid = await payout_repo.existing_booking_ids([b.id for b in candidates])
        eligible = [b for b in candidates if b.id not in already_paid]

        if not eligible:
            raise BadRequestError("No eligible bookings found for payout")

        splits = [
            (booking, self.pricing.calculate_payout_split(booking.subtotal_cents, booking.cleaning_fee_cents))
            for booking in eligible
        ]
        total_amount = sum(split.amount_cents for _, split in splits)
        total_fee = sum(split.platform_fee_cents for _, split in splits)
        net_total = total_amount - total_fee

        if net_total <= 0:
            raise BadRequestError("Payout amount must be greater than zero")

        scheduled_for = datetime.now(UTC).date() + timedelta(days=settings.payout_delay_days)
        rows = [
            {
                "host_id": host_id,
                "booking_id": booking.id,
                "amount_cents": split.amount_cents,
                "platform_fee_cents": split.platform_fee_cents,
                "net_amount_cents": split.net_amount_cents,
                "payout_status": PayoutStatus.PENDING.value,
                "payout_method_id": payout_method_id,
                "scheduled_for": scheduled_for,
            }
            for booking, split in splits
        ]

        try:
            payouts = await payout_repo.insert_many(rows)
        except IntegrityError as e:
            logger.warning(f"Duplicate payout rejected by storage for host {host_id}: {e}")
            raise ConflictError("A payout was already requested for one or more of these bookings") from e

        logger.info(
            f"Payout requested: host={host_id} bookings={len(payouts)} "
            f"amount_cents={total_amount} fee_cents={total_fee} net_cents={net_total} "
            f"scheduled_for={scheduled_for}"
        )

        return {
            "total_payouts": len(payouts),
            "total_amount_cents": total_amount,
            "platform_fee_cents": total_fee,
            "net_payout_cents": net_total,
            "scheduled_for": scheduled_for,
            "payouts": [PayoutResponse.model_validate(p).model_dump() for p in payouts],
        }

    async def to_detail(self, db: AsyncSession, payout: Payout) -> dict:
        return {
            **PayoutResponse.model_validate(payout).model_dump(),
            "booking": await booking_summary(db, payout.booking_id),
        }

    async def get_host_payouts(
        self,
        db: AsyncSession,
        host_id: UUID,
        status: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        """Paginated payouts of a host, newest first."""
        payouts, total = await PayoutRepository(db).list_for_host(
            host_id, status=status, page=page, limit=limit
        )
        return {
            "payouts": [await self.to_detail(db, p) for p in payouts],
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": total_pages(total, limit),
        }

    async def get_payout(self, db: AsyncSession, payout_id: UUID, user_id: UUID) -> dict:
        payout = await PayoutRepository(db).get(payout_id)
        if payout is None:
            raise NotFoundError("Payout", str(payout_id))
        if payout.host_id != user_id:
            raise AuthorizationError("You can only view your own payouts")
        return await self.to_detail(db, payout)


payout_service = PayoutService()
