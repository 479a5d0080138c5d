"""Booking lifecycle service.

Owns booking creation (validation, availability, pricing) and every status
transition. Each transition is one read-authorize-validate-write unit whose
write is conditional on the status that was read.
"""

import logging
from collections.abc import Callable
from dataclasses import asdict
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.config import settings
from nestquarter.core.exceptions import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    DatesNotAvailable,
    InvalidBookingStatus,
    NotFoundError,
    PropertyNotAvailable,
    StayLengthError,
)
from nestquarter.core.locks import KeyedLock, property_locks
from nestquarter.domain.availability import BLOCKING_STATUSES, find_conflicts
from nestquarter.domain.booking_state import BookingStatus, PaymentStatus, assert_booking_action
from nestquarter.models.booking import Booking
from nestquarter.models.property import Property
from nestquarter.repositories.booking_repository import BookingRepository
from nestquarter.repositories.property_repository import PropertyRepository
from nestquarter.repositories.user_repository import UserRepository
from nestquarter.schemas.booking import BookingBase, BookingCreate, BookingListFilters, BookingResponse
from nestquarter.schemas.common import total_pages
from nestquarter.services.enrichment import property_summary, user_summary
from nestquarter.services.pricing_service import PriceBreakdown, PricingService, pricing_service

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

# Storage-level guard against overlapping active stays (see the initial migration)
OVERLAP_CONSTRAINT = "ex_bookings_no_overlap"


class BookingService:
    """Service for the booking lifecycle."""

    def __init__(
        self,
        pricing: PricingService | None = None,
        locks: KeyedLock | None = None,
        min_stay_weeks: int | None = None,
    ) -> None:
        self.pricing = pricing or pricing_service
        self.locks = locks or property_locks
        self.min_stay_weeks = settings.min_stay_weeks if min_stay_weeks is None else min_stay_weeks

    # ==================== VALIDATION ====================

    def check_platform_min_stay(self, nights: int) -> None:
        if nights < self.min_stay_weeks * DAYS_PER_WEEK:
            raise StayLengthError(f"Minimum stay is {self.min_stay_weeks} weeks")

    def validate_stay(self, prop: Property, guest_id: UUID, nights: int, guest_count: int) -> None:
        """Check a stay request against the property's rules.

        Raises:
            BadRequestError: Naming the first rule the request breaks
        """
        self.check_platform_min_stay(nights)

        if prop.status != "active":
            raise PropertyNotAvailable()

        if guest_count > prop.max_guests:
            raise BadRequestError(f"Maximum {prop.max_guests} guests allowed")

        if nights < prop.minimum_stay_weeks * DAYS_PER_WEEK:
            raise StayLengthError(
                f"Minimum stay for this property is {prop.minimum_stay_weeks} weeks"
            )

        if nights > prop.maximum_stay_months * DAYS_PER_MONTH:
            raise StayLengthError(
                f"Maximum stay for this property is {prop.maximum_stay_months} months"
            )

        if prop.host_id == guest_id:
            raise BadRequestError("You cannot book your own property")

    def price(self, prop: Property, nights: int) -> PriceBreakdown:
        return self.pricing.calculate_booking_amounts(
            monthly_price_cents=prop.monthly_price_cents,
            nights=nights,
            cleaning_fee_cents=prop.cleaning_fee_cents,
            security_deposit_cents=prop.security_deposit_cents,
        )

    # ==================== CREATE ====================

    async def quote(self, db: AsyncSession, guest_id: UUID, request: BookingBase) -> dict:
        """Price a stay without creating a booking.

        Business-rule violations are reported as ``available=False`` with the
        reason instead of raising.
        """
        nights = (request.check_out_date - request.check_in_date).days

        prop = await PropertyRepository(db).get(request.property_id)
        if prop is None:
            raise NotFoundError("Property", str(request.property_id))

        try:
            self.validate_stay(prop, guest_id, nights, request.guest_count)
        except BadRequestError as e:
            return {"available": False, "unavailable_reason": e.detail}

        existing = await BookingRepository(db).list_for_property(prop.id, BLOCKING_STATUSES)
        if find_conflicts(request.check_in_date, request.check_out_date, existing):
            return {"available": False, "unavailable_reason": DatesNotAvailable().detail}

        breakdown = self.price(prop, nights)
        return {"available": True, "price_breakdown": asdict(breakdown)}

    async def create_booking(self, db: AsyncSession, guest_id: UUID, data: BookingCreate) -> Booking:
        """Create a pending booking request.

        The availability check and the insert run under the property lock and
        are committed before the lock is released.
        """
        nights = (data.check_out_date - data.check_in_date).days
        self.check_platform_min_stay(nights)

        async with self.locks.acquire(data.property_id):
            prop = await PropertyRepository(db).lock(data.property_id)
            if prop is None:
                raise NotFoundError("Property", str(data.property_id))

            if await UserRepository(db).get(guest_id) is None:
                raise NotFoundError("User", str(guest_id))

            self.validate_stay(prop, guest_id, nights, data.guest_count)

            property_id = prop.id
            repo = BookingRepository(db)
            existing = await repo.list_for_property(property_id, BLOCKING_STATUSES)
            conflicts = find_conflicts(data.check_in_date, data.check_out_date, existing)
            if conflicts:
                logger.info(
                    f"Booking rejected for property {property_id}: "
                    f"{data.check_in_date}..{data.check_out_date} overlaps {len(conflicts)} booking(s)"
                )
                raise DatesNotAvailable()

            breakdown = self.price(prop, nights)

            try:
                booking = await repo.insert(
                    property_id=property_id,
                    guest_id=guest_id,
                    host_id=prop.host_id,
                    check_in_date=data.check_in_date,
                    check_out_date=data.check_out_date,
                    nights=nights,
                    guest_count=data.guest_count,
                    purpose_of_stay=data.purpose_of_stay,
                    special_requests=data.special_requests,
                    booking_status=BookingStatus.PENDING.value,
                    payment_status=PaymentStatus.PENDING.value,
                    **breakdown.as_booking_fields(),
                )
                await db.commit()
            except IntegrityError as e:
                # The failed flush expired every loaded instance; only locals are safe here
                if OVERLAP_CONSTRAINT not in str(e.orig):
                    raise
                logger.warning(f"Overlapping booking rejected by storage for property {property_id}: {e.orig}")
                raise DatesNotAvailable() from e

        logger.info(
            f"Booking {booking.id} created: property={property_id} guest={guest_id} "
            f"nights={nights} total_cents={booking.total_cents}"
        )
        return booking

    # ==================== TRANSITIONS ====================

    async def _transition(
        self,
        db: AsyncSession,
        booking_id: UUID,
        action: str,
        values: dict,
        authorize: Callable[[Booking], None] | None = None,
    ) -> Booking:
        repo = BookingRepository(db)
        booking = await repo.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))

        if authorize is not None:
            authorize(booking)

        expected = booking.booking_status
        target = assert_booking_action(action, expected)

        updated = await repo.update_status(booking_id, expected, {"booking_status": target, **values})
        if updated is None:
            current = await repo.get(booking_id, refresh=True)
            if current is None:
                logger.warning(f"Booking {booking_id}: {action} lost a race (deleted)")
                raise NotFoundError("Booking", str(booking_id))
            logger.warning(
                f"Booking {booking_id}: {action} lost a race ({expected} -> {current.booking_status})"
            )
            assert_booking_action(action, current.booking_status)
            raise ConflictError("Booking was modified by another request, please retry")

        logger.info(f"Booking {booking_id}: {action} ({expected} -> {target})")
        return updated

    @staticmethod
    def _host_only(action: str, actor_id: UUID) -> Callable[[Booking], None]:
        def authorize(booking: Booking) -> None:
            if booking.host_id != actor_id:
                raise AuthorizationError(f"Only the host can {action} this booking")

        return authorize

    @staticmethod
    def _participants_only(action: str, actor_id: UUID) -> Callable[[Booking], None]:
        def authorize(booking: Booking) -> None:
            if actor_id not in (booking.guest_id, booking.host_id):
                raise AuthorizationError(f"Only the guest or host can {action} this booking")

        return authorize

    async def accept_booking(self, db: AsyncSession, booking_id: UUID, actor_id: UUID) -> Booking:
        """Host accepts a pending request."""
        return await self._transition(
            db,
            booking_id,
            "accept",
            {"confirmed_at": datetime.now(UTC)},
            authorize=self._host_only("accept", actor_id),
        )

    async def decline_booking(
        self, db: AsyncSession, booking_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Booking:
        """Host declines a pending request (recorded as a cancellation by the host)."""
        return await self._transition(
            db,
            booking_id,
            "decline",
            {
                "cancellation_reason": reason,
                "cancelled_by": actor_id,
                "cancelled_at": datetime.now(UTC),
            },
            authorize=self._host_only("decline", actor_id),
        )

    async def cancel_booking(
        self, db: AsyncSession, booking_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Booking:
        """Guest or host cancels a pending or confirmed booking."""
        return await self._transition(
            db,
            booking_id,
            "cancel",
            {
                "cancellation_reason": reason,
                "cancelled_by": actor_id,
                "cancelled_at": datetime.now(UTC),
            },
            authorize=self._participants_only("cancel", actor_id),
        )

    async def complete_booking(self, db: AsyncSession, booking_id: UUID) -> Booking:
        """Mark a confirmed stay as completed (system transition)."""
        return await self._transition(
            db, booking_id, "complete", {"completed_at": datetime.now(UTC)}
        )

    async def complete_due_bookings(self, db: AsyncSession, today: date | None = None) -> list[Booking]:
        """Complete every confirmed booking whose checkout plus grace period has passed.

        Args:
            db: Database session
            today: Reference day (defaults to the current UTC date)

        Returns:
            list[Booking]: Bookings moved to completed
        """
        today = today or datetime.now(UTC).date()
        cutoff = today - timedelta(days=settings.booking_completion_grace_days)

        due = await BookingRepository(db).list_due_for_completion(cutoff)
        completed = []
        for booking in due:
            try:
                completed.append(await self.complete_booking(db, booking.id))
            except (InvalidBookingStatus, ConflictError) as e:
                logger.warning(f"Skipping completion of booking {booking.id}: {e.detail}")

        logger.info(f"Completion sweep (cutoff {cutoff}): {len(completed)} of {len(due)} completed")
        return completed

    async def record_payment_status(
        self, db: AsyncSession, booking_id: UUID, payment_status: str
    ) -> Booking:
        """Store the payment state reported by the payment gateway."""
        PaymentStatus(payment_status)
        booking = await BookingRepository(db).set_payment_status(booking_id, payment_status)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))
        logger.info(f"Booking {booking_id}: payment_status={payment_status}")
        return booking

    # ==================== READS ====================

    async def to_detail(self, db: AsyncSession, booking: Booking, photo_limit: int | None = 1) -> dict:
        """Booking fields plus best-effort property, guest and host summaries."""
        return {
            **BookingResponse.model_validate(booking).model_dump(),
            "property": await property_summary(db, booking.property_id, photo_limit=photo_limit),
            "guest": await user_summary(db, booking.guest_id),
            "host": await user_summary(db, booking.host_id),
        }

    async def get_bookings(self, db: AsyncSession, user_id: UUID, filters: BookingListFilters) -> dict:
        """Paginated bookings where the user is guest and/or host."""
        bookings, total = await BookingRepository(db).list_for_user(
            user_id,
            role=filters.role,
            status=filters.status,
            property_id=filters.property_id,
            check_in_from=datetime.now(UTC).date() if filters.upcoming else None,
            page=filters.page,
            limit=filters.limit,
        )
        return {
            "bookings": [await self.to_detail(db, b) for b in bookings],
            "total": total,
            "page": filters.page,
            "limit": filters.limit,
            "total_pages": total_pages(total, filters.limit),
        }

    async def _get_for_participant(self, db: AsyncSession, booking_id: UUID, user_id: UUID) -> Booking:
        booking = await BookingRepository(db).get(booking_id)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))
        if user_id not in (booking.guest_id, booking.host_id):
            raise AuthorizationError("You do not have permission to view this booking")
        return booking

    async def get_booking(self, db: AsyncSession, booking_id: UUID, user_id: UUID) -> dict:
        booking = await self._get_for_participant(db, booking_id, user_id)
        return await self.to_detail(db, booking, photo_limit=None)

    async def get_booking_invoice(self, db: AsyncSession, booking_id: UUID, user_id: UUID) -> dict:
        booking = await self._get_for_participant(db, booking_id, user_id)
        return {
            "booking_id": booking.id,
            "booking_status": booking.booking_status,
            "payment_status": booking.payment_status,
            "created_at": booking.created_at,
            "confirmed_at": booking.confirmed_at,
            "guest": await user_summary(db, booking.guest_id),
            "property": await property_summary(db, booking.property_id, photo_limit=0),
            "check_in_date": booking.check_in_date,
            "check_out_date": booking.check_out_date,
            "nights": booking.nights,
            "guest_count": booking.guest_count,
            "pricing": {
                "nights": booking.nights,
                "subtotal_cents": booking.subtotal_cents,
                "service_fee_cents": booking.service_fee_cents,
                "cleaning_fee_cents": booking.cleaning_fee_cents,
                "security_deposit_cents": booking.security_deposit_cents,
                "total_cents": booking.total_cents,
            },
        }


booking_service = BookingService()
