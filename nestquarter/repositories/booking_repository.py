"""Booking repository.

All booking writes go through here. Status changes are conditional on the
status the caller read, so two concurrent transitions cannot both apply.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.models.booking import Booking


class BookingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, booking_id: UUID, *, refresh: bool = False) -> Booking | None:
        query = select(Booking).where(Booking.id == booking_id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_property(
        self,
        property_id: UUID,
        statuses: Iterable[str],
    ) -> list[Booking]:
        """Bookings on a property in the given statuses, earliest first."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.property_id == property_id,
                Booking.booking_status.in_(list(statuses)),
            )
            .order_by(Booking.check_in_date.asc())
        )
        return list(result.scalars().all())

    async def insert(self, **fields: Any) -> Booking:
        booking = Booking(**fields)
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return booking

    async def update_status(
        self,
        booking_id: UUID,
        expected_status: str,
        values: dict[str, Any],
    ) -> Booking | None:
        """Apply ``values`` only if the booking is still in ``expected_status``.

        Returns:
            The updated booking, or None when another request changed the
            status first
        """
        result = await self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.booking_status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get(booking_id, refresh=True)

    async def set_payment_status(self, booking_id: UUID, payment_status: str) -> Booking | None:
        result = await self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(payment_status=payment_status)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get(booking_id, refresh=True)

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        role: str | None = None,
        status: str | None = None,
        property_id: UUID | None = None,
        check_in_from: date | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Booking], int]:
        """Bookings where the user is guest, host, or either; newest first."""
        if role == "guest":
            query = select(Booking).where(Booking.guest_id == user_id)
        elif role == "host":
            query = select(Booking).where(Booking.host_id == user_id)
        else:
            query = select(Booking).where(
                or_(Booking.guest_id == user_id, Booking.host_id == user_id)
            )

        if status:
            query = query.where(Booking.booking_status == status)
        if property_id:
            query = query.where(Booking.property_id == property_id)
        if check_in_from:
            query = query.where(Booking.check_in_date >= check_in_from)

        count_result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar() or 0

        offset = (page - 1) * limit
        query = query.order_by(Booking.created_at.desc(), Booking.id).offset(offset).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def list_completed_paid(
        self,
        host_id: UUID,
        booking_ids: list[UUID] | None = None,
    ) -> list[Booking]:
        """Completed and fully paid bookings of a host (payout candidates)."""
        query = select(Booking).where(
            Booking.host_id == host_id,
            Booking.payment_status == "completed",
            Booking.booking_status == "completed",
        )
        if booking_ids:
            query = query.where(Booking.id.in_(booking_ids))
        result = await self.db.execute(query.order_by(Booking.check_out_date.asc()))
        return list(result.scalars().all())

    async def list_due_for_completion(self, checked_out_on_or_before: date) -> list[Booking]:
        """Confirmed bookings whose checkout is on or before the given day."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.booking_status == "confirmed",
                Booking.check_out_date <= checked_out_on_or_before,
            )
            .order_by(Booking.check_out_date.asc())
        )
        return list(result.scalars().all())
