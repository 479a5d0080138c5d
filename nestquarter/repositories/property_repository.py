"""Property repository: reads over properties and their photos."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import exists, false, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.domain.availability import BLOCKING_STATUSES, overlap_clause
from nestquarter.models.booking import Booking
from nestquarter.models.property import Property, PropertyPhoto

SORT_COLUMNS = {
    "created_at": Property.created_at.desc(),
    "price_asc": Property.monthly_price_cents.asc(),
    "price_desc": Property.monthly_price_cents.desc(),
}


class PropertyRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, property_id: UUID) -> Property | None:
        result = await self.db.execute(select(Property).where(Property.id == property_id))
        return result.scalar_one_or_none()

    async def lock(self, property_id: UUID) -> Property | None:
        """Load a property holding a row lock until the transaction ends.

        Concurrent booking requests for the same property queue here.
        """
        result = await self.db.execute(
            select(Property).where(Property.id == property_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_photos(self, property_id: UUID, limit: int | None = None) -> list[PropertyPhoto]:
        query = (
            select(PropertyPhoto)
            .where(PropertyPhoto.property_id == property_id)
            .order_by(PropertyPhoto.display_order.asc())
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def search(
        self,
        *,
        city: str | None = None,
        country: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        guests: int | None = None,
        check_in: date | None = None,
        check_out: date | None = None,
        min_stay_nights: int = 0,
        sort_by: str = "created_at",
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Property], int]:
        """Search active properties; returns one page and the total match count."""
        query = select(Property).where(Property.status == "active")

        if city:
            query = query.where(Property.city.ilike(f"%{city}%"))
        if country:
            query = query.where(Property.country.ilike(f"%{country}%"))
        if min_price is not None:
            query = query.where(Property.monthly_price_cents >= min_price)
        if max_price is not None:
            query = query.where(Property.monthly_price_cents <= max_price)
        if guests is not None:
            query = query.where(Property.max_guests >= guests)

        if check_in and check_out:
            booked = exists().where(
                Booking.property_id == Property.id,
                Booking.booking_status.in_(BLOCKING_STATUSES),
                overlap_clause(Booking.check_in_date, Booking.check_out_date, check_in, check_out),
            )
            nights = (check_out - check_in).days
            query = query.where(
                ~booked,
                Property.minimum_stay_weeks * 7 <= nights,
                Property.maximum_stay_months * 30 >= nights,
            )
            if nights < min_stay_nights:
                query = query.where(false())

        count_result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar() or 0

        offset = (page - 1) * limit
        query = (
            query.order_by(SORT_COLUMNS.get(sort_by, SORT_COLUMNS["created_at"]), Property.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total
