"""Property search and availability queries."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.config import settings
from nestquarter.core.exceptions import NotFoundError
from nestquarter.domain.availability import BLOCKING_STATUSES, is_available
from nestquarter.repositories.booking_repository import BookingRepository
from nestquarter.repositories.property_repository import PropertyRepository
from nestquarter.schemas.common import total_pages
from nestquarter.schemas.property import PropertySearchFilters, PropertySearchResult

logger = logging.getLogger(__name__)


class PropertyService:
    """Read-side queries over properties."""

    def __init__(self, min_stay_weeks: int | None = None) -> None:
        self.min_stay_weeks = settings.min_stay_weeks if min_stay_weeks is None else min_stay_weeks

    async def search_properties(self, db: AsyncSession, filters: PropertySearchFilters) -> dict:
        """Search active properties.

        When a date range is given, properties holding a pending or confirmed
        booking that overlaps it are excluded, as are properties whose stay
        limits do not admit its length. A range shorter than the platform
        minimum stay matches nothing.
        """
        repo = PropertyRepository(db)
        properties, total = await repo.search(
            city=filters.city,
            country=filters.country,
            min_price=filters.min_price,
            max_price=filters.max_price,
            guests=filters.guests,
            check_in=filters.check_in,
            check_out=filters.check_out,
            min_stay_nights=self.min_stay_weeks * 7,
            sort_by=filters.sort_by,
            page=filters.page,
            limit=filters.limit,
        )

        results = []
        for prop in properties:
            photos = await repo.list_photos(prop.id, limit=1)
            results.append(
                {
                    **PropertySearchResult.model_validate(prop).model_dump(exclude={"photos"}),
                    "photos": [{"photo_url": p.photo_url, "caption": p.caption} for p in photos],
                }
            )

        logger.debug(f"Property search matched {total} properties")
        return {
            "properties": results,
            "total": total,
            "page": filters.page,
            "limit": filters.limit,
            "total_pages": total_pages(total, filters.limit),
        }

    async def get_availability(
        self,
        db: AsyncSession,
        property_id: UUID,
        check_in: date | None = None,
        check_out: date | None = None,
    ) -> dict:
        """Booked ranges of a property and, for a given range, whether it is free."""
        prop = await PropertyRepository(db).get(property_id)
        if prop is None:
            raise NotFoundError("Property", str(property_id))

        bookings = await BookingRepository(db).list_for_property(property_id, BLOCKING_STATUSES)
        result = {
            "property_id": prop.id,
            "booked_dates": [
                {"start_date": b.check_in_date, "end_date": b.check_out_date, "status": b.booking_status}
                for b in bookings
            ],
        }
        if check_in and check_out:
            result.update(
                check_in=check_in,
                check_out=check_out,
                available=is_available(check_in, check_out, bookings),
            )
        return result


property_service = PropertyService()
