"""Best-effort lookups of display data attached to booking and payout responses.

Missing or failing lookups return None; they never fail the operation the
response belongs to. Each lookup runs in its own savepoint so a failed
statement leaves the caller's transaction usable.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.repositories.booking_repository import BookingRepository
from nestquarter.repositories.property_repository import PropertyRepository
from nestquarter.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


async def property_summary(
    db: AsyncSession, property_id: UUID | None, photo_limit: int | None = 1
) -> dict | None:
    if property_id is None:
        return None
    try:
        async with db.begin_nested():
            repo = PropertyRepository(db)
            prop = await repo.get(property_id)
            if prop is None:
                return None
            photos = await repo.list_photos(property_id, limit=photo_limit)
    except SQLAlchemyError as e:
        logger.warning(f"Property enrichment failed for {property_id}: {e}")
        return None

    return {
        "id": prop.id,
        "title": prop.title,
        "address_line1": prop.address_line1,
        "city": prop.city,
        "country": prop.country,
        "photos": [{"photo_url": p.photo_url, "caption": p.caption} for p in photos],
    }


async def user_summary(db: AsyncSession, user_id: UUID | None) -> dict | None:
    if user_id is None:
        return None
    try:
        async with db.begin_nested():
            user = await UserRepository(db).get(user_id)
    except SQLAlchemyError as e:
        logger.warning(f"User enrichment failed for {user_id}: {e}")
        return None
    if user is None:
        return None

    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_photo_url": user.profile_photo_url,
    }


async def booking_summary(db: AsyncSession, booking_id: UUID | None) -> dict | None:
    """Booking dates and totals with its property title and guest name."""
    if booking_id is None:
        return None
    try:
        async with db.begin_nested():
            booking = await BookingRepository(db).get(booking_id)
    except SQLAlchemyError as e:
        logger.warning(f"Booking enrichment failed for {booking_id}: {e}")
        return None
    if booking is None:
        return None

    return {
        "id": booking.id,
        "check_in_date": booking.check_in_date,
        "check_out_date": booking.check_out_date,
        "nights": booking.nights,
        "total_cents": booking.total_cents,
        "property": await property_summary(db, booking.property_id, photo_limit=0),
        "guest": await user_summary(db, booking.guest_id),
    }
