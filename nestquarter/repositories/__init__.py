"""Persistence access used by the booking services."""

from nestquarter.repositories.booking_repository import BookingRepository
from nestquarter.repositories.payout_repository import PayoutRepository
from nestquarter.repositories.property_repository import PropertyRepository
from nestquarter.repositories.user_repository import UserRepository

__all__ = [
    "BookingRepository",
    "PayoutRepository",
    "PropertyRepository",
    "UserRepository",
]
