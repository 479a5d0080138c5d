"""Database models."""

from nestquarter.models.booking import Booking
from nestquarter.models.payout import Payout
from nestquarter.models.property import Property, PropertyPhoto
from nestquarter.models.user import User

__all__ = [
    # User
    "User",
    # Property
    "Property",
    "PropertyPhoto",
    # Booking
    "Booking",
    # Payout
    "Payout",
]
