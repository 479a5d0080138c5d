"""Booking state machine.

States: pending → confirmed | cancelled; confirmed → completed | cancelled.
A host decline is a cancellation recorded with the host as ``cancelled_by``.
"""

from enum import Enum

from nestquarter.core.exceptions import InvalidBookingStatus


class BookingStatus(str, Enum):
    """Booking lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Payment states reported by the payment gateway."""

    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    PARTIAL = "partial"


BOOKING_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

# Source states each action may start from
ACTION_SOURCES: dict[str, set[str]] = {
    "accept": {"pending"},
    "decline": {"pending"},
    "cancel": {"pending", "confirmed"},
    "complete": {"confirmed"},
}

ACTION_TARGETS: dict[str, str] = {
    "accept": "confirmed",
    "decline": "cancelled",
    "cancel": "cancelled",
    "complete": "completed",
}


def assert_booking_action(action: str, current: str) -> str:
    """Validate that ``action`` may run from ``current``.

    Returns:
        str: The status the booking moves to

    Raises:
        InvalidBookingStatus: If the booking is not in a legal source state
    """
    target = ACTION_TARGETS[action]
    if current not in ACTION_SOURCES[action] or target not in BOOKING_TRANSITIONS.get(current, set()):
        raise InvalidBookingStatus(action, current)
    return target
