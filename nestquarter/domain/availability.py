"""Date-range availability rules.

Stays are half-open ranges ``[check_in, check_out)``: the check-out day is
not occupied, so one stay may start on the day another ends. Two ranges
``[a1, a2)`` and ``[b1, b2)`` conflict iff ``a1 < b2 and b1 < a2``.

Every availability check (booking creation, the property availability
endpoint, search) goes through this module. ``ranges_overlap`` evaluates the
rule on values, ``overlap_clause`` renders the same rule as SQL.
"""

from collections.abc import Iterable
from datetime import date
from typing import Protocol, TypeVar

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from nestquarter.domain.booking_state import BookingStatus

# Bookings in these states hold their dates
BLOCKING_STATUSES: tuple[str, ...] = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
)


class DateRange(Protocol):
    check_in_date: date
    check_out_date: date


R = TypeVar("R", bound=DateRange)


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True if ``[start_a, end_a)`` and ``[start_b, end_b)`` share a night."""
    return start_a < end_b and start_b < end_a


def overlap_clause(start_column, end_column, check_in: date, check_out: date) -> ColumnElement[bool]:
    """SQL form of :func:`ranges_overlap` for a stored ``[start, end)`` range."""
    return and_(start_column < check_out, check_in < end_column)


def find_conflicts(check_in: date, check_out: date, bookings: Iterable[R]) -> list[R]:
    """Return the bookings whose dates conflict with ``[check_in, check_out)``.

    Callers pass only bookings in :data:`BLOCKING_STATUSES`.
    """
    return [
        b for b in bookings
        if ranges_overlap(check_in, check_out, b.check_in_date, b.check_out_date)
    ]


def is_available(check_in: date, check_out: date, bookings: Iterable[DateRange]) -> bool:
    return not find_conflicts(check_in, check_out, bookings)
