"""Overlap rule: value form and SQL form agree."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import select

from nestquarter.domain.availability import (
    find_conflicts,
    is_available,
    overlap_clause,
    ranges_overlap,
)
from nestquarter.models import Booking
from tests.factories import make_booking

D = date(2030, 3, 1)


def stay(start: int, end: int) -> SimpleNamespace:
    return SimpleNamespace(check_in_date=D + timedelta(days=start), check_out_date=D + timedelta(days=end))


def test_back_to_back_ranges_do_not_overlap():
    assert not ranges_overlap(D, D + timedelta(days=14), D + timedelta(days=14), D + timedelta(days=28))
    assert not ranges_overlap(D + timedelta(days=14), D + timedelta(days=28), D, D + timedelta(days=14))


def test_partial_and_nested_ranges_overlap():
    assert ranges_overlap(D, D + timedelta(days=14), D + timedelta(days=13), D + timedelta(days=20))
    assert ranges_overlap(D, D + timedelta(days=30), D + timedelta(days=5), D + timedelta(days=6))
    assert ranges_overlap(D + timedelta(days=5), D + timedelta(days=6), D, D + timedelta(days=30))
    assert ranges_overlap(D, D + timedelta(days=14), D, D + timedelta(days=14))


def test_find_conflicts_returns_only_overlapping_bookings():
    existing = [stay(0, 14), stay(14, 28), stay(40, 60)]

    conflicts = find_conflicts(D + timedelta(days=10), D + timedelta(days=20), existing)

    assert conflicts == existing[:2]
    assert is_available(D + timedelta(days=28), D + timedelta(days=40), existing)
    assert not is_available(D + timedelta(days=59), D + timedelta(days=70), existing)


@pytest.mark.parametrize(
    ("start", "end"),
    [(-14, 0), (-14, 1), (0, 14), (13, 20), (14, 28), (5, 6), (-5, 30), (20, 34)],
)
async def test_sql_clause_matches_value_rule(db, listing, guest, start, end):
    booked = await make_booking(db, listing, guest, D, D + timedelta(days=14))
    check_in, check_out = D + timedelta(days=start), D + timedelta(days=end)

    result = await db.execute(
        select(Booking.id).where(
            overlap_clause(Booking.check_in_date, Booking.check_out_date, check_in, check_out)
        )
    )
    matched_in_sql = booked.id in set(result.scalars().all())

    assert matched_in_sql == ranges_overlap(check_in, check_out, booked.check_in_date, booked.check_out_date)
