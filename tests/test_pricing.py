"""Pricing calculator tests."""

from decimal import Decimal

from nestquarter.services.pricing_service import PricingService, percent_of, round_cents


def test_fourteen_night_stay_breakdown():
    pricing = PricingService(guest_service_fee_percent=12, platform_fee_percent=15)

    breakdown = pricing.calculate_booking_amounts(
        monthly_price_cents=90000, nights=14, cleaning_fee_cents=5000, security_deposit_cents=0
    )

    assert pricing.daily_rate(90000) == Decimal(3000)
    assert breakdown.subtotal_cents == 42000
    assert breakdown.service_fee_cents == 5040
    assert breakdown.total_cents == 42000 + 5040 + 5000
    assert breakdown.nights == 14


def test_service_fee_follows_configured_percent():
    breakdown = PricingService(guest_service_fee_percent=10).calculate_booking_amounts(90000, 14, 5000)

    assert breakdown.service_fee_cents == 4200
    assert breakdown.total_cents == 42000 + 4200 + 5000


def test_missing_deposit_counts_as_zero():
    breakdown = PricingService().calculate_booking_amounts(120000, 14, 8000, None)

    assert breakdown.security_deposit_cents == 0
    assert breakdown.subtotal_cents == 56000
    assert breakdown.total_cents == breakdown.subtotal_cents + breakdown.service_fee_cents + 8000


def test_deposit_is_added_to_total():
    breakdown = PricingService(guest_service_fee_percent=12).calculate_booking_amounts(120000, 14, 8000, 50000)

    assert breakdown.total_cents == 56000 + 6720 + 8000 + 50000


def test_subtotal_rounds_half_away_from_zero():
    # 100001 / 30 * 15 = 50000.5
    breakdown = PricingService(guest_service_fee_percent=0).calculate_booking_amounts(100001, 15)

    assert breakdown.subtotal_cents == 50001


def test_each_step_is_rounded_independently():
    assert round_cents(Decimal("2.5")) == 3
    assert round_cents(Decimal("2.4999")) == 2
    assert percent_of(50001, 12) == 6000  # 6000.12
    assert percent_of(12345, 15) == 1852  # 1851.75


def test_as_booking_fields_drops_nights():
    fields = PricingService().calculate_booking_amounts(90000, 14).as_booking_fields()

    assert "nights" not in fields
    assert set(fields) == {
        "subtotal_cents",
        "service_fee_cents",
        "cleaning_fee_cents",
        "security_deposit_cents",
        "total_cents",
    }


def test_payout_split_excludes_service_fee_and_deposit():
    split = PricingService(platform_fee_percent=15).calculate_payout_split(56000, 8000)

    assert split.amount_cents == 64000
    assert split.platform_fee_cents == 9600
    assert split.net_amount_cents == 54400
