"""Pricing calculation service.

CRITICAL BUSINESS LOGIC:
- All amounts are integer cents; arithmetic runs on Decimal, never float
- Monthly rent is pro-rated over a fixed 30-day month
- Each step is rounded half away from zero on its own
- Guests pay a service fee on the subtotal; cleaning fee and security
  deposit are passed through unchanged
- The platform keeps a fee on host revenue (subtotal + cleaning fee)
"""

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

from nestquarter.config import settings

DAYS_PER_MONTH = 30


def round_cents(value: Decimal) -> int:
    """Round to a whole cent, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(amount: int | Decimal, percent: float | Decimal) -> int:
    """Return ``round(amount * percent / 100)`` in cents."""
    return round_cents(Decimal(amount) * Decimal(str(percent)) / Decimal("100"))


@dataclass(frozen=True)
class PriceBreakdown:
    """Immutable booking price breakdown."""

    nights: int
    subtotal_cents: int
    service_fee_cents: int
    cleaning_fee_cents: int
    security_deposit_cents: int
    total_cents: int

    def as_booking_fields(self) -> dict:
        fields = asdict(self)
        fields.pop("nights")
        return fields


@dataclass(frozen=True)
class PayoutSplit:
    """Host revenue split for one booking."""

    amount_cents: int
    platform_fee_cents: int
    net_amount_cents: int


class PricingService:
    """Service for booking prices and host payout splits."""

    def __init__(
        self,
        guest_service_fee_percent: float | None = None,
        platform_fee_percent: float | None = None,
    ) -> None:
        self.guest_service_fee_percent = (
            settings.guest_service_fee_percent
            if guest_service_fee_percent is None
            else guest_service_fee_percent
        )
        self.platform_fee_percent = (
            settings.platform_fee_percent if platform_fee_percent is None else platform_fee_percent
        )

    @staticmethod
    def daily_rate(monthly_price_cents: int) -> Decimal:
        """Unrounded daily rate from the monthly price."""
        return Decimal(monthly_price_cents) / Decimal(DAYS_PER_MONTH)

    def calculate_booking_amounts(
        self,
        monthly_price_cents: int,
        nights: int,
        cleaning_fee_cents: int = 0,
        security_deposit_cents: int | None = None,
    ) -> PriceBreakdown:
        """Calculate the guest-facing price of a stay.

        Args:
            monthly_price_cents: Monthly rent in cents
            nights: Number of nights
            cleaning_fee_cents: One-time cleaning fee in cents
            security_deposit_cents: Refundable deposit in cents (None means 0)

        Returns:
            PriceBreakdown: All calculated amounts
        """
        subtotal = round_cents(self.daily_rate(monthly_price_cents) * nights)
        service_fee = percent_of(subtotal, self.guest_service_fee_percent)
        deposit = security_deposit_cents or 0
        cleaning = cleaning_fee_cents or 0

        return PriceBreakdown(
            nights=nights,
            subtotal_cents=subtotal,
            service_fee_cents=service_fee,
            cleaning_fee_cents=cleaning,
            security_deposit_cents=deposit,
            total_cents=subtotal + service_fee + cleaning + deposit,
        )

    def calculate_payout_split(self, subtotal_cents: int, cleaning_fee_cents: int) -> PayoutSplit:
        """Split host revenue for a booking into platform fee and net payout.

        The guest service fee and the security deposit are not host revenue.
        """
        host_revenue = (subtotal_cents or 0) + (cleaning_fee_cents or 0)
        platform_fee = percent_of(host_revenue, self.platform_fee_percent)
        return PayoutSplit(
            amount_cents=host_revenue,
            platform_fee_cents=platform_fee,
            net_amount_cents=host_revenue - platform_fee,
        )


pricing_service = PricingService()
