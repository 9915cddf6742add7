"""Pricing engine: turns quantity, unit price and an optional code into a total.

Rules, in strict precedence order:
    1. base = quantity * unit_price
    2. quantity above the bulk threshold → base less the bulk rate
       (any discount code is ignored)
    3. otherwise a non-empty code → base less the code's flat amount, floored at 0
    4. otherwise → base
    5. total = subtotal plus the surcharge rate

All arithmetic is exact ``Decimal``; floats are converted through ``str`` so
that ``10.1`` means ten-point-one and not its binary approximation.
"""

from decimal import Decimal

import structlog

from ordering.pricing.discounts import DiscountService

logger = structlog.get_logger(__name__)

DEFAULT_BULK_THRESHOLD = 10
DEFAULT_BULK_DISCOUNT_RATE = Decimal("0.10")
DEFAULT_SURCHARGE_RATE = Decimal("0.20")

_ZERO = Decimal("0")
_ONE = Decimal("1")


def to_decimal(value) -> Decimal:
    """Convert ints, floats, strings and Decimals to an exact Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid monetary amounts")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float | str):
        return Decimal(str(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


class PricingEngine:
    def __init__(
        self,
        discounts: DiscountService,
        bulk_threshold: int = DEFAULT_BULK_THRESHOLD,
        bulk_discount_rate: Decimal = DEFAULT_BULK_DISCOUNT_RATE,
        surcharge_rate: Decimal = DEFAULT_SURCHARGE_RATE,
    ) -> None:
        self.discounts = discounts
        self.bulk_threshold = bulk_threshold
        self.bulk_multiplier = _ONE - to_decimal(bulk_discount_rate)
        self.surcharge_multiplier = _ONE + to_decimal(surcharge_rate)

    def qualifies_for_bulk(self, quantity: int) -> bool:
        return quantity > self.bulk_threshold

    def subtotal(self, quantity: int, unit_price, discount_code: str | None = None) -> Decimal:
        """Discounted amount before the surcharge is applied."""
        base = quantity * to_decimal(unit_price)

        if self.qualifies_for_bulk(quantity):
            if discount_code:
                logger.debug(
                    "Bulk discount takes precedence, ignoring discount code",
                    quantity=quantity,
                    discount_code=discount_code,
                )
            return base * self.bulk_multiplier

        if discount_code:
            amount = to_decimal(self.discounts.validate_code(discount_code))
            return max(base - amount, _ZERO)

        return base

    def compute(self, quantity: int, unit_price, discount_code: str | None = None) -> Decimal:
        """Final price the customer pays for ``quantity`` units."""
        return self.subtotal(quantity, unit_price, discount_code) * self.surcharge_multiplier
