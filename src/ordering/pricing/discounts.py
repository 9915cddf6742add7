"""Discount code port and a static catalog adapter.

The workflow only asks "how much is this code worth?". Unknown or invalid
codes are worth zero; they never raise.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal

import structlog

logger = structlog.get_logger(__name__)


class DiscountService(ABC):
    """Abstract discount-code validation interface."""

    @abstractmethod
    def validate_code(self, code: str) -> Decimal:
        """Return the flat amount ``code`` takes off a subtotal, or 0 if unknown."""
        ...


class StaticDiscountCatalog(DiscountService):
    """Discount codes backed by a fixed mapping (typically from settings).

    Codes are matched case-sensitively. Negative amounts are rejected at
    construction time.
    """

    def __init__(self, codes: Mapping[str, Decimal] | None = None) -> None:
        self._codes: dict[str, Decimal] = {}
        for code, amount in (codes or {}).items():
            amount = Decimal(str(amount))
            if amount < 0:
                raise ValueError(f"Discount amount for {code!r} cannot be negative")
            self._codes[code] = amount

    def validate_code(self, code: str) -> Decimal:
        amount = self._codes.get(code)
        if amount is None:
            logger.info("Unknown discount code", code=code)
            return Decimal("0")
        return amount
