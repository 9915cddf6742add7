"""Payment service port (abstract interface).

Defines the contract the ordering workflow uses to decide whether an order
is charged right away, charged at all, or parked for a human to sign off.
This enables swapping between FakePaymentService (dev/test) and a real
gateway integration without changing any workflow code.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ordering.order.order import Order


class PaymentService(ABC):
    """Abstract payment interface."""

    @abstractmethod
    def needs_manual_approval(self, order: "Order") -> bool:
        """True if the order requires human sign-off before charging."""
        ...

    @abstractmethod
    def process_payment(self, order: "Order") -> bool:
        """Charge the order. True on success."""
        ...
