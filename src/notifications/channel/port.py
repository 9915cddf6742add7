"""Notification port: abstract interface for order lifecycle messages.

Notifications are fire-and-forget: return values are ignored and a failing
adapter never fails the order operation that triggered it.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ordering.order.order import Order


class NotificationService(ABC):
    """Abstract interface for order notification adapters."""

    @abstractmethod
    def send_paid_confirmation(self, order: "Order") -> None:
        """Tell the customer their order was charged."""
        ...

    @abstractmethod
    def send_pending_approval(self, order: "Order") -> None:
        """Tell the customer their order awaits manual approval."""
        ...

    @abstractmethod
    def send_cancellation(self, order: "Order") -> None:
        """Tell the customer their order was cancelled."""
        ...
