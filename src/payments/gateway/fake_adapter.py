"""Configurable fake payment service for development and testing.

This adapter simulates a real payment provider without any external calls.
It can be configured at runtime to succeed or fail, and to route expensive
orders to manual approval, making it useful for:
- Automated tests with predictable outcomes
- Development without real gateway credentials
"""

from decimal import Decimal

from payments.gateway.port import PaymentService


class FakePaymentService(PaymentService):
    """Configurable fake payment service."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.approval_threshold: Decimal | None = None
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool = True, approval_threshold: Decimal | None = None) -> None:
        """Configure behavior at runtime.

        Args:
            should_succeed: Outcome of every ``process_payment`` call.
            approval_threshold: Orders whose total is at or above this amount
                need manual approval. ``None`` disables manual approval.
        """
        self.should_succeed = should_succeed
        self.approval_threshold = approval_threshold

    def needs_manual_approval(self, order) -> bool:
        needs_approval = self.approval_threshold is not None and order.total_price >= self.approval_threshold
        self.calls.append(
            {
                "method": "needs_manual_approval",
                "order_id": order.id,
                "result": needs_approval,
            }
        )
        return needs_approval

    def process_payment(self, order) -> bool:
        self.calls.append(
            {
                "method": "process_payment",
                "order_id": order.id,
                "amount": order.total_price,
                "result": self.should_succeed,
            }
        )
        return self.should_succeed

    def reset(self) -> None:
        """Clear recorded calls and restore defaults (useful between tests)."""
        self.calls.clear()
        self.should_succeed = True
        self.approval_threshold = None
