"""Ordering errors: one exception type per rejection reason.

Every error carries a structured ``kind`` for programmatic handling. The
message is kept separately and always contains a lower-case keyword
("prohibited", "exceed", ...) because some callers classify failures by
substring match.
"""

from enum import Enum


class ErrorKind(Enum):
    PROHIBITED_PRODUCT = "Prohibited_Product"
    QUOTA_EXCEEDED = "Quota_Exceeded"
    INSUFFICIENT_STOCK = "Insufficient_Stock"
    PAYMENT_FAILED = "Payment_Failed"
    ORDER_NOT_FOUND = "Order_Not_Found"
    INVALID_ORDER = "Invalid_Order"
    INVALID_TRANSITION = "Invalid_Transition"


class OrderingError(Exception):
    """Base class for all order workflow failures."""

    kind: ErrorKind

    def __init__(self, message: str, **context) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value}, message={self.message!r})"


class ProhibitedProductError(OrderingError):
    kind = ErrorKind.PROHIBITED_PRODUCT

    def __init__(self, product: str) -> None:
        super().__init__(f"Product '{product}' is prohibited and cannot be ordered", product=product)


class QuotaExceededError(OrderingError):
    kind = ErrorKind.QUOTA_EXCEEDED

    def __init__(self, product: str, requested: int, used: int, limit: int) -> None:
        super().__init__(
            f"Ordering {requested} units of '{product}' would exceed the daily limit "
            f"of {limit} ({used} already ordered today)",
            product=product,
            requested=requested,
            used=used,
            limit=limit,
        )


class InsufficientStockError(OrderingError):
    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product: str, quantity: int, reason: str = "not enough units available") -> None:
        super().__init__(
            f"Insufficient stock for '{product}': {reason} ({quantity} requested)",
            product=product,
            quantity=quantity,
        )


class PaymentFailedError(OrderingError):
    kind = ErrorKind.PAYMENT_FAILED

    def __init__(self, order_id: str, product: str) -> None:
        super().__init__(
            f"Payment failed for order {order_id} ('{product}')",
            order_id=order_id,
            product=product,
        )


class OrderNotFoundError(OrderingError):
    kind = ErrorKind.ORDER_NOT_FOUND

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} not found", order_id=order_id)


class InvalidOrderError(OrderingError):
    """Raised for malformed input (non-positive quantity, negative price)."""

    kind = ErrorKind.INVALID_ORDER

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, field=field)
        self.field = field


class InvalidTransitionError(OrderingError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, order_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Order {order_id} cannot transition from {current} to {target}",
            order_id=order_id,
            current=current,
            target=target,
        )
