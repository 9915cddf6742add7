"""In-memory order registry: insertion-ordered, keyed by order id."""

import threading
from collections.abc import Iterator

from ordering.order.errors import OrderNotFoundError
from ordering.order.order import Order, OrderStatus


class OrderRegistry:
    """Append-only store of every order that completed creation.

    Orders are kept by reference, so state changes made by the workflow
    (cancellation, approval) are visible to later lookups. All reads return
    copies of the sequence, never the live container.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._orders: dict[str, Order] = {}

    def add(self, order: Order) -> None:
        with self._lock:
            if order.id in self._orders:
                raise ValueError(f"Order {order.id} is already registered")
            self._orders[order.id] = order

    def find(self, order_id: str) -> Order | None:
        with self._lock:
            return self._orders.get(order_id)

    def get(self, order_id: str) -> Order:
        order = self.find(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def snapshot(self) -> list[Order]:
        with self._lock:
            return list(self._orders.values())

    def with_status(self, status: OrderStatus) -> list[Order]:
        return [order for order in self.snapshot() if order.state is status]

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._orders

    def __iter__(self) -> Iterator[Order]:
        return iter(self.snapshot())
