"""Thread-safe in-memory inventory for development and testing.

Stock Level Model (per product):
    on_hand:   Physical count
    reserved:  Held for orders awaiting a payment decision
    available: on_hand - reserved (what can be sold)
"""

import threading
from dataclasses import dataclass

import structlog

from inventory.stock.port import InventoryService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLevels:
    on_hand: int = 0
    reserved: int = 0

    @property
    def available(self) -> int:
        return self.on_hand - self.reserved


class InMemoryInventory(InventoryService):
    """Inventory adapter holding stock counts in a dict."""

    def __init__(self, initial_stock: dict[str, int] | None = None) -> None:
        self._lock = threading.Lock()
        self._levels: dict[str, StockLevels] = {}
        for product, quantity in (initial_stock or {}).items():
            self.receive(product, quantity)

    def stock_level(self, product: str) -> StockLevels:
        with self._lock:
            return self._levels.get(product, StockLevels())

    def receive(self, product: str, quantity: int) -> None:
        """Add newly arrived units to on-hand stock."""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        with self._lock:
            levels = self._levels.get(product, StockLevels())
            self._levels[product] = StockLevels(on_hand=levels.on_hand + quantity, reserved=levels.reserved)

    def check_stock(self, product: str, quantity: int) -> bool:
        return self.stock_level(product).available >= quantity

    def reserve_stock(self, product: str, quantity: int) -> bool:
        with self._lock:
            levels = self._levels.get(product, StockLevels())
            if levels.available < quantity:
                logger.info(
                    "Reservation refused",
                    product=product,
                    requested=quantity,
                    available=levels.available,
                )
                return False
            self._levels[product] = StockLevels(on_hand=levels.on_hand, reserved=levels.reserved + quantity)
            return True

    def reduce_stock(self, product: str, quantity: int) -> None:
        with self._lock:
            levels = self._levels.get(product, StockLevels())
            if levels.reserved < quantity:
                raise ValueError(
                    f"Cannot commit {quantity} units of {product}: only {levels.reserved} reserved"
                )
            self._levels[product] = StockLevels(
                on_hand=levels.on_hand - quantity,
                reserved=levels.reserved - quantity,
            )

    def increase_stock(self, product: str, quantity: int) -> None:
        self.receive(product, quantity)

    def release_reservation(self, product: str, quantity: int) -> None:
        with self._lock:
            levels = self._levels.get(product, StockLevels())
            if levels.reserved < quantity:
                raise ValueError(
                    f"Cannot release {quantity} units of {product}: only {levels.reserved} reserved"
                )
            self._levels[product] = StockLevels(on_hand=levels.on_hand, reserved=levels.reserved - quantity)
