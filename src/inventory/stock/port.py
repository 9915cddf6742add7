"""Inventory port (abstract interface).

Defines the stock operations the ordering workflow depends on. A reservation
is a soft hold: it is either converted into a permanent deduction with
``reduce_stock`` once payment succeeds, or handed back with
``release_reservation`` when the order does not go through.
"""

from abc import ABC, abstractmethod


class InventoryService(ABC):
    """Abstract inventory interface."""

    @abstractmethod
    def check_stock(self, product: str, quantity: int) -> bool:
        """True if at least ``quantity`` units are available."""
        ...

    @abstractmethod
    def reserve_stock(self, product: str, quantity: int) -> bool:
        """Soft-hold ``quantity`` units. False if the hold could not be taken."""
        ...

    @abstractmethod
    def reduce_stock(self, product: str, quantity: int) -> None:
        """Convert a reservation into a permanent deduction."""
        ...

    @abstractmethod
    def increase_stock(self, product: str, quantity: int) -> None:
        """Return ``quantity`` previously deducted units to available stock."""
        ...

    @abstractmethod
    def release_reservation(self, product: str, quantity: int) -> None:
        """Drop a soft hold without deducting anything."""
        ...
