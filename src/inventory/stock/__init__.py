"""Inventory port and adapters.

- InventoryService: the stock interface the ordering workflow depends on
- InMemoryInventory: thread-safe adapter for development and testing
"""

from inventory.stock.memory_adapter import InMemoryInventory, StockLevels
from inventory.stock.port import InventoryService

__all__ = ["InMemoryInventory", "InventoryService", "StockLevels"]
