"""Shared fixtures for the ordering tests.

Collaborators are ``MagicMock(spec=Port)`` doubles configured for the happy
path: stock is available, reservations succeed, no manual approval is
needed and payment goes through. Tests override individual return values.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from inventory.stock.port import InventoryService
from notifications.channel.port import NotificationService
from ordering.config import OrderingSettings
from ordering.order.workflow import OrderWorkflow
from ordering.pricing.discounts import DiscountService
from payments.gateway.port import PaymentService


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock():
    return FrozenClock(datetime(2024, 3, 15, 12, 0, tzinfo=UTC))


@pytest.fixture()
def settings():
    return OrderingSettings(prohibited_products=frozenset({"ProhibitedProduct"}))


@pytest.fixture()
def inventory():
    inv = MagicMock(spec=InventoryService)
    inv.check_stock.return_value = True
    inv.reserve_stock.return_value = True
    return inv


@pytest.fixture()
def payments():
    pay = MagicMock(spec=PaymentService)
    pay.needs_manual_approval.return_value = False
    pay.process_payment.return_value = True
    return pay


@pytest.fixture()
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture()
def discounts():
    disc = MagicMock(spec=DiscountService)
    disc.validate_code.return_value = Decimal("0")
    return disc


@pytest.fixture()
def workflow(inventory, payments, notifier, discounts, settings):
    return OrderWorkflow(inventory, payments, notifier, discounts, settings=settings)


@pytest.fixture()
def clocked_workflow(inventory, payments, notifier, discounts, settings, clock):
    return OrderWorkflow(inventory, payments, notifier, discounts, settings=settings, clock=clock)
