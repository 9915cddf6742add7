"""Tests for the configurable fake payment service."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from ordering.order.order import Order
from payments.gateway import FakePaymentService, PaymentService


def _order(total):
    return Order(
        id="ord-001",
        product="Widget",
        quantity=1,
        unit_price=Decimal(total),
        total_price=Decimal(total),
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def gateway():
    return FakePaymentService()


def test_implements_port(gateway):
    assert isinstance(gateway, PaymentService)


def test_defaults_to_success_without_approval(gateway):
    order = _order("50")
    assert not gateway.needs_manual_approval(order)
    assert gateway.process_payment(order)


def test_configured_failure(gateway):
    gateway.configure(should_succeed=False)
    assert not gateway.process_payment(_order("50"))


def test_approval_threshold_is_inclusive(gateway):
    gateway.configure(approval_threshold=Decimal("100"))
    assert not gateway.needs_manual_approval(_order("99.99"))
    assert gateway.needs_manual_approval(_order("100"))


def test_records_calls(gateway):
    gateway.process_payment(_order("50"))
    assert gateway.calls == [
        {"method": "process_payment", "order_id": "ord-001", "amount": Decimal("50"), "result": True}
    ]


def test_reset_restores_defaults(gateway):
    gateway.configure(should_succeed=False, approval_threshold=Decimal("1"))
    gateway.process_payment(_order("50"))
    gateway.reset()
    assert gateway.calls == []
    assert gateway.should_succeed
    assert gateway.approval_threshold is None
