"""Tests for the recording and logging notification adapters."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from notifications.channel import LoggingNotifier, NotificationService, RecordingNotifier
from ordering.order.order import Order, OrderStatus
from structlog.testing import capture_logs


@pytest.fixture()
def order():
    order = Order(
        id="ord-001",
        product="Widget",
        quantity=2,
        unit_price=Decimal("10"),
        total_price=Decimal("24.0"),
        created_at=datetime.now(UTC),
    )
    order.transition_to(OrderStatus.PAID)
    return order


class TestRecordingNotifier:
    def test_implements_port(self):
        assert isinstance(RecordingNotifier(), NotificationService)

    def test_records_each_kind(self, order):
        notifier = RecordingNotifier()
        notifier.send_paid_confirmation(order)
        notifier.send_pending_approval(order)
        notifier.send_cancellation(order)

        assert notifier.sent_for("ord-001") == ["paid_confirmation", "pending_approval", "cancellation"]
        assert notifier.sent[0]["status"] == "Paid"

    def test_configured_failure_raises(self, order):
        notifier = RecordingNotifier()
        notifier.configure(should_succeed=False, failure_reason="mailbox full")

        with pytest.raises(RuntimeError, match="mailbox full"):
            notifier.send_cancellation(order)
        assert notifier.sent == []

    def test_reset(self, order):
        notifier = RecordingNotifier()
        notifier.send_cancellation(order)
        notifier.configure(should_succeed=False)
        notifier.reset()

        assert notifier.sent == []
        assert notifier.should_succeed


class TestLoggingNotifier:
    def test_logs_structured_event(self, order):
        with capture_logs() as logs:
            LoggingNotifier().send_paid_confirmation(order)

        assert logs == [
            {
                "event": "Order paid confirmation sent",
                "log_level": "info",
                "order_id": "ord-001",
                "product": "Widget",
                "quantity": 2,
                "total_price": "24.0",
                "status": "Paid",
            }
        ]

    def test_each_notification_logs_once(self, order):
        notifier = LoggingNotifier()
        with capture_logs() as logs:
            notifier.send_pending_approval(order)
            notifier.send_cancellation(order)

        assert [entry["event"] for entry in logs] == [
            "Order pending approval notice sent",
            "Order cancellation notice sent",
        ]
