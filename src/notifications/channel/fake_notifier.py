"""Fake notifier: records sent notifications for testing."""

from uuid import uuid4

from notifications.channel.port import NotificationService


class RecordingNotifier(NotificationService):
    """Notifier that records messages in memory for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake notifier behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _record(self, kind: str, order) -> None:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        self.sent.append(
            {
                "message_id": f"note-{uuid4().hex[:12]}",
                "kind": kind,
                "order_id": order.id,
                "status": order.state.value,
            }
        )

    def send_paid_confirmation(self, order) -> None:
        self._record("paid_confirmation", order)

    def send_pending_approval(self, order) -> None:
        self._record("pending_approval", order)

    def send_cancellation(self, order) -> None:
        self._record("cancellation", order)

    def sent_for(self, order_id: str) -> list[str]:
        """Kinds of notification sent for ``order_id``, in dispatch order."""
        return [record["kind"] for record in self.sent if record["order_id"] == order_id]

    def reset(self):
        """Clear sent notifications (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
