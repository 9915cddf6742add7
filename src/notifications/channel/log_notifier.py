"""Logging notifier: emits each notification as a structured log event.

Useful in development where no delivery channel is wired up.
"""

import structlog

from notifications.channel.port import NotificationService

logger = structlog.get_logger(__name__)


class LoggingNotifier(NotificationService):
    def _emit(self, message: str, order) -> None:
        logger.info(
            message,
            order_id=order.id,
            product=order.product,
            quantity=order.quantity,
            total_price=str(order.total_price),
            status=order.state.value,
        )

    def send_paid_confirmation(self, order) -> None:
        self._emit("Order paid confirmation sent", order)

    def send_pending_approval(self, order) -> None:
        self._emit("Order pending approval notice sent", order)

    def send_cancellation(self, order) -> None:
        self._emit("Order cancellation notice sent", order)
