"""Order workflow: validation, pricing, payment decision and inventory moves.

Creation pipeline:
    input sanity, prohibited list, daily quota, stock check, reservation,
    quota record, price, manual approval or payment, stock commit,
    registry, notification

The workflow owns its quota counters, pricing engine and registry. Inventory,
payment, discount and notification collaborators are injected ports, so one
instance is one self-contained order book.

Locking:
    - one lock per product, held from the quota check until the order is
      built
    - one lock per order id, held while cancelling or approving
    - notifications are sent after every lock is released
"""

from collections.abc import Callable
from datetime import UTC, date, datetime
from uuid import uuid4

import structlog
from pydantic import ValidationError

from inventory.stock.port import InventoryService
from notifications.channel.port import NotificationService
from ordering.config import OrderingSettings
from ordering.order.errors import (
    InsufficientStockError,
    InvalidOrderError,
    InvalidTransitionError,
    PaymentFailedError,
    ProhibitedProductError,
    QuotaExceededError,
)
from ordering.order.order import Order, OrderRequest, OrderStatus
from ordering.order.registry import OrderRegistry
from ordering.pricing.discounts import DiscountService
from ordering.pricing.engine import PricingEngine
from ordering.quota.tracker import DailyQuotaTracker
from ordering.utils.clock import utc_now
from ordering.utils.locks import KeyedLock
from ordering.utils.logging import order_context
from payments.gateway.port import PaymentService

logger = structlog.get_logger(__name__)


def _new_order_id() -> str:
    return str(uuid4())


def _invalid_order(exc: ValidationError) -> InvalidOrderError:
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first["loc"] else "order"
    return InvalidOrderError(field, f"Invalid {field}: {first['msg']}")


class OrderWorkflow:
    def __init__(
        self,
        inventory: InventoryService,
        payments: PaymentService,
        notifier: NotificationService,
        discounts: DiscountService,
        settings: OrderingSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_order_id,
    ) -> None:
        self.inventory = inventory
        self.payments = payments
        self.notifier = notifier
        self.settings = settings or OrderingSettings()

        self.quota = DailyQuotaTracker(limit=self.settings.daily_quota_limit, clock=clock)
        self.pricing = PricingEngine(
            discounts,
            bulk_threshold=self.settings.bulk_threshold,
            bulk_discount_rate=self.settings.bulk_discount_rate,
            surcharge_rate=self.settings.surcharge_rate,
        )
        self.registry = OrderRegistry()

        self._clock = clock
        self._id_factory = id_factory
        self._quota_day: date | None = None
        self._product_locks = KeyedLock()
        self._order_locks = KeyedLock()

    # -------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------
    def create_order(
        self,
        product: str,
        quantity: int,
        unit_price,
        category: str = "Normal",
        discount_code: str | None = None,
    ) -> Order:
        """Validate, price and settle a new order.

        Returns the order in PAID or PENDING_APPROVAL state. Any failure
        raises an OrderingError subclass; in that case nothing is registered
        and any stock reservation taken for the attempt has been released.
        """
        try:
            request = OrderRequest(
                product=product,
                quantity=quantity,
                unit_price=unit_price,
                category=category,
                discount_code=discount_code,
            )
        except ValidationError as exc:
            raise _invalid_order(exc) from exc

        with order_context(product=request.product):
            if self.settings.is_prohibited(request.product):
                logger.warning("Order rejected: prohibited product", product=request.product)
                raise ProhibitedProductError(request.product)

            now = self._clock()
            today = now.astimezone(UTC).date()
            self._roll_quota_day(today)

            with self._product_locks.hold(request.product):
                self._enforce_quota(request.product, request.quantity, today)
                self._reserve_stock(request.product, request.quantity)
                self.quota.record(request.product, request.quantity, on=today)
                order = self._build(request, now)

            with order_context(order_id=order.id):
                return self._settle(order)

    def _roll_quota_day(self, today: date) -> None:
        # Buckets from earlier days can no longer be hit
        if self._quota_day != today:
            self.quota.purge_before(today)
            self._quota_day = today

    def _enforce_quota(self, product: str, quantity: int, today: date) -> None:
        if self.quota.would_exceed(product, quantity, on=today):
            used = self.quota.usage(product, on=today)
            logger.warning(
                "Order rejected: daily quota",
                product=product,
                quantity=quantity,
                used=used,
                limit=self.quota.limit,
            )
            raise QuotaExceededError(product, quantity, used, self.quota.limit)

    def _reserve_stock(self, product: str, quantity: int) -> None:
        if not self.inventory.check_stock(product, quantity):
            logger.warning("Order rejected: insufficient stock", product=product, quantity=quantity)
            raise InsufficientStockError(product, quantity)

        if not self.inventory.reserve_stock(product, quantity):
            logger.warning("Order rejected: reservation failed", product=product, quantity=quantity)
            raise InsufficientStockError(product, quantity, reason="reservation could not be taken")

    def _build(self, request: OrderRequest, now: datetime) -> Order:
        try:
            return Order(
                id=self._next_id(),
                total_price=self.pricing.compute(request.quantity, request.unit_price, request.discount_code),
                created_at=now,
                **request.model_dump(),
            )
        except Exception:
            self.inventory.release_reservation(request.product, request.quantity)
            raise

    def _next_id(self) -> str:
        order_id = self._id_factory()
        if order_id in self.registry:
            raise ValueError(f"Order id {order_id} has already been issued")
        return order_id

    def _settle(self, order: Order) -> Order:
        """Route a freshly built order to manual approval or payment."""
        try:
            if self.payments.needs_manual_approval(order):
                order.transition_to(OrderStatus.PENDING_APPROVAL)
                self.registry.add(order)
                logger.info(
                    "Order awaiting manual approval",
                    order_id=order.id,
                    product=order.product,
                    quantity=order.quantity,
                    total_price=str(order.total_price),
                )
                self._notify("pending_approval", self.notifier.send_pending_approval, order)
                return order

            paid = self.payments.process_payment(order)
        except Exception:
            if order.id not in self.registry:
                self.inventory.release_reservation(order.product, order.quantity)
            raise

        if not paid:
            self.inventory.release_reservation(order.product, order.quantity)
            logger.warning(
                "Order rejected: payment failed",
                order_id=order.id,
                product=order.product,
                total_price=str(order.total_price),
            )
            raise PaymentFailedError(order.id, order.product)

        try:
            self.inventory.reduce_stock(order.product, order.quantity)
        except Exception as e:
            logger.error(
                "Stock commit failed after payment",
                order_id=order.id,
                product=order.product,
                quantity=order.quantity,
                total_price=str(order.total_price),
                error=str(e),
            )
            self.inventory.release_reservation(order.product, order.quantity)
            raise

        order.transition_to(OrderStatus.PAID)
        self.registry.add(order)
        logger.info(
            "Order paid",
            order_id=order.id,
            product=order.product,
            quantity=order.quantity,
            total_price=str(order.total_price),
        )
        self._notify("paid_confirmation", self.notifier.send_paid_confirmation, order)
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def cancel_order(self, order_id: str) -> Order:
        """Cancel an order. Cancelling an already cancelled order does nothing.

        Stock is only handed back for PAID orders; orders that never got past
        manual approval had nothing permanently deducted.
        """
        with order_context(order_id=order_id):
            order = self.registry.get(order_id)

            with self._order_locks.hold(order.id):
                if order.is_cancelled:
                    logger.info("Order already cancelled", order_id=order.id)
                    return order

                previous = order.state
                if not order.can_transition_to(OrderStatus.CANCELLED):
                    raise InvalidTransitionError(order.id, previous.value, OrderStatus.CANCELLED.value)
                if previous is OrderStatus.PAID:
                    self.inventory.increase_stock(order.product, order.quantity)
                order.transition_to(OrderStatus.CANCELLED)

            logger.info("Order cancelled", order_id=order.id, previous_status=previous.value)
            self._notify("cancellation", self.notifier.send_cancellation, order)
            return order

    def approve_order(self, order_id: str) -> Order:
        """Charge an order that was parked for manual approval.

        On payment failure the order stays PENDING_APPROVAL with its
        reservation intact, so it can be retried or cancelled. The same holds
        when the stock commit fails after payment.
        """
        with order_context(order_id=order_id):
            order = self.registry.get(order_id)

            with self._order_locks.hold(order.id):
                if order.state is not OrderStatus.PENDING_APPROVAL:
                    raise InvalidTransitionError(order.id, order.state.value, OrderStatus.PAID.value)

                if not self.payments.process_payment(order):
                    logger.warning("Approved order payment failed", order_id=order.id)
                    raise PaymentFailedError(order.id, order.product)

                try:
                    self.inventory.reduce_stock(order.product, order.quantity)
                except Exception as e:
                    logger.error(
                        "Stock commit failed after payment",
                        order_id=order.id,
                        product=order.product,
                        quantity=order.quantity,
                        error=str(e),
                    )
                    raise
                order.transition_to(OrderStatus.PAID)

            logger.info("Order approved and paid", order_id=order.id)
            self._notify("paid_confirmation", self.notifier.send_paid_confirmation, order)
            return order

    def _notify(self, kind: str, send: Callable[[Order], object], order: Order) -> None:
        try:
            send(order)
        except Exception as e:
            logger.error(
                "Notification dispatch failed",
                notification=kind,
                order_id=order.id,
                error=str(e),
            )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id: str) -> Order:
        return self.registry.get(order_id)

    def get_orders(self) -> list[Order]:
        return self.registry.snapshot()

    def get_orders_by_status(self, state: OrderStatus | str) -> list[Order]:
        return self.registry.with_status(OrderStatus(state))
