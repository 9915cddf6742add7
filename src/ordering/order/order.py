"""Order entity: creation-time data plus lifecycle state.

State Machine (4 states):
    NEW → PAID | PENDING_APPROVAL
    PENDING_APPROVAL → PAID (manual approval)
    CANCELLED (from NEW, PENDING_APPROVAL, PAID), terminal

Only PAID implies the order's stock was permanently deducted. NEW and
PENDING_APPROVAL orders hold at most a reservation.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import AwareDatetime, BaseModel, Field, PositiveInt, PrivateAttr

from ordering.order.errors import InvalidTransitionError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    NEW = "New"
    PAID = "Paid"
    PENDING_APPROVAL = "PendingApproval"
    CANCELLED = "Cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.NEW: {OrderStatus.PAID, OrderStatus.PENDING_APPROVAL, OrderStatus.CANCELLED},
    OrderStatus.PENDING_APPROVAL: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.CANCELLED},
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Field types (fixed at creation)
# ---------------------------------------------------------------------------
Identifier = Annotated[str, Field(min_length=1, frozen=True)]
Quantity = Annotated[PositiveInt, Field(strict=True, frozen=True)]
Amount = Annotated[Decimal, Field(ge=0, allow_inf_nan=False, frozen=True)]


class OrderRequest(BaseModel):
    """What a caller asks for, before quota, stock and pricing are applied."""

    product: Identifier
    quantity: Quantity
    unit_price: Amount
    category: Annotated[str, Field(frozen=True)] = "Normal"
    discount_code: Annotated[str | None, Field(frozen=True)] = None


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------
class Order(OrderRequest):
    """A single accepted (or in-flight) order.

    Built once by the workflow with every field populated. ``total_price`` is
    computed before construction and never recomputed. ``state`` only changes
    through :meth:`transition_to`.
    """

    id: Identifier
    total_price: Amount
    created_at: Annotated[AwareDatetime, Field(frozen=True)]

    _state: OrderStatus = PrivateAttr(default=OrderStatus.NEW)

    def __eq__(self, other):
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def state(self) -> OrderStatus:
        return self._state

    @property
    def is_cancelled(self) -> bool:
        return self._state is OrderStatus.CANCELLED

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: OrderStatus) -> None:
        """Move the order to ``target``, enforcing the state machine."""
        if not self.can_transition_to(target):
            raise InvalidTransitionError(self.id, self._state.value, target.value)
        self._state = target
