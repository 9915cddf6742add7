"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the error raised by the last When step, if any."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps: collaborator behavior
# ---------------------------------------------------------------------------
@given("payments require manual approval")
def _(payments):
    payments.needs_manual_approval.return_value = True


@given("payment is declined")
def _(payments):
    payments.process_payment.return_value = False


@given(parsers.cfparse('the discount code "{code}" is worth {amount:d}'))
def _(discounts, code, amount):
    discounts.validate_code.side_effect = lambda candidate: Decimal(amount) if candidate == code else Decimal("0")


@given(
    parsers.cfparse('an order for {quantity:d} units of "{product}" at {price:d}'),
    target_fixture="order",
)
def _(workflow, inventory, notifier, quantity, product, price):
    order = workflow.create_order(product, quantity, Decimal(price))
    inventory.reset_mock()
    notifier.reset_mock()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order state is "{state}"'))
def _(order, state):
    assert order is not None
    assert order.state.value == state


@then(parsers.cfparse("the order total is {amount}"))
def _(order, amount):
    assert order.total_price == Decimal(amount)


@then("the order has a created_at timestamp")
def _(order):
    assert order.created_at is not None


@then(parsers.cfparse('the order is rejected with "{keyword}"'))
def _(error, keyword):
    assert error["exc"] is not None, "Expected the order to be rejected but it was accepted"
    assert keyword in str(error["exc"]).lower()


@then(parsers.cfparse("the order book holds {count:d} orders"))
def _(workflow, count):
    assert len(workflow.get_orders()) == count


@then("a paid confirmation is sent once")
def _(notifier):
    notifier.send_paid_confirmation.assert_called_once()


@then("a pending approval notice is sent once")
def _(notifier):
    notifier.send_pending_approval.assert_called_once()


@then("a cancellation notice is sent once")
def _(notifier):
    notifier.send_cancellation.assert_called_once()


@then(parsers.cfparse('stock for "{product}" is reduced by {quantity:d} once'))
def _(inventory, product, quantity):
    inventory.reduce_stock.assert_called_once_with(product, quantity)


@then(parsers.cfparse('stock for "{product}" is returned once'))
def _(inventory, order, product):
    inventory.increase_stock.assert_called_once_with(product, order.quantity)


@then("stock is never reduced")
def _(inventory):
    inventory.reduce_stock.assert_not_called()


@then("stock is never returned")
def _(inventory):
    inventory.increase_stock.assert_not_called()
