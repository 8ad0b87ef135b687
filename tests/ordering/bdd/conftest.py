"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.events import OrderStatusChanged
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_EVENT_CLASSES = {
    "OrderStatusChanged": OrderStatusChanged,
}

_PATHS = {
    "processing": ["processing"],
    "shipped": ["processing", "shipped"],
    "completed": ["processing", "shipped", "completed"],
    "cancelled": ["cancelled"],
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a shopper places an order for {quantity:d} bottles at {price:d} each"),
    target_fixture="order",
)
def placed_order(quantity, price):
    return Order.place(
        user_id="user-1",
        product_name="Sasya Mantra Herbal Hair Growth Oil",
        quantity=quantity,
        price=float(price),
        fullname="Asha Rao",
        phone="9876543210",
        address="12 MG Road",
    )


@given(parsers.cfparse('the order has reached "{status}"'))
def order_reached(order, status):
    for step in _PATHS[status]:
        order.change_status(step)
    order._events.clear()


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the status is changed to "{status}"'))
def change_status(order, status, error):
    try:
        order.change_status(status)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the quantity is changed to {quantity:d}"))
def change_quantity(order, quantity, error):
    try:
        order.update_details(quantity=quantity)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse("the order total is {total:d}"))
def order_total_is(order, total):
    assert order.total == float(total)


@then("the order has a tracking number")
def has_tracking_number(order):
    assert order.tracking_number


@then("the change is rejected")
def change_rejected(error):
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("an {event_type} event was raised {count:d} times"))
def event_raised_times(order, event_type, count):
    event_cls = _EVENT_CLASSES[event_type]
    assert len([e for e in order._events if isinstance(e, event_cls)]) == count
