"""Shared BDD fixtures and step definitions for CampusEats."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from campuseats.menu.management import CreateProduct
from campuseats.order.cancellation import CancelOrder
from campuseats.order.order import Order
from campuseats.order.placement import PlaceOrder
from campuseats.order.status import UpdateOrderStatus
from campuseats.user.registration import RegisterUser
from campuseats.user.user import User


@pytest.fixture()
def error():
    """Container for the domain error a When step ran into."""
    return {"exc": None}


@pytest.fixture()
def menu():
    """Product ids by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a registered student with {points:d} loyalty points"), target_fixture="student_id")
def registered_student(points):
    return current_domain.process(
        RegisterUser(email="student@campus.ro", full_name="Alex Popescu", opening_points=points),
        asynchronous=False,
    )


@given(parsers.cfparse('the menu offers "{name}" at {price:f}'))
def menu_offers(menu, name, price):
    menu[name] = current_domain.process(
        CreateProduct(name=name, description=f"{name} from the campus kitchen", price=price, category="Main"),
        asynchronous=False,
    )


@given(parsers.cfparse('the student ordered {quantity:d} "{name}"'), target_fixture="order_id")
def student_ordered(student_id, menu, quantity, name):
    return current_domain.process(
        PlaceOrder(user_id=student_id, items=json.dumps([{"product_id": menu[name], "quantity": quantity}])),
        asynchronous=False,
    )


@given(parsers.cfparse('the order has reached "{status}"'))
def order_has_reached(order_id, status):
    path = ["Preparing", "Ready", "Completed"]
    for step in path[: path.index(status) + 1]:
        current_domain.process(UpdateOrderStatus(order_id=order_id, status=step), asynchronous=False)


@given(parsers.cfparse('the student cancelled the order because "{reason}"'))
def student_cancelled(order_id, student_id, reason):
    current_domain.process(CancelOrder(order_id=order_id, user_id=student_id, reason=reason), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the order payment status is "{status}"'))
def order_payment_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).payment_status == status


@then(parsers.cfparse("the student has {points:f} loyalty points"))
def student_points(student_id, points):
    assert current_domain.repository_for(User).get(student_id).loyalty_points == points


@then(parsers.cfparse('the student ledger has {count:d} "{kind}" {noun}'))
def ledger_entries(student_id, count, kind, noun):
    user = current_domain.repository_for(User).get(student_id)
    assert len([t for t in user.transactions if t.kind == kind]) == count


@then(parsers.cfparse('the request fails with "{kind}"'))
def request_fails_with(error, kind):
    assert error["exc"] is not None
    assert error["exc"].kind.value == kind


@then(parsers.cfparse('the error message is "{message}"'))
def error_message_is(error, message):
    assert message in [m for msgs in error["exc"].messages.values() for m in msgs]
