"""Shared BDD fixtures and step definitions for the Ordering context."""

from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def context():
    """Container for results and captured errors between steps."""
    return {"session": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(cart):
    assert cart.is_empty
    return cart


@given(parsers.cfparse('the cart holds {qty:d} of product {product_id:d} "{name}" at {price}'))
def cart_holds(cart, qty, product_id, name, price):
    cart.add_item({"id": product_id, "name": name, "price": Decimal(price)}, qty=qty)


@given("a cart with a keyboard at 50.00 and a mouse at 60.00")
def keyboard_and_mouse_cart(cart):
    cart.add_item({"id": 1, "name": "Mechanical Keyboard", "price": Decimal("50.00")})
    cart.add_item({"id": 2, "name": "Wireless Mouse", "price": Decimal("60.00")})


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_item_count(cart, count):
    assert cart.total_items() == count


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.is_empty


@then(parsers.cfparse("the cart total is {amount}"))
def cart_total(cart, amount):
    assert cart.total_amount() == Decimal(amount)
