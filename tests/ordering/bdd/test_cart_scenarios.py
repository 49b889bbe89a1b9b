"""BDD tests for the shopping cart."""

from decimal import Decimal

from identity.credentials import Identity
from ordering.cart.cart import CartStore
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} of product {product_id:d} "{name}" at {price} are added'))
def add_product(cart, qty, product_id, name, price):
    cart.add_item({"id": product_id, "name": name, "price": Decimal(price)}, qty=qty)


@when(parsers.cfparse("the quantity of product {product_id:d} is set to {qty:d}"))
def set_quantity(cart, product_id, qty):
    cart.set_quantity(product_id, qty)


@when("the storefront is reopened", target_fixture="cart")
def reopen(cart, storage):
    return CartStore(storage, cart.identity)


@when(parsers.cfparse('"{email}" signs in'))
def sign_in(cart, email):
    cart.switch_identity(Identity(email=email, token=f"tok-{email}"))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def line_count(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("product {product_id:d} has quantity {qty:d}"))
def product_quantity(cart, product_id, qty):
    assert cart.get(product_id).quantity == qty
