from decimal import Decimal

import pytest
from catalogue.client import Product
from identity.credentials import Identity
from ordering.cart.cart import CartStore
from ordering.cart.storage import InMemoryCartStorage
from ordering.checkout.models import CustomerInfo, PaymentChoice
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.order.fake_adapter import FakeOrderService
from payments.gateway.fake_adapter import FakeGateway
from payments.payment.payment import PaymentMethod


@pytest.fixture()
def storage():
    return InMemoryCartStorage()


@pytest.fixture()
def customer_identity():
    return Identity(email="ada@example.com", user_id="7", username="ada", role="CUSTOMER", token="tok-ada")


@pytest.fixture()
def cart(storage, customer_identity):
    return CartStore(storage, customer_identity)


@pytest.fixture()
def keyboard():
    return Product(id=1, name="Mechanical Keyboard", price=Decimal("50"), category="Electronics", stock_quantity=10)


@pytest.fixture()
def mouse():
    return Product(id=2, name="Wireless Mouse", price=Decimal("60"), category="Electronics", stock_quantity=5)


@pytest.fixture()
def cable():
    return Product(id=3, name="USB-C Cable", price=Decimal("9.99"), category="Accessories", stock_quantity=100)


@pytest.fixture()
def two_item_cart(cart, keyboard, mouse):
    cart.add_item(keyboard)
    cart.add_item(mouse)
    return cart


@pytest.fixture()
def order_service():
    return FakeOrderService(next_id=42)


@pytest.fixture()
def gateway():
    return FakeGateway(next_id=900)


@pytest.fixture()
def orchestrator(order_service, gateway):
    return CheckoutOrchestrator(order_service, gateway)


@pytest.fixture()
def customer():
    return CustomerInfo(email="ada@example.com", name="Ada Lovelace", shipping_address="12 Analytical Way, London")


@pytest.fixture()
def card_payment():
    return PaymentChoice(method=PaymentMethod.CREDIT_CARD, details="4111111111111111")
