"""BDD tests for checkout sequencing and failure handling."""

from decimal import Decimal

from ordering.checkout.errors import CheckoutError
from ordering.order.schemas import OrderStatus
from payments.payment.payment import PaymentStatus
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the order service rejects new orders with "{message}"'))
def order_service_rejects(order_service, message):
    order_service.fail("create_order", message, status_code=400)


@given("the order service cannot attach payments")
def order_service_cannot_attach(order_service):
    order_service.fail("attach_payment", "Internal Server Error", status_code=500)


@given(parsers.cfparse('the payment service answers "{status}"'))
def payment_service_answers(gateway, status):
    gateway.configure(PaymentStatus(status))


@given("the payment service is unreachable")
def payment_service_unreachable(gateway):
    gateway.fail_transport()


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer checks out paying by credit card")
def checkout(orchestrator, cart, customer, card_payment, context):
    try:
        context["session"] = orchestrator.submit(cart, customer, card_payment)
    except CheckoutError as exc:
        context["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout ends in phase "{phase}"'))
def checkout_phase(context, phase):
    assert context["session"].phase.value == phase


@then(parsers.cfparse('the error kind is "{kind}"'))
def error_kind(context, kind):
    assert context["session"].error.kind.value == kind


@then(parsers.cfparse("the error keeps order id {order_id:d}"))
def error_keeps_order_id(context, order_id):
    assert context["session"].error.order_id == order_id


@then("resubmitting is safe")
def resubmitting_safe(context):
    assert context["session"].error.retry_safe


@then("resubmitting is not safe")
def resubmitting_not_safe(context):
    assert not context["session"].error.retry_safe


@then("the order needs reconciliation")
def needs_reconciliation(context):
    assert context["session"].error.requires_reconciliation


@then(parsers.cfparse("the payment service was charged {amount}"))
def charged(gateway, amount):
    assert [call["amount"] for call in gateway.calls] == [Decimal(amount)]


@then("the payment service was not called")
def payment_not_called(gateway):
    assert gateway.calls == []


@then(parsers.cfparse("the order {order_id:d} is marked paid"))
def order_marked_paid(order_service, order_id):
    assert order_service.orders[order_id].status == OrderStatus.PAID


@then(parsers.cfparse('checkout is refused as "{kind}"'))
def checkout_refused(context, kind):
    assert context["session"] is None
    assert context["exc"].kind.value == kind


@then("no remote calls were made")
def no_remote_calls(order_service, gateway):
    assert order_service.calls == []
    assert gateway.calls == []
