"""Checkout Orchestrator: create order, take payment, confirm, all from the client.

There is no server-side coordinator, so this class sequences the two
services itself:

1. price the cart and create the order (order service)
2. charge the grand total (payment service)
3. attach the payment to the order (order service)
4. clear the cart

Each remote call is made exactly once per ``submit``; there are no
automatic retries. Failures after step 1 leave remote state that this
class does not compensate for. It reports them as distinct error kinds
so the caller (or a reconciliation job) can act:

- ``PaymentError``: an unpaid order exists (``order_id`` is kept).
- ``ConfirmationError``: payment taken, order not marked paid.

The cart is only cleared after a successful confirmation.
"""

import structlog

from ordering.checkout.errors import CheckoutStateError, EmptyCartError
from ordering.checkout.events import (
    CheckoutCancelled,
    ConfirmationFailed,
    OrderCreated,
    OrderCreationFailed,
    PaymentCompleted,
    PaymentConfirmed,
    PaymentDeclined,
    PaymentStarted,
    SubmissionStarted,
)
from ordering.checkout.models import CustomerInfo, PaymentChoice
from ordering.checkout.session import CheckoutPhase, CheckoutSession
from ordering.order.port import OrderService
from ordering.order.schemas import CheckoutRequest, OrderLineRequest
from ordering.pricing import DEFAULT_POLICY, PricingPolicy, price_cart, to_cents
from payments.gateway.port import PaymentGateway
from shared.http import ServiceError

logger = structlog.get_logger(__name__)


class CheckoutOrchestrator:
    def __init__(
        self,
        order_service: OrderService,
        payment_gateway: PaymentGateway,
        pricing_policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self.order_service = order_service
        self.payment_gateway = payment_gateway
        self.pricing_policy = pricing_policy

    def new_session(self) -> CheckoutSession:
        return CheckoutSession()

    def cancel(self, session: CheckoutSession) -> None:
        """Abandon a session that has not been submitted. No remote calls are made."""
        if session.phase != CheckoutPhase.IDLE:
            raise CheckoutStateError(f"Cannot cancel a checkout in phase {session.phase.value}")
        session.apply(CheckoutCancelled())
        logger.info("Checkout cancelled", idempotency_key=session.idempotency_key)

    def build_request(self, cart, customer: CustomerInfo, payment: PaymentChoice) -> CheckoutRequest:
        return CheckoutRequest(
            customer_email=customer.email,
            customer_name=customer.name,
            shipping_address=customer.shipping_address,
            payment_method=payment.method.value,
            payment_details=payment.details,
            items=[
                OrderLineRequest(
                    product_id=line.product_id,
                    product_name=line.name,
                    quantity=line.quantity,
                    price=line.unit_price,
                )
                for line in cart.lines
            ],
        )

    def submit(
        self,
        cart,
        customer: CustomerInfo,
        payment: PaymentChoice,
        session: CheckoutSession | None = None,
    ) -> CheckoutSession:
        """Run one checkout attempt to a terminal phase and return its session.

        Raises ``EmptyCartError`` (before any remote call) for an empty cart
        and ``CheckoutStateError`` for a session that is not idle. Remote
        failures are not raised; they end the session in ``FAILED`` with
        ``session.error`` set.
        """
        session = session or self.new_session()
        if session.phase != CheckoutPhase.IDLE:
            raise CheckoutStateError(f"Checkout already {session.phase.value}; start a new session to retry")
        if cart.is_empty:
            raise EmptyCartError()

        breakdown = price_cart(cart, self.pricing_policy)
        amount = to_cents(breakdown.total)
        request = self.build_request(cart, customer, payment)
        log = logger.bind(idempotency_key=session.idempotency_key, customer_email=customer.email)

        session.apply(SubmissionStarted(grand_total=amount, item_count=cart.total_items()))
        log.info("Checkout submitted", amount=str(amount), line_count=len(request.items))

        # Step 1: create the order
        try:
            order = self.order_service.create_order(request, idempotency_key=session.idempotency_key)
        except ServiceError as exc:
            session.apply(OrderCreationFailed(reason=exc.message, status_code=exc.status_code))
            log.warning("Order creation failed", error=exc.message, status_code=exc.status_code)
            return session
        session.apply(OrderCreated(order_id=order.id))
        log = log.bind(order_id=order.id)

        # Step 2: take payment
        session.apply(PaymentStarted(amount=amount))
        try:
            result = self.payment_gateway.process_payment(
                order_id=order.id,
                amount=amount,
                payment_method=payment.method,
                payment_details=payment.details,
                idempotency_key=session.idempotency_key,
            )
        except ServiceError as exc:
            session.apply(PaymentDeclined(reason=exc.message))
            log.warning("Payment call failed; order left unpaid", error=exc.message)
            return session

        if not result.completed:
            session.apply(PaymentDeclined(status=result.status, payment_id=result.id))
            log.warning("Payment not completed; order left unpaid", payment_status=result.status)
            return session
        session.apply(PaymentCompleted(payment_id=result.id))
        log = log.bind(payment_id=result.id)

        # Step 3: mark the order paid
        if result.id is None:
            return self._confirmation_failed(session, log, "Payment completed without a payment id")
        try:
            self.order_service.attach_payment(order.id, result.id)
        except ServiceError as exc:
            return self._confirmation_failed(session, log, exc.message)
        session.apply(PaymentConfirmed())

        cart.clear()
        log.info("Checkout succeeded", amount=str(amount))
        return session

    @staticmethod
    def _confirmation_failed(session: CheckoutSession, log, reason: str) -> CheckoutSession:
        session.apply(ConfirmationFailed(reason=reason))
        log.error("Payment taken but order not confirmed; needs reconciliation", error=reason)
        return session
