"""Configurable fake payment gateway for development and testing.

Simulates the payment service without any network calls. It can be set
to complete, to answer with another status (FAILED, PENDING), or to fail
at the transport level, and it records every call for inspection.
"""

from decimal import Decimal
from uuid import uuid4

from payments.gateway.port import PaymentGateway
from payments.payment.payment import PaymentMethod, PaymentResult, PaymentStatus
from shared.http import ServiceError


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    service_name = "payment-service"

    def __init__(self, next_id: int = 1) -> None:
        self.next_id = next_id
        self.status: PaymentStatus = PaymentStatus.COMPLETED
        self.transport_error: ServiceError | None = None
        self.calls: list[dict] = []

    def configure(self, status: PaymentStatus = PaymentStatus.COMPLETED) -> None:
        """Answer every following charge with ``status``."""
        self.status = status
        self.transport_error = None

    def fail_transport(self, message: str = "payment-service is unreachable", status_code: int | None = None) -> None:
        self.transport_error = ServiceError(self.service_name, message, status_code=status_code)

    def process_payment(
        self,
        order_id: int | str,
        amount: Decimal,
        payment_method: PaymentMethod,
        payment_details: str | None,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        self.calls.append(
            {
                "method": "process_payment",
                "order_id": order_id,
                "amount": amount,
                "payment_method": payment_method,
                "payment_details": payment_details,
                "idempotency_key": idempotency_key,
            }
        )
        if self.transport_error is not None:
            raise self.transport_error

        payment_id = self.next_id
        self.next_id += 1
        last4 = payment_details[-4:] if payment_method == PaymentMethod.CREDIT_CARD and payment_details else None
        return PaymentResult(
            id=payment_id,
            order_id=order_id,
            status=self.status.value,
            amount=amount,
            transaction_id=f"fake_txn_{uuid4().hex[:12]}",
            card_last_four_digits=last4,
        )
