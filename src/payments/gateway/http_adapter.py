"""HTTP adapter for the payment service (``POST /api/payments/process``)."""

from decimal import Decimal

import structlog
from pydantic import ValidationError

from payments.gateway.port import PaymentGateway
from payments.payment.payment import PaymentMethod, PaymentResult, ProcessPaymentRequest
from shared.http import ServiceClient, ServiceError

logger = structlog.get_logger(__name__)


class HttpPaymentGateway(ServiceClient, PaymentGateway):
    service_name = "payment-service"

    def process_payment(
        self,
        order_id: int | str,
        amount: Decimal,
        payment_method: PaymentMethod,
        payment_details: str | None,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        try:
            payload = ProcessPaymentRequest(
                order_id=order_id,
                amount=amount,
                payment_method=payment_method,
                payment_details=payment_details,
            ).to_json()
        except ValidationError as exc:
            logger.warning("Payment request rejected before sending", order_id=order_id, amount=str(amount))
            raise ServiceError(self.service_name, "Payment request is invalid; nothing was charged") from exc
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None

        body = self.request("POST", "/api/payments/process", json=payload, headers=headers)
        if not isinstance(body, dict) or not body.get("status"):
            raise ServiceError(self.service_name, "Payment service returned no payment status")
        return self.parse(PaymentResult, body)
