"""Payment gateway port (abstract interface).

Defines the contract every payment service adapter implements, so the
checkout orchestrator can run against ``HttpPaymentGateway`` in production
and ``FakeGateway`` in tests without changing any calling code.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from payments.payment.payment import PaymentMethod, PaymentResult


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def process_payment(
        self,
        order_id: int | str,
        amount: Decimal,
        payment_method: PaymentMethod,
        payment_details: str | None,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        """Charge ``amount`` for ``order_id``.

        Returns the payment as recorded by the service, whatever its status.
        Raises ``shared.http.ServiceError`` when no usable answer came back.
        """
        ...
