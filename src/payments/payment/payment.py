"""Payment service contract: methods, statuses, request and result shapes.

Only ``COMPLETED`` counts as a successful charge; ``PENDING`` and every
other status are treated as not paid.
"""

from decimal import Decimal
from enum import Enum

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.schemas import WireDecimal, WireModel


class PaymentMethod(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    CANCELLED = "CANCELLED"


class ProcessPaymentRequest(WireModel):
    order_id: int | str
    amount: WireDecimal = Field(ge=Decimal("0.01"))
    payment_method: PaymentMethod
    payment_details: str | None = None


class PaymentResult(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int | str | None = None
    order_id: int | str | None = None
    status: str
    amount: WireDecimal | None = None
    transaction_id: str | None = None
    card_last_four_digits: str | None = None

    @property
    def completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED.value
