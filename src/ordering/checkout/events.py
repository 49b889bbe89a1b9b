"""Events fed into a checkout session.

Every remote call's outcome becomes one of these and is applied to the
``CheckoutSession``; the session never inspects service responses itself.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class CheckoutEvent:
    occurred_at: datetime = field(default_factory=_now, kw_only=True)


@dataclass(frozen=True)
class SubmissionStarted(CheckoutEvent):
    grand_total: Decimal
    item_count: int


@dataclass(frozen=True)
class OrderCreated(CheckoutEvent):
    order_id: int | str


@dataclass(frozen=True)
class OrderCreationFailed(CheckoutEvent):
    reason: str | None = None
    status_code: int | None = None


@dataclass(frozen=True)
class PaymentStarted(CheckoutEvent):
    amount: Decimal


@dataclass(frozen=True)
class PaymentCompleted(CheckoutEvent):
    payment_id: int | str


@dataclass(frozen=True)
class PaymentDeclined(CheckoutEvent):
    """The payment service answered with a non-COMPLETED status, or not at all."""

    status: str | None = None
    payment_id: int | str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class PaymentConfirmed(CheckoutEvent):
    pass


@dataclass(frozen=True)
class ConfirmationFailed(CheckoutEvent):
    reason: str | None = None


@dataclass(frozen=True)
class CheckoutCancelled(CheckoutEvent):
    pass
