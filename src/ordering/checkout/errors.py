"""Checkout failure taxonomy.

Each kind tells the caller two things: whether simply resubmitting the
cart is safe, and whether a person has to reconcile remote state.

==================  ==========  =======================
kind                retry safe  needs reconciliation
==================  ==========  =======================
EMPTY_CART          yes         no
ORDER_CREATION      yes         no
PAYMENT             no          no (unpaid order exists)
CONFIRMATION        no          yes (paid, not marked)
==================  ==========  =======================
"""

from enum import Enum


class ErrorKind(Enum):
    EMPTY_CART = "EmptyCartError"
    ORDER_CREATION = "OrderCreationError"
    PAYMENT = "PaymentError"
    CONFIRMATION = "ConfirmationError"


class CheckoutError(Exception):
    kind: ErrorKind
    default_message = "Checkout failed"
    retry_safe = False
    requires_reconciliation = False

    def __init__(
        self,
        message: str | None = None,
        upstream_message: str | None = None,
        order_id: int | str | None = None,
        payment_id: int | str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.upstream_message = upstream_message
        self.order_id = order_id
        self.payment_id = payment_id
        super().__init__(self.message)

    def user_message(self) -> str:
        """Text suitable for showing to the shopper."""
        if self.upstream_message:
            return f"{self.message}: {self.upstream_message}"
        return self.message

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "upstream_message": self.upstream_message,
            "order_id": self.order_id,
            "payment_id": self.payment_id,
            "retry_safe": self.retry_safe,
            "requires_reconciliation": self.requires_reconciliation,
        }


class EmptyCartError(CheckoutError):
    kind = ErrorKind.EMPTY_CART
    default_message = "Your cart is empty"
    retry_safe = True


class OrderCreationError(CheckoutError):
    kind = ErrorKind.ORDER_CREATION
    default_message = "Failed to place order. Please try again."
    retry_safe = True


class PaymentError(CheckoutError):
    """Payment did not complete; the order already exists unpaid."""

    kind = ErrorKind.PAYMENT
    default_message = "Payment processing failed"


class ConfirmationError(CheckoutError):
    """Payment completed but the order was not marked paid."""

    kind = ErrorKind.CONFIRMATION
    default_message = "Payment was taken but the order could not be confirmed. Please contact support."
    requires_reconciliation = True


class CheckoutStateError(Exception):
    """A session was used in a phase that does not allow the operation."""


class InvalidTransitionError(CheckoutStateError):
    def __init__(self, phase, event) -> None:
        self.phase = phase
        self.event = event
        super().__init__(f"{type(event).__name__} is not valid in phase {phase.value}")
