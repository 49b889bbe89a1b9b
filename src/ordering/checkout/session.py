"""Checkout session: the state machine for one checkout attempt.

Phases::

    IDLE → SUBMITTING → ORDER_CREATED → PAYMENT_PROCESSING → CONFIRMING → SUCCEEDED
      │         │                              │                  │
      │         └──────────────────────────────┴──────────────────┴──→ FAILED
      └──→ CANCELLED

State only changes by applying an event; the transition table below is
the complete list of legal moves. SUCCEEDED, FAILED and CANCELLED are
terminal: a new attempt needs a new session.
"""

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

import structlog

from ordering.checkout.errors import (
    CheckoutError,
    ConfirmationError,
    InvalidTransitionError,
    OrderCreationError,
    PaymentError,
)
from ordering.checkout.events import (
    CheckoutCancelled,
    CheckoutEvent,
    ConfirmationFailed,
    OrderCreated,
    OrderCreationFailed,
    PaymentCompleted,
    PaymentConfirmed,
    PaymentDeclined,
    PaymentStarted,
    SubmissionStarted,
)

logger = structlog.get_logger(__name__)


class CheckoutPhase(Enum):
    IDLE = "Idle"
    SUBMITTING = "Submitting"
    ORDER_CREATED = "OrderCreated"
    PAYMENT_PROCESSING = "PaymentProcessing"
    CONFIRMING = "Confirming"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


TERMINAL_PHASES = frozenset({CheckoutPhase.SUCCEEDED, CheckoutPhase.FAILED, CheckoutPhase.CANCELLED})


@dataclass
class CheckoutSession:
    phase: CheckoutPhase = CheckoutPhase.IDLE
    order_id: int | str | None = None
    payment_id: int | str | None = None
    error: CheckoutError | None = None
    idempotency_key: str = field(default_factory=lambda: uuid4().hex)
    history: list[CheckoutEvent] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def succeeded(self) -> bool:
        return self.phase == CheckoutPhase.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.phase == CheckoutPhase.FAILED

    def apply(self, event: CheckoutEvent) -> CheckoutPhase:
        """Advance the session with ``event``; illegal events raise InvalidTransitionError."""
        handler = _TRANSITIONS.get((self.phase, type(event)))
        if handler is None:
            raise InvalidTransitionError(self.phase, event)

        previous = self.phase
        handler(self, event)
        self.history.append(event)
        logger.debug(
            "Checkout transition",
            event_type=type(event).__name__,
            from_phase=previous.value,
            to_phase=self.phase.value,
            order_id=self.order_id,
        )
        return self.phase

    # -------------------------------------------------------------------
    # Transition handlers
    # -------------------------------------------------------------------
    def _on_submission_started(self, event: SubmissionStarted) -> None:
        self.phase = CheckoutPhase.SUBMITTING

    def _on_cancelled(self, event: CheckoutCancelled) -> None:
        self.phase = CheckoutPhase.CANCELLED

    def _on_order_created(self, event: OrderCreated) -> None:
        self.order_id = event.order_id
        self.phase = CheckoutPhase.ORDER_CREATED

    def _on_order_creation_failed(self, event: OrderCreationFailed) -> None:
        self.error = OrderCreationError(upstream_message=event.reason)
        self.phase = CheckoutPhase.FAILED

    def _on_payment_started(self, event: PaymentStarted) -> None:
        self.phase = CheckoutPhase.PAYMENT_PROCESSING

    def _on_payment_completed(self, event: PaymentCompleted) -> None:
        self.payment_id = event.payment_id
        self.phase = CheckoutPhase.CONFIRMING

    def _on_payment_declined(self, event: PaymentDeclined) -> None:
        self.payment_id = event.payment_id
        upstream = event.reason or (f"payment status {event.status}" if event.status else None)
        self.error = PaymentError(upstream_message=upstream, order_id=self.order_id, payment_id=event.payment_id)
        self.phase = CheckoutPhase.FAILED

    def _on_payment_confirmed(self, event: PaymentConfirmed) -> None:
        self.phase = CheckoutPhase.SUCCEEDED

    def _on_confirmation_failed(self, event: ConfirmationFailed) -> None:
        self.error = ConfirmationError(
            upstream_message=event.reason,
            order_id=self.order_id,
            payment_id=self.payment_id,
        )
        self.phase = CheckoutPhase.FAILED


_TRANSITIONS = {
    (CheckoutPhase.IDLE, SubmissionStarted): CheckoutSession._on_submission_started,
    (CheckoutPhase.IDLE, CheckoutCancelled): CheckoutSession._on_cancelled,
    (CheckoutPhase.SUBMITTING, OrderCreated): CheckoutSession._on_order_created,
    (CheckoutPhase.SUBMITTING, OrderCreationFailed): CheckoutSession._on_order_creation_failed,
    (CheckoutPhase.ORDER_CREATED, PaymentStarted): CheckoutSession._on_payment_started,
    (CheckoutPhase.ORDER_CREATED, PaymentDeclined): CheckoutSession._on_payment_declined,
    (CheckoutPhase.PAYMENT_PROCESSING, PaymentCompleted): CheckoutSession._on_payment_completed,
    (CheckoutPhase.PAYMENT_PROCESSING, PaymentDeclined): CheckoutSession._on_payment_declined,
    (CheckoutPhase.CONFIRMING, PaymentConfirmed): CheckoutSession._on_payment_confirmed,
    (CheckoutPhase.CONFIRMING, ConfirmationFailed): CheckoutSession._on_confirmation_failed,
}
