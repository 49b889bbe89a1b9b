"""Order History Query: a customer's past orders, read straight from the order service.

One read per call, no caching. A failed load is reported as a ``FAILED``
result carrying a ``LoadError``; calling again is the retry.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import structlog

from ordering.order.port import OrderService
from ordering.order.schemas import Order
from shared.http import ServiceError

logger = structlog.get_logger(__name__)


class LoadError(Exception):
    retry_safe = True

    def __init__(self, message: str = "Failed to load orders. Please try again.", upstream_message: str | None = None):
        self.message = message
        self.upstream_message = upstream_message
        super().__init__(message)


class HistoryState(Enum):
    LOADED = "Loaded"
    FAILED = "Failed"


@dataclass(frozen=True)
class OrderHistoryResult:
    customer_email: str
    state: HistoryState
    orders: list[Order] = field(default_factory=list)
    error: LoadError | None = None

    @property
    def loaded(self) -> bool:
        return self.state == HistoryState.LOADED

    @property
    def is_empty(self) -> bool:
        return self.loaded and not self.orders


def _created_key(order: Order) -> float:
    return order.created_at.timestamp() if isinstance(order.created_at, datetime) else float("-inf")


class OrderHistoryQuery:
    def __init__(self, order_service: OrderService) -> None:
        self.order_service = order_service

    def fetch_orders_for(self, customer_email: str) -> OrderHistoryResult:
        email = (customer_email or "").strip()
        if not email:
            return OrderHistoryResult(
                customer_email="",
                state=HistoryState.FAILED,
                error=LoadError("Please enter your email address"),
            )

        try:
            orders = self.order_service.orders_for_customer(email)
        except ServiceError as exc:
            logger.warning("Order history load failed", customer_email=email, error=exc.message)
            return OrderHistoryResult(
                customer_email=email,
                state=HistoryState.FAILED,
                error=LoadError(upstream_message=exc.message),
            )

        orders = sorted(orders, key=_created_key, reverse=True)
        logger.debug("Order history loaded", customer_email=email, order_count=len(orders))
        return OrderHistoryResult(customer_email=email, state=HistoryState.LOADED, orders=orders)
