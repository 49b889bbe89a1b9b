"""Order service port (abstract interface).

The checkout orchestrator and the history query program against this
port; ``HttpOrderService`` talks to the real service and
``FakeOrderService`` stands in for it in tests and offline runs.
Implementations raise ``shared.http.ServiceError`` on any failure.
"""

from abc import ABC, abstractmethod

from ordering.order.schemas import CheckoutRequest, Order


class OrderService(ABC):
    @abstractmethod
    def create_order(self, request: CheckoutRequest, idempotency_key: str | None = None) -> Order:
        """Create an order from a checkout request. Returns at least the new order id."""
        ...

    @abstractmethod
    def attach_payment(self, order_id: int | str, payment_id: int | str) -> Order | None:
        """Record a completed payment against an existing order."""
        ...

    @abstractmethod
    def orders_for_customer(self, customer_email: str) -> list[Order]:
        """All orders placed with ``customer_email``. An empty list is a valid answer."""
        ...
