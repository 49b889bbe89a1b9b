"""In-memory order service for development and testing.

Keeps orders in a dict, records every call, and can be told to fail any
operation the way the real service would (a ``ServiceError`` with or
without an upstream status).
"""

from datetime import UTC, datetime

from ordering.order.port import OrderService
from ordering.order.schemas import CheckoutRequest, Order, OrderItem, OrderStatus
from shared.http import ServiceError


class FakeOrderService(OrderService):
    service_name = "order-service"

    def __init__(self, next_id: int = 1) -> None:
        self.next_id = next_id
        self.orders: dict[int | str, Order] = {}
        self.calls: list[dict] = []
        self.failures: dict[str, ServiceError] = {}

    def fail(self, operation: str, message: str = "Service unavailable", status_code: int | None = None) -> None:
        """Make ``operation`` ("create_order", "attach_payment", "orders_for_customer") fail."""
        self.failures[operation] = ServiceError(self.service_name, message, status_code=status_code)

    def succeed(self, operation: str | None = None) -> None:
        if operation is None:
            self.failures.clear()
        else:
            self.failures.pop(operation, None)

    def calls_to(self, operation: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == operation]

    def _check(self, operation: str) -> None:
        if operation in self.failures:
            raise self.failures[operation]

    def create_order(self, request: CheckoutRequest, idempotency_key: str | None = None) -> Order:
        self.calls.append({"method": "create_order", "request": request, "idempotency_key": idempotency_key})
        self._check("create_order")

        order_id = self.next_id
        self.next_id += 1
        order = Order(
            id=order_id,
            status=OrderStatus.PENDING,
            total_amount=sum((line.price * line.quantity for line in request.items), start=0),
            customer_email=request.customer_email,
            customer_name=request.customer_name,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            items=[
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity,
                    price=line.price,
                )
                for line in request.items
            ],
            created_at=datetime.now(UTC),
        )
        self.orders[order_id] = order
        return order

    def attach_payment(self, order_id: int | str, payment_id: int | str) -> Order | None:
        self.calls.append({"method": "attach_payment", "order_id": order_id, "payment_id": payment_id})
        self._check("attach_payment")

        order = self.orders.get(order_id)
        if order is None:
            raise ServiceError(self.service_name, f"Order not found: {order_id}", status_code=404)
        paid = order.model_copy(
            update={"payment_id": payment_id, "status": OrderStatus.PAID, "updated_at": datetime.now(UTC)}
        )
        self.orders[order_id] = paid
        return paid

    def orders_for_customer(self, customer_email: str) -> list[Order]:
        self.calls.append({"method": "orders_for_customer", "customer_email": customer_email})
        self._check("orders_for_customer")
        return [order for order in self.orders.values() if order.customer_email == customer_email]
