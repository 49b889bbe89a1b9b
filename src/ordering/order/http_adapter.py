"""HTTP adapter for the order service."""

from urllib.parse import quote

from ordering.order.port import OrderService
from ordering.order.schemas import AttachPaymentRequest, CheckoutRequest, Order
from shared.http import ServiceClient, ServiceError


class HttpOrderService(ServiceClient, OrderService):
    service_name = "order-service"

    def create_order(self, request: CheckoutRequest, idempotency_key: str | None = None) -> Order:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        body = self.request("POST", "/api/orders", json=request.to_order_payload(), headers=headers)
        if not isinstance(body, dict) or body.get("id") is None:
            raise ServiceError(self.service_name, "Order service did not return an order id")
        return self.parse(Order, body)

    def attach_payment(self, order_id: int | str, payment_id: int | str) -> Order | None:
        body = self.request(
            "PUT",
            f"/api/orders/{order_id}/payment",
            json=AttachPaymentRequest(payment_id=payment_id).to_json(),
        )
        return self.parse(Order, body) if isinstance(body, dict) and "id" in body else None

    def orders_for_customer(self, customer_email: str) -> list[Order]:
        body = self.request("GET", f"/api/orders/customer/{quote(customer_email, safe='@')}")
        if body is None:
            return []
        if not isinstance(body, list):
            raise ServiceError(self.service_name, "Expected a list of orders")
        return [self.parse(Order, item) for item in body]
