"""Pydantic wire schemas for the order service.

These are the external contracts (camelCase JSON), kept separate from the
cart and checkout types used inside the storefront.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from shared.schemas import WireDecimal, WireModel


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAYMENT_PROCESSING = "PAYMENT_PROCESSING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class OrderLineRequest(WireModel):
    product_id: int | str
    product_name: str
    quantity: int = Field(ge=1)
    price: WireDecimal = Field(gt=0)


class CheckoutRequest(WireModel):
    customer_email: str = Field(min_length=3)
    customer_name: str = Field(min_length=1)
    shipping_address: str = Field(min_length=1)
    payment_method: str
    payment_details: str | None = None
    items: list[OrderLineRequest] = Field(min_length=1)

    def to_order_payload(self) -> dict:
        """Body for ``POST /api/orders``; payment details go to the payment service only."""
        return self.to_json(exclude={"payment_details"})


class AttachPaymentRequest(WireModel):
    payment_id: int | str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class OrderItem(WireModel):
    product_id: int | str | None = None
    product_name: str | None = None
    quantity: int = 0
    price: WireDecimal | None = None


class Order(WireModel):
    id: int | str
    # Statuses this client doesn't know yet are kept as plain strings
    status: OrderStatus | str | None = Field(default=None, union_mode="left_to_right")
    total_amount: WireDecimal | None = None
    payment_id: int | str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    shipping_address: str | None = None
    payment_method: str | None = None
    items: list[OrderItem] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
