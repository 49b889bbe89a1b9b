"""A single cart line."""

from dataclasses import dataclass, replace
from decimal import Decimal


@dataclass(frozen=True)
class CartLine:
    product_id: int | str
    name: str
    unit_price: Decimal
    quantity: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.unit_price, Decimal):
            object.__setattr__(self, "unit_price", Decimal(str(self.unit_price)))
        if self.unit_price <= 0:
            raise ValueError(f"unit_price must be positive, got {self.unit_price}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity}")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)
