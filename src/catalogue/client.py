"""Product service client: read-only source of items for the cart."""

from decimal import Decimal

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.http import ServiceClient
from shared.schemas import WireDecimal, WireModel


class Product(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int | str
    name: str
    description: str | None = None
    price: WireDecimal = Field(gt=Decimal("0"))
    category: str | None = None
    stock_quantity: int | None = None
    image_url: str | None = None
    available: bool = True


class CatalogueClient(ServiceClient):
    service_name = "product-service"

    def list_products(self) -> list[Product]:
        body = self.request("GET", "/api/products") or []
        return [self.parse(Product, item) for item in body]

    def get_product(self, product_id: int | str) -> Product:
        return self.parse(Product, self.request("GET", f"/api/products/{product_id}"))
