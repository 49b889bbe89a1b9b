"""Checkout form input: who is buying, where it ships, how they pay."""

from pydantic import BaseModel, Field, field_validator

from payments.payment.payment import PaymentMethod


class CustomerInfo(BaseModel):
    email: str = Field(min_length=3)
    name: str = Field(min_length=1)
    shipping_address: str = Field(min_length=1)

    @field_validator("email", "name", "shipping_address")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class PaymentChoice(BaseModel):
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    details: str | None = None
