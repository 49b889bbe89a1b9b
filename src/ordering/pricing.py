"""Pricing Engine: subtotal, tax, shipping and grand total for a cart amount.

Pure functions over ``Decimal``. Nothing is rounded internally; use
``to_cents`` (or ``PricingBreakdown.rounded``) only for display and for the
amount actually charged.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def _decimal(amount) -> Decimal:
    # Floats go through str() so 0.1 stays 0.1
    return amount if isinstance(amount, Decimal) else Decimal(str(amount))


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: Decimal = Decimal("0.10")
    free_shipping_threshold: Decimal = Decimal("100")
    flat_shipping_fee: Decimal = Decimal("10")

    @classmethod
    def from_settings(cls, settings) -> "PricingPolicy":
        return cls(
            tax_rate=Decimal(str(settings.tax_rate)),
            free_shipping_threshold=Decimal(str(settings.free_shipping_threshold)),
            flat_shipping_fee=Decimal(str(settings.flat_shipping_fee)),
        )


DEFAULT_POLICY = PricingPolicy()


@dataclass(frozen=True)
class PricingBreakdown:
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    total: Decimal

    @property
    def free_shipping(self) -> bool:
        return self.shipping_amount == 0

    def rounded(self) -> "PricingBreakdown":
        return PricingBreakdown(
            subtotal=to_cents(self.subtotal),
            tax_amount=to_cents(self.tax_amount),
            shipping_amount=to_cents(self.shipping_amount),
            total=to_cents(self.total),
        )


def to_cents(amount: Decimal) -> Decimal:
    return _decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def tax(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    return _decimal(amount) * policy.tax_rate


def shipping(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    """Free strictly above the threshold, flat fee otherwise."""
    if _decimal(amount) > policy.free_shipping_threshold:
        return Decimal("0")
    return policy.flat_shipping_fee


def grand_total(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    amount = _decimal(amount)
    return amount + tax(amount, policy) + shipping(amount, policy)


def price(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> PricingBreakdown:
    amount = _decimal(amount)
    return PricingBreakdown(
        subtotal=amount,
        tax_amount=tax(amount, policy),
        shipping_amount=shipping(amount, policy),
        total=grand_total(amount, policy),
    )


def price_cart(cart, policy: PricingPolicy = DEFAULT_POLICY) -> PricingBreakdown:
    """Breakdown for anything exposing ``total_amount()`` (a ``CartStore``)."""
    return price(cart.total_amount(), policy)
