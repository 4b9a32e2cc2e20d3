"""
pricing.py — Pricing Strategies

Interchangeable implementations of `PricingStrategy`. All arithmetic is done in
`Decimal` at full precision; only the final cents value is rounded (half-up).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .models import CartItem
from .ports import PricingStrategy

LOYALTY_DISCOUNT_RATE = Decimal("0.10")
LOYALTY_TAX_FACTOR = Decimal("0.8")


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def subtotal_cents(items: Sequence[CartItem]) -> int:
    return sum(item.product.price_cents * item.quantity for item in items)


def round_cents(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StandardPricing(PricingStrategy):
    """
    Subtotal, minus a percentage discount once the subtotal reaches a threshold,
    plus tax.

    Args:
        tax_rate (float): Tax as a fraction, e.g. 0.21.
        discount_threshold_cents (int): Minimum subtotal for the discount to apply.
        discount_rate (float): Discount as a fraction of the subtotal.
    """

    def __init__(self, tax_rate: float = 0.21, discount_threshold_cents: int = 5000,
                 discount_rate: float = 0.05):
        self.tax_rate = _to_decimal(tax_rate)
        self.discount_threshold_cents = discount_threshold_cents
        self.discount_rate = _to_decimal(discount_rate)

    def calculate_total_cents(self, items: Sequence[CartItem]) -> int:
        subtotal = Decimal(subtotal_cents(items))
        if subtotal >= self.discount_threshold_cents:
            discount = subtotal * self.discount_rate
        else:
            discount = Decimal(0)
        return round_cents((subtotal - discount) * (1 + self.tax_rate))


class LoyaltyPricing(PricingStrategy):
    """Flat 10% member discount and 20% off the tax rate."""

    def __init__(self, base_tax_rate: float = 0.21):
        self.base_tax_rate = _to_decimal(base_tax_rate)

    def calculate_total_cents(self, items: Sequence[CartItem]) -> int:
        subtotal = Decimal(subtotal_cents(items))
        discount = subtotal * LOYALTY_DISCOUNT_RATE
        effective_tax_rate = self.base_tax_rate * LOYALTY_TAX_FACTOR
        return round_cents((subtotal - discount) * (1 + effective_tax_rate))
