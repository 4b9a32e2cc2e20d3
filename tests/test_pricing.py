from decimal import Decimal

import pytest

from checkout_service.models import CartItem, Product
from checkout_service.pricing import LoyaltyPricing, StandardPricing, round_cents, subtotal_cents


def _items(*pairs):
    return [CartItem(product=Product(id=f"p{n}", name=f"Product {n}", price_cents=price), quantity=qty)
            for n, (price, qty) in enumerate(pairs)]


def test_subtotal_sums_price_times_quantity():
    assert subtotal_cents(_items((1499, 2), (999, 1))) == 3997


def test_round_cents_rounds_half_up():
    assert round_cents(Decimal("4594.5")) == 4595
    assert round_cents(Decimal("4594.4999")) == 4594
    assert round_cents(Decimal("2.5")) == 3


@pytest.mark.parametrize("strategy", [StandardPricing(), LoyaltyPricing()])
def test_empty_items_cost_nothing(strategy):
    assert strategy.calculate_total_cents([]) == 0


class TestStandardPricing:

    def test_discount_applies_at_threshold(self, cart):
        pricing = StandardPricing(tax_rate=0.21, discount_threshold_cents=2000, discount_rate=0.05)
        # (3997 - 199.85) * 1.21 = 4594.5515
        assert pricing.calculate_total_cents(cart.get_items()) == 4595

    def test_no_discount_below_threshold(self):
        pricing = StandardPricing(tax_rate=0.21, discount_threshold_cents=5000, discount_rate=0.05)
        # 3997 * 1.21 = 4836.37
        assert pricing.calculate_total_cents(_items((1499, 2), (999, 1))) == 4836

    def test_subtotal_equal_to_threshold_is_discounted(self):
        pricing = StandardPricing(tax_rate=0.0, discount_threshold_cents=1000, discount_rate=0.10)
        assert pricing.calculate_total_cents(_items((1000, 1))) == 900

    def test_is_pure(self, cart):
        pricing = StandardPricing(0.21, 2000, 0.05)
        items = cart.get_items()
        assert pricing.calculate_total_cents(items) == pricing.calculate_total_cents(items)
        assert items == cart.get_items()


class TestLoyaltyPricing:

    def test_member_discount_and_reduced_tax(self, cart):
        # (3997 - 399.7) * 1.168 = 4201.6464
        assert LoyaltyPricing(base_tax_rate=0.21).calculate_total_cents(cart.get_items()) == 4202

    def test_without_tax_only_discount_applies(self):
        assert LoyaltyPricing(base_tax_rate=0.0).calculate_total_cents(_items((1000, 3))) == 2700
