"""
demo.py — Command-line demonstration of the checkout workflow.

Runs one checkout with standard pricing and one with loyalty pricing against the
same in-memory collaborators, showing that the orchestrator is unchanged apart
from the injected pricing strategy.

Usage: python -m checkout_service.demo
"""

import asyncio
import sys
from typing import List

from .cart import Cart
from .catalog import DEMO_PRODUCTS
from .clients import FakePaymentProcessor, InMemoryInventory, LogNotification
from .errors import CheckoutError
from .logging_config import get_logger, setup_logging
from .models import CheckoutResponse
from .pricing import LoyaltyPricing, StandardPricing
from .workflow import CheckoutRequest, CheckoutService

log = get_logger(__name__)


async def run_demo() -> List[CheckoutResponse]:
    coffee, mug = DEMO_PRODUCTS[0], DEMO_PRODUCTS[1]
    inventory = InMemoryInventory({coffee.id: 10, mug.id: 5})
    notifier = LogNotification()
    payment = FakePaymentProcessor()

    cart = Cart()
    cart.add_item(coffee, 2)
    cart.add_item(mug, 1)
    standard = CheckoutService(StandardPricing(0.21, 2000, 0.05), payment, inventory, notifier)
    first = await standard.checkout(
        CheckoutRequest(cart=cart, customer_email="user@example.com", payment_method_token="tok_visa")
    )
    log.info(f"Checkout with StandardPricing: {first.model_dump()}")

    loyalty_cart = Cart()
    loyalty_cart.add_item(coffee, 1)
    loyalty_cart.add_item(mug, 2)
    loyalty = CheckoutService(LoyaltyPricing(0.21), payment, inventory, notifier)
    second = await loyalty.checkout(
        CheckoutRequest(cart=loyalty_cart, customer_email="vip@example.com", payment_method_token="tok_master")
    )
    log.info(f"Checkout with LoyaltyPricing: {second.model_dump()}")

    return [first, second]


def main():
    setup_logging()
    try:
        asyncio.run(run_demo())
    except CheckoutError as e:
        log.error(f"Demo checkout failed ({e.kind}): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
