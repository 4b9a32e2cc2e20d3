"""Shared fixtures: demo products, carts and recording collaborators."""

from typing import List, Tuple

import pytest

from checkout_service.cart import Cart
from checkout_service.clients import FakePaymentProcessor, InMemoryInventory, LogNotification
from checkout_service.models import PaymentResult, Product


class RecordingInventory(InMemoryInventory):
    """In-memory inventory that remembers every call made to it."""

    def __init__(self, stock=None):
        super().__init__(stock)
        self.stock_checks: List[Tuple[str, int]] = []
        self.reservations: List[Tuple[str, int]] = []

    async def is_in_stock(self, product_id, quantity):
        self.stock_checks.append((product_id, quantity))
        return await super().is_in_stock(product_id, quantity)

    async def reserve(self, product_id, quantity):
        self.reservations.append((product_id, quantity))
        await super().reserve(product_id, quantity)


class RecordingPayment(FakePaymentProcessor):

    def __init__(self, should_fail=False, delay=0):
        super().__init__(should_fail=should_fail, delay=delay)
        self.charges: List[Tuple[int, str]] = []

    async def pay(self, amount_cents, payment_method_token) -> PaymentResult:
        self.charges.append((amount_cents, payment_method_token))
        return await super().pay(amount_cents, payment_method_token)


class RecordingNotification(LogNotification):

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def send(self, recipient, message):
        self.sent.append((recipient, message))
        await super().send(recipient, message)


@pytest.fixture
def coffee() -> Product:
    return Product(id="p1", name="Coffee beans 1kg", price_cents=1499)


@pytest.fixture
def mug() -> Product:
    return Product(id="p2", name="Ceramic mug", price_cents=999)


@pytest.fixture
def cart(coffee, mug) -> Cart:
    """2x coffee + 1x mug, subtotal 3997 cents."""
    cart = Cart()
    cart.add_item(coffee, 2)
    cart.add_item(mug, 1)
    return cart


@pytest.fixture
def inventory() -> RecordingInventory:
    return RecordingInventory({"p1": 10, "p2": 5})


@pytest.fixture
def payment() -> RecordingPayment:
    return RecordingPayment()


@pytest.fixture
def notifier() -> RecordingNotification:
    return RecordingNotification()


@pytest.fixture
def make_inventory():
    return RecordingInventory


@pytest.fixture
def make_payment():
    return RecordingPayment
