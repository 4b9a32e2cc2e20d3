"""
ports.py — Capability Interfaces of the Checkout Orchestrator

The orchestrator depends only on these abstractions. Concrete variants (pricing
algorithms, in-memory or HTTP payment, in-memory inventory, log or queue
notifications) implement them and are selected by constructor injection.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from .models import CartItem, PaymentResult


class PricingStrategy(ABC):
    """Pure, deterministic price calculation. Must return 0 for no items."""

    @abstractmethod
    def calculate_total_cents(self, items: Sequence[CartItem]) -> int:
        ...


class PaymentProcessor(ABC):

    @abstractmethod
    async def pay(self, amount_cents: int, payment_method_token: str) -> PaymentResult:
        """
        Attempts to charge `amount_cents` against the payment method.

        Ordinary declines are reported through the returned `PaymentResult`,
        never by raising.
        """


class InventoryService(ABC):

    @abstractmethod
    async def is_in_stock(self, product_id: str, quantity: int) -> bool:
        ...

    @abstractmethod
    async def reserve(self, product_id: str, quantity: int) -> None:
        """
        Decrements the stock of `product_id` by `quantity`.

        Raises:
            InsufficientStockError: If fewer than `quantity` units are available
                at reservation time.
        """


class NotificationService(ABC):

    @abstractmethod
    async def send(self, recipient: str, message: str) -> None:
        """
        Delivers `message` to `recipient`.

        Raises:
            NotificationError: If the message could not be delivered.
        """
