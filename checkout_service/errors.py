"""
errors.py — Error Taxonomy for Checkout Processing

Every failure of a checkout attempt is reported as a subclass of `CheckoutError`.
Each error carries a machine-readable `kind`, a human-readable message and, once it
has passed through the orchestrator, the workflow state in which it occurred.

Kinds:
    • EmptyCart          — cart has no line items
    • OutOfStock         — stock check failed before charging
    • PaymentFailed      — payment processor reported a failure
    • InsufficientStock  — reservation failed (after the charge)
    • InvalidArgument    — malformed input to a cart or ledger mutation
    • NotificationFailed — confirmation could not be delivered
    • Timeout            — a collaborator call exceeded the step timeout
"""

from typing import Optional


class CheckoutError(Exception):
    """Base class for all checkout failures."""

    kind = "CheckoutError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        # Set by the orchestrator to the state the checkout failed in
        self.state: Optional[str] = None

    def __str__(self):
        return self.message


class EmptyCartError(CheckoutError):
    kind = "EmptyCart"

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class OutOfStockError(CheckoutError):
    kind = "OutOfStock"

    def __init__(self, product_name: str):
        super().__init__(f"Out of stock: {product_name}")
        self.product_name = product_name


class PaymentFailedError(CheckoutError):
    kind = "PaymentFailed"

    def __init__(self, error_message: Optional[str] = None):
        super().__init__(error_message or "Payment failed")


class InsufficientStockError(CheckoutError):
    """
    Raised by a reservation when the ledger holds fewer units than requested.

    Attributes:
        product_id (str): The product whose reservation failed.
        requested (int): Units requested.
        available (int): Units in the ledger at reservation time.
    """
    kind = "InsufficientStock"

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_id}: requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidArgumentError(CheckoutError, ValueError):
    kind = "InvalidArgument"


class NotificationError(CheckoutError):
    kind = "NotificationFailed"


class CheckoutTimeoutError(CheckoutError):
    kind = "Timeout"

    def __init__(self, step: str, timeout: float):
        super().__init__(f"Step '{step}' timed out after {timeout}s")
        self.step = step
        self.timeout = timeout
