"""
models.py — Data Models for Checkout Processing

This module defines the value objects passed between the checkout orchestrator and
its collaborators, plus the request/response payloads of the HTTP layer.
It uses Pydantic models to ensure type safety and automatic validation of incoming data.

Models:
    - Product: Immutable catalogue entry with a unit price in cents.
    - CartItem: Read-only snapshot of one line item (product + quantity).
    - PaymentResult: Outcome of a charge attempt.
    - CheckoutResponse: Total and transaction id of a completed checkout.
    - CheckoutItem / CheckoutPayload / CheckoutResult: HTTP wire models.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Product(BaseModel):
    """
    Represents a product that can be put into a cart.

    Attributes:
        id (str): Unique product identifier.
        name (str): Display name.
        price_cents (int): Unit price in minor currency units (serialized as 'priceCents').
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    price_cents: int = Field(..., ge=0, alias="priceCents")


class CartItem(BaseModel):
    """
    A single line item of a cart. Instances are snapshots; the cart never hands out
    the objects it stores internally in a mutable form.
    """
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(..., gt=0)

    @property
    def line_total_cents(self) -> int:
        return self.product.price_cents * self.quantity


class PaymentResult(BaseModel):
    """
    Outcome of a charge attempt. `transaction_id` is present iff the charge
    succeeded, `error_message` iff it failed.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    transaction_id: Optional[str] = None
    error_message: Optional[str] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "PaymentResult":
        if self.success and (not self.transaction_id or self.error_message is not None):
            raise ValueError("successful payment requires a transaction_id and no error_message")
        if not self.success and (not self.error_message or self.transaction_id is not None):
            raise ValueError("failed payment requires an error_message and no transaction_id")
        return self

    @classmethod
    def succeeded(cls, transaction_id: str) -> "PaymentResult":
        return cls(success=True, transaction_id=transaction_id)

    @classmethod
    def failed(cls, error_message: str) -> "PaymentResult":
        return cls(success=False, error_message=error_message)


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_cents: int = Field(..., ge=0)
    transaction_id: str


# --- HTTP wire models ---

class CheckoutItem(BaseModel):
    """
    One requested line item in the checkout payload.

    Attributes:
        productId (str): Catalogue id of the product.
        quantity (int): Requested quantity. Validated by the cart, not here.
    """
    productId: str
    quantity: int


class CheckoutPayload(BaseModel):
    """
    Checkout request body as sent by the storefront.

    Attributes:
        items (List[CheckoutItem]): Requested line items.
        email (str): Customer email for the confirmation.
        token (str): Payment method token.
    """
    items: List[CheckoutItem]
    email: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)


class CheckoutResult(BaseModel):
    ok: bool = True
    totalCents: int
    transactionId: str

    @classmethod
    def from_response(cls, response: CheckoutResponse) -> "CheckoutResult":
        return cls(totalCents=response.total_cents, transactionId=response.transaction_id)
