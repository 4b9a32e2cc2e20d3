"""
workflow.py — Core Orchestration Logic for Checkout Processing

This module contains the checkout orchestrator. It coordinates the injected
collaborators (Pricing, Payment, Inventory, Notification) in a fixed sequence.

Workflow Overview:
1. Validate that the cart is not empty
2. Check stock for every line item (Inventory)
3. Compute the total (Pricing)
4. Charge the payment method (Payment)
5. Reserve stock for every line item (Inventory)
6. Send the confirmation (Notification)

Stock is reserved only once money has moved. Between the stock check (2) and the
reservation (5) another checkout may take the last units; the reservation then
fails after a successful charge. That charge is not refunded here and must be
handled manually.
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import Awaitable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from .cart import Cart
from .errors import CheckoutError, CheckoutTimeoutError, EmptyCartError, OutOfStockError, PaymentFailedError
from .models import CheckoutResponse
from .ports import InventoryService, NotificationService, PaymentProcessor, PricingStrategy

log = logging.getLogger(__name__)

T = TypeVar("T")


class CheckoutState(str, Enum):
    VALIDATING = "Validating"
    STOCK_CHECKING = "StockChecking"
    PRICING = "Pricing"
    CHARGING = "Charging"
    RESERVING = "Reserving"
    NOTIFYING = "Notifying"
    COMPLETED = "Completed"
    FAILED = "Failed"


class CheckoutRequest(BaseModel):
    """
    Input of one checkout attempt. Constructed by the caller and consumed once.

    Attributes:
        cart (Cart): The cart to check out.
        customer_email (str): Recipient of the confirmation.
        payment_method_token (str): Token passed to the payment processor as-is.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    cart: Cart
    customer_email: str
    payment_method_token: str


def format_amount(amount_cents: int, currency: str = "EUR") -> str:
    return f"{amount_cents / 100:.2f} {currency}"


class CheckoutService:
    """
    Runs one checkout end-to-end against the injected collaborators.

    Args:
        pricing (PricingStrategy): Computes the total charge.
        payment (PaymentProcessor): Charges the payment method.
        inventory (InventoryService): Checks and reserves stock.
        notifier (NotificationService): Delivers the confirmation.
        step_timeout (float): Optional upper bound in seconds for each collaborator call.
        currency (str): Currency code used in the confirmation message.
    """

    def __init__(self, pricing: PricingStrategy, payment: PaymentProcessor,
                 inventory: InventoryService, notifier: NotificationService,
                 step_timeout: Optional[float] = None, currency: str = "EUR"):
        self.pricing = pricing
        self.payment = payment
        self.inventory = inventory
        self.notifier = notifier
        self.step_timeout = step_timeout
        self.currency = currency

    async def _call(self, step: CheckoutState, awaitable: Awaitable[T]) -> T:
        if self.step_timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout=self.step_timeout)
        except asyncio.TimeoutError:
            raise CheckoutTimeoutError(step.value, self.step_timeout) from None

    async def checkout(self, request: CheckoutRequest) -> CheckoutResponse:
        """
        Executes the complete checkout workflow for a single request.

        Args:
            request (CheckoutRequest): Cart, customer email and payment token.

        Returns:
            CheckoutResponse: The charged total and the payment transaction id.

        Raises:
            EmptyCartError: The cart has no line items. No collaborator is called.
            OutOfStockError: A line item is not in stock. Nothing is charged.
            PaymentFailedError: The processor reported a failure. No stock is reserved.
            InsufficientStockError: A reservation failed after the charge. The charge is kept.
            NotificationError: The confirmation could not be sent. Charge and reservation are kept.
            CheckoutTimeoutError: A collaborator call exceeded `step_timeout`.
        """
        checkout_id = uuid.uuid4().hex[:12]
        log_prefix = f"[Checkout: {checkout_id}]"
        state = CheckoutState.VALIDATING
        transaction_id = None

        try:
            # --- 1. Validation ---
            items = request.cart.get_items()
            if not items:
                raise EmptyCartError()
            log.info(f"{log_prefix} Started for {request.customer_email} with {len(items)} line item(s).")

            # --- 2. Stock check ---
            state = CheckoutState.STOCK_CHECKING
            for item in items:
                in_stock = await self._call(state, self.inventory.is_in_stock(item.product.id, item.quantity))
                if not in_stock:
                    raise OutOfStockError(item.product.name)

            # --- 3. Pricing ---
            state = CheckoutState.PRICING
            total = self.pricing.calculate_total_cents(items)
            log.info(f"{log_prefix} Total computed: {total} cents.")

            # --- 4. Payment ---
            state = CheckoutState.CHARGING
            result = await self._call(state, self.payment.pay(total, request.payment_method_token))
            if not result.success or not result.transaction_id:
                raise PaymentFailedError(result.error_message)
            transaction_id = result.transaction_id
            log.info(f"{log_prefix} Payment succeeded. (TxID: {transaction_id})")

            # --- 5. Reservation (only after the charge) ---
            state = CheckoutState.RESERVING
            for item in items:
                await self._call(state, self.inventory.reserve(item.product.id, item.quantity))

            # --- 6. Confirmation ---
            state = CheckoutState.NOTIFYING
            message = (
                f"Thank you for your purchase. Total: {format_amount(total, self.currency)}. "
                f"Transaction: {transaction_id}"
            )
            await self._call(state, self.notifier.send(request.customer_email, message))

        except CheckoutError as e:
            e.state = state.value
            if transaction_id is not None:
                # Money has moved; no automatic refund exists
                log.critical(
                    f"{log_prefix} {state.value} failed after charge {transaction_id}: {e}. "
                    f"MANUAL ACTION REQUIRED."
                )
            else:
                log.warning(f"{log_prefix} {CheckoutState.FAILED.value} in {state.value}: {e.kind} - {e}")
            raise

        except Exception as e:
            if transaction_id is not None:
                log.critical(
                    f"{log_prefix} Unexpected error in {state.value} after charge {transaction_id}: {e!r}. "
                    f"MANUAL ACTION REQUIRED.",
                    exc_info=True
                )
            else:
                log.error(f"{log_prefix} Unexpected error in {state.value}: {e!r}", exc_info=True)
            raise

        log.info(f"{log_prefix} {CheckoutState.COMPLETED.value}.")
        return CheckoutResponse(total_cents=total, transaction_id=transaction_id)
