"""
main.py — FastAPI Entry Point for the Checkout Service

This module provides the REST API used by the storefront and wires the checkout
orchestrator to its infrastructure collaborators.

Responsibilities:
    • List the product catalogue
    • Accept checkout requests and run the checkout workflow
    • Build the collaborators (pricing, payment, inventory, notification) from configuration
    • Provide system health information

Run with: uvicorn checkout_service.main:app
"""

from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from . import config
from .cart import Cart
from .catalog import DEMO_PRODUCTS, DEMO_STOCK, find_product
from .clients import FakePaymentProcessor, HttpPaymentProcessor, InMemoryInventory, LogNotification, QueueNotification
from .errors import CheckoutError
from .logging_config import get_logger, setup_logging
from .models import CheckoutPayload, CheckoutResult, Product
from .ports import NotificationService, PaymentProcessor, PricingStrategy
from .pricing import LoyaltyPricing, StandardPricing
from .workflow import CheckoutRequest, CheckoutService

# Initialization
setup_logging()
log = get_logger(__name__)
app = FastAPI(title="Checkout Service")


def build_pricing(strategy: str = config.PRICING_STRATEGY) -> PricingStrategy:
    if strategy == "standard":
        return StandardPricing(config.TAX_RATE, config.DISCOUNT_THRESHOLD_CENTS, config.DISCOUNT_RATE)
    if strategy == "loyalty":
        return LoyaltyPricing(config.TAX_RATE)
    raise ValueError(f"Unknown pricing strategy: {strategy!r}")


def build_payment(backend: str = config.PAYMENT_BACKEND) -> PaymentProcessor:
    if backend == "fake":
        return FakePaymentProcessor(should_fail=config.PAYMENT_SHOULD_FAIL)
    if backend == "http":
        return HttpPaymentProcessor(config.PAYMENT_SERVICE_URL, currency=config.CURRENCY)
    raise ValueError(f"Unknown payment backend: {backend!r}")


def build_notifier(backend: str = config.NOTIFICATION_BACKEND) -> NotificationService:
    if backend == "log":
        return LogNotification()
    if backend == "queue":
        return QueueNotification()
    raise ValueError(f"Unknown notification backend: {backend!r}")


# Infrastructure collaborators (shared across requests)
inventory = InMemoryInventory(DEMO_STOCK)
pricing = build_pricing()
payment = build_payment()
notifier = build_notifier()


def get_checkout_service() -> CheckoutService:
    """Creates the orchestrator for one request on top of the shared collaborators."""
    return CheckoutService(
        pricing, payment, inventory, notifier,
        step_timeout=config.CHECKOUT_STEP_TIMEOUT,
        currency=config.CURRENCY
    )


@app.on_event("shutdown")
async def on_shutdown():
    if isinstance(payment, HttpPaymentProcessor):
        await payment.aclose()
    log.info("Checkout service stopped.")


@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    """Maps every checkout failure to a 400 response carrying its kind and message."""
    return JSONResponse(
        status_code=400,
        content={"ok": False, "error": exc.message, "kind": exc.kind}
    )


@app.get("/api/products", response_model=List[Product])
def list_products():
    return DEMO_PRODUCTS


@app.post("/api/checkout", response_model=CheckoutResult)
async def submit_checkout(
        payload: CheckoutPayload,
        service: CheckoutService = Depends(get_checkout_service)
):
    """
    Builds a cart from the requested items and runs the checkout workflow.

    Args:
        payload (CheckoutPayload): Requested items, customer email and payment token.
        service (CheckoutService): Orchestrator provided by `get_checkout_service`.

    Returns:
        CheckoutResult: {"ok": true, "totalCents": ..., "transactionId": ...}

    Errors:
        400: Unknown product id, or any CheckoutError (see checkout_error_handler).
        422: Missing or empty email/token, malformed items.
    """
    cart = Cart()
    for item in payload.items:
        product = find_product(item.productId)
        if product is None:
            log.warning(f"Checkout rejected: unknown product {item.productId}.")
            return JSONResponse(status_code=400, content={"ok": False, "error": f"Product not found: {item.productId}"})
        cart.add_item(product, item.quantity)

    response = await service.checkout(
        CheckoutRequest(cart=cart, customer_email=payload.email, payment_method_token=payload.token)
    )
    return CheckoutResult.from_response(response)


# Health Check Endpoint
@app.get("/health")
def health_check():
    return {"status": "ok"}
