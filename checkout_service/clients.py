"""
This module provides the collaborator implementations used by the checkout orchestrator:
- Inventory: in-memory stock ledger with per-product locking
- Payment: in-process simulation, and a client for the Payment Service (REST API)
- Notification: application log, and a RabbitMQ publisher
Each class encapsulates its protocol logic, error handling, and connection management.
"""

import asyncio
import json
import logging
import time
import uuid
from collections import defaultdict
from typing import Dict, Optional

import httpx
import pika

from . import config
from .errors import InsufficientStockError, InvalidArgumentError, NotificationError
from .models import PaymentResult
from .ports import InventoryService, NotificationService, PaymentProcessor

log = logging.getLogger(__name__)

MISSING_TOKEN = "Missing payment token"
PAYMENT_DECLINED = "Payment declined"


# --- Inventory (in-memory) ---
class InMemoryInventory(InventoryService):
    """
    Owns the stock ledger (product id -> remaining quantity).

    Reservations are serialized per product id, so `reserve` is an atomic
    check-and-decrement even when several checkouts share this instance.
    A preceding `is_in_stock` call is not a lock and is not relied upon.
    """

    def __init__(self, stock: Optional[Dict[str, int]] = None):
        self._stock: Dict[str, int] = dict(stock or {})
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def available(self, product_id: str) -> int:
        return self._stock.get(product_id, 0)

    async def is_in_stock(self, product_id: str, quantity: int) -> bool:
        return self.available(product_id) >= quantity

    async def reserve(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidArgumentError(f"Reservation quantity must be > 0 (got {quantity})")

        async with self._locks[product_id]:
            current = self.available(product_id)
            if current < quantity:
                log.warning(f"[Inventory] Reservation of {quantity}x {product_id} refused, only {current} left.")
                raise InsufficientStockError(product_id, quantity, current)
            self._stock[product_id] = current - quantity
            log.info(f"[Inventory] Reserved {quantity}x {product_id} ({current - quantity} left).")


# --- Payment (in-process simulation) ---
class FakePaymentProcessor(PaymentProcessor):
    """
    Simulated payment processor.

    Args:
        should_fail (bool): When True every charge is declined.
        delay (float): Simulated processing time in seconds.
    """

    def __init__(self, should_fail: bool = False, delay: float = 0.05):
        self.should_fail = should_fail
        self.delay = delay

    async def pay(self, amount_cents: int, payment_method_token: str) -> PaymentResult:
        if not payment_method_token:
            return PaymentResult.failed(MISSING_TOKEN)

        await asyncio.sleep(self.delay)

        if self.should_fail:
            log.warning(f"[Payment] Charge of {amount_cents} declined (simulated).")
            return PaymentResult.failed(PAYMENT_DECLINED)
        return PaymentResult.succeeded(f"tx_{uuid.uuid4().hex}")


# --- Payment Client (REST) ---
class HttpPaymentProcessor(PaymentProcessor):
    """
    Client for the Payment Service (REST API).
    Translates HTTP outcomes into `PaymentResult` values; nothing is raised for a decline
    or an unreachable service.

    Args:
        base_url (str): Payment Service address. Defaults to config.PAYMENT_SERVICE_URL.
        currency (str): ISO 4217 code sent with every charge.
        client (httpx.AsyncClient): Optional preconfigured client (e.g. for tests).
    """

    def __init__(self, base_url: Optional[str] = None, currency: str = "EUR",
                 client: Optional[httpx.AsyncClient] = None):
        self.currency = currency
        if client is None:
            timeout_config = httpx.Timeout(5.0, read=8.0)
            client = httpx.AsyncClient(base_url=base_url or config.PAYMENT_SERVICE_URL, timeout=timeout_config)
        self.client = client

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    async def pay(self, amount_cents: int, payment_method_token: str) -> PaymentResult:
        """
        Creates a new charge via the Payment Service REST API.

        Args:
            amount_cents (int): Charge amount in cents.
            payment_method_token (str): Payment token provided by the customer.

        Returns:
            PaymentResult: Success with the service's transactionId, or failure with
            "Missing payment token", "Payment declined" (HTTP 402),
            "Payment processor error (HTTP <code>)", "Payment processor error (invalid response)"
            or "Payment service unavailable".
        """
        if not payment_method_token:
            return PaymentResult.failed(MISSING_TOKEN)

        reference_id = f"chk_{uuid.uuid4().hex}"
        payload = {
            "amount": amount_cents,
            "currency": self.currency,
            "paymentToken": payment_method_token,
            "referenceId": reference_id
        }
        headers = {"Idempotency-Key": str(uuid.uuid4())}

        try:
            response = await self.client.post("/v2/charges", json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 402:
                log.warning(f"[Payment: {reference_id}] Charge declined: {e.response.text}")
                return PaymentResult.failed(PAYMENT_DECLINED)
            log.error(f"[Payment: {reference_id}] HTTP error from Payment Service: {e}")
            return PaymentResult.failed(f"Payment processor error (HTTP {e.response.status_code})")
        except httpx.TransportError as e:
            # Outcome unknown; the idempotency key would allow a safe retry by the caller
            log.error(f"[Payment: {reference_id}] Payment Service unreachable ({e!r}).")
            return PaymentResult.failed("Payment service unavailable")

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            log.error(f"[Payment: {reference_id}] Unreadable response from Payment Service: {response.text!r}")
            return PaymentResult.failed("Payment processor error (invalid response)")

        transaction_id = data.get("transactionId")
        if not transaction_id:
            log.error(f"[Payment: {reference_id}] Response without transactionId: {response.text}")
            return PaymentResult.failed("Payment processor error (no transaction id)")
        return PaymentResult.succeeded(transaction_id)


# --- Notification (log) ---
class LogNotification(NotificationService):
    """Writes confirmations to the application log instead of sending email/SMS."""

    async def send(self, recipient: str, message: str) -> None:
        log.info(f"[Notification to {recipient}] {message}")


# --- Notification (MQ) ---
class QueueNotification(NotificationService):
    """
    Publishes confirmations to a RabbitMQ queue for an external mailer to deliver.
    pika is blocking, so each publish runs in a worker thread with its own connection.
    """

    def __init__(self, host: Optional[str] = None, queue: Optional[str] = None,
                 username: Optional[str] = None, password: Optional[str] = None):
        self.host = host or config.RABBITMQ_HOST
        self.queue = queue or config.NOTIFICATION_QUEUE
        self.credentials = pika.PlainCredentials(
            username or config.RABBITMQ_USER, password or config.RABBITMQ_PASSWORD
        )

    def _publish(self, body: str):
        connection = pika.BlockingConnection(
            pika.ConnectionParameters(host=self.host, credentials=self.credentials, heartbeat=60)
        )
        try:
            channel = connection.channel()
            channel.queue_declare(queue=self.queue, durable=True)
            channel.basic_publish(
                exchange='',
                routing_key=self.queue,
                body=body,
                properties=pika.BasicProperties(delivery_mode=2)  # persistent
            )
        finally:
            if connection.is_open:
                connection.close()

    async def send(self, recipient: str, message: str) -> None:
        notification = {
            "notificationId": str(uuid.uuid4()),
            "recipient": recipient,
            "message": message,
            "createdAt": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        }
        try:
            await asyncio.to_thread(self._publish, json.dumps(notification))
        except pika.exceptions.AMQPError as e:
            log.error(f"[Notification to {recipient}] Publishing to '{self.queue}' failed: {e!r}")
            raise NotificationError(f"Could not queue notification for {recipient}") from e
        log.info(f"[Notification to {recipient}] Queued on '{self.queue}'.")
