"""
config.py — Environment Configuration for the Checkout Service

All settings are read from environment variables once, at import time, with
defaults suitable for local development.
"""

import os
from typing import Optional


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name, "").strip()
    return float(value) if value else None


# Pricing
PRICING_STRATEGY = os.environ.get("PRICING_STRATEGY", "standard")
TAX_RATE = float(os.environ.get("TAX_RATE", "0.21"))
DISCOUNT_THRESHOLD_CENTS = int(os.environ.get("DISCOUNT_THRESHOLD_CENTS", "2000"))
DISCOUNT_RATE = float(os.environ.get("DISCOUNT_RATE", "0.05"))
CURRENCY = os.environ.get("CURRENCY", "EUR")

# Payment ("fake" = in-process simulation, "http" = payment service REST API)
PAYMENT_BACKEND = os.environ.get("PAYMENT_BACKEND", "fake")
PAYMENT_SHOULD_FAIL = _env_bool("PAYMENT_SHOULD_FAIL")
PAYMENT_SERVICE_URL = os.environ.get("PAYMENT_SERVICE_URL", "http://payment_service:8001")

# Notification ("log" = application log, "queue" = RabbitMQ)
NOTIFICATION_BACKEND = os.environ.get("NOTIFICATION_BACKEND", "log")
RABBITMQ_HOST = os.environ.get("RABBITMQ_HOST", "localhost")
RABBITMQ_USER = os.environ.get("RABBITMQ_USER", "guest")
RABBITMQ_PASSWORD = os.environ.get("RABBITMQ_PASSWORD", "guest")
NOTIFICATION_QUEUE = os.environ.get("NOTIFICATION_QUEUE", "notifications.email")

# Upper bound in seconds for each collaborator call; unset means no timeout
CHECKOUT_STEP_TIMEOUT = _env_float("CHECKOUT_STEP_TIMEOUT")

LOG_FILE = os.environ.get("LOG_FILE", "")
