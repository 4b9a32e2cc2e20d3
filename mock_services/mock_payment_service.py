"""
mock_payment_service.py — Mock Implementation of the Payment Service (REST API)

This module provides a simulated Payment Service for the `HttpPaymentProcessor`
of the checkout service. It exposes a small FastAPI application that mimics
real-world payment processing behavior.

Simulation Scenarios:
    • Successful payment processing
    • Declined payment (HTTP 402)
    • Timeout simulation (slow response)
    • Idempotent replay of a repeated Idempotency-Key

Endpoints:
    POST /v2/charges — Handles incoming charge requests.

Port:
    Default: 8001 (HTTP)
"""

import logging
import time
import uuid
from collections import OrderedDict

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

app = FastAPI(title="Mock Payment Service")
log = logging.getLogger(__name__)

TIMEOUT_DELAY_SECONDS = 10

# Idempotency-Key -> stored charge response, oldest evicted beyond MAX_STORED_CHARGES
MAX_STORED_CHARGES = 1000
_charges: "OrderedDict[str, dict]" = OrderedDict()


class ChargeRequest(BaseModel):
    """
    Represents a payment charge request payload.

    Attributes:
        amount (int): Total payment amount in the smallest currency units (e.g., cents).
        currency (str): ISO 4217 currency code (e.g., 'EUR', 'USD').
        paymentToken (str): Payment authorization token.
        referenceId (str): Unique identifier of the checkout associated with this charge.
    """
    amount: int = Field(..., ge=0)
    currency: str
    paymentToken: str
    referenceId: str


@app.post("/v2/charges")
def create_charge(
        request: ChargeRequest,
        idempotency_key: str = Header(..., alias="Idempotency-Key")
):
    """
    Processes a payment charge request.

    Outcomes depend on the provided `paymentToken`:
        - Starts with "tok_decline_" → Payment declined (HTTP 402)
        - Starts with "tok_timeout_" → Responds only after TIMEOUT_DELAY_SECONDS
        - Any other token → Successful transaction

    A request repeating an Idempotency-Key that already succeeded returns the stored
    response instead of charging again.

    Returns:
        dict: transactionId, status ("succeeded"), amount and createdAt.

    Raises:
        HTTPException(402): If the payment is declined.
    """
    if idempotency_key in _charges:
        log.info(f"[PS] Replaying charge for Idempotency-Key {idempotency_key}.")
        return _charges[idempotency_key]

    log.info(f"[PS] Charge request for {request.referenceId} (Idempotency-Key: {idempotency_key})")

    if request.paymentToken.startswith("tok_decline_"):
        log.warning(f"[PS] Charge for {request.referenceId} declined.")
        raise HTTPException(
            status_code=402,
            detail={"errorCode": "payment_declined", "message": "Card declined."}
        )

    if request.paymentToken.startswith("tok_timeout_"):
        log.info(f"[PS] Simulating timeout for {request.referenceId}...")
        time.sleep(TIMEOUT_DELAY_SECONDS)

    log.info(f"[PS] Charge for {request.referenceId} succeeded.")
    charge = {
        "transactionId": f"tr_{uuid.uuid4()}",
        "status": "succeeded",
        "amount": request.amount,
        "currency": request.currency,
        "createdAt": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }
    _charges[idempotency_key] = charge
    while len(_charges) > MAX_STORED_CHARGES:
        _charges.popitem(last=False)
    return charge


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8001)
