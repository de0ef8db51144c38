"""
app/api/webhook.py

Purpose: Stripe webhook endpoint

- Reads the raw body (needed byte-for-byte for signature checks)
- Verifies the stripe-signature header
- Passes the event to the dispatcher
- Returns {"received": true} so Stripe stops retrying
"""

from fastapi import APIRouter, Header, Request
from typing import Optional

from app.core.exceptions import WebhookVerificationError
from app.core.logging import get_logger
from app.schemas.response import WebhookAck
from app.services.stripe_service import stripe_service
from app.services.webhook_service import dispatch_event

logger = get_logger(__name__)
router = APIRouter()


@router.post("/stripe", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="stripe-signature"),
):
    """
    Stripe webhook receiver.

    Invalid signatures and malformed payloads get a 400 and are only
    logged. Profile store failures surface as 500 so Stripe redelivers.
    """
    payload = await request.body()

    try:
        event = stripe_service.construct_event(payload, stripe_signature)
    except WebhookVerificationError as e:
        logger.warning(f"Webhook handler failed: {e.message}")
        raise

    logger.info(f"Stripe event received: {event.type} ({event.id})")
    outcome = await dispatch_event(event)
    logger.info(f"Stripe event {event.id} -> {outcome.value}")

    return WebhookAck()
