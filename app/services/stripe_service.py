"""
app/services/stripe_service.py

Purpose: Stripe integration

- Creates subscription Checkout Sessions and billing-portal sessions
- Verifies webhook signatures and decodes events
- Maps Stripe SDK failures to PaymentProviderError

The Stripe SDK is blocking, so API calls run in the Starlette threadpool.
"""

import json
import stripe
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool
from typing import Any, Dict, Optional, Tuple

from app.core.config import settings
from app.core.exceptions import PaymentProviderError, WebhookVerificationError
from app.core.logging import get_logger
from app.schemas.webhook import StripeEvent
from utils.constants import (
    CHECKOUT_CANCEL_PATH,
    CHECKOUT_FAILED,
    CHECKOUT_PAYMENT_METHODS,
    CHECKOUT_SUCCESS_PATH,
    DEFAULT_PLAN,
    PLANS,
    PORTAL_FAILED,
    PORTAL_RETURN_PATH,
)

logger = get_logger(__name__)


def resolve_plan(plan: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """
    Returns (plan_name, plan_config); unknown names fall back to monthly.
    """
    name = (plan or "").strip().lower()
    if name not in PLANS:
        name = DEFAULT_PLAN
    return name, PLANS[name]


def build_checkout_params(user_id: str, email: str, plan: Optional[str]) -> Dict[str, Any]:
    """
    Builds the Checkout Session parameters for a subscription purchase.
    """
    _, cfg = resolve_plan(plan)
    frontend = settings.FRONTEND_URL

    return {
        "mode": "subscription",
        "payment_method_types": list(CHECKOUT_PAYMENT_METHODS),
        "line_items": [
            {
                "price_data": {
                    "currency": settings.CHECKOUT_CURRENCY,
                    "product_data": {"name": f"{settings.PRODUCT_NAME} ({cfg['interval']})"},
                    "unit_amount": cfg["amount"],
                    "recurring": {"interval": cfg["interval"]},
                },
                "quantity": 1,
            }
        ],
        "customer_email": email,
        "client_reference_id": user_id,
        "success_url": f"{frontend}{CHECKOUT_SUCCESS_PATH}",
        "cancel_url": f"{frontend}{CHECKOUT_CANCEL_PATH}",
    }


def _error_message(exc: stripe.StripeError, fallback: str) -> str:
    return exc.user_message or str(exc) or fallback


class StripeService:
    """
    Service class for Stripe checkout, billing portal and webhooks.
    """

    def _configure(self) -> None:
        # Settings may change between calls (tests, reloads)
        stripe.api_key = settings.STRIPE_SECRET_KEY or ""
        stripe.api_version = settings.STRIPE_API_VERSION

    async def create_checkout_session(self, user_id: str, email: str, plan: Optional[str] = None) -> str:
        """
        Creates a Checkout Session for the given user.

        Returns:
            Hosted checkout URL

        Raises:
            PaymentProviderError: If Stripe rejects the request
        """
        self._configure()
        params = build_checkout_params(user_id, email, plan)
        plan_name, _ = resolve_plan(plan)

        try:
            session = await run_in_threadpool(stripe.checkout.Session.create, **params)
        except stripe.StripeError as e:
            logger.error(f"Checkout error for user {user_id}: {e}")
            raise PaymentProviderError(_error_message(e, CHECKOUT_FAILED)) from e

        logger.info(f"Checkout session created for user {user_id} ({plan_name})")
        return session.url

    async def create_portal_session(self, customer_id: str) -> str:
        """
        Creates a billing-portal session for an existing customer.

        Returns:
            Hosted billing portal URL

        Raises:
            PaymentProviderError: If Stripe rejects the request
        """
        self._configure()

        try:
            portal = await run_in_threadpool(
                stripe.billing_portal.Session.create,
                customer=customer_id,
                return_url=f"{settings.FRONTEND_URL}{PORTAL_RETURN_PATH}",
            )
        except stripe.StripeError as e:
            logger.error(f"Portal error for {customer_id}: {e}")
            raise PaymentProviderError(_error_message(e, PORTAL_FAILED)) from e

        return portal.url

    def construct_event(self, payload: bytes, sig_header: Optional[str]) -> StripeEvent:
        """
        Verifies the webhook signature and decodes the event.

        Args:
            payload: Raw request body, exactly as received
            sig_header: Value of the stripe-signature header

        Raises:
            WebhookVerificationError: On a missing secret/header, bad
                signature, stale timestamp or malformed payload
        """
        secret = settings.STRIPE_WEBHOOK_SECRET
        if not secret:
            raise WebhookVerificationError("Webhook secret not configured")
        if not sig_header:
            raise WebhookVerificationError("Missing stripe-signature header")

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookVerificationError("Payload is not valid UTF-8") from e

        try:
            stripe.WebhookSignature.verify_header(
                text, sig_header, secret, settings.STRIPE_WEBHOOK_TOLERANCE
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(f"Invalid signature: {e}") from e

        try:
            data = json.loads(text)
        except ValueError as e:
            raise WebhookVerificationError("Malformed event payload") from e

        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise WebhookVerificationError("Malformed event payload")

        try:
            return StripeEvent.model_validate(data)
        except PydanticValidationError as e:
            raise WebhookVerificationError("Malformed event payload") from e


# Global Stripe service instance
stripe_service = StripeService()
