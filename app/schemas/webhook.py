"""
app/schemas/webhook.py

Purpose: Stripe webhook payload schemas and parsers

- Extracts the fields the subscription sync needs from Stripe event objects
- Normalizes `customer` (bare id or expanded object) into an id string
- Names the event types the handler reacts to
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


CHECKOUT_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_UPDATED = "customer.subscription.updated"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"

SUBSCRIPTION_EVENTS = (SUBSCRIPTION_UPDATED, SUBSCRIPTION_DELETED)


class WebhookOutcome(str, Enum):
    """What the handler did with an event."""
    LINKED = "linked"
    STATUS_UPDATED = "status_updated"
    SKIPPED = "skipped"
    IGNORED = "ignored"


class StripeEvent(BaseModel):
    """
    Envelope of a verified Stripe event.
    """
    id: str = ""
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def data_object(self) -> Dict[str, Any]:
        obj = self.data.get("object")
        return obj if isinstance(obj, dict) else {}


class CheckoutCompleted(BaseModel):
    session_id: Optional[str] = None
    client_reference_id: Optional[str] = None
    customer_id: Optional[str] = None


class SubscriptionChange(BaseModel):
    subscription_id: Optional[str] = None
    customer_id: Optional[str] = None
    status: Optional[str] = None


def _customer_id(value: Any) -> Optional[str]:
    """
    Stripe sends `customer` as "cus_..." unless the field was expanded,
    in which case it is the full customer object.
    """
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return value.get("id") or None
    return None


def parse_checkout_session(obj: Dict[str, Any]) -> CheckoutCompleted:
    """
    Parses a checkout.session object

    Relevant fields:
    {
        "id": "cs_test_...",
        "client_reference_id": "<supabase user id>",
        "customer": "cus_..."
    }
    """
    return CheckoutCompleted(
        session_id=obj.get("id"),
        client_reference_id=obj.get("client_reference_id") or None,
        customer_id=_customer_id(obj.get("customer")),
    )


def parse_subscription(obj: Dict[str, Any]) -> SubscriptionChange:
    """
    Parses a subscription object

    Relevant fields:
    {
        "id": "sub_...",
        "customer": "cus_...",
        "status": "active" | "past_due" | "canceled" | ...
    }
    """
    return SubscriptionChange(
        subscription_id=obj.get("id"),
        customer_id=_customer_id(obj.get("customer")),
        status=obj.get("status") or None,
    )
