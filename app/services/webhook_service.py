"""
app/services/webhook_service.py

Purpose: Stripe event dispatcher

- Routes verified Stripe events to the matching profile update
- checkout.session.completed -> link customer + mark active
- customer.subscription.updated/deleted -> overwrite status
- Everything else is acknowledged and ignored

Each handled event produces at most one profile write. There is no
dedup or ordering: two events for the same customer delivered out of
order leave whichever status was written last.
"""

from app.core.logging import get_logger, LogContext
from app.schemas.webhook import (
    CHECKOUT_COMPLETED,
    SUBSCRIPTION_EVENTS,
    StripeEvent,
    WebhookOutcome,
    parse_checkout_session,
    parse_subscription,
)
from app.services import profile_service

logger = get_logger(__name__)


async def dispatch_event(event: StripeEvent) -> WebhookOutcome:
    """
    Applies a verified Stripe event to the profile store.

    Args:
        event: Verified event envelope

    Returns:
        What was done with the event

    Raises:
        ProfileStoreError: If the profile write fails
    """
    with LogContext(event_id=event.id, event_type=event.type):
        if event.type == CHECKOUT_COMPLETED:
            return await _handle_checkout_completed(event)

        if event.type in SUBSCRIPTION_EVENTS:
            return await _handle_subscription_change(event)

        logger.debug("Ignoring unhandled Stripe event type")
        return WebhookOutcome.IGNORED


async def _handle_checkout_completed(event: StripeEvent) -> WebhookOutcome:
    session = parse_checkout_session(event.data_object)

    if not (session.client_reference_id and session.customer_id):
        logger.warning(
            f"Checkout session {session.session_id} has no client_reference_id or customer; skipping"
        )
        return WebhookOutcome.SKIPPED

    await profile_service.link_stripe_customer(session.client_reference_id, session.customer_id)
    return WebhookOutcome.LINKED


async def _handle_subscription_change(event: StripeEvent) -> WebhookOutcome:
    subscription = parse_subscription(event.data_object)

    if not (subscription.customer_id and subscription.status):
        logger.warning(
            f"Subscription {subscription.subscription_id} has no customer or status; skipping"
        )
        return WebhookOutcome.SKIPPED

    await profile_service.update_subscription_status(subscription.customer_id, subscription.status)
    return WebhookOutcome.STATUS_UPDATED
