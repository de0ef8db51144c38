"""
app/api/billing.py

Purpose: Stripe checkout, billing portal and plan listing

- Validates required fields before any provider call
- Returns the hosted page URL for the browser to redirect to
"""

from fastapi import APIRouter

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.schemas.billing import CheckoutRequest, Plan, PlansResponse, PortalRequest
from app.schemas.response import UrlResponse
from app.core.config import settings
from app.services.stripe_service import stripe_service
from utils.constants import MISSING_CHECKOUT_FIELDS, MISSING_CUSTOMER_ID, PLANS
from utils.validation_utils import clean_text

logger = get_logger(__name__)
router = APIRouter()


@router.get("/plans", response_model=PlansResponse)
async def list_plans():
    """Pricing tiers shown on the marketing and account pages."""
    return PlansResponse(
        plans=[
            Plan(
                id=name,
                amount=cfg["amount"],
                currency=settings.CHECKOUT_CURRENCY,
                interval=cfg["interval"],
                label=cfg["label"],
            )
            for name, cfg in PLANS.items()
        ]
    )


@router.post("/checkout", response_model=UrlResponse)
async def create_checkout(body: CheckoutRequest):
    """
    Starts a subscription checkout.

    Body: {userId, email, plan}; plan defaults to "monthly".
    """
    user_id = clean_text(body.userId)
    email = clean_text(body.email)

    if not user_id or not email:
        logger.warning("Checkout rejected: missing userId or email")
        raise ValidationError(MISSING_CHECKOUT_FIELDS)

    url = await stripe_service.create_checkout_session(user_id, email, body.plan)
    return UrlResponse(url=url)


@router.post("/portal", response_model=UrlResponse)
async def create_portal(body: PortalRequest):
    """
    Opens the Stripe billing portal for an existing customer.
    """
    customer_id = clean_text(body.customerId)

    if not customer_id:
        logger.warning("Portal rejected: missing customerId")
        raise ValidationError(MISSING_CUSTOMER_ID)

    url = await stripe_service.create_portal_session(customer_id)
    logger.info(f"Billing portal opened for {customer_id}")
    return UrlResponse(url=url)
