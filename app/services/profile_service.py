"""
app/services/profile_service.py

Purpose: Profile data management (Supabase)

- Links a Stripe customer to a profile after checkout
- Overwrites subscription status from subscription events
- Resolves Supabase access tokens to users
- Profile retrieval and price-drop alert inserts
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.exceptions import AuthenticationError, ProfileStoreError
from app.core.logging import get_logger, LogContext
from app.db.supabase import AUTH_PREFIX, REST_PREFIX, get_supabase_client
from app.schemas.account import Profile
from utils.constants import ACTIVE_STATUS, INVALID_TOKEN, PROFILE_COLUMNS

logger = get_logger(__name__)


async def _request(
    method: str,
    table: str,
    *,
    params: Optional[Dict[str, str]] = None,
    json: Optional[Any] = None,
    prefer: Optional[str] = "return=minimal",
) -> httpx.Response:
    """
    Sends one PostgREST request and maps transport or HTTP failures
    to ProfileStoreError.
    """
    client = get_supabase_client()
    headers = {"Prefer": prefer} if prefer else None

    try:
        response = await client.request(
            method,
            f"{REST_PREFIX}/{table}",
            params=params,
            json=json,
            headers=headers,
        )
    except httpx.HTTPError as e:
        logger.error(f"Supabase {method} {table} failed: {e}")
        raise ProfileStoreError(str(e) or type(e).__name__) from e

    if response.status_code >= 400:
        logger.error(
            f"Supabase {method} {table} returned {response.status_code}: {response.text[:200]}"
        )
        raise ProfileStoreError(
            f"Profile store returned {response.status_code}",
            details=response.text[:200] or None,
        )

    return response


async def link_stripe_customer(user_id: str, customer_id: str) -> None:
    """
    Records the Stripe customer on the user's profile and marks it active.

    Args:
        user_id: Supabase user id (the checkout client_reference_id)
        customer_id: Stripe customer id
    """
    with LogContext(user_id=user_id, customer_id=customer_id):
        await _request(
            "PATCH",
            settings.PROFILES_TABLE,
            params={"id": f"eq.{user_id}"},
            json={
                "stripe_customer_id": customer_id,
                "subscription_status": ACTIVE_STATUS,
            },
        )
        logger.info("Stripe customer linked to profile")


async def update_subscription_status(customer_id: str, status: str) -> None:
    """
    Overwrites the subscription status of the profile linked to a customer.

    Args:
        customer_id: Stripe customer id
        status: Stripe subscription status (active, past_due, canceled, ...)
    """
    with LogContext(customer_id=customer_id):
        await _request(
            "PATCH",
            settings.PROFILES_TABLE,
            params={"stripe_customer_id": f"eq.{customer_id}"},
            json={"subscription_status": status},
        )
        logger.info(f"Subscription status set to {status}")


async def get_profile(user_id: str) -> Optional[Profile]:
    """
    Retrieves a profile by user id.

    Returns:
        Profile or None if no row exists
    """
    response = await _request(
        "GET",
        settings.PROFILES_TABLE,
        params={"select": PROFILE_COLUMNS, "id": f"eq.{user_id}", "limit": "1"},
        prefer=None,
    )
    rows = response.json()
    if not rows:
        return None
    return Profile(**rows[0])


async def add_price_drop_subscription(user_id: str, query: str, zip_code: Optional[str]) -> None:
    """
    Stores a price-drop alert for the user.
    """
    with LogContext(user_id=user_id):
        await _request(
            "POST",
            settings.PRICE_DROPS_TABLE,
            json={"user_id": user_id, "query": query, "zip": zip_code},
        )
        logger.info(f"Price-drop alert added for '{query}'")


async def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """
    Resolves a Supabase access token to the signed-in user.

    Args:
        access_token: JWT issued to the browser by Supabase auth

    Returns:
        User dict with at least "id" (and usually "email")

    Raises:
        AuthenticationError: If Supabase rejects the token
        ProfileStoreError: If Supabase cannot be reached
    """
    client = get_supabase_client()

    try:
        response = await client.get(
            f"{AUTH_PREFIX}/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
    except httpx.HTTPError as e:
        logger.error(f"Supabase auth lookup failed: {e}")
        raise ProfileStoreError(str(e) or type(e).__name__) from e

    if response.status_code in (401, 403):
        raise AuthenticationError(INVALID_TOKEN)
    if response.status_code >= 400:
        raise ProfileStoreError(f"Auth service returned {response.status_code}")

    user = response.json()
    if not isinstance(user, dict) or not user.get("id"):
        raise AuthenticationError(INVALID_TOKEN)
    return user
