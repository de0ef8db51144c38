"""
app/api/account.py

Purpose: Signed-in account endpoints

- Resolves the caller from their Supabase access token
- Returns the profile with the derived plan
- Stores price-drop alerts
"""

from fastapi import APIRouter, Header
from typing import Any, Dict, Optional

from app.core.exceptions import AuthenticationError, ResourceNotFoundError, ValidationError
from app.core.logging import get_logger
from app.schemas.account import AccountResponse, PriceDropRequest
from app.schemas.response import OkResponse
from app.services import profile_service
from utils.constants import INVALID_ALERT_QUERY, INVALID_ZIP, MISSING_TOKEN, PROFILE_NOT_FOUND
from utils.validation_utils import clean_text, extract_bearer_token, is_valid_alert_query, is_valid_zip

logger = get_logger(__name__)
router = APIRouter()


async def _current_user(authorization: Optional[str]) -> Dict[str, Any]:
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError(MISSING_TOKEN)
    return await profile_service.get_user_from_token(token)


@router.get("/me", response_model=AccountResponse)
async def get_account(authorization: Optional[str] = Header(None)):
    """
    Returns the caller's profile, plan ("free" when no status) and
    premium flag.
    """
    user = await _current_user(authorization)

    profile = await profile_service.get_profile(user["id"])
    if profile is None:
        logger.warning(f"No profile row for user {user['id']}")
        raise ResourceNotFoundError(PROFILE_NOT_FOUND)

    if profile.email is None:
        profile.email = user.get("email")
    if profile.username is None:
        profile.username = (user.get("user_metadata") or {}).get("username")

    return AccountResponse.from_profile(profile)


@router.post("/price-drops", response_model=OkResponse, status_code=201)
async def add_price_drop(body: PriceDropRequest, authorization: Optional[str] = Header(None)):
    """
    Subscribes the caller to price-drop notifications for a product.
    """
    user = await _current_user(authorization)

    query = clean_text(body.query)
    zip_code = clean_text(body.zip) or None

    if not is_valid_alert_query(query):
        raise ValidationError(INVALID_ALERT_QUERY)
    if zip_code is not None and not is_valid_zip(zip_code):
        raise ValidationError(INVALID_ZIP)

    await profile_service.add_price_drop_subscription(user["id"], query, zip_code)
    return OkResponse()
