"""
utils/validation_utils.py

Purpose: Input validation

- Required-field presence checks
- ZIP and alert query validation
- Bearer token extraction
"""

import re
from typing import Optional


MAX_QUERY_LENGTH = 200


def clean_text(value: Optional[str]) -> str:
    """
    Strips a possibly-missing string value.

    Args:
        value: Raw input (may be None)

    Returns:
        Trimmed string, empty if the value was missing
    """
    return (value or "").strip()


def is_valid_zip(zip_code: str) -> bool:
    """
    Validates a US ZIP code (exactly 5 digits).
    """
    return bool(re.fullmatch(r"\d{5}", zip_code or ""))


def is_valid_alert_query(query: str) -> bool:
    """
    A price-drop query must be non-empty and at most MAX_QUERY_LENGTH characters.
    """
    return 0 < len(query) <= MAX_QUERY_LENGTH


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extracts the token from an `Authorization: Bearer <token>` header.

    Returns:
        The token, or None if the header is missing or uses another scheme
    """
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None

    token = token.strip()
    return token or None
