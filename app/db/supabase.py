"""
app/db/supabase.py

Purpose: Supabase connection setup

- Initializes one shared httpx client for the Supabase REST + auth APIs
- Service-role credentials attached to every request
- Health check for the readiness probe
- Proper connection lifecycle management
"""

import httpx
from typing import Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"

# Global Supabase client
_client: Optional[httpx.AsyncClient] = None


def _service_headers() -> dict:
    key = settings.SUPABASE_SERVICE_ROLE_KEY or ""
    return {
        "apikey": key,
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
    }


async def connect_to_supabase():
    """
    Creates the shared Supabase client.
    Called during application startup.
    """
    global _client

    if _client is not None:
        logger.warning("Supabase client already initialized")
        return

    if not settings.supabase_configured:
        logger.warning("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set; profile sync is disabled")
        return

    _client = httpx.AsyncClient(
        base_url=settings.SUPABASE_URL.rstrip("/"),
        headers=_service_headers(),
        timeout=settings.SUPABASE_TIMEOUT,
    )
    logger.info(f"Supabase client ready: {settings.SUPABASE_URL}")


async def close_supabase_connection():
    """
    Closes the Supabase client.
    Called during application shutdown.
    """
    global _client

    if _client:
        logger.info("Closing Supabase client")
        await _client.aclose()
        _client = None


async def check_supabase_health() -> bool:
    """
    Checks that the Supabase REST endpoint answers with the service key.

    Returns:
        True if reachable, False otherwise
    """
    if _client is None:
        logger.error("Supabase client not initialized")
        return False

    try:
        response = await _client.get(
            f"{REST_PREFIX}/{settings.PROFILES_TABLE}",
            params={"select": "id", "limit": "1"},
        )
        return response.status_code < 400
    except httpx.HTTPError as e:
        logger.error(f"Supabase health check failed: {str(e)}")
        return False


def get_supabase_client() -> httpx.AsyncClient:
    """
    Returns the shared Supabase client.

    Raises:
        RuntimeError: If the client is not initialized
    """
    if _client is None:
        raise RuntimeError(
            "Supabase client not initialized. Set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY and call connect_to_supabase() during startup."
        )
    return _client
