"""
Quick check that Supabase is reachable with the service role key and that
the profiles / price-drop tables exist.

Run: python scripts/check_supabase.py
"""

import asyncio
import sys
from pathlib import Path
import os
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

import httpx
import logging

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
TABLES = [
    os.getenv("PROFILES_TABLE", "profiles"),
    os.getenv("PRICE_DROPS_TABLE", "price_drop_subscriptions"),
]

if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
    raise ValueError("❌ SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in .env file")


async def check_connection():
    """Probe each table with a one-row select."""
    print("=" * 60)
    print("  Supabase Connection Check")
    print("=" * 60 + "\n")

    headers = {
        "apikey": SUPABASE_SERVICE_ROLE_KEY,
        "Authorization": f"Bearer {SUPABASE_SERVICE_ROLE_KEY}",
    }

    failures = 0
    async with httpx.AsyncClient(base_url=SUPABASE_URL.rstrip("/"), headers=headers, timeout=10.0) as client:
        for table in TABLES:
            try:
                response = await client.get(f"/rest/v1/{table}", params={"select": "*", "limit": "1"})
            except httpx.HTTPError as e:
                logger.error(f"❌ {table}: request failed: {e}")
                failures += 1
                continue

            if response.status_code == 200:
                logger.info(f"✅ {table}: reachable ({len(response.json())} row(s) sampled)")
            else:
                logger.error(f"❌ {table}: HTTP {response.status_code} {response.text[:200]}")
                failures += 1

    print("\n" + "=" * 60)
    return failures


if __name__ == "__main__":
    sys.exit(1 if asyncio.run(check_connection()) else 0)
