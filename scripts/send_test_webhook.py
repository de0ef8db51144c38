"""
Sends a signed Stripe event to a running API, the way Stripe would.

Usage:
    python scripts/send_test_webhook.py <user_id> <customer_id> [status]

Without a status a checkout.session.completed event is sent; with one, a
customer.subscription.updated event carrying that status.
Requires STRIPE_WEBHOOK_SECRET in .env (same value the server uses).
"""

import asyncio
import hashlib
import hmac
import json
import os
import sys
import time

import httpx
from dotenv import load_dotenv

load_dotenv()

API_URL = os.getenv("API_URL", "http://localhost:3000")
WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET", "")


def build_event(user_id: str, customer_id: str, status: str = None) -> dict:
    if status is None:
        return {
            "id": f"evt_local_{int(time.time())}",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": {"id": "cs_local", "client_reference_id": user_id, "customer": customer_id}},
        }
    return {
        "id": f"evt_local_{int(time.time())}",
        "object": "event",
        "type": "customer.subscription.updated",
        "data": {"object": {"id": "sub_local", "customer": customer_id, "status": status}},
    }


def sign(payload: str) -> str:
    timestamp = int(time.time())
    digest = hmac.new(
        WEBHOOK_SECRET.encode("utf-8"),
        f"{timestamp}.{payload}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={timestamp},v1={digest}"


async def send_webhook(user_id: str, customer_id: str, status: str = None):
    url = f"{API_URL}/webhooks/stripe"
    payload = json.dumps(build_event(user_id, customer_id, status))

    print(f"🧪 Sending webhook to {url}")
    print(f"📤 Payload: {payload}\n")

    async with httpx.AsyncClient() as client:
        response = await client.post(
            url,
            content=payload,
            headers={"Content-Type": "application/json", "stripe-signature": sign(payload)},
            timeout=10.0,
        )

    print(f"Status: {response.status_code}")
    print(f"📥 Response: {response.text[:200]}")
    return response.status_code


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)
    if not WEBHOOK_SECRET:
        print("❌ STRIPE_WEBHOOK_SECRET must be set")
        sys.exit(2)

    code = asyncio.run(send_webhook(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None))
    sys.exit(0 if code == 200 else 1)
