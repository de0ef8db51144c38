import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import httpx
import pytest
import stripe
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db import supabase
from app.main import app

WEBHOOK_SECRET = "whsec_test_secret"
SUPABASE_URL = "https://project.supabase.test"
VALID_TOKEN = "token-user-1"


class FakeSupabase:
    """
    In-memory stand-in for the PostgREST tables and the auth user
    endpoint, served through httpx.MockTransport.
    """

    def __init__(self):
        self.profiles = {}
        self.price_drops = []
        self.writes = []
        self.users = {VALID_TOKEN: {"id": "user-1", "email": "shopper@example.com"}}
        self.fail_writes = False

    def add_profile(self, user_id, **fields):
        row = {
            "id": user_id,
            "email": None,
            "username": None,
            "subscription_status": None,
            "stripe_customer_id": None,
        }
        row.update(fields)
        self.profiles[user_id] = row
        return row

    def _matching(self, params):
        rows = list(self.profiles.values())
        for column in ("id", "stripe_customer_id"):
            value = params.get(column)
            if value is not None:
                assert value.startswith("eq.")
                rows = [r for r in rows if r.get(column) == value[3:]]
        return rows

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        params = dict(request.url.params)

        if path == "/auth/v1/user":
            token = request.headers.get("authorization", "").removeprefix("Bearer ")
            user = self.users.get(token)
            if user is None:
                return httpx.Response(401, json={"msg": "invalid JWT"})
            return httpx.Response(200, json=user)

        if request.method in ("PATCH", "POST") and self.fail_writes:
            return httpx.Response(503, text="upstream unavailable")

        if path == "/rest/v1/profiles":
            if request.method == "GET":
                return httpx.Response(200, json=self._matching(params))
            if request.method == "PATCH":
                body = json.loads(request.content)
                self.writes.append(("profiles", params, body))
                for row in self._matching(params):
                    row.update(body)
                return httpx.Response(204)

        if path == "/rest/v1/price_drop_subscriptions" and request.method == "POST":
            body = json.loads(request.content)
            self.writes.append(("price_drop_subscriptions", params, body))
            self.price_drops.append(body)
            return httpx.Response(201)

        return httpx.Response(404, json={"message": f"no route for {request.method} {path}"})


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    http_client = httpx.AsyncClient(
        base_url=SUPABASE_URL,
        transport=httpx.MockTransport(fake.handler),
    )
    monkeypatch.setattr(supabase, "_client", http_client)
    return fake


@pytest.fixture
def webhook_secret(monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", WEBHOOK_SECRET)
    return WEBHOOK_SECRET


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Builds a stripe-signature header the same way Stripe does."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(event_type: str, obj: dict, event_id: str = "evt_test_1") -> str:
    return json.dumps({"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}})


@pytest.fixture
def post_event(client, webhook_secret):
    """
    Posts a Stripe event; pass `signature` to override the valid one.
    """
    def _post(event_type, obj, event_id="evt_test_1", signature=None, timestamp=None):
        payload = make_event(event_type, obj, event_id)
        headers = {
            "Content-Type": "application/json",
            "stripe-signature": signature if signature is not None else sign_payload(payload, timestamp=timestamp),
        }
        return client.post("/webhooks/stripe", content=payload, headers=headers)

    return _post


@pytest.fixture
def stripe_calls(monkeypatch):
    """
    Records Stripe session creation instead of calling the API.
    """
    calls = {"checkout": [], "portal": []}

    def fake_checkout_create(**params):
        calls["checkout"].append(params)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.test/cs_test_1")

    def fake_portal_create(**params):
        calls["portal"].append(params)
        return SimpleNamespace(id="bps_test_1", url="https://billing.stripe.test/bps_test_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_checkout_create)
    monkeypatch.setattr(stripe.billing_portal.Session, "create", fake_portal_create)
    return calls
