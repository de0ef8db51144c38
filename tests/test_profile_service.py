import asyncio
import logging

import httpx
import pytest

from app.core.exceptions import AuthenticationError, ProfileStoreError
from app.core.logging import ContextFilter
from app.db import supabase
from app.services import profile_service


def test_update_status_filters_by_customer(fake_supabase):
    fake_supabase.add_profile("user-1", stripe_customer_id="cus_1", subscription_status="active")
    other = fake_supabase.add_profile("user-2", stripe_customer_id="cus_2", subscription_status="active")

    asyncio.run(profile_service.update_subscription_status("cus_1", "canceled"))

    assert fake_supabase.profiles["user-1"]["subscription_status"] == "canceled"
    assert other["subscription_status"] == "active"
    _, params, body = fake_supabase.writes[0]
    assert params == {"stripe_customer_id": "eq.cus_1"}
    assert body == {"subscription_status": "canceled"}


def test_get_profile_returns_none_for_missing_row(fake_supabase):
    assert asyncio.run(profile_service.get_profile("ghost")) is None


def test_get_profile_parses_row(fake_supabase):
    fake_supabase.add_profile("user-1", subscription_status="trialing")
    profile = asyncio.run(profile_service.get_profile("user-1"))
    assert profile.plan == "trialing"
    assert profile.is_premium is False


def test_http_error_status_raises_profile_store_error(fake_supabase):
    fake_supabase.fail_writes = True
    with pytest.raises(ProfileStoreError) as exc_info:
        asyncio.run(profile_service.link_stripe_customer("user-1", "cus_1"))
    assert "503" in exc_info.value.message


def test_transport_error_raises_profile_store_error(monkeypatch):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(
        supabase,
        "_client",
        httpx.AsyncClient(base_url="https://down.test", transport=httpx.MockTransport(unreachable)),
    )
    with pytest.raises(ProfileStoreError) as exc_info:
        asyncio.run(profile_service.update_subscription_status("cus_1", "active"))
    assert "connection refused" in exc_info.value.message


def test_unknown_token_raises_authentication_error(fake_supabase):
    with pytest.raises(AuthenticationError):
        asyncio.run(profile_service.get_user_from_token("bad-token"))


def test_uninitialized_client_is_an_error(monkeypatch):
    monkeypatch.setattr(supabase, "_client", None)
    with pytest.raises(RuntimeError):
        supabase.get_supabase_client()


def test_overlapping_calls_keep_their_own_log_context(monkeypatch):
    delays = {"eq.user-a": 0.01, "eq.user-b": 0.05}

    async def slow_store(request):
        await asyncio.sleep(delays[request.url.params["id"]])
        return httpx.Response(204)

    monkeypatch.setattr(
        supabase,
        "_client",
        httpx.AsyncClient(base_url="https://project.supabase.test", transport=httpx.MockTransport(slow_store)),
    )

    records = []

    class Collector(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Collector()
    handler.addFilter(ContextFilter())
    app_logger = logging.getLogger("smartsaver")
    app_logger.addHandler(handler)
    factory = logging.getLogRecordFactory()

    async def link_both():
        await asyncio.gather(
            profile_service.link_stripe_customer("user-a", "cus_a"),
            profile_service.link_stripe_customer("user-b", "cus_b"),
        )

    try:
        asyncio.run(link_both())
        logging.getLogger("smartsaver.tests").warning("after both links")
    finally:
        app_logger.removeHandler(handler)

    linked = [r for r in records if r.getMessage() == "Stripe customer linked to profile"]
    assert {(r.user_id, r.customer_id) for r in linked} == {("user-a", "cus_a"), ("user-b", "cus_b")}
    assert logging.getLogRecordFactory() is factory
    assert not hasattr(records[-1], "user_id")
    assert not hasattr(records[-1], "customer_id")
