import pytest

from app.core.config import settings

CHECKOUT_SESSION = {
    "id": "cs_test_1",
    "object": "checkout.session",
    "client_reference_id": "user-1",
    "customer": "cus_123",
}


@pytest.fixture
def profile(fake_supabase):
    return fake_supabase.add_profile("user-1", email="shopper@example.com")


def test_invalid_signature_is_rejected_without_writes(post_event, fake_supabase, profile):
    response = post_event(
        "checkout.session.completed",
        CHECKOUT_SESSION,
        signature="t=1700000000,v1=deadbeef",
    )
    assert response.status_code == 400
    assert response.json()["code"] == "WEBHOOK_ERROR"
    assert fake_supabase.writes == []
    assert profile["subscription_status"] is None


def test_missing_signature_header_is_rejected(client, webhook_secret, fake_supabase):
    response = client.post(
        "/webhooks/stripe",
        content=b'{"type": "checkout.session.completed"}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert fake_supabase.writes == []


def test_unset_webhook_secret_rejects_everything(post_event, fake_supabase, monkeypatch):
    response = post_event("checkout.session.completed", CHECKOUT_SESSION)
    assert response.status_code == 200

    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", None)
    response = post_event("checkout.session.completed", CHECKOUT_SESSION)
    assert response.status_code == 400


def test_checkout_completed_links_customer_and_activates(post_event, fake_supabase, profile):
    response = post_event("checkout.session.completed", CHECKOUT_SESSION)

    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert profile["stripe_customer_id"] == "cus_123"
    assert profile["subscription_status"] == "active"
    assert len(fake_supabase.writes) == 1
    table, params, _ = fake_supabase.writes[0]
    assert table == "profiles"
    assert params == {"id": "eq.user-1"}


def test_subscription_deleted_overwrites_active(post_event, fake_supabase, profile):
    post_event("checkout.session.completed", CHECKOUT_SESSION)

    response = post_event(
        "customer.subscription.deleted",
        {"id": "sub_1", "object": "subscription", "customer": "cus_123", "status": "canceled"},
        event_id="evt_test_2",
    )

    assert response.status_code == 200
    assert profile["subscription_status"] == "canceled"
    assert profile["stripe_customer_id"] == "cus_123"
    assert len(fake_supabase.writes) == 2


def test_subscription_updated_with_expanded_customer(post_event, fake_supabase):
    profile = fake_supabase.add_profile("user-2", stripe_customer_id="cus_456", subscription_status="active")

    response = post_event(
        "customer.subscription.updated",
        {"id": "sub_2", "customer": {"id": "cus_456", "object": "customer"}, "status": "past_due"},
    )

    assert response.status_code == 200
    assert profile["subscription_status"] == "past_due"


def test_unrecognized_event_is_acknowledged_without_writes(post_event, fake_supabase, profile):
    response = post_event("invoice.paid", {"id": "in_1", "customer": "cus_123"})
    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert fake_supabase.writes == []


def test_checkout_without_reference_id_is_skipped(post_event, fake_supabase, profile):
    session = dict(CHECKOUT_SESSION, client_reference_id=None)
    response = post_event("checkout.session.completed", session)
    assert response.status_code == 200
    assert fake_supabase.writes == []


def test_store_failure_returns_500_so_stripe_retries(post_event, fake_supabase, profile):
    fake_supabase.fail_writes = True
    response = post_event("checkout.session.completed", CHECKOUT_SESSION)
    assert response.status_code == 500
    assert response.json()["code"] == "PROFILE_STORE_ERROR"


def test_stale_signature_timestamp_is_rejected(post_event, fake_supabase, profile):
    response = post_event("checkout.session.completed", CHECKOUT_SESSION, timestamp=1)
    assert response.status_code == 400
    assert fake_supabase.writes == []
