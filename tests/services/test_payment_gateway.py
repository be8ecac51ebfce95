"""
Tests for the Stripe adapter.

The Stripe SDK calls are patched, so nothing leaves the process.
"""

from decimal import Decimal

import pytest
import stripe

from league_registry.config import Settings
from league_registry.errors import GatewayUnavailable
from league_registry.services import payment_gateway
from league_registry.services.payment_gateway import (
    StripeGateway,
    from_cents,
    get_payment_gateway,
    to_cents,
)


def stripe_intent(**overrides):
    intent = {
        "id": "pi_123",
        "status": "requires_payment_method",
        "amount": 15000,
        "amount_received": 0,
        "currency": "usd",
        "client_secret": "pi_123_secret_abc",
        "metadata": {"registration_id": "7"},
    }
    intent.update(overrides)
    return intent


@pytest.fixture
def gateway(monkeypatch):
    # StripeGateway configures the SDK globally; restore it afterwards
    monkeypatch.setattr(stripe, "default_http_client", None)
    monkeypatch.setattr(stripe, "max_network_retries", 0)
    return StripeGateway("sk_test_123", timeout=5, max_retries=3)


class TestAmountConversion:

    def test_to_cents(self):
        assert to_cents(Decimal("150.00")) == 15000

    def test_to_cents_rounds_half_up(self):
        assert to_cents(Decimal("10.005")) == 1001

    def test_from_cents(self):
        assert from_cents(4999) == Decimal("49.99")


class TestStripeGateway:

    def test_configures_sdk(self, gateway):
        assert stripe.max_network_retries == 3
        assert isinstance(stripe.default_http_client, stripe.RequestsClient)

    def test_create_intent_sends_cents(self, gateway, monkeypatch):
        calls = []

        def fake_create(**kwargs):
            calls.append(kwargs)
            return stripe_intent()

        monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

        intent = gateway.create_intent(
            Decimal("150.00"), "usd", {"registration_id": "7"}
        )

        assert calls[0]["amount"] == 15000
        assert calls[0]["api_key"] == "sk_test_123"
        assert calls[0]["metadata"] == {"registration_id": "7"}
        assert intent.id == "pi_123"
        assert intent.amount == Decimal("150.00")
        assert intent.client_secret == "pi_123_secret_abc"
        assert intent.succeeded is False

    def test_create_intent_failure_is_unavailable(self, gateway, monkeypatch):
        def fake_create(**kwargs):
            raise stripe.APIConnectionError("connection reset")

        monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

        with pytest.raises(GatewayUnavailable):
            gateway.create_intent(Decimal("150.00"), "usd", {})

    def test_retrieve_uses_amount_received(self, gateway, monkeypatch):
        monkeypatch.setattr(
            stripe.PaymentIntent, "retrieve",
            lambda intent_id, **kwargs: stripe_intent(
                status="succeeded", amount_received=15000
            ),
        )

        intent = gateway.retrieve_intent("pi_123")

        assert intent.succeeded is True
        assert intent.amount == Decimal("150.00")
        assert intent.metadata == {"registration_id": "7"}

    def test_retrieve_unknown_intent_is_not_succeeded(self, gateway, monkeypatch):
        def fake_retrieve(intent_id, **kwargs):
            raise stripe.InvalidRequestError("No such payment_intent", "intent")

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake_retrieve)

        intent = gateway.retrieve_intent("pi_missing")
        assert intent.status == "not_found"
        assert intent.succeeded is False

    def test_retrieve_outage_is_unavailable(self, gateway, monkeypatch):
        def fake_retrieve(intent_id, **kwargs):
            raise stripe.APIConnectionError("timed out")

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake_retrieve)

        with pytest.raises(GatewayUnavailable):
            gateway.retrieve_intent("pi_123")


class TestGetPaymentGateway:

    def test_missing_key_means_no_gateway(self, monkeypatch):
        settings = Settings()
        settings.STRIPE_SECRET_KEY = ""
        monkeypatch.setattr(payment_gateway, "get_settings", lambda: settings)

        assert get_payment_gateway() is None
