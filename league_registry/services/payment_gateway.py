"""
Payment gateway adapter.

The registration lifecycle only needs two things from a gateway:
issue a payment intent the browser can complete, and report the
terminal state of an intent afterwards. StripeGateway provides
both on top of the Stripe SDK; tests substitute a fake through
the same protocol.

Amounts cross this boundary as Decimal currency units. Stripe
works in the smallest currency unit (cents), so conversion
happens here and nowhere else.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from typing import Protocol

import stripe

from league_registry.config import get_settings
from league_registry.errors import GatewayUnavailable

logger = logging.getLogger(__name__)

CURRENCY_TO_CENTS_MULTIPLIER = 100
SUCCEEDED = "succeeded"


@dataclass
class GatewayIntent:
    """Gateway-neutral view of a payment intent."""
    id: str
    status: str
    amount: Decimal
    currency: str
    client_secret: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


class PaymentGateway(Protocol):

    def create_intent(
        self, amount: Decimal, currency: str, metadata: dict[str, str]
    ) -> GatewayIntent:
        ...

    def retrieve_intent(self, intent_id: str) -> GatewayIntent:
        ...


def to_cents(amount: Decimal) -> int:
    return int(
        (amount * CURRENCY_TO_CENTS_MULTIPLIER).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
    )


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / CURRENCY_TO_CENTS_MULTIPLIER).quantize(Decimal("0.01"))


class StripeGateway:
    """PaymentGateway backed by Stripe PaymentIntents."""

    def __init__(self, api_key: str, timeout: int, max_retries: int):
        self.api_key = api_key
        stripe.max_network_retries = max_retries
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    def create_intent(
        self, amount: Decimal, currency: str, metadata: dict[str, str]
    ) -> GatewayIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=to_cents(amount),
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.exception(
                "Stripe create_intent failed for metadata=%s", metadata
            )
            raise GatewayUnavailable(
                "Payment gateway is unavailable, please retry"
            ) from e
        return self._to_intent(intent)

    def retrieve_intent(self, intent_id: str) -> GatewayIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            # Unknown intent id: report it as a non-successful payment
            logger.warning("Stripe has no intent %s: %s", intent_id, e)
            return GatewayIntent(
                id=intent_id, status="not_found",
                amount=Decimal("0"), currency="",
            )
        except stripe.StripeError as e:
            logger.exception("Stripe retrieve_intent failed for %s", intent_id)
            raise GatewayUnavailable(
                "Payment gateway is unavailable, please retry"
            ) from e
        return self._to_intent(intent)

    @staticmethod
    def _to_intent(intent) -> GatewayIntent:
        # amount_received is zero until the intent succeeds
        cents = intent.get("amount_received") or intent["amount"]
        return GatewayIntent(
            id=intent["id"],
            status=intent["status"],
            amount=from_cents(cents),
            currency=intent["currency"],
            client_secret=intent.get("client_secret"),
            metadata=dict(intent.get("metadata") or {}),
        )


@lru_cache()
def _stripe_gateway(api_key: str, timeout: int, max_retries: int) -> StripeGateway:
    return StripeGateway(api_key, timeout, max_retries)


def get_payment_gateway() -> PaymentGateway | None:
    """
    FastAPI dependency returning the configured gateway.

    Returns None without a Stripe key. PaymentRecorder raises
    GatewayUnavailable only when an operation actually needs the
    gateway, so replayed confirmations still succeed.
    """
    settings = get_settings()
    if not settings.STRIPE_SECRET_KEY:
        return None
    return _stripe_gateway(
        settings.STRIPE_SECRET_KEY,
        settings.STRIPE_TIMEOUT_SECONDS,
        settings.STRIPE_MAX_RETRIES,
    )
