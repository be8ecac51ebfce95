"""
Payment API endpoints.

Card payments go through the gateway in two steps: the client
asks for an intent, completes it in the browser, then asks us to
confirm it. Manual payments (cash, check, ...) are recorded
directly by an operator.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.config import Settings, get_settings
from league_registry.errors import LeagueError
from league_registry.models.base import get_db
from league_registry.models.enums import PaymentStatus
from league_registry.services.payment_gateway import PaymentGateway, get_payment_gateway
from league_registry.services.payment_recorder import PaymentRecorder
from league_registry.schemas.payment import (
    PaymentConfirm,
    PaymentConfirmResponse,
    PaymentCreate,
    PaymentIntentCreate,
    PaymentIntentResponse,
    PaymentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/create-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    request: PaymentIntentCreate,
    db: Session = Depends(get_db),
    gateway: PaymentGateway | None = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    """Open a gateway payment intent and return its client secret."""
    service = PaymentRecorder(db, gateway)
    try:
        payment, intent = service.create_payment_intent(
            request.registration_id, request.amount, settings.CURRENCY
        )
        db.commit()
    except LeagueError as e:
        db.rollback()
        if e.status_code >= 500:
            logger.error(
                "create-intent failed for registration %s: %s",
                request.registration_id, e.message,
            )
        raise http_error(e)

    return PaymentIntentResponse(
        payment_id=payment.id,
        payment_intent_id=intent.id,
        client_secret=intent.client_secret or "",
        amount=payment.amount,
        currency=intent.currency,
    )


@router.post("/confirm", response_model=PaymentConfirmResponse)
def confirm_payment(
    request: PaymentConfirm,
    db: Session = Depends(get_db),
    gateway: PaymentGateway | None = Depends(get_payment_gateway),
):
    """
    Confirm a gateway payment.

    Safe to retry: confirming the same transaction id again
    returns the original payment with replayed=true.
    """
    service = PaymentRecorder(db, gateway)
    try:
        payment, replayed = service.confirm_gateway_payment(
            request.gateway_transaction_id, request.registration_id
        )
        db.commit()
    except LeagueError as e:
        db.rollback()
        if e.status_code >= 500:
            logger.error(
                "confirm failed for registration %s transaction %s: %s",
                request.registration_id, request.gateway_transaction_id,
                e.message,
            )
        raise http_error(e)

    registration = payment.registration
    return PaymentConfirmResponse(
        payment=PaymentResponse.model_validate(payment),
        registration_status=registration.status.value,
        balance_due=registration.balance_due,
        replayed=replayed,
    )


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=201,
    dependencies=[Depends(require_operator)],
)
def record_payment(
    request: PaymentCreate,
    db: Session = Depends(get_db),
):
    """Record a manual payment against a registration."""
    service = PaymentRecorder(db)
    try:
        payment = service.record_payment(
            request.registration_id, request.amount, request.method
        )
        db.commit()
        return payment
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.get(
    "",
    response_model=list[PaymentResponse],
    dependencies=[Depends(require_operator)],
)
def list_payments(
    registration_id: int | None = None,
    status: PaymentStatus | None = None,
    db: Session = Depends(get_db),
):
    """Payment history, newest first."""
    return PaymentRecorder(db).list_payments(registration_id, status)
