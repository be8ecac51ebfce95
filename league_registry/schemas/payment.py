"""
Pydantic schemas for payment operations.

Amounts are not constrained to be positive here: the recorder
rejects non-positive amounts itself with INVALID_AMOUNT, so the
client sees the same error whether it calls the API or the
service.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from league_registry.models.enums import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    """Manual payment entered by an operator (cash, check, ...)."""
    registration_id: int
    amount: Decimal = Field(decimal_places=2)
    method: PaymentMethod


class PaymentIntentCreate(BaseModel):
    registration_id: int
    amount: Decimal = Field(decimal_places=2)


class PaymentIntentResponse(BaseModel):
    payment_id: int
    payment_intent_id: str
    client_secret: str
    amount: Decimal
    currency: str


class PaymentConfirm(BaseModel):
    gateway_transaction_id: str = Field(min_length=1, max_length=255)
    registration_id: int


class PaymentResponse(BaseModel):
    id: int
    registration_id: int
    amount: Decimal
    method: PaymentMethod
    status: PaymentStatus
    gateway_transaction_id: str | None
    processed_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentConfirmResponse(BaseModel):
    payment: PaymentResponse
    registration_status: str
    balance_due: Decimal
    # True when this transaction id had already been confirmed
    replayed: bool
