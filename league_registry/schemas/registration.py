"""
Pydantic schemas for registration operations.

RegistrationUpdate is an explicit partial-update record: every
field an operator may correct is listed here, and nothing else
can be changed through the administrative update.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from league_registry.models.enums import RegistrationStatus


class RegistrationCreate(BaseModel):
    player_id: int
    program_id: int
    notes: str | None = Field(default=None, max_length=2000)


class RegistrationStatusUpdate(BaseModel):
    """Request to move a registration through the state machine."""
    new_status: RegistrationStatus


class RegistrationUpdate(BaseModel):
    """Operator correction. Unset fields are left alone."""
    status: RegistrationStatus | None = None
    notes: str | None = Field(default=None, max_length=2000)
    amount_paid: Decimal | None = Field(default=None, ge=0, decimal_places=2)


class RegistrationFilters(BaseModel):
    player_id: int | None = None
    program_id: int | None = None
    status: RegistrationStatus | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class RegistrationResponse(BaseModel):
    id: int
    player_id: int
    program_id: int
    status: RegistrationStatus
    amount_paid: Decimal
    balance_due: Decimal
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class RegistrationPage(BaseModel):
    registrations: list[RegistrationResponse]
    pagination: Pagination
