"""
Pydantic schemas for program operations.

Program times are stored as naive UTC. Values sent with an offset
are converted to UTC on the way in; values without one are taken
to be UTC already.
"""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator


class ProgramCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    season: str | None = Field(default=None, max_length=100)
    fee: Decimal = Field(ge=0, decimal_places=2)
    capacity: int | None = Field(default=None, gt=0)
    registration_open_at: datetime
    registration_close_at: datetime
    starts_at: datetime
    ends_at: datetime
    is_active: bool = True

    @field_validator(
        "registration_open_at", "registration_close_at", "starts_at", "ends_at"
    )
    @classmethod
    def as_naive_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def dates_must_be_ordered(self) -> "ProgramCreate":
        if not self.registration_open_at < self.registration_close_at:
            raise ValueError(
                "registration_open_at must be before registration_close_at"
            )
        if not self.registration_close_at <= self.starts_at:
            raise ValueError(
                "registration must close on or before the program starts"
            )
        if not self.starts_at < self.ends_at:
            raise ValueError("starts_at must be before ends_at")
        return self


class ProgramResponse(BaseModel):
    id: int
    name: str
    description: str | None
    season: str | None
    fee: Decimal
    capacity: int | None
    registration_open_at: datetime
    registration_close_at: datetime
    starts_at: datetime
    ends_at: datetime
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
