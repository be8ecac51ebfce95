"""
Pydantic schemas for players, teams and roster entries.
"""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


# --- Player Schemas ---

class PlayerCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    organization: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    date_of_birth: date | None = None
    address: str | None = None
    medical_alerts: str | None = None
    emergency_contact_name: str | None = Field(default=None, max_length=200)
    emergency_contact_phone: str | None = Field(default=None, max_length=50)
    emergency_contact_relation: str | None = Field(default=None, max_length=100)
    parent_guardian_name: str | None = Field(default=None, max_length=200)
    parent_guardian_email: EmailStr | None = None
    parent_guardian_phone: str | None = Field(default=None, max_length=50)

    @field_validator("phone", "emergency_contact_phone", "parent_guardian_phone")
    @classmethod
    def phone_must_have_digits(cls, v: str | None) -> str | None:
        if v is not None and not any(ch.isdigit() for ch in v):
            raise ValueError("Phone number must contain digits")
        return v


class PlayerResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    organization: str
    email: str | None
    phone: str | None
    date_of_birth: date | None
    emergency_contact_name: str | None
    emergency_contact_phone: str | None
    parent_guardian_name: str | None
    parent_guardian_email: str | None
    parent_guardian_phone: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PlayerPage(BaseModel):
    players: list[PlayerResponse]
    total: int
    page: int
    limit: int


# --- Team Schemas ---

class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    organization: str = Field(min_length=1, max_length=200)
    division: str | None = Field(default=None, max_length=100)
    age_group: str | None = Field(default=None, max_length=100)
    skill_level: str | None = Field(default=None, max_length=100)
    description: str | None = None


class TeamResponse(BaseModel):
    id: int
    name: str
    organization: str
    division: str | None
    age_group: str | None
    skill_level: str | None
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Roster Schemas ---

class RosterEntryCreate(BaseModel):
    player_id: int
    start_date: date
    jersey_number: int | None = Field(default=None, ge=0, le=999)
    position: str | None = Field(default=None, max_length=50)


class RosterEntryUpdate(BaseModel):
    jersey_number: int | None = Field(default=None, ge=0, le=999)
    position: str | None = Field(default=None, max_length=50)
    end_date: date | None = None


class RosterEntryResponse(BaseModel):
    id: int
    team_id: int
    player_id: int
    start_date: date
    end_date: date | None
    jersey_number: int | None
    position: str | None

    model_config = {"from_attributes": True}


class TeamRosterResponse(BaseModel):
    team: TeamResponse
    roster: list[RosterEntryResponse]
