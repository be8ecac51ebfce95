"""
Pydantic schemas for report projections.

Each row model's field order is also the CSV column order.
"""

import enum
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from league_registry.models.enums import RosterStatus


class ReportKind(str, enum.Enum):
    ROSTER = "roster"
    PLAYER_CONTACT = "player-contact"
    TEAM_SUMMARY = "team-summary"


class ReportFormat(str, enum.Enum):
    JSON = "json"
    CSV = "csv"
    PDF = "pdf"


class RosterScope(str, enum.Enum):
    ACTIVE = "active"
    ALL = "all"


class RosterReportRow(BaseModel):
    team_id: int
    team_name: str
    player_id: int
    player_name: str
    player_email: str | None
    organization: str | None
    jersey_number: int | None
    position: str | None
    start_date: date
    end_date: date | None
    status: RosterStatus


class ContactReportRow(BaseModel):
    player_id: int
    player_name: str
    player_email: str | None
    player_phone: str | None
    team_names: str
    organization: str | None
    parent_guardian_name: str | None
    parent_guardian_email: str | None
    parent_guardian_phone: str | None
    emergency_contact: str | None


class TeamSummaryRow(BaseModel):
    team_id: int
    team_name: str
    organization: str
    division: str | None
    age_group: str | None
    skill_level: str | None
    active_player_count: int
    total_player_count: int


class ReportResponse(BaseModel):
    report_type: ReportKind
    generated_at: datetime
    row_count: int
    rows: list[dict[str, Any]]
