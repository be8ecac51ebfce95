"""
Team and roster API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.errors import LeagueError
from league_registry.models.base import get_db
from league_registry.services.roster_service import RosterService
from league_registry.schemas.roster import (
    RosterEntryCreate,
    RosterEntryResponse,
    RosterEntryUpdate,
    TeamCreate,
    TeamResponse,
    TeamRosterResponse,
)

router = APIRouter(tags=["Teams"])


@router.post(
    "/teams",
    response_model=TeamResponse,
    status_code=201,
    dependencies=[Depends(require_operator)],
)
def create_team(
    request: TeamCreate,
    db: Session = Depends(get_db),
):
    team = RosterService(db).create_team(request)
    db.commit()
    return team


@router.get("/teams", response_model=list[TeamResponse])
def list_teams(db: Session = Depends(get_db)):
    return RosterService(db).list_teams()


@router.get("/teams/{team_id}", response_model=TeamResponse)
def get_team(
    team_id: int,
    db: Session = Depends(get_db),
):
    try:
        return RosterService(db).get_team(team_id)
    except LeagueError as e:
        raise http_error(e)


@router.put(
    "/teams/{team_id}",
    response_model=TeamResponse,
    dependencies=[Depends(require_operator)],
)
def update_team(
    team_id: int,
    request: TeamCreate,
    db: Session = Depends(get_db),
):
    service = RosterService(db)
    try:
        team = service.update_team(team_id, request)
        db.commit()
        return team
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.delete(
    "/teams/{team_id}",
    status_code=204,
    dependencies=[Depends(require_operator)],
)
def delete_team(
    team_id: int,
    db: Session = Depends(get_db),
):
    """Delete a team. Refused with 409 while it has roster entries."""
    service = RosterService(db)
    try:
        service.delete_team(team_id)
        db.commit()
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


# --- Roster Endpoints ---

@router.post(
    "/teams/{team_id}/roster",
    response_model=RosterEntryResponse,
    status_code=201,
    dependencies=[Depends(require_operator)],
)
def add_to_roster(
    team_id: int,
    request: RosterEntryCreate,
    db: Session = Depends(get_db),
):
    """
    Add a player to a team roster.

    Jersey numbers are unique among the team's active players,
    and a player cannot hold two overlapping spots on one team.
    """
    service = RosterService(db)
    try:
        entry = service.add_to_roster(team_id, request)
        db.commit()
        return entry
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/teams/{team_id}/roster", response_model=TeamRosterResponse)
def get_team_roster(
    team_id: int,
    db: Session = Depends(get_db),
):
    """Active roster for a team, ordered by jersey number."""
    try:
        team, entries = RosterService(db).get_roster(team_id)
    except LeagueError as e:
        raise http_error(e)
    return TeamRosterResponse(
        team=TeamResponse.model_validate(team),
        roster=[RosterEntryResponse.model_validate(e) for e in entries],
    )


@router.put(
    "/roster/{roster_entry_id}",
    response_model=RosterEntryResponse,
    dependencies=[Depends(require_operator)],
)
def update_roster_entry(
    roster_entry_id: int,
    request: RosterEntryUpdate,
    db: Session = Depends(get_db),
):
    service = RosterService(db)
    try:
        entry = service.update_roster_entry(roster_entry_id, request)
        db.commit()
        return entry
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.delete(
    "/roster/{roster_entry_id}",
    status_code=204,
    dependencies=[Depends(require_operator)],
)
def remove_roster_entry(
    roster_entry_id: int,
    db: Session = Depends(get_db),
):
    service = RosterService(db)
    try:
        service.remove_roster_entry(roster_entry_id)
        db.commit()
    except LeagueError as e:
        db.rollback()
        raise http_error(e)
