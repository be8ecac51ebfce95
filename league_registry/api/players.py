"""
Player API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.errors import LeagueError
from league_registry.models.base import get_db
from league_registry.services.roster_service import RosterService
from league_registry.schemas.roster import (
    PlayerCreate,
    PlayerPage,
    PlayerResponse,
)

router = APIRouter(prefix="/players", tags=["Players"])


@router.post("", response_model=PlayerResponse, status_code=201)
def create_player(
    request: PlayerCreate,
    db: Session = Depends(get_db),
):
    """Create a new player."""
    player = RosterService(db).create_player(request)
    db.commit()
    return player


@router.get("", response_model=PlayerPage)
def list_players(
    search: str = "",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """List players by name, optionally filtered by a search term."""
    players, total = RosterService(db).list_players(search, page, limit)
    return PlayerPage(
        players=[PlayerResponse.model_validate(p) for p in players],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{player_id}", response_model=PlayerResponse)
def get_player(
    player_id: int,
    db: Session = Depends(get_db),
):
    try:
        return RosterService(db).get_player(player_id)
    except LeagueError as e:
        raise http_error(e)


@router.put(
    "/{player_id}",
    response_model=PlayerResponse,
    dependencies=[Depends(require_operator)],
)
def update_player(
    player_id: int,
    request: PlayerCreate,
    db: Session = Depends(get_db),
):
    """Replace a player's details. Required fields are validated again."""
    service = RosterService(db)
    try:
        player = service.update_player(player_id, request)
        db.commit()
        return player
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.delete(
    "/{player_id}",
    status_code=204,
    dependencies=[Depends(require_operator)],
)
def delete_player(
    player_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a player.

    Refused with 409 while the player is on an active roster
    or has any registration.
    """
    service = RosterService(db)
    try:
        service.delete_player(player_id)
        db.commit()
    except LeagueError as e:
        db.rollback()
        raise http_error(e)
