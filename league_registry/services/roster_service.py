"""
Roster service: players, teams, and team roster assignments.

The report projections read what this service writes. Roster
rules:
- a new assignment cannot start in the past
- a position, when given, cannot be blank
- a jersey number is unique among the team's active assignments
- a player cannot hold two overlapping assignments on one team

A player is deleted only once off every active roster and never
registered; their ended roster history goes with them. A team is
deleted only while its roster is empty.
"""

import logging
from datetime import date

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from league_registry.errors import (
    InvalidRosterEntry,
    PlayerNotFound,
    RecordInUse,
    RosterConflict,
    RosterEntryNotFound,
    TeamNotFound,
)
from league_registry.models.player import Player
from league_registry.models.team import Team, RosterEntry
from league_registry.schemas.roster import (
    PlayerCreate,
    TeamCreate,
    RosterEntryCreate,
    RosterEntryUpdate,
)

logger = logging.getLogger(__name__)


def _ranges_overlap(
    start_a: date, end_a: date | None, start_b: date, end_b: date | None
) -> bool:
    """Closed date ranges; a missing end date means open-ended."""
    a_before_b = end_a is not None and end_a < start_b
    b_before_a = end_b is not None and end_b < start_a
    return not (a_before_b or b_before_a)


class RosterService:

    def __init__(self, db: Session):
        self.db = db

    # --- Players ---

    def create_player(self, request: PlayerCreate) -> Player:
        player = Player(**request.model_dump())
        self.db.add(player)
        self.db.flush()
        return player

    def get_player(self, player_id: int) -> Player:
        player = self.db.get(Player, player_id)
        if not player:
            raise PlayerNotFound(f"Player {player_id} not found")
        return player

    def list_players(
        self, search: str = "", page: int = 1, limit: int = 10
    ) -> tuple[list[Player], int]:
        """Players ordered by last then first name, with optional search."""
        stmt = select(Player)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Player.first_name).like(pattern),
                func.lower(Player.last_name).like(pattern),
                func.lower(Player.email).like(pattern),
                func.lower(Player.phone).like(pattern),
                func.lower(Player.organization).like(pattern),
            ))
        total = self.db.execute(
            select(func.count()).select_from(stmt.subquery())
        ).scalar_one()
        players = self.db.execute(
            stmt.order_by(Player.last_name, Player.first_name)
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()
        return list(players), total

    def update_player(self, player_id: int, request: PlayerCreate) -> Player:
        """Replace a player's details; omitted optional fields are cleared."""
        player = self.get_player(player_id)
        for name, value in request.model_dump().items():
            setattr(player, name, value)
        self.db.flush()
        return player

    def delete_player(self, player_id: int, today: date | None = None) -> None:
        today = today or date.today()
        player = self.get_player(player_id)

        active = [e for e in player.roster_entries if e.is_active_on(today)]
        if active:
            raise RecordInUse(
                "Cannot delete a player with active roster assignments, "
                "remove them from all teams first",
                roster_entry_ids=[e.id for e in active],
            )
        if player.registrations:
            raise RecordInUse(
                f"Player {player.id} has registrations and cannot be deleted",
                registration_ids=[r.id for r in player.registrations],
            )

        for entry in player.roster_entries:
            self.db.delete(entry)
        self.db.delete(player)
        self.db.flush()
        logger.info("Player %s deleted", player_id)

    # --- Teams ---

    def create_team(self, request: TeamCreate) -> Team:
        team = Team(**request.model_dump())
        self.db.add(team)
        self.db.flush()
        return team

    def get_team(self, team_id: int) -> Team:
        team = self.db.get(Team, team_id)
        if not team:
            raise TeamNotFound(f"Team {team_id} not found", team_id=team_id)
        return team

    def list_teams(self) -> list[Team]:
        return list(
            self.db.execute(select(Team).order_by(Team.name)).scalars().all()
        )

    def update_team(self, team_id: int, request: TeamCreate) -> Team:
        team = self.get_team(team_id)
        for name, value in request.model_dump().items():
            setattr(team, name, value)
        self.db.flush()
        return team

    def delete_team(self, team_id: int) -> None:
        team = self.get_team(team_id)
        if team.roster_entries:
            raise RecordInUse(
                "Cannot delete a team with roster entries, "
                "remove all players first",
                roster_entry_ids=[e.id for e in team.roster_entries],
            )
        self.db.delete(team)
        self.db.flush()
        logger.info("Team %s deleted", team_id)

    # --- Roster ---

    def add_to_roster(
        self, team_id: int, request: RosterEntryCreate, today: date | None = None
    ) -> RosterEntry:
        """Assign a player to a team from start_date onwards."""
        today = today or date.today()
        team = self.get_team(team_id)
        player = self.get_player(request.player_id)

        if request.start_date < today:
            raise InvalidRosterEntry("Start date cannot be in the past")
        if request.position is not None and not request.position.strip():
            raise InvalidRosterEntry("Position cannot be empty")

        active = self._active_entries(team.id, today)
        if request.jersey_number is not None:
            self._check_jersey_free(active, request.jersey_number)

        for entry in active:
            if entry.player_id == player.id and _ranges_overlap(
                entry.start_date, entry.end_date, request.start_date, None
            ):
                raise RosterConflict(
                    f"Player {player.id} is already on team {team.id} "
                    f"from {entry.start_date.isoformat()}",
                    roster_entry_id=entry.id,
                )

        entry = RosterEntry(
            team_id=team.id,
            player_id=player.id,
            start_date=request.start_date,
            jersey_number=request.jersey_number,
            position=request.position,
        )
        self.db.add(entry)
        self.db.flush()
        logger.info("Player %s added to team %s roster", player.id, team.id)
        return entry

    def get_roster(
        self, team_id: int, today: date | None = None
    ) -> tuple[Team, list[RosterEntry]]:
        """Active roster entries for a team, ordered by jersey number."""
        today = today or date.today()
        team = self.get_team(team_id)
        entries = sorted(
            self._active_entries(team.id, today),
            key=lambda e: (e.jersey_number is None, e.jersey_number or 0, e.id),
        )
        return team, entries

    def update_roster_entry(
        self,
        roster_entry_id: int,
        request: RosterEntryUpdate,
        today: date | None = None,
    ) -> RosterEntry:
        today = today or date.today()
        entry = self._get_entry(roster_entry_id)
        fields = request.model_fields_set

        if "position" in fields and request.position is not None \
                and not request.position.strip():
            raise InvalidRosterEntry("Position cannot be empty")
        if "end_date" in fields and request.end_date is not None \
                and request.end_date < entry.start_date:
            raise InvalidRosterEntry("End date cannot be before start date")
        if (
            "jersey_number" in fields
            and request.jersey_number is not None
            and request.jersey_number != entry.jersey_number
        ):
            others = [
                e for e in self._active_entries(entry.team_id, today)
                if e.id != entry.id
            ]
            self._check_jersey_free(others, request.jersey_number)

        for name in ("jersey_number", "position", "end_date"):
            if name in fields:
                setattr(entry, name, getattr(request, name))
        self.db.flush()
        return entry

    def remove_roster_entry(self, roster_entry_id: int) -> None:
        entry = self._get_entry(roster_entry_id)
        self.db.delete(entry)
        self.db.flush()
        logger.info(
            "Player %s removed from team %s roster", entry.player_id, entry.team_id
        )

    def _get_entry(self, roster_entry_id: int) -> RosterEntry:
        entry = self.db.get(RosterEntry, roster_entry_id)
        if not entry:
            raise RosterEntryNotFound(f"Roster entry {roster_entry_id} not found")
        return entry

    def _active_entries(self, team_id: int, today: date) -> list[RosterEntry]:
        return list(self.db.execute(
            select(RosterEntry).where(
                RosterEntry.team_id == team_id,
                or_(RosterEntry.end_date.is_(None), RosterEntry.end_date >= today),
            )
        ).scalars().all())

    @staticmethod
    def _check_jersey_free(entries: list[RosterEntry], jersey_number: int) -> None:
        for entry in entries:
            if entry.jersey_number == jersey_number:
                raise RosterConflict(
                    f"Jersey number {jersey_number} is already taken in this team",
                    roster_entry_id=entry.id,
                )
