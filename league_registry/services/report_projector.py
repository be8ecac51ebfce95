"""
Report projections: read-only views over teams and rosters.

Nothing here writes. Each projection returns typed row models;
encoding them as JSON, CSV or PDF is the exporter's job, so every
encoding of a report carries the same rows.

"Today" is a parameter so a report for a fixed snapshot and a
fixed day is deterministic.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from league_registry.errors import TeamNotFound
from league_registry.models.enums import RosterStatus
from league_registry.models.team import Team, RosterEntry
from league_registry.schemas.report import (
    ContactReportRow,
    RosterReportRow,
    RosterScope,
    TeamSummaryRow,
)


class ReportProjector:

    def __init__(self, db: Session):
        self.db = db

    def roster(
        self,
        team_ids: list[int] | None = None,
        scope: RosterScope = RosterScope.ACTIVE,
        today: date | None = None,
    ) -> list[RosterReportRow]:
        """One row per roster assignment, grouped by team name."""
        today = today or date.today()
        rows = []
        for entry in self._entries(team_ids):
            status = (
                RosterStatus.ACTIVE if entry.is_active_on(today)
                else RosterStatus.INACTIVE
            )
            if scope == RosterScope.ACTIVE and status != RosterStatus.ACTIVE:
                continue
            player = entry.player
            rows.append(RosterReportRow(
                team_id=entry.team.id,
                team_name=entry.team.name,
                player_id=player.id,
                player_name=player.full_name,
                player_email=player.email,
                organization=player.organization,
                jersey_number=entry.jersey_number,
                position=entry.position,
                start_date=entry.start_date,
                end_date=entry.end_date,
                status=status,
            ))
        return rows

    def contacts(self, team_ids: list[int] | None = None) -> list[ContactReportRow]:
        """One row per distinct player across the selected teams."""
        by_player: dict[int, tuple] = {}
        for entry in self._entries(team_ids):
            player, team_names = by_player.setdefault(
                entry.player_id, (entry.player, set())
            )
            team_names.add(entry.team.name)

        rows = []
        for player, team_names in by_player.values():
            rows.append(ContactReportRow(
                player_id=player.id,
                player_name=player.full_name,
                player_email=player.email,
                player_phone=player.phone,
                team_names="; ".join(sorted(team_names)),
                organization=player.organization,
                parent_guardian_name=player.parent_guardian_name,
                parent_guardian_email=player.parent_guardian_email,
                parent_guardian_phone=player.parent_guardian_phone,
                emergency_contact=_emergency_contact(player),
            ))
        rows.sort(key=lambda r: (r.player_name.lower(), r.player_id))
        return rows

    def team_summary(
        self, team_ids: list[int] | None = None, today: date | None = None
    ) -> list[TeamSummaryRow]:
        """One row per team with active and total player counts."""
        today = today or date.today()
        teams = self._teams(team_ids)
        entries = self._entries([t.id for t in teams]) if teams else []

        active: dict[int, int] = {t.id: 0 for t in teams}
        total: dict[int, int] = {t.id: 0 for t in teams}
        for entry in entries:
            total[entry.team_id] += 1
            if entry.is_active_on(today):
                active[entry.team_id] += 1

        return [
            TeamSummaryRow(
                team_id=team.id,
                team_name=team.name,
                organization=team.organization,
                division=team.division,
                age_group=team.age_group,
                skill_level=team.skill_level,
                active_player_count=active[team.id],
                total_player_count=total[team.id],
            )
            for team in teams
        ]

    def _teams(self, team_ids: list[int] | None) -> list[Team]:
        """Selected teams by name; unknown ids in the filter are an error."""
        stmt = select(Team).order_by(Team.name, Team.id)
        if team_ids:
            stmt = stmt.where(Team.id.in_(team_ids))
        teams = list(self.db.execute(stmt).scalars().all())
        if team_ids:
            missing = sorted(set(team_ids) - {t.id for t in teams})
            if missing:
                raise TeamNotFound(
                    f"Teams not found: {missing}", team_ids=missing
                )
        return teams

    def _entries(self, team_ids: list[int] | None) -> list[RosterEntry]:
        if team_ids:
            self._teams(team_ids)
        stmt = (
            select(RosterEntry)
            .join(RosterEntry.team)
            .options(
                joinedload(RosterEntry.team),
                joinedload(RosterEntry.player),
            )
            .order_by(Team.name, RosterEntry.team_id, RosterEntry.id)
        )
        if team_ids:
            stmt = stmt.where(RosterEntry.team_id.in_(team_ids))
        return list(self.db.execute(stmt).scalars().unique().all())


def _emergency_contact(player) -> str | None:
    parts = [
        player.emergency_contact_name,
        f"({player.emergency_contact_relation})"
        if player.emergency_contact_relation else None,
        player.emergency_contact_phone,
    ]
    text = " ".join(p for p in parts if p)
    return text or None
