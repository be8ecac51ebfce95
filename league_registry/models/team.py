"""
Team and roster entry models.

A roster entry assigns a player to a team for a date range.
An entry with no end date, or an end date not yet passed,
is active.
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Text, Date, DateTime, Integer, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league_registry.models.base import Base


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    organization: Mapped[str] = mapped_column(String(200), nullable=False)
    division: Mapped[str | None] = mapped_column(String(100), nullable=True)
    age_group: Mapped[str | None] = mapped_column(String(100), nullable=True)
    skill_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    roster_entries: Mapped[list["RosterEntry"]] = relationship(
        back_populates="team"
    )

    def __repr__(self) -> str:
        return f"<Team {self.name}>"


class RosterEntry(Base):
    __tablename__ = "roster_entries"
    __table_args__ = (
        UniqueConstraint(
            "team_id", "player_id", "start_date",
            name="uq_roster_team_player_start",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id"), nullable=False, index=True
    )
    player_id: Mapped[int] = mapped_column(
        ForeignKey("players.id"), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    jersey_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    position: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    team: Mapped["Team"] = relationship(back_populates="roster_entries")
    player: Mapped["Player"] = relationship(back_populates="roster_entries")

    def is_active_on(self, day: date) -> bool:
        """Active unless the end date has already passed."""
        return self.end_date is None or self.end_date >= day

    def __repr__(self) -> str:
        return f"<RosterEntry team={self.team_id} player={self.player_id}>"
