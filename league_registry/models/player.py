"""
Player model.

A player can register for many programs and appear on
many team rosters. Guardian and emergency contact fields
feed the contact report.
"""

from datetime import date, datetime

from sqlalchemy import String, Text, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league_registry.models.base import Base


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    organization: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    medical_alerts: Mapped[str | None] = mapped_column(Text, nullable=True)
    emergency_contact_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True
    )
    emergency_contact_phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    emergency_contact_relation: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    parent_guardian_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True
    )
    parent_guardian_email: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    parent_guardian_phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    registrations: Mapped[list["Registration"]] = relationship(
        back_populates="player"
    )
    roster_entries: Mapped[list["RosterEntry"]] = relationship(
        back_populates="player"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Player {self.first_name} {self.last_name}>"
