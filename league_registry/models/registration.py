"""
Registration model.

A registration is a player's enrollment in a program. There is
at most one registration per (player, program) pair, enforced
by a unique constraint so the database rejects duplicates even
when two requests race.

The registration has a state machine governing its lifecycle.
Invalid state transitions are rejected.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Text, DateTime, Numeric, ForeignKey, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league_registry.models.base import Base
from league_registry.models.enums import RegistrationStatus


# Valid state transitions, the source of truth for the state machine
VALID_TRANSITIONS: dict[RegistrationStatus, set[RegistrationStatus]] = {
    RegistrationStatus.PENDING: {
        RegistrationStatus.CONFIRMED,
        RegistrationStatus.WAITLISTED,
        RegistrationStatus.CANCELLED,
    },
    RegistrationStatus.WAITLISTED: {
        RegistrationStatus.CONFIRMED,
        RegistrationStatus.CANCELLED,
    },
    RegistrationStatus.CONFIRMED: {RegistrationStatus.CANCELLED},
    RegistrationStatus.CANCELLED: set(),  # Terminal
}


class Registration(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint(
            "player_id", "program_id",
            name="uq_registration_player_program",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    player_id: Mapped[int] = mapped_column(
        ForeignKey("players.id"), nullable=False, index=True
    )
    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.id"), nullable=False, index=True
    )
    status: Mapped[RegistrationStatus] = mapped_column(
        SAEnum(
            RegistrationStatus,
            name="registration_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=RegistrationStatus.PENDING,
    )
    # Running sum of completed payments. Written by PaymentRecorder.
    amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    player: Mapped["Player"] = relationship(back_populates="registrations")
    program: Mapped["Program"] = relationship(back_populates="registrations")
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="registration"
    )

    @property
    def balance_due(self) -> Decimal:
        """
        Program fee minus what has been paid.

        Always derived, never stored. amount_paid can be None on a
        freshly constructed object that has not been flushed yet.
        """
        return self.program.fee - (self.amount_paid or Decimal("0"))

    def can_transition_to(self, new_status: RegistrationStatus) -> bool:
        """Check if a state transition is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return (
            f"<Registration player={self.player_id} "
            f"program={self.program_id} ({self.status.value})>"
        )
