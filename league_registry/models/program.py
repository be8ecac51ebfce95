"""
Program model.

A program is something a player enrolls in: a season, a camp,
a clinic. Its fee, capacity and registration window gate every
registration. The registration lifecycle only reads programs;
it never changes them.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Text, Boolean, DateTime, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league_registry.models.base import Base


class Program(Base):
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    season: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    # None means unbounded
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    registration_open_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False
    )
    registration_close_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    registrations: Mapped[list["Registration"]] = relationship(
        back_populates="program"
    )

    def __repr__(self) -> str:
        return f"<Program {self.name} fee={self.fee}>"
