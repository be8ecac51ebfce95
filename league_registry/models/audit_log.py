"""
Audit log model.

Records registration lifecycle events (creation, status changes,
manual corrections, payments) so an operator can reconstruct how
a registration reached its current state.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from league_registry.models.base import Base


class AuditLog(Base):
    """
    Immutable record of a lifecycle event.

    Like payments, audit rows are append-only.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_id: Mapped[int | None] = mapped_column(nullable=True, index=True)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<AuditLog {self.event_type} #{self.entity_id}>"
