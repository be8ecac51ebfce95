"""
Payment model.

Payments are append-only. A completed payment is never modified
or deleted. The only mutation a payment ever sees is the single
pending -> completed step when a gateway confirms it.

Gateway idempotency is enforced via the gateway_transaction_id
unique constraint.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league_registry.models.base import Base
from league_registry.models.enums import PaymentMethod, PaymentStatus


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    registration_id: Mapped[int] = mapped_column(
        ForeignKey("registrations.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False
    )
    method: Mapped[PaymentMethod] = mapped_column(
        SAEnum(
            PaymentMethod,
            name="payment_method_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(
            PaymentStatus,
            name="payment_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    gateway_transaction_id: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True, index=True
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    registration: Mapped["Registration"] = relationship(
        back_populates="payments"
    )

    def __repr__(self) -> str:
        return (
            f"<Payment {self.method.value} "
            f"{self.amount} ({self.status.value})>"
        )
