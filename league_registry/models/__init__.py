"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from league_registry.models.base import Base
from league_registry.models.enums import (
    RegistrationStatus,
    PaymentMethod,
    PaymentStatus,
    RosterStatus,
)
from league_registry.models.audit_log import AuditLog
from league_registry.models.program import Program
from league_registry.models.player import Player
from league_registry.models.team import Team, RosterEntry
from league_registry.models.registration import Registration
from league_registry.models.payment import Payment

__all__ = [
    "Base",
    "RegistrationStatus",
    "PaymentMethod",
    "PaymentStatus",
    "RosterStatus",
    "AuditLog",
    "Program",
    "Player",
    "Team",
    "RosterEntry",
    "Registration",
    "Payment",
]
