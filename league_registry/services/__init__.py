"""Business logic services."""

from league_registry.services.program_catalog import ProgramCatalog
from league_registry.services.registration_ledger import RegistrationLedger
from league_registry.services.payment_recorder import PaymentRecorder
from league_registry.services.report_projector import ReportProjector
from league_registry.services.roster_service import RosterService

__all__ = [
    "ProgramCatalog",
    "RegistrationLedger",
    "PaymentRecorder",
    "ReportProjector",
    "RosterService",
]
