"""
Domain errors.

Every failure the services can report is a LeagueError subclass
carrying a machine-readable code, the HTTP status it maps to, and
optional diagnostic fields. Services raise them; the API layer
turns them into HTTP responses without inspecting the message.
"""

from decimal import Decimal
from typing import Any


class LeagueError(Exception):
    """Base class for all errors surfaced to API clients."""

    code: str = "LEAGUE_ERROR"
    status_code: int = 400

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_detail(self) -> dict[str, Any]:
        """Body placed under "detail" in the HTTP error response."""
        detail: dict[str, Any] = {"error": self.code, "message": self.message}
        for key, value in self.details.items():
            detail[key] = str(value) if isinstance(value, Decimal) else value
        return detail


# --- Validation (caller's fault, never retried) ---

class ValidationFailed(LeagueError):
    code = "VALIDATION_ERROR"
    status_code = 400


class NoFieldsProvided(ValidationFailed):
    code = "NO_FIELDS_PROVIDED"

    def __init__(self, message: str = "At least one field must be provided"):
        super().__init__(message)


class InvalidAmount(ValidationFailed):
    code = "INVALID_AMOUNT"


class InvalidRosterEntry(ValidationFailed):
    code = "INVALID_ROSTER_ENTRY"


class InvalidReportFormat(ValidationFailed):
    code = "INVALID_REPORT_FORMAT"


class PaymentRegistrationMismatch(ValidationFailed):
    code = "PAYMENT_REGISTRATION_MISMATCH"


# --- State conflicts (caller must change input) ---

class StateConflict(LeagueError):
    code = "STATE_CONFLICT"
    status_code = 400


class DuplicateRegistration(StateConflict):
    code = "DUPLICATE_REGISTRATION"
    status_code = 409


class ProgramInactive(StateConflict):
    code = "PROGRAM_INACTIVE"


class RegistrationNotOpenYet(StateConflict):
    code = "REGISTRATION_NOT_OPEN_YET"


class RegistrationClosed(StateConflict):
    code = "REGISTRATION_CLOSED"


class CapacityExceeded(StateConflict):
    code = "CAPACITY_EXCEEDED"


class ExceedsBalanceDue(StateConflict):
    code = "EXCEEDS_BALANCE_DUE"


class PaymentNotSucceeded(StateConflict):
    code = "PAYMENT_NOT_SUCCEEDED"


class InvalidStatusTransition(StateConflict):
    code = "INVALID_STATUS_TRANSITION"
    status_code = 409


class RosterConflict(StateConflict):
    code = "ROSTER_CONFLICT"
    status_code = 409


class RecordInUse(StateConflict):
    code = "RECORD_IN_USE"
    status_code = 409


# --- Not found ---

class NotFound(LeagueError):
    code = "NOT_FOUND"
    status_code = 404


class RegistrationNotFound(NotFound):
    code = "REGISTRATION_NOT_FOUND"


class ProgramNotFound(NotFound):
    code = "PROGRAM_NOT_FOUND"


class PlayerNotFound(NotFound):
    code = "PLAYER_NOT_FOUND"


class TeamNotFound(NotFound):
    code = "TEAM_NOT_FOUND"


class RosterEntryNotFound(NotFound):
    code = "ROSTER_ENTRY_NOT_FOUND"


# --- Collaborators unavailable (safe to retry with backoff) ---

class CollaboratorUnavailable(LeagueError):
    code = "SERVICE_UNAVAILABLE"
    status_code = 503


class GatewayUnavailable(CollaboratorUnavailable):
    code = "GATEWAY_UNAVAILABLE"


class StorageUnavailable(CollaboratorUnavailable):
    code = "STORAGE_UNAVAILABLE"


# --- Authorization ---

class Unauthorized(LeagueError):
    code = "UNAUTHORIZED"
    status_code = 401


class Forbidden(LeagueError):
    code = "FORBIDDEN"
    status_code = 403
