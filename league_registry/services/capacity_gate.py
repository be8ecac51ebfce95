"""
Admission checks for a program: capacity and registration window.

These are pure functions over a snapshot. The caller supplies
the active-registration count and the current time, and is
responsible for taking them inside the same transaction that
inserts the registration.
"""

from datetime import datetime

from league_registry.errors import RegistrationNotOpenYet, RegistrationClosed
from league_registry.models.enums import RegistrationStatus
from league_registry.models.program import Program


# Registrations in these statuses occupy a place in the program
ACTIVE_STATUSES = (
    RegistrationStatus.PENDING,
    RegistrationStatus.CONFIRMED,
)


def can_admit(capacity: int | None, active_count: int) -> bool:
    """True if the program has room for one more registration."""
    return capacity is None or active_count < capacity


def check_registration_window(program: Program, now: datetime) -> None:
    """
    Raise if registration for the program is not open at `now`.

    Both ends of the window are inclusive.
    """
    if now < program.registration_open_at:
        raise RegistrationNotOpenYet(
            f"Registration for program {program.id} opens at "
            f"{program.registration_open_at.isoformat()}",
            opens_at=program.registration_open_at.isoformat(),
        )
    if now > program.registration_close_at:
        raise RegistrationClosed(
            f"Registration for program {program.id} closed at "
            f"{program.registration_close_at.isoformat()}",
            closed_at=program.registration_close_at.isoformat(),
        )
