"""
Registration ledger: owns the state of every enrollment.

Creating a registration runs the admission checks in a fixed
order and inserts a PENDING row. Status changes after that are
either explicit operator actions (this service) or the automatic
confirm-on-full-payment step (PaymentRecorder).

The service never commits. The caller controls the transaction
boundary, so a rejected request leaves nothing behind.
"""

import logging
import math
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from league_registry.errors import (
    CapacityExceeded,
    DuplicateRegistration,
    InvalidAmount,
    InvalidStatusTransition,
    NoFieldsProvided,
    PlayerNotFound,
    ProgramInactive,
    RegistrationNotFound,
)
from league_registry.models.enums import RegistrationStatus
from league_registry.models.player import Player
from league_registry.models.registration import Registration
from league_registry.schemas.registration import (
    RegistrationCreate,
    RegistrationFilters,
    RegistrationStatusUpdate,
    RegistrationUpdate,
)
from league_registry.services.audit import record_event
from league_registry.services.capacity_gate import (
    ACTIVE_STATUSES,
    can_admit,
    check_registration_window,
)
from league_registry.services.program_catalog import ProgramCatalog

logger = logging.getLogger(__name__)


class RegistrationLedger:

    def __init__(self, db: Session):
        self.db = db
        self.catalog = ProgramCatalog(db)

    def create(
        self, request: RegistrationCreate, now: datetime | None = None
    ) -> Registration:
        """
        Enroll a player in a program.

        Checks, in order: player and program exist, no existing
        registration for the pair (any status), program is active,
        registration window is open, program has capacity.

        The program row is locked for the rest of the transaction so
        two admissions near the capacity limit cannot both pass the
        count. Backends without row locks (SQLite) can still overshoot
        by one under concurrent load; the (player, program) unique
        constraint holds regardless.
        """
        now = now or datetime.utcnow()

        player = self.db.get(Player, request.player_id)
        if not player:
            raise PlayerNotFound(f"Player {request.player_id} not found")

        program = self.catalog.get_program(request.program_id, for_update=True)

        existing = self._find(request.player_id, request.program_id)
        if existing:
            raise DuplicateRegistration(
                f"Player {request.player_id} is already registered "
                f"for program {request.program_id}",
                registration_id=existing.id,
                status=existing.status.value,
            )

        if not program.is_active:
            raise ProgramInactive(f"Program {program.id} is not active")

        check_registration_window(program, now)

        active_count = self.count_active(program.id)
        if not can_admit(program.capacity, active_count):
            logger.info(
                "Program %s full: capacity=%s active=%s",
                program.id, program.capacity, active_count,
            )
            raise CapacityExceeded(
                f"Program {program.id} is full",
                capacity=program.capacity,
                active_registrations=active_count,
            )

        registration = Registration(
            player_id=player.id,
            program_id=program.id,
            status=RegistrationStatus.PENDING,
            amount_paid=Decimal("0"),
            notes=request.notes,
        )
        self.db.add(registration)
        try:
            self.db.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same pair
            raise DuplicateRegistration(
                f"Player {request.player_id} is already registered "
                f"for program {request.program_id}"
            ) from e

        record_event(
            self.db, "registration.created", registration.id,
            player_id=player.id, program_id=program.id,
        )
        logger.info(
            "Registration %s created: player=%s program=%s",
            registration.id, player.id, program.id,
        )
        return registration

    def get(self, registration_id: int, for_update: bool = False) -> Registration:
        """Get a registration by ID."""
        stmt = select(Registration).where(Registration.id == registration_id)
        if for_update:
            stmt = stmt.with_for_update()
        registration = self.db.execute(stmt).scalar_one_or_none()
        if not registration:
            raise RegistrationNotFound(
                f"Registration {registration_id} not found"
            )
        return registration

    def list_registrations(
        self, filters: RegistrationFilters
    ) -> tuple[list[Registration], int]:
        """Return one page of registrations (newest first) and the total count."""
        stmt = select(Registration)
        if filters.player_id is not None:
            stmt = stmt.where(Registration.player_id == filters.player_id)
        if filters.program_id is not None:
            stmt = stmt.where(Registration.program_id == filters.program_id)
        if filters.status is not None:
            stmt = stmt.where(Registration.status == filters.status)

        total = self.db.execute(
            select(func.count()).select_from(stmt.subquery())
        ).scalar_one()

        rows = self.db.execute(
            stmt.order_by(Registration.created_at.desc(), Registration.id.desc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
        ).scalars().all()
        return list(rows), total

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        return math.ceil(total / limit) if total else 0

    def count_active(self, program_id: int) -> int:
        """Registrations currently holding a place in the program."""
        return self.db.execute(
            select(func.count(Registration.id)).where(
                Registration.program_id == program_id,
                Registration.status.in_(ACTIVE_STATUSES),
            )
        ).scalar_one()

    def update_status(
        self, registration_id: int, request: RegistrationStatusUpdate
    ) -> Registration:
        """
        Move a registration to a new status.

        Enforces the state machine but deliberately ignores payment
        state: an operator may confirm an unpaid registration.
        """
        registration = self.get(registration_id, for_update=True)

        if not registration.can_transition_to(request.new_status):
            raise InvalidStatusTransition(
                f"Cannot transition from {registration.status.value} "
                f"to {request.new_status.value}",
                current_status=registration.status.value,
                requested_status=request.new_status.value,
            )

        old_status = registration.status
        registration.status = request.new_status
        record_event(
            self.db, "registration.status_changed", registration.id,
            old_status=old_status.value, new_status=request.new_status.value,
        )
        self.db.flush()
        logger.info(
            "Registration %s: %s -> %s",
            registration.id, old_status.value, request.new_status.value,
        )
        return registration

    def apply_administrative_update(
        self, registration_id: int, update: RegistrationUpdate
    ) -> Registration:
        """
        Apply an operator correction to status, notes or amount_paid.

        Every provided field is validated before any is written.
        Status is not re-derived from the payment total, and the
        state machine is not consulted except that a cancelled
        registration stays cancelled.
        """
        fields = update.model_fields_set
        changes: dict = {}
        if "status" in fields and update.status is not None:
            changes["status"] = update.status
        if "notes" in fields:
            changes["notes"] = update.notes
        if "amount_paid" in fields and update.amount_paid is not None:
            changes["amount_paid"] = update.amount_paid
        if not changes:
            raise NoFieldsProvided(
                "Provide at least one of status, notes, amount_paid"
            )

        registration = self.get(registration_id, for_update=True)

        new_status = changes.get("status")
        if (
            new_status is not None
            and registration.status == RegistrationStatus.CANCELLED
            and new_status != RegistrationStatus.CANCELLED
        ):
            raise InvalidStatusTransition(
                "Cancelled registrations cannot be reopened",
                current_status=registration.status.value,
                requested_status=new_status.value,
            )

        new_amount = changes.get("amount_paid")
        if new_amount is not None and new_amount > registration.program.fee:
            raise InvalidAmount(
                f"amount_paid {new_amount} exceeds program fee "
                f"{registration.program.fee}",
                fee=registration.program.fee,
                amount_requested=new_amount,
            )

        before = {
            "status": registration.status.value,
            "notes": registration.notes,
            "amount_paid": registration.amount_paid,
        }
        for field, value in changes.items():
            setattr(registration, field, value)

        record_event(
            self.db, "registration.corrected", registration.id,
            before=before, changes=changes,
        )
        self.db.flush()
        logger.info(
            "Registration %s corrected: fields=%s",
            registration.id, sorted(changes),
        )
        return registration

    def _find(self, player_id: int, program_id: int) -> Registration | None:
        return self.db.execute(
            select(Registration).where(
                Registration.player_id == player_id,
                Registration.program_id == program_id,
            )
        ).scalar_one_or_none()
