"""
Registration API endpoints.

The API layer is thin: it handles HTTP concerns and the
transaction boundary (commit on success, rollback on error)
and delegates every rule to the RegistrationLedger.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.errors import LeagueError
from league_registry.models.base import get_db
from league_registry.services.registration_ledger import RegistrationLedger
from league_registry.schemas.registration import (
    Pagination,
    RegistrationCreate,
    RegistrationFilters,
    RegistrationPage,
    RegistrationResponse,
    RegistrationStatusUpdate,
    RegistrationUpdate,
)

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("", response_model=RegistrationResponse, status_code=201)
def create_registration(
    request: RegistrationCreate,
    db: Session = Depends(get_db),
):
    """
    Register a player for a program.

    The registration starts PENDING with nothing paid. Fails if
    the player is already registered, the program is inactive,
    outside its registration window, or full.
    """
    service = RegistrationLedger(db)
    try:
        registration = service.create(request)
        db.commit()
        return registration
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.get("", response_model=RegistrationPage)
def list_registrations(
    filters: Annotated[RegistrationFilters, Query()],
    db: Session = Depends(get_db),
):
    """List registrations, newest first, one page at a time."""
    service = RegistrationLedger(db)
    registrations, total = service.list_registrations(filters)
    return RegistrationPage(
        registrations=[
            RegistrationResponse.model_validate(r) for r in registrations
        ],
        pagination=Pagination(
            page=filters.page,
            limit=filters.limit,
            total=total,
            total_pages=service.total_pages(total, filters.limit),
        ),
    )


@router.get("/{registration_id}", response_model=RegistrationResponse)
def get_registration(
    registration_id: int,
    db: Session = Depends(get_db),
):
    service = RegistrationLedger(db)
    try:
        return service.get(registration_id)
    except LeagueError as e:
        raise http_error(e)


@router.put(
    "/{registration_id}",
    response_model=RegistrationResponse,
    dependencies=[Depends(require_operator)],
)
def update_registration(
    registration_id: int,
    request: RegistrationUpdate,
    db: Session = Depends(get_db),
):
    """
    Operator correction of status, notes or amount_paid.

    At least one field is required. Status is applied as given
    and not re-derived from payments.
    """
    service = RegistrationLedger(db)
    try:
        registration = service.apply_administrative_update(
            registration_id, request
        )
        db.commit()
        return registration
    except LeagueError as e:
        db.rollback()
        raise http_error(e)


@router.patch(
    "/{registration_id}/status",
    response_model=RegistrationResponse,
    dependencies=[Depends(require_operator)],
)
def change_registration_status(
    registration_id: int,
    request: RegistrationStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Change registration status.

    Enforces the state machine. Cancelled is terminal.
    """
    service = RegistrationLedger(db)
    try:
        registration = service.update_status(registration_id, request)
        db.commit()
        return registration
    except LeagueError as e:
        db.rollback()
        raise http_error(e)
