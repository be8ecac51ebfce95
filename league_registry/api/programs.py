"""
Program API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.errors import LeagueError
from league_registry.models.base import get_db
from league_registry.services.program_catalog import ProgramCatalog
from league_registry.schemas.program import ProgramCreate, ProgramResponse

router = APIRouter(prefix="/programs", tags=["Programs"])


@router.post(
    "",
    response_model=ProgramResponse,
    status_code=201,
    dependencies=[Depends(require_operator)],
)
def create_program(
    request: ProgramCreate,
    db: Session = Depends(get_db),
):
    """
    Create a program.

    The registration window must close no later than the
    program starts.
    """
    program = ProgramCatalog(db).create_program(request)
    db.commit()
    return program


@router.get("", response_model=list[ProgramResponse])
def list_programs(
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    return ProgramCatalog(db).list_programs(active_only=active_only)


@router.get("/{program_id}", response_model=ProgramResponse)
def get_program(
    program_id: int,
    db: Session = Depends(get_db),
):
    try:
        return ProgramCatalog(db).get_program(program_id)
    except LeagueError as e:
        raise http_error(e)
