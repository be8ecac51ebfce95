"""
Program catalog: read access to program metadata.

The registration lifecycle consumes programs (fee, capacity,
window) but never mutates them. Creation is here so operators
can set programs up; nothing else writes to programs.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from league_registry.errors import ProgramNotFound
from league_registry.models.program import Program
from league_registry.schemas.program import ProgramCreate

logger = logging.getLogger(__name__)


class ProgramCatalog:

    def __init__(self, db: Session):
        self.db = db

    def create_program(self, request: ProgramCreate) -> Program:
        """Create a program. Date ordering is validated by the schema."""
        program = Program(**request.model_dump())
        self.db.add(program)
        self.db.flush()
        logger.info("Created program %s (%s)", program.id, program.name)
        return program

    def get_program(self, program_id: int, for_update: bool = False) -> Program:
        """
        Get a program by ID.

        for_update=True takes a row lock so concurrent admissions
        to the same program are serialized until commit.
        """
        stmt = select(Program).where(Program.id == program_id)
        if for_update:
            stmt = stmt.with_for_update()
        program = self.db.execute(stmt).scalar_one_or_none()
        if not program:
            raise ProgramNotFound(f"Program {program_id} not found")
        return program

    def list_programs(self, active_only: bool = False) -> list[Program]:
        stmt = select(Program).order_by(Program.registration_open_at, Program.id)
        if active_only:
            stmt = stmt.where(Program.is_active.is_(True))
        return list(self.db.execute(stmt).scalars().all())
