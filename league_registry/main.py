"""
League Registration Service: FastAPI Application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from league_registry.config import get_settings
from league_registry.errors import LeagueError, StorageUnavailable
from league_registry.api.health import router as health_router
from league_registry.api.programs import router as programs_router
from league_registry.api.players import router as players_router
from league_registry.api.teams import router as teams_router
from league_registry.api.registrations import router as registrations_router
from league_registry.api.payments import router as payments_router
from league_registry.api.reports import router as reports_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Program registration, payments and roster reports for a sports league",
)


@app.exception_handler(LeagueError)
async def league_error_handler(request: Request, exc: LeagueError):
    """Domain errors raised outside a route's own try block (dependencies)."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are the caller's fault: 400, never retried."""
    return JSONResponse(
        status_code=400,
        content={"detail": {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "fields": jsonable_encoder(exc.errors()),
        }},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Database failures become a retryable 503.

    The raw driver message stays in the server log; the client
    only learns that storage is unavailable.
    """
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    error = StorageUnavailable("Storage is temporarily unavailable, please retry")
    return JSONResponse(status_code=error.status_code, content={"detail": error.to_detail()})


# Register routers
app.include_router(health_router)
app.include_router(programs_router)
app.include_router(players_router)
app.include_router(teams_router)
app.include_router(registrations_router)
app.include_router(payments_router)
app.include_router(reports_router)
