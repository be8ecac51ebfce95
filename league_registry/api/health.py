"""
Health check endpoint.

Reports whether the database answers and whether a payment
gateway is configured. Registration works without a gateway;
card payments do not.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from league_registry.config import Settings, get_settings
from league_registry.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "league-registry",
        "version": settings.APP_VERSION,
        "database": db_status,
        "payment_gateway": (
            "configured" if settings.STRIPE_SECRET_KEY else "not_configured"
        ),
    }
