"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from league_registry.config import get_settings

settings = get_settings()


def _connect_args(url: str) -> dict:
    """Driver-level connection options, including the connect timeout."""
    if url.startswith("sqlite"):
        return {
            "check_same_thread": False,
            "timeout": settings.DATABASE_CONNECT_TIMEOUT,
        }
    if url.startswith("postgresql"):
        return {"connect_timeout": settings.DATABASE_CONNECT_TIMEOUT}
    return {}


# --- Engine ---
# pool_pre_ping=True tests connections before using them, so a
# restarted database or a stale connection is detected before a
# registration or payment is half-written.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

# --- Session Factory ---
# autocommit=False: the API layer decides when a unit of work
# is committed. A payment insert and the registration balance
# update it causes are committed together or rolled back together.
# autoflush=False: SQL is only sent on explicit flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes,
    even if an error occurs. Closing a session with an open
    transaction rolls it back, so nothing half-done survives.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
