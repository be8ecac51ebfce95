"""
Shared API dependencies and error translation.
"""

from fastapi import Depends, Header, HTTPException

from league_registry.config import Settings, get_settings
from league_registry.errors import Forbidden, LeagueError, Unauthorized


def http_error(error: LeagueError) -> HTTPException:
    """Turn a domain error into the HTTP response the client sees."""
    return HTTPException(status_code=error.status_code, detail=error.to_detail())


def require_operator(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Guard for operator-only routes.

    When API_KEY is configured the request must carry
    "Authorization: Bearer <API_KEY>". With no key configured
    the guard is open (local development).
    """
    if not settings.API_KEY:
        return
    if not authorization or not authorization.startswith("Bearer "):
        raise http_error(Unauthorized("Missing bearer credential"))
    if authorization.removeprefix("Bearer ").strip() != settings.API_KEY:
        raise http_error(Forbidden("Invalid credential"))
