"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from levelcre.config import get_settings
from levelcre.db.session import get_db  # re-export
from levelcre.schemas.auth import UserRead
from levelcre.services.activity import ActivityNotifier
from levelcre.services.auth import get_user_from_token
from levelcre.storage import DatabaseStore, ResourceStore

__all__ = [
    "get_db",
    "get_store",
    "get_notifier",
    "get_current_user",
    "require_auth",
]

# Cookie name for browser sessions
AUTH_COOKIE = "access_token"


def get_store(request: Request, db: Session = Depends(get_db)) -> ResourceStore:
    """Resource store for this request.

    database: a DatabaseStore over the request-scoped session.
    memory: the application's single MemoryStore (one lock per dataset).
    """
    if get_settings().storage_backend == "memory":
        return request.app.state.memory_store
    return DatabaseStore(db)


def get_notifier(request: Request) -> ActivityNotifier | None:
    return getattr(request.app.state, "activity_notifier", None)


def get_current_user(
    store: ResourceStore = Depends(get_store),
    authorization: str | None = Header(None),
    access_token: str | None = Cookie(None),
) -> UserRead | None:
    """Return the authenticated user or None.

    Checks (in order):
    1. Authorization: Bearer <token> header
    2. access_token cookie
    """
    token: str | None = None

    # Check Authorization header
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :]

    # Fall back to cookie
    if token is None and access_token:
        token = access_token

    if token is None:
        return None

    return get_user_from_token(store, token)


def require_auth(user: UserRead | None = Depends(get_current_user)) -> UserRead:
    """Dependency that requires authentication. Returns 401 otherwise."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
