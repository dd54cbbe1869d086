"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from levelcre.api.deps import require_auth
from levelcre.schemas.auth import UserRead

router = APIRouter()


@router.get("/me", response_model=UserRead)
def me(current_user: UserRead = Depends(require_auth)) -> UserRead:
    """Return the currently authenticated user's information."""
    return current_user
