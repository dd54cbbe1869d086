"""Authentication service — JWT tokens carrying the caller's user id.

Token issuance belongs to the identity provider; create_access_token exists for
local runs and tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from levelcre.config import get_settings
from levelcre.schemas.auth import UserRead
from levelcre.storage.base import ResourceStore

# JWT configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token. `data["sub"]` is the user id."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token. Returns payload or None."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def get_user_from_token(store: ResourceStore, token: str) -> Optional[UserRead]:
    """Resolve the caller from a token, creating the user row on first sight.

    Returns None if the token is invalid or has no subject.
    """
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id: Optional[str] = payload.get("sub")
    if not user_id:
        return None
    email = payload.get("email")
    return store.ensure_user(str(user_id), email if isinstance(email, str) else None)
