"""Authentication schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    """Schema for reading user info (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None
