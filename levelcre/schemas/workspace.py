"""Workspace, membership and link schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from levelcre.schemas.common import as_utc


class Role(str, Enum):
    """Caller's effective role on a workspace, totally ordered owner > editor > viewer > none."""

    none = "none"
    viewer = "viewer"
    editor = "editor"
    owner = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, other: Role) -> bool:
        """True when this role grants everything `other` grants."""
        return self.rank >= other.rank


_ROLE_RANK = {Role.none: 0, Role.viewer: 1, Role.editor: 2, Role.owner: 3}

# Roles that can be stored on a WorkspaceMember row
GRANTABLE_ROLES = (Role.editor, Role.viewer)


class WorkspaceCreate(BaseModel):
    """Schema for creating a workspace. The caller becomes its owner."""

    title: str = Field(..., max_length=255)
    address: Optional[str] = Field(None, max_length=512)
    lat: Optional[str] = Field(None, max_length=32)
    lng: Optional[str] = Field(None, max_length=32)
    submarket: Optional[str] = Field(None, max_length=255)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coordinate_as_string(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class WorkspaceRead(BaseModel):
    """Schema for reading a workspace (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    address: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    submarket: Optional[str] = None
    created_at: datetime
    archived_at: Optional[datetime] = None
    prospect_count: int = 0
    role: Optional[Role] = None

    @field_validator("created_at", "archived_at")
    @classmethod
    def timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class WorkspaceMemberRead(BaseModel):
    """One row of a workspace's member list. The owner entry is synthesized, never stored."""

    model_config = ConfigDict(from_attributes=True)

    workspace_id: str
    user_id: str
    role: Role
    email: Optional[str] = None


class MemberAddRequest(BaseModel):
    """Share a workspace with another user, identified by id or email."""

    user_id: Optional[str] = Field(None, min_length=1, max_length=64)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    role: Literal["editor", "viewer"] = "viewer"

    @model_validator(mode="after")
    def user_id_or_email(self) -> MemberAddRequest:
        if not self.user_id and not self.email:
            raise ValueError("user_id or email is required")
        return self


class MemberUpdateRequest(BaseModel):
    """Change a member's role. 'owner' is accepted but never transfers ownership."""

    role: Literal["owner", "editor", "viewer"]


class LinkProspectRequest(BaseModel):
    """Schema for linking a prospect into a workspace."""

    prospect_id: str = Field(..., min_length=1, max_length=36)
