"""Prospect schemas for request/response validation."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from levelcre.schemas.common import as_utc


class ProspectStatus(str, Enum):
    """Pipeline stage of a prospect."""

    prospect = "prospect"
    contacted = "contacted"
    listing = "listing"
    client = "client"
    no_go = "no_go"


class FollowUpTimeframe(str, Enum):
    """How long until the next follow-up is due."""

    one_month = "1_month"
    three_month = "3_month"
    six_month = "6_month"
    one_year = "1_year"


class ProspectGeometry(BaseModel):
    """GeoJSON geometry drawn on the map. Coordinates are passed through untouched."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Point", "Polygon"]
    coordinates: list[Any]


class ProspectCreate(BaseModel):
    """Schema for creating a prospect. The caller becomes its owner."""

    name: str = Field(..., min_length=1, max_length=255)
    status: ProspectStatus = ProspectStatus.prospect
    notes: str = ""
    geometry: ProspectGeometry
    submarket_id: Optional[str] = Field(None, max_length=64)
    last_contact_date: Optional[str] = Field(None, max_length=32)
    follow_up_timeframe: Optional[FollowUpTimeframe] = None
    follow_up_due_date: Optional[str] = Field(None, max_length=32)
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=64)
    contact_company: Optional[str] = Field(None, max_length=255)
    size: Optional[str] = Field(None, max_length=64)
    acres: Optional[str] = Field(None, max_length=32)
    business_name: Optional[str] = Field(None, max_length=255)
    website_url: Optional[str] = Field(None, max_length=2048)


class ProspectUpdate(BaseModel):
    """Partial update. Unknown keys (including id and owner_id) are rejected."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[ProspectStatus] = None
    notes: Optional[str] = None
    geometry: Optional[ProspectGeometry] = None
    submarket_id: Optional[str] = Field(None, max_length=64)
    last_contact_date: Optional[str] = Field(None, max_length=32)
    follow_up_timeframe: Optional[FollowUpTimeframe] = None
    follow_up_due_date: Optional[str] = Field(None, max_length=32)
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=64)
    contact_company: Optional[str] = Field(None, max_length=255)
    size: Optional[str] = Field(None, max_length=64)
    acres: Optional[str] = Field(None, max_length=32)
    business_name: Optional[str] = Field(None, max_length=255)
    website_url: Optional[str] = Field(None, max_length=2048)


class ProspectRead(BaseModel):
    """Schema for reading a prospect (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    status: ProspectStatus
    notes: str = ""
    geometry: dict[str, Any]
    submarket_id: Optional[str] = None
    last_contact_date: Optional[str] = None
    follow_up_timeframe: Optional[FollowUpTimeframe] = None
    follow_up_due_date: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_company: Optional[str] = None
    size: Optional[str] = None
    acres: Optional[str] = None
    business_name: Optional[str] = None
    website_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class ProspectUpdateResponse(ProspectRead):
    """Updated prospect plus the activity credit awarded for the change."""

    new_xp_gained: int = 0
