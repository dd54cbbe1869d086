"""Workspace model — shared container of prospects."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from levelcre.db.session import Base

if TYPE_CHECKING:
    from levelcre.models.workspace_member import WorkspaceMember
    from levelcre.models.workspace_prospect import WorkspaceProspect


class Workspace(Base):
    """Workspace with a single owner; other users get access through WorkspaceMember rows."""

    __tablename__ = "workspaces"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    lat: Mapped[str | None] = mapped_column(String(32), nullable=True)
    lng: Mapped[str | None] = mapped_column(String(32), nullable=True)
    submarket: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    members: Mapped[list[WorkspaceMember]] = relationship(
        "WorkspaceMember", back_populates="workspace", cascade="all, delete-orphan"
    )
    prospect_links: Mapped[list[WorkspaceProspect]] = relationship(
        "WorkspaceProspect", back_populates="workspace", cascade="all, delete-orphan"
    )
