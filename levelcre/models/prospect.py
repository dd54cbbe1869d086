"""Prospect model — a privately owned map record."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from levelcre.db.session import Base

if TYPE_CHECKING:
    from levelcre.models.workspace_prospect import WorkspaceProspect


class Prospect(Base):
    """Prospect owned by exactly one user. owner_id never changes after insert."""

    __tablename__ = "prospects"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="prospect", nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    geometry: Mapped[dict] = mapped_column(JSON, nullable=False)
    submarket_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_contact_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    follow_up_timeframe: Mapped[str | None] = mapped_column(String(16), nullable=True)
    follow_up_due_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    contact_company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[str | None] = mapped_column(String(64), nullable=True)
    acres: Mapped[str | None] = mapped_column(String(32), nullable=True)
    business_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    workspace_links: Mapped[list[WorkspaceProspect]] = relationship(
        "WorkspaceProspect", back_populates="prospect", cascade="all, delete-orphan"
    )
