"""WorkspaceProspect model — many-to-many link between workspaces and prospects."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from levelcre.db.session import Base

if TYPE_CHECKING:
    from levelcre.models.prospect import Prospect
    from levelcre.models.workspace import Workspace


class WorkspaceProspect(Base):
    """Link row; the composite primary key makes (workspace_id, prospect_id) unique."""

    __tablename__ = "workspace_prospects"

    workspace_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        primary_key=True,
    )
    prospect_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("prospects.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    workspace: Mapped[Workspace] = relationship("Workspace", back_populates="prospect_links")
    prospect: Mapped[Prospect] = relationship("Prospect", back_populates="workspace_links")
