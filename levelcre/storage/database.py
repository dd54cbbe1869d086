"""Relational resource store. SQLAlchemy ORM; joins and FK cascades do the heavy lifting."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from levelcre.models import Prospect, User, Workspace, WorkspaceMember, WorkspaceProspect
from levelcre.schemas.auth import UserRead
from levelcre.schemas.prospect import ProspectRead
from levelcre.schemas.workspace import Role, WorkspaceMemberRead, WorkspaceRead
from levelcre.services.errors import ConflictError, NotFoundError
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)


def _workspace_to_read(workspace: Workspace, prospect_count: int) -> WorkspaceRead:
    read = WorkspaceRead.model_validate(workspace)
    read.prospect_count = int(prospect_count or 0)
    return read


def _member_to_read(member: WorkspaceMember, email: str | None) -> WorkspaceMemberRead:
    return WorkspaceMemberRead(
        workspace_id=member.workspace_id,
        user_id=member.user_id,
        role=Role(member.role),
        email=email,
    )


class DatabaseStore(ResourceStore):
    """ResourceStore backed by a request-scoped SQLAlchemy Session.

    Each write commits immediately. The check-then-write pair of the mutation
    gateway is two round-trips; no multi-statement isolation is assumed.
    """

    backend_name = "database"

    def __init__(self, db: Session) -> None:
        self.db = db

    # ── Users ───────────────────────────────────────────────────────

    def ensure_user(self, user_id: str, email: str | None = None) -> UserRead:
        user = self.db.get(User, user_id)
        if user is None:
            user = User(id=user_id, email=email)
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # Concurrent first request for the same user
                self.db.rollback()
                user = self.db.get(User, user_id)
        elif email and not user.email:
            user.email = email
            self.db.commit()
        return UserRead.model_validate(user)

    def get_user(self, user_id: str) -> UserRead | None:
        user = self.db.get(User, user_id)
        return UserRead.model_validate(user) if user else None

    def find_user_by_email(self, email: str) -> UserRead | None:
        user = (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .order_by(User.created_at)
            .first()
        )
        return UserRead.model_validate(user) if user else None

    # ── Prospects ───────────────────────────────────────────────────

    def create_prospect(self, owner_id: str, values: dict[str, Any]) -> ProspectRead:
        prospect = Prospect(owner_id=owner_id, **values)
        self.db.add(prospect)
        self.db.commit()
        self.db.refresh(prospect)
        return ProspectRead.model_validate(prospect)

    def get_prospect(self, prospect_id: str) -> ProspectRead | None:
        prospect = self.db.get(Prospect, prospect_id)
        return ProspectRead.model_validate(prospect) if prospect else None

    def _owned_prospect(self, user_id: str, prospect_id: str) -> Prospect | None:
        return (
            self.db.query(Prospect)
            .filter(Prospect.id == prospect_id, Prospect.owner_id == user_id)
            .first()
        )

    def get_prospect_owned_by(self, user_id: str, prospect_id: str) -> ProspectRead | None:
        prospect = self._owned_prospect(user_id, prospect_id)
        return ProspectRead.model_validate(prospect) if prospect else None

    def list_prospects(self, owner_id: str) -> list[ProspectRead]:
        rows = (
            self.db.query(Prospect)
            .filter(Prospect.owner_id == owner_id)
            .order_by(Prospect.created_at, Prospect.id)
            .all()
        )
        return [ProspectRead.model_validate(p) for p in rows]

    def find_prospect_owner_anywhere(self, prospect_id: str) -> str | None:
        row = self.db.query(Prospect.owner_id).filter(Prospect.id == prospect_id).first()
        return row[0] if row else None

    def apply_prospect_patch(
        self, owner_id: str, prospect_id: str, changes: dict[str, Any]
    ) -> ProspectRead | None:
        prospect = self._owned_prospect(owner_id, prospect_id)
        if prospect is None:
            return None
        for key, value in changes.items():
            setattr(prospect, key, value)
        prospect.updated_at = datetime.now(timezone.utc)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(prospect)
        return ProspectRead.model_validate(prospect)

    def delete_prospect(self, owner_id: str, prospect_id: str) -> bool:
        prospect = self._owned_prospect(owner_id, prospect_id)
        if prospect is None:
            return False
        # workspace_links cascade through the ORM relationship and the FK
        self.db.delete(prospect)
        self.db.commit()
        return True

    # ── Workspaces ──────────────────────────────────────────────────

    def _with_counts(self):
        return (
            self.db.query(Workspace, func.count(WorkspaceProspect.prospect_id))
            .outerjoin(WorkspaceProspect, WorkspaceProspect.workspace_id == Workspace.id)
        )

    def create_workspace(self, owner_id: str, values: dict[str, Any]) -> WorkspaceRead:
        workspace = Workspace(owner_id=owner_id, **values)
        self.db.add(workspace)
        self.db.commit()
        self.db.refresh(workspace)
        return _workspace_to_read(workspace, 0)

    def get_workspace(self, workspace_id: str) -> WorkspaceRead | None:
        row = (
            self._with_counts()
            .filter(Workspace.id == workspace_id)
            .group_by(Workspace.id)
            .first()
        )
        if row is None:
            return None
        workspace, count = row
        return _workspace_to_read(workspace, count)

    def list_owned_workspaces(
        self, owner_id: str, include_archived: bool = False
    ) -> list[WorkspaceRead]:
        query = self._with_counts().filter(Workspace.owner_id == owner_id)
        if not include_archived:
            query = query.filter(Workspace.archived_at.is_(None))
        rows = query.group_by(Workspace.id).order_by(Workspace.created_at, Workspace.id).all()
        return [_workspace_to_read(w, c) for w, c in rows]

    def list_shared_workspaces(self, user_id: str) -> list[WorkspaceRead]:
        rows = (
            self._with_counts()
            .join(
                WorkspaceMember,
                (WorkspaceMember.workspace_id == Workspace.id)
                & (WorkspaceMember.user_id == user_id),
            )
            .filter(Workspace.archived_at.is_(None))
            .group_by(Workspace.id)
            .order_by(Workspace.created_at, Workspace.id)
            .all()
        )
        return [_workspace_to_read(w, c) for w, c in rows]

    def archive_workspace(self, workspace_id: str) -> bool:
        workspace = self.db.get(Workspace, workspace_id)
        if workspace is None:
            return False
        workspace.archived_at = datetime.now(timezone.utc)
        self.db.commit()
        return True

    def delete_workspace(self, workspace_id: str) -> bool:
        workspace = self.db.get(Workspace, workspace_id)
        if workspace is None:
            return False
        self.db.delete(workspace)
        self.db.commit()
        return True

    # ── Members ─────────────────────────────────────────────────────

    def get_member(self, workspace_id: str, user_id: str) -> WorkspaceMemberRead | None:
        row = (
            self.db.query(WorkspaceMember, User.email)
            .outerjoin(User, User.id == WorkspaceMember.user_id)
            .filter(
                WorkspaceMember.workspace_id == workspace_id,
                WorkspaceMember.user_id == user_id,
            )
            .first()
        )
        if row is None:
            return None
        member, email = row
        return _member_to_read(member, email)

    def list_members(self, workspace_id: str) -> list[WorkspaceMemberRead]:
        rows = (
            self.db.query(WorkspaceMember, User.email)
            .outerjoin(User, User.id == WorkspaceMember.user_id)
            .filter(WorkspaceMember.workspace_id == workspace_id)
            .order_by(WorkspaceMember.created_at, WorkspaceMember.user_id)
            .all()
        )
        return [_member_to_read(m, email) for m, email in rows]

    def add_member(self, workspace_id: str, user_id: str, role: Role) -> WorkspaceMemberRead:
        if self.db.get(Workspace, workspace_id) is None:
            raise NotFoundError("Workspace not found")
        if self.db.get(User, user_id) is None:
            raise NotFoundError("User not found")
        if self.db.get(WorkspaceMember, (workspace_id, user_id)) is not None:
            raise ConflictError("User is already a member of this workspace")
        self.db.add(WorkspaceMember(workspace_id=workspace_id, user_id=user_id, role=role.value))
        try:
            self.db.commit()
        except IntegrityError:
            # Only a concurrent insert of the same pair is a conflict
            self.db.rollback()
            if self.db.get(WorkspaceMember, (workspace_id, user_id)) is None:
                raise
            raise ConflictError("User is already a member of this workspace") from None
        return self.get_member(workspace_id, user_id)

    def update_member_role(
        self, workspace_id: str, user_id: str, role: Role
    ) -> WorkspaceMemberRead | None:
        member = self.db.get(WorkspaceMember, (workspace_id, user_id))
        if member is None:
            return None
        member.role = role.value
        self.db.commit()
        return self.get_member(workspace_id, user_id)

    def delete_member(self, workspace_id: str, user_id: str) -> bool:
        member = self.db.get(WorkspaceMember, (workspace_id, user_id))
        if member is None:
            return False
        self.db.delete(member)
        self.db.commit()
        return True

    # ── Links ───────────────────────────────────────────────────────

    def list_linked_workspaces(self, prospect_id: str) -> list[str]:
        rows = (
            self.db.query(WorkspaceProspect.workspace_id)
            .filter(WorkspaceProspect.prospect_id == prospect_id)
            .order_by(WorkspaceProspect.workspace_id)
            .all()
        )
        return [r[0] for r in rows]

    def upsert_link(self, workspace_id: str, prospect_id: str) -> bool:
        if self.db.get(Workspace, workspace_id) is None:
            raise NotFoundError("Workspace not found")
        if self.db.get(Prospect, prospect_id) is None:
            raise NotFoundError("Prospect not found")
        if self.db.get(WorkspaceProspect, (workspace_id, prospect_id)) is not None:
            return False
        self.db.add(WorkspaceProspect(workspace_id=workspace_id, prospect_id=prospect_id))
        try:
            self.db.commit()
        except IntegrityError:
            # Unique key hit by a concurrent insert of the same pair
            self.db.rollback()
            if self.db.get(WorkspaceProspect, (workspace_id, prospect_id)) is None:
                raise
            return False
        return True

    def delete_link(self, workspace_id: str, prospect_id: str) -> bool:
        link = self.db.get(WorkspaceProspect, (workspace_id, prospect_id))
        if link is None:
            return False
        self.db.delete(link)
        self.db.commit()
        return True

    def list_workspace_prospects(self, workspace_id: str) -> list[ProspectRead]:
        rows = (
            self.db.query(Prospect)
            .join(WorkspaceProspect, WorkspaceProspect.prospect_id == Prospect.id)
            .filter(WorkspaceProspect.workspace_id == workspace_id)
            .order_by(Prospect.created_at, Prospect.id)
            .all()
        )
        return [ProspectRead.model_validate(p) for p in rows]

    def count_links(self, workspace_id: str) -> int:
        return (
            self.db.query(func.count(WorkspaceProspect.prospect_id))
            .filter(WorkspaceProspect.workspace_id == workspace_id)
            .scalar()
            or 0
        )
