"""Resource store contract shared by the relational and process-local backends.

Both implementations must give identical answers for identical stored state.
Every authorization decision in the service layer is computed from these
methods only, so the backend choice is never observable in an outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from levelcre.schemas.auth import UserRead
from levelcre.schemas.prospect import ProspectRead
from levelcre.schemas.workspace import Role, WorkspaceMemberRead, WorkspaceRead


class ResourceStore(ABC):
    """Persistence for users, prospects, workspaces, members and workspace/prospect links."""

    backend_name: str = "abstract"

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Unit of work for a check-then-write sequence. Default: no extra isolation."""
        yield

    # ── Users ───────────────────────────────────────────────────────

    @abstractmethod
    def ensure_user(self, user_id: str, email: str | None = None) -> UserRead:
        """Create the user row if missing; fill in email when it was unknown."""

    @abstractmethod
    def get_user(self, user_id: str) -> UserRead | None: ...

    @abstractmethod
    def find_user_by_email(self, email: str) -> UserRead | None:
        """Case-insensitive email lookup."""

    # ── Prospects ───────────────────────────────────────────────────

    @abstractmethod
    def create_prospect(self, owner_id: str, values: dict[str, Any]) -> ProspectRead: ...

    @abstractmethod
    def get_prospect(self, prospect_id: str) -> ProspectRead | None:
        """Prospect by id regardless of owner. Callers must authorize."""

    @abstractmethod
    def get_prospect_owned_by(self, user_id: str, prospect_id: str) -> ProspectRead | None: ...

    @abstractmethod
    def list_prospects(self, owner_id: str) -> list[ProspectRead]: ...

    @abstractmethod
    def find_prospect_owner_anywhere(self, prospect_id: str) -> str | None:
        """Owner id of the prospect, or None when no user owns a prospect with this id."""

    @abstractmethod
    def apply_prospect_patch(
        self, owner_id: str, prospect_id: str, changes: dict[str, Any]
    ) -> ProspectRead | None:
        """Apply all of `changes` to the owner-scoped record, or nothing if it does not exist."""

    @abstractmethod
    def delete_prospect(self, owner_id: str, prospect_id: str) -> bool:
        """Delete an owned prospect and every link that references it."""

    # ── Workspaces ──────────────────────────────────────────────────

    @abstractmethod
    def create_workspace(self, owner_id: str, values: dict[str, Any]) -> WorkspaceRead: ...

    @abstractmethod
    def get_workspace(self, workspace_id: str) -> WorkspaceRead | None: ...

    @abstractmethod
    def list_owned_workspaces(
        self, owner_id: str, include_archived: bool = False
    ) -> list[WorkspaceRead]: ...

    @abstractmethod
    def list_shared_workspaces(self, user_id: str) -> list[WorkspaceRead]:
        """Non-archived workspaces where the user holds a member row."""

    @abstractmethod
    def archive_workspace(self, workspace_id: str) -> bool: ...

    @abstractmethod
    def delete_workspace(self, workspace_id: str) -> bool:
        """Delete a workspace together with its members and links."""

    # ── Members ─────────────────────────────────────────────────────

    @abstractmethod
    def get_member(self, workspace_id: str, user_id: str) -> WorkspaceMemberRead | None: ...

    @abstractmethod
    def list_members(self, workspace_id: str) -> list[WorkspaceMemberRead]: ...

    @abstractmethod
    def add_member(self, workspace_id: str, user_id: str, role: Role) -> WorkspaceMemberRead:
        """Insert a member row.

        Raises NotFoundError if the workspace or user does not exist, and
        ConflictError if the pair already exists.
        """

    @abstractmethod
    def update_member_role(
        self, workspace_id: str, user_id: str, role: Role
    ) -> WorkspaceMemberRead | None: ...

    @abstractmethod
    def delete_member(self, workspace_id: str, user_id: str) -> bool: ...

    # ── Links ───────────────────────────────────────────────────────

    @abstractmethod
    def list_linked_workspaces(self, prospect_id: str) -> list[str]:
        """Ids of every workspace in the system linked to the prospect, sorted."""

    @abstractmethod
    def upsert_link(self, workspace_id: str, prospect_id: str) -> bool:
        """Insert the link if absent. Returns True when a row was created.

        Raises NotFoundError if the workspace or prospect does not exist.
        """

    @abstractmethod
    def delete_link(self, workspace_id: str, prospect_id: str) -> bool: ...

    @abstractmethod
    def list_workspace_prospects(self, workspace_id: str) -> list[ProspectRead]:
        """Every prospect linked to the workspace, whoever owns it."""

    @abstractmethod
    def count_links(self, workspace_id: str) -> int: ...
