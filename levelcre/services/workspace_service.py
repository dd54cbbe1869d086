"""Workspace service: create, list, archive, delete, and membership management.

The workspace owner is derived from Workspace.owner_id only. A member row for
the owner is never created, changed, or removed through this module.
"""

from __future__ import annotations

import logging
from typing import Literal

from levelcre.schemas.prospect import ProspectRead
from levelcre.schemas.workspace import (
    GRANTABLE_ROLES,
    MemberAddRequest,
    Role,
    WorkspaceCreate,
    WorkspaceMemberRead,
    WorkspaceRead,
)
from levelcre.services.errors import ConflictError, NotFoundError
from levelcre.services.workspace_access import require_owner, require_view
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)

WorkspaceScope = Literal["owned", "shared"]


def create_workspace(store: ResourceStore, caller_id: str, data: WorkspaceCreate) -> WorkspaceRead:
    """Create a workspace owned by the caller. Address defaults to the title."""
    values = data.model_dump()
    if not values.get("address"):
        values["address"] = values["title"]
    workspace = store.create_workspace(caller_id, values)
    logger.info("User %s created workspace %s", caller_id, workspace.id)
    workspace.role = Role.owner
    return workspace


def list_workspaces(
    store: ResourceStore,
    caller_id: str,
    scope: WorkspaceScope = "owned",
    include_archived: bool = False,
) -> list[WorkspaceRead]:
    """Caller's own workspaces, or those shared with them (never archived)."""
    if scope == "owned":
        items = store.list_owned_workspaces(caller_id, include_archived=include_archived)
        for item in items:
            item.role = Role.owner
        return items
    if scope == "shared":
        items = store.list_shared_workspaces(caller_id)
        for item in items:
            member = store.get_member(item.id, caller_id)
            item.role = member.role if member else Role.none
        return items
    raise ValueError(f"Unknown workspace scope: {scope!r}")


def get_workspace(store: ResourceStore, caller_id: str, workspace_id: str) -> WorkspaceRead:
    role = require_view(store, caller_id, workspace_id)
    workspace = store.get_workspace(workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    workspace.role = role
    return workspace


def archive_workspace(store: ResourceStore, caller_id: str, workspace_id: str) -> None:
    with store.atomic():
        require_owner(store, caller_id, workspace_id)
        if not store.archive_workspace(workspace_id):
            raise NotFoundError("Workspace not found")
    logger.info("User %s archived workspace %s", caller_id, workspace_id)


def delete_workspace(store: ResourceStore, caller_id: str, workspace_id: str) -> None:
    """Hard delete; members and links go with it."""
    with store.atomic():
        require_owner(store, caller_id, workspace_id)
        if not store.delete_workspace(workspace_id):
            raise NotFoundError("Workspace not found")
    logger.info("User %s deleted workspace %s", caller_id, workspace_id)


def list_workspace_prospects(
    store: ResourceStore, caller_id: str, workspace_id: str
) -> list[ProspectRead]:
    """Every prospect linked into the workspace, regardless of who owns it."""
    require_view(store, caller_id, workspace_id)
    return store.list_workspace_prospects(workspace_id)


# ── Members ─────────────────────────────────────────────────────────


def list_members(
    store: ResourceStore, caller_id: str, workspace_id: str
) -> list[WorkspaceMemberRead]:
    """Owner entry first (synthesized), then member rows."""
    require_view(store, caller_id, workspace_id)
    workspace = store.get_workspace(workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    owner = store.get_user(workspace.owner_id)
    owner_entry = WorkspaceMemberRead(
        workspace_id=workspace_id,
        user_id=workspace.owner_id,
        role=Role.owner,
        email=owner.email if owner else None,
    )
    return [owner_entry, *store.list_members(workspace_id)]


def _resolve_target_user(store: ResourceStore, data: MemberAddRequest) -> str:
    if data.user_id:
        user = store.get_user(data.user_id)
    else:
        user = store.find_user_by_email(data.email or "")
    if user is None:
        raise NotFoundError("User not found")
    return user.id


def add_member(
    store: ResourceStore, caller_id: str, workspace_id: str, data: MemberAddRequest
) -> WorkspaceMemberRead:
    """Grant editor or viewer. Re-adding an existing member updates their role."""
    role = Role(data.role)
    if role not in GRANTABLE_ROLES:
        raise ConflictError(f"Role {role.value!r} cannot be granted")
    with store.atomic():
        require_owner(store, caller_id, workspace_id)
        user_id = _resolve_target_user(store, data)
        workspace = store.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        if user_id == workspace.owner_id:
            raise ConflictError("Owner cannot be added as a member")
        if store.get_member(workspace_id, user_id) is not None:
            member = store.update_member_role(workspace_id, user_id, role)
        else:
            member = store.add_member(workspace_id, user_id, role)
    logger.info(
        "User %s granted %s on workspace %s to %s", caller_id, role.value, workspace_id, user_id
    )
    return member


def update_member(
    store: ResourceStore, caller_id: str, workspace_id: str, user_id: str, role: Role
) -> WorkspaceMemberRead:
    """Change a member's role. Asking for 'owner' leaves the row untouched."""
    with store.atomic():
        require_owner(store, caller_id, workspace_id)
        workspace = store.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        if user_id == workspace.owner_id:
            raise ConflictError("Cannot change owner role")
        member = store.get_member(workspace_id, user_id)
        if member is None:
            raise NotFoundError("Member not found")
        if role == Role.owner:
            # Ownership is not transferable through membership
            logger.info(
                "Ignored request by %s to make %s owner of workspace %s",
                caller_id,
                user_id,
                workspace_id,
            )
            return member
        updated = store.update_member_role(workspace_id, user_id, role)
    if updated is None:
        raise NotFoundError("Member not found")
    return updated


def remove_member(store: ResourceStore, caller_id: str, workspace_id: str, user_id: str) -> bool:
    """Revoke a member's grant. Returns False when there was no member row."""
    with store.atomic():
        require_owner(store, caller_id, workspace_id)
        workspace = store.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        if user_id == workspace.owner_id:
            raise ConflictError("Cannot remove owner")
        removed = store.delete_member(workspace_id, user_id)
    if removed:
        logger.info("User %s removed %s from workspace %s", caller_id, user_id, workspace_id)
    return removed
