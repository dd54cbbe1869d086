"""Workspace access control.

Resolves the caller's effective role on a workspace from stored state only:
owner of the workspace, else the role on their member row, else none.
Nothing is cached; every decision re-reads the store.
"""

from __future__ import annotations

import logging

from levelcre.schemas.workspace import Role
from levelcre.services.errors import ForbiddenError
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)


def resolve_role(store: ResourceStore, caller_id: str, workspace_id: str) -> Role:
    """Return the caller's role on the workspace; Role.none if it does not exist."""
    workspace = store.get_workspace(workspace_id)
    if workspace is None:
        return Role.none
    if workspace.owner_id == caller_id:
        return Role.owner
    member = store.get_member(workspace_id, caller_id)
    if member is None:
        return Role.none
    return member.role


def can_view(role: Role) -> bool:
    return role.at_least(Role.viewer)


def can_edit(role: Role) -> bool:
    return role.at_least(Role.editor)


def _require(
    store: ResourceStore, caller_id: str, workspace_id: str, needed: Role, message: str
) -> Role:
    role = resolve_role(store, caller_id, workspace_id)
    if not role.at_least(needed):
        logger.info(
            "Denied %s access to workspace %s for user %s (role=%s)",
            needed.value,
            workspace_id,
            caller_id,
            role.value,
        )
        raise ForbiddenError(message)
    return role


def require_view(store: ResourceStore, caller_id: str, workspace_id: str) -> Role:
    return _require(store, caller_id, workspace_id, Role.viewer, "Access denied")


def require_edit(store: ResourceStore, caller_id: str, workspace_id: str) -> Role:
    return _require(store, caller_id, workspace_id, Role.editor, "Edit access required")


def require_owner(store: ResourceStore, caller_id: str, workspace_id: str) -> Role:
    return _require(store, caller_id, workspace_id, Role.owner, "Owner access required")
