"""Workspace API routes: workspaces, their linked prospects, and members."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from levelcre.api.deps import get_store, require_auth
from levelcre.schemas.auth import UserRead
from levelcre.schemas.prospect import ProspectRead
from levelcre.schemas.workspace import (
    LinkProspectRequest,
    MemberAddRequest,
    MemberUpdateRequest,
    Role,
    WorkspaceCreate,
    WorkspaceMemberRead,
    WorkspaceRead,
)
from levelcre.services import workspace_service
from levelcre.services.workspace_links import link_prospect, unlink_prospect
from levelcre.storage import ResourceStore

router = APIRouter()


@router.get("", response_model=list[WorkspaceRead])
def api_list_workspaces(
    scope: Literal["owned", "shared"] = Query("owned"),
    include_archived: bool = Query(False),
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> list[WorkspaceRead]:
    """List owned workspaces, or workspaces shared with the caller."""
    return workspace_service.list_workspaces(
        store, user.id, scope=scope, include_archived=include_archived
    )


@router.post("", response_model=WorkspaceRead, status_code=201)
def api_create_workspace(
    data: WorkspaceCreate,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> WorkspaceRead:
    return workspace_service.create_workspace(store, user.id, data)


@router.get("/{workspace_id}", response_model=WorkspaceRead)
def api_get_workspace(
    workspace_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> WorkspaceRead:
    """Workspace plus the caller's role on it."""
    return workspace_service.get_workspace(store, user.id, workspace_id)


@router.post("/{workspace_id}/archive")
def api_archive_workspace(
    workspace_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> dict:
    workspace_service.archive_workspace(store, user.id, workspace_id)
    return {"ok": True}


@router.delete("/{workspace_id}", status_code=204)
def api_delete_workspace(
    workspace_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> None:
    workspace_service.delete_workspace(store, user.id, workspace_id)


# ── Linked prospects ────────────────────────────────────────────────


@router.get("/{workspace_id}/prospects", response_model=list[ProspectRead])
def api_list_workspace_prospects(
    workspace_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> list[ProspectRead]:
    return workspace_service.list_workspace_prospects(store, user.id, workspace_id)


@router.post("/{workspace_id}/prospects", status_code=201)
def api_link_prospect(
    workspace_id: str,
    data: LinkProspectRequest,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> dict:
    """Link a prospect into the workspace. Re-linking is not an error."""
    created = link_prospect(store, user.id, workspace_id, data.prospect_id)
    return {"ok": True, "created": created}


@router.delete("/{workspace_id}/prospects/{prospect_id}", status_code=204)
def api_unlink_prospect(
    workspace_id: str,
    prospect_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> None:
    if not unlink_prospect(store, user.id, workspace_id, prospect_id):
        raise HTTPException(status_code=404, detail="Not linked")


# ── Members ─────────────────────────────────────────────────────────


@router.get("/{workspace_id}/members", response_model=list[WorkspaceMemberRead])
def api_list_members(
    workspace_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> list[WorkspaceMemberRead]:
    """Owner first, then members. Any role may read the list."""
    return workspace_service.list_members(store, user.id, workspace_id)


@router.post("/{workspace_id}/members", response_model=WorkspaceMemberRead, status_code=201)
def api_add_member(
    workspace_id: str,
    data: MemberAddRequest,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> WorkspaceMemberRead:
    return workspace_service.add_member(store, user.id, workspace_id, data)


@router.patch("/{workspace_id}/members/{user_id}", response_model=WorkspaceMemberRead)
def api_update_member(
    workspace_id: str,
    user_id: str,
    data: MemberUpdateRequest,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> WorkspaceMemberRead:
    return workspace_service.update_member(store, user.id, workspace_id, user_id, Role(data.role))


@router.delete("/{workspace_id}/members/{user_id}", status_code=204)
def api_remove_member(
    workspace_id: str,
    user_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> None:
    if not workspace_service.remove_member(store, user.id, workspace_id, user_id):
        raise HTTPException(status_code=404, detail="Member not found")
