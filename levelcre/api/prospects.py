"""Prospect API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from levelcre.api.deps import get_notifier, get_store, require_auth
from levelcre.schemas.auth import UserRead
from levelcre.schemas.prospect import (
    ProspectCreate,
    ProspectRead,
    ProspectUpdate,
    ProspectUpdateResponse,
)
from levelcre.services import prospect_service
from levelcre.services.activity import ActivityNotifier
from levelcre.services.prospect_mutation import update_prospect
from levelcre.storage import ResourceStore

router = APIRouter()


@router.get("", response_model=list[ProspectRead])
def api_list_prospects(
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> list[ProspectRead]:
    """List the caller's own prospects."""
    return prospect_service.list_prospects(store, user.id)


@router.post("", response_model=ProspectRead, status_code=201)
def api_create_prospect(
    data: ProspectCreate,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> ProspectRead:
    return prospect_service.create_prospect(store, user.id, data)


@router.get("/{prospect_id}", response_model=ProspectRead)
def api_get_prospect(
    prospect_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> ProspectRead:
    """Return a prospect the caller owns or can view through a workspace."""
    return prospect_service.get_prospect(store, user.id, prospect_id)


@router.patch("/{prospect_id}", response_model=ProspectUpdateResponse)
def api_update_prospect(
    prospect_id: str,
    patch: ProspectUpdate,
    store: ResourceStore = Depends(get_store),
    notifier: ActivityNotifier | None = Depends(get_notifier),
    user: UserRead = Depends(require_auth),
) -> ProspectUpdateResponse:
    """Update a prospect owned by the caller or shared with edit rights."""
    return update_prospect(store, user.id, prospect_id, patch, notifier=notifier)


@router.delete("/{prospect_id}", status_code=204)
def api_delete_prospect(
    prospect_id: str,
    store: ResourceStore = Depends(get_store),
    user: UserRead = Depends(require_auth),
) -> None:
    """Delete an owned prospect and its workspace links."""
    prospect_service.delete_prospect(store, user.id, prospect_id)
