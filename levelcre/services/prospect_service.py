"""Prospect service — create, list, read, delete. Updates go through prospect_mutation."""

from __future__ import annotations

import logging

from levelcre.schemas.prospect import ProspectCreate, ProspectRead
from levelcre.services.errors import ForbiddenError, NotFoundError
from levelcre.services.workspace_access import can_view, resolve_role
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)


def create_prospect(store: ResourceStore, caller_id: str, data: ProspectCreate) -> ProspectRead:
    """Create a prospect owned by the caller."""
    prospect = store.create_prospect(caller_id, data.model_dump(mode="json"))
    logger.debug("User %s created prospect %s", caller_id, prospect.id)
    return prospect


def list_prospects(store: ResourceStore, caller_id: str) -> list[ProspectRead]:
    """The caller's own prospects. Shared ones are listed per workspace."""
    return store.list_prospects(caller_id)


def get_prospect(store: ResourceStore, caller_id: str, prospect_id: str) -> ProspectRead:
    """Return a prospect the caller owns or can view through any linked workspace."""
    owned = store.get_prospect_owned_by(caller_id, prospect_id)
    if owned is not None:
        return owned
    prospect = store.get_prospect(prospect_id)
    if prospect is None:
        raise NotFoundError("Prospect not found")
    for workspace_id in store.list_linked_workspaces(prospect_id):
        if can_view(resolve_role(store, caller_id, workspace_id)):
            return prospect
    raise ForbiddenError("Access denied")


def delete_prospect(store: ResourceStore, caller_id: str, prospect_id: str) -> None:
    """Delete an owned prospect and every link to it. Collaborators cannot delete."""
    if not store.delete_prospect(caller_id, prospect_id):
        raise NotFoundError("Prospect not found")
    logger.info("User %s deleted prospect %s", caller_id, prospect_id)
