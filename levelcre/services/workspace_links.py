"""Workspace/prospect link management.

Linking and unlinking both need edit access on the workspace. The prospect may
belong to anyone; linking it only shares it, never re-owns it.
"""

from __future__ import annotations

import logging

from levelcre.services.errors import NotFoundError
from levelcre.services.ownership import find_owner_of
from levelcre.services.workspace_access import require_edit
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)


def link_prospect(
    store: ResourceStore, caller_id: str, workspace_id: str, prospect_id: str
) -> bool:
    """Link a prospect into a workspace. Idempotent; returns True if a row was created."""
    with store.atomic():
        require_edit(store, caller_id, workspace_id)
        if find_owner_of(store, prospect_id) is None:
            raise NotFoundError("Prospect not found")
        created = store.upsert_link(workspace_id, prospect_id)
    if created:
        logger.info("User %s linked prospect %s into workspace %s", caller_id, prospect_id, workspace_id)
    return created


def unlink_prospect(
    store: ResourceStore, caller_id: str, workspace_id: str, prospect_id: str
) -> bool:
    """Remove a link. Returns False when the pair was never linked."""
    with store.atomic():
        require_edit(store, caller_id, workspace_id)
        removed = store.delete_link(workspace_id, prospect_id)
    if removed:
        logger.info(
            "User %s unlinked prospect %s from workspace %s", caller_id, prospect_id, workspace_id
        )
    return removed
