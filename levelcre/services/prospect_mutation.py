"""Prospect mutation gateway.

Applies a patch to a prospect the caller may not own. Order of checks:

1. Caller owns the prospect: apply directly.
2. Find the true owner anywhere in the store; none means NotFound.
3. Collect every workspace linked to the prospect, whoever created the link.
4. Resolve the caller's role on each; a single owner/editor grant suffices.
5. Apply the patch to the owner's record, or raise Forbidden and write nothing.

The record stays anchored to its owner no matter who edits it. Roles are
re-resolved on every call inside the store's unit of work.
"""

from __future__ import annotations

import logging
from typing import Any

from levelcre.schemas.prospect import ProspectUpdate, ProspectUpdateResponse
from levelcre.services.activity import ActivityNotifier, notify_prospect_updated
from levelcre.services.errors import ForbiddenError, NotFoundError
from levelcre.services.ownership import find_owner_of
from levelcre.services.workspace_access import can_edit, resolve_role
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)

# Columns that are NOT NULL; an explicit null in a patch leaves them untouched
_REQUIRED_FIELDS = frozenset({"name", "status", "notes", "geometry"})


def patch_to_changes(patch: ProspectUpdate) -> dict[str, Any]:
    """Column values to write, JSON-ready (enums as values, geometry as a dict)."""
    changes = patch.model_dump(mode="json", exclude_unset=True)
    return {
        key: value
        for key, value in changes.items()
        if not (value is None and key in _REQUIRED_FIELDS)
    }


def find_editable_workspace(
    store: ResourceStore, caller_id: str, prospect_id: str
) -> str | None:
    """Id of the first linked workspace on which the caller may edit, else None."""
    for workspace_id in store.list_linked_workspaces(prospect_id):
        if can_edit(resolve_role(store, caller_id, workspace_id)):
            return workspace_id
    return None


def update_prospect(
    store: ResourceStore,
    caller_id: str,
    prospect_id: str,
    patch: ProspectUpdate,
    notifier: ActivityNotifier | None = None,
) -> ProspectUpdateResponse:
    """Authorize and apply `patch`. Raises NotFoundError or ForbiddenError."""
    changes = patch_to_changes(patch)

    with store.atomic():
        if store.get_prospect_owned_by(caller_id, prospect_id) is not None:
            updated = store.apply_prospect_patch(caller_id, prospect_id, changes)
        else:
            owner_id = find_owner_of(store, prospect_id)
            if owner_id is None:
                raise NotFoundError("Prospect not found")

            via = find_editable_workspace(store, caller_id, prospect_id)
            if via is None:
                logger.info(
                    "Denied update of prospect %s by %s: no edit grant on any linked workspace",
                    prospect_id,
                    caller_id,
                )
                raise ForbiddenError("Edit access required")

            logger.info(
                "User %s editing prospect %s owned by %s via workspace %s",
                caller_id,
                prospect_id,
                owner_id,
                via,
            )
            updated = store.apply_prospect_patch(owner_id, prospect_id, changes)

    if updated is None:
        # Deleted between the check and the write
        raise NotFoundError("Prospect not found")

    gained = notify_prospect_updated(notifier, caller_id, updated)
    return ProspectUpdateResponse(**updated.model_dump(), new_xp_gained=gained)
