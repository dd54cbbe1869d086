"""Process-local resource store.

Plain dicts keyed by owner, with no foreign keys or indexes: every cross-owner
lookup (workspace by id, owner of a prospect, links of a prospect) is a scan.
The relational store must return the same answers through indexed lookups.

Optionally persisted to a JSON file after every structural write (write to a
temp file, fsync, then atomic rename). A write whose save fails is rolled back
in memory. One RLock per instance serializes all access.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from levelcre.schemas.auth import UserRead
from levelcre.schemas.prospect import ProspectRead
from levelcre.schemas.workspace import Role, WorkspaceMemberRead, WorkspaceRead
from levelcre.services.errors import ConflictError, NotFoundError
from levelcre.storage.base import ResourceStore

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "prospects", "workspaces", "members", "links")

# Nullable prospect payload columns; absent keys are stored as None like the relational columns
_PROSPECT_OPTIONAL = (
    "submarket_id",
    "last_contact_date",
    "follow_up_timeframe",
    "follow_up_due_date",
    "contact_name",
    "contact_email",
    "contact_phone",
    "contact_company",
    "size",
    "acres",
    "business_name",
    "website_url",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _empty_data() -> dict[str, dict]:
    return {name: {} for name in COLLECTIONS}


def _sort_key(row: dict) -> tuple[str, str]:
    return (row["created_at"], row["id"])


class MemoryStore(ResourceStore):
    """ResourceStore over in-process collections.

    Layout:
        users       {user_id: {"id", "email", "created_at"}}
        prospects   {owner_id: [prospect, ...]}
        workspaces  {owner_id: [workspace, ...]}
        members     {workspace_id: [{"user_id", "role", "created_at"}, ...]}
        links       {workspace_id: [prospect_id, ...]}
    """

    backend_name = "memory"

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path else None
        self._lock = threading.RLock()
        self._data = _empty_data()
        if self.path is not None:
            self._load()

    # ── Persistence ─────────────────────────────────────────────────

    def _load(self) -> None:
        if not self.path.exists():
            self._save()
            return
        with self.path.open(encoding="utf-8") as fh:
            raw = json.load(fh)
        data = _empty_data()
        for name in COLLECTIONS:
            data[name] = raw.get(name) or {}
        self._data = data
        logger.info("Loaded memory store from %s", self.path)

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
            ) as tmp:
                temp_path = Path(tmp.name)
                json.dump(self._data, tmp, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(temp_path, self.path)
        except OSError:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved memory store to %s", self.path)

    def reset(self) -> None:
        """Drop every collection (demo reset)."""
        with self._commit():
            self._data = _empty_data()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            yield

    @contextmanager
    def _commit(self) -> Iterator[None]:
        """Hold the lock for one structural write and save it; restore the dataset if either step fails."""
        with self._lock:
            snapshot = copy.deepcopy(self._data)
            try:
                yield
                self._save()
            except Exception:
                self._data = snapshot
                raise

    # ── Scans ───────────────────────────────────────────────────────

    def _find_prospect(self, prospect_id: str) -> tuple[str, dict] | None:
        for owner_id, rows in self._data["prospects"].items():
            for row in rows:
                if row["id"] == prospect_id:
                    return owner_id, row
        return None

    def _owned_prospect(self, user_id: str, prospect_id: str) -> dict | None:
        for row in self._data["prospects"].get(user_id, []):
            if row["id"] == prospect_id:
                return row
        return None

    def _find_workspace(self, workspace_id: str) -> dict | None:
        for rows in self._data["workspaces"].values():
            for row in rows:
                if row["id"] == workspace_id:
                    return row
        return None

    def _workspace_read(self, row: dict) -> WorkspaceRead:
        read = WorkspaceRead.model_validate(copy.deepcopy(row))
        read.prospect_count = len(self._data["links"].get(row["id"], []))
        return read

    def _member_read(self, workspace_id: str, row: dict) -> WorkspaceMemberRead:
        user = self._data["users"].get(row["user_id"])
        return WorkspaceMemberRead(
            workspace_id=workspace_id,
            user_id=row["user_id"],
            role=Role(row["role"]),
            email=user.get("email") if user else None,
        )

    @staticmethod
    def _prospect_read(row: dict) -> ProspectRead:
        return ProspectRead.model_validate(copy.deepcopy(row))

    # ── Users ───────────────────────────────────────────────────────

    def ensure_user(self, user_id: str, email: str | None = None) -> UserRead:
        with self._lock:
            user = self._data["users"].get(user_id)
            if user is None:
                user = {"id": user_id, "email": email, "created_at": _now()}
                with self._commit():
                    self._data["users"][user_id] = user
            elif email and not user.get("email"):
                with self._commit():
                    user["email"] = email
            return UserRead.model_validate(user)

    def get_user(self, user_id: str) -> UserRead | None:
        with self._lock:
            user = self._data["users"].get(user_id)
            return UserRead.model_validate(user) if user else None

    def find_user_by_email(self, email: str) -> UserRead | None:
        needle = email.strip().lower()
        with self._lock:
            matches = [
                u
                for u in self._data["users"].values()
                if (u.get("email") or "").lower() == needle
            ]
            if not matches:
                return None
            return UserRead.model_validate(min(matches, key=lambda u: u["created_at"]))

    # ── Prospects ───────────────────────────────────────────────────

    def create_prospect(self, owner_id: str, values: dict[str, Any]) -> ProspectRead:
        now = _now()
        row = {key: None for key in _PROSPECT_OPTIONAL}
        row.update(copy.deepcopy(values))
        row.setdefault("status", "prospect")
        row.setdefault("notes", "")
        row.update(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        with self._commit():
            self._data["prospects"].setdefault(owner_id, []).append(row)
            return self._prospect_read(row)

    def get_prospect(self, prospect_id: str) -> ProspectRead | None:
        with self._lock:
            found = self._find_prospect(prospect_id)
            return self._prospect_read(found[1]) if found else None

    def get_prospect_owned_by(self, user_id: str, prospect_id: str) -> ProspectRead | None:
        with self._lock:
            row = self._owned_prospect(user_id, prospect_id)
            return self._prospect_read(row) if row else None

    def list_prospects(self, owner_id: str) -> list[ProspectRead]:
        with self._lock:
            rows = sorted(self._data["prospects"].get(owner_id, []), key=_sort_key)
            return [self._prospect_read(r) for r in rows]

    def find_prospect_owner_anywhere(self, prospect_id: str) -> str | None:
        with self._lock:
            found = self._find_prospect(prospect_id)
            return found[0] if found else None

    def apply_prospect_patch(
        self, owner_id: str, prospect_id: str, changes: dict[str, Any]
    ) -> ProspectRead | None:
        with self._lock:
            row = self._owned_prospect(owner_id, prospect_id)
            if row is None:
                return None
            with self._commit():
                row.update(copy.deepcopy(changes), updated_at=_now())
            return self._prospect_read(row)

    def delete_prospect(self, owner_id: str, prospect_id: str) -> bool:
        with self._lock:
            rows = self._data["prospects"].get(owner_id, [])
            remaining = [r for r in rows if r["id"] != prospect_id]
            if len(remaining) == len(rows):
                return False
            with self._commit():
                self._data["prospects"][owner_id] = remaining
                # No foreign keys here: sweep links in the same critical section
                for workspace_id, prospect_ids in self._data["links"].items():
                    if prospect_id in prospect_ids:
                        self._data["links"][workspace_id] = [
                            p for p in prospect_ids if p != prospect_id
                        ]
            return True

    # ── Workspaces ──────────────────────────────────────────────────

    def create_workspace(self, owner_id: str, values: dict[str, Any]) -> WorkspaceRead:
        row = {
            "address": None,
            "lat": None,
            "lng": None,
            "submarket": None,
            **copy.deepcopy(values),
            "id": str(uuid.uuid4()),
            "owner_id": owner_id,
            "created_at": _now(),
            "archived_at": None,
        }
        with self._commit():
            self._data["workspaces"].setdefault(owner_id, []).append(row)
            return self._workspace_read(row)

    def get_workspace(self, workspace_id: str) -> WorkspaceRead | None:
        with self._lock:
            row = self._find_workspace(workspace_id)
            return self._workspace_read(row) if row else None

    def list_owned_workspaces(
        self, owner_id: str, include_archived: bool = False
    ) -> list[WorkspaceRead]:
        with self._lock:
            rows = [
                r
                for r in self._data["workspaces"].get(owner_id, [])
                if include_archived or not r.get("archived_at")
            ]
            return [self._workspace_read(r) for r in sorted(rows, key=_sort_key)]

    def list_shared_workspaces(self, user_id: str) -> list[WorkspaceRead]:
        with self._lock:
            rows = []
            for workspace_id, members in self._data["members"].items():
                if not any(m["user_id"] == user_id for m in members):
                    continue
                row = self._find_workspace(workspace_id)
                if row is not None and not row.get("archived_at"):
                    rows.append(row)
            return [self._workspace_read(r) for r in sorted(rows, key=_sort_key)]

    def archive_workspace(self, workspace_id: str) -> bool:
        with self._lock:
            row = self._find_workspace(workspace_id)
            if row is None:
                return False
            with self._commit():
                row["archived_at"] = _now()
            return True

    def delete_workspace(self, workspace_id: str) -> bool:
        with self._lock:
            row = self._find_workspace(workspace_id)
            if row is None:
                return False
            owner_id = row["owner_id"]
            with self._commit():
                self._data["workspaces"][owner_id] = [
                    r for r in self._data["workspaces"][owner_id] if r["id"] != workspace_id
                ]
                self._data["members"].pop(workspace_id, None)
                self._data["links"].pop(workspace_id, None)
            return True

    # ── Members ─────────────────────────────────────────────────────

    def get_member(self, workspace_id: str, user_id: str) -> WorkspaceMemberRead | None:
        with self._lock:
            for row in self._data["members"].get(workspace_id, []):
                if row["user_id"] == user_id:
                    return self._member_read(workspace_id, row)
            return None

    def list_members(self, workspace_id: str) -> list[WorkspaceMemberRead]:
        with self._lock:
            rows = sorted(
                self._data["members"].get(workspace_id, []),
                key=lambda m: (m["created_at"], m["user_id"]),
            )
            return [self._member_read(workspace_id, r) for r in rows]

    def add_member(self, workspace_id: str, user_id: str, role: Role) -> WorkspaceMemberRead:
        with self._lock:
            if self._find_workspace(workspace_id) is None:
                raise NotFoundError("Workspace not found")
            if user_id not in self._data["users"]:
                raise NotFoundError("User not found")
            if any(r["user_id"] == user_id for r in self._data["members"].get(workspace_id, [])):
                raise ConflictError("User is already a member of this workspace")
            row = {"user_id": user_id, "role": role.value, "created_at": _now()}
            with self._commit():
                self._data["members"].setdefault(workspace_id, []).append(row)
            return self._member_read(workspace_id, row)

    def update_member_role(
        self, workspace_id: str, user_id: str, role: Role
    ) -> WorkspaceMemberRead | None:
        with self._lock:
            for row in self._data["members"].get(workspace_id, []):
                if row["user_id"] == user_id:
                    with self._commit():
                        row["role"] = role.value
                    return self._member_read(workspace_id, row)
            return None

    def delete_member(self, workspace_id: str, user_id: str) -> bool:
        with self._lock:
            rows = self._data["members"].get(workspace_id, [])
            remaining = [r for r in rows if r["user_id"] != user_id]
            if len(remaining) == len(rows):
                return False
            with self._commit():
                self._data["members"][workspace_id] = remaining
            return True

    # ── Links ───────────────────────────────────────────────────────

    def list_linked_workspaces(self, prospect_id: str) -> list[str]:
        with self._lock:
            return sorted(
                workspace_id
                for workspace_id, prospect_ids in self._data["links"].items()
                if prospect_id in prospect_ids
            )

    def upsert_link(self, workspace_id: str, prospect_id: str) -> bool:
        with self._lock:
            if self._find_workspace(workspace_id) is None:
                raise NotFoundError("Workspace not found")
            if self._find_prospect(prospect_id) is None:
                raise NotFoundError("Prospect not found")
            if prospect_id in self._data["links"].get(workspace_id, []):
                return False
            with self._commit():
                self._data["links"].setdefault(workspace_id, []).append(prospect_id)
            return True

    def delete_link(self, workspace_id: str, prospect_id: str) -> bool:
        with self._lock:
            prospect_ids = self._data["links"].get(workspace_id, [])
            if prospect_id not in prospect_ids:
                return False
            with self._commit():
                self._data["links"][workspace_id] = [p for p in prospect_ids if p != prospect_id]
            return True

    def list_workspace_prospects(self, workspace_id: str) -> list[ProspectRead]:
        with self._lock:
            wanted = set(self._data["links"].get(workspace_id, []))
            rows = [
                row
                for owner_rows in self._data["prospects"].values()
                for row in owner_rows
                if row["id"] in wanted
            ]
            return [self._prospect_read(r) for r in sorted(rows, key=_sort_key)]

    def count_links(self, workspace_id: str) -> int:
        with self._lock:
            return len(self._data["links"].get(workspace_id, []))
