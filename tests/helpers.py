"""Shared builders for store, service and API tests."""

from __future__ import annotations

from tests.test_constants import POINT


def make_prospect(store, owner_id: str, name: str = "Corner lot", **values):
    """Create a prospect directly in the store."""
    return store.create_prospect(
        owner_id,
        {"name": name, "status": "prospect", "notes": "", "geometry": dict(POINT), **values},
    )


def make_workspace(store, owner_id: str, title: str = "Downtown listing", **values):
    """Create a workspace directly in the store."""
    return store.create_workspace(owner_id, {"title": title, "address": title, **values})


def auth_headers(user_id: str, email: str | None = None) -> dict[str, str]:
    """Bearer header for `user_id`, signed with the test secret."""
    from levelcre.services.auth import create_access_token

    claims = {"sub": user_id}
    if email:
        claims["email"] = email
    return {"Authorization": f"Bearer {create_access_token(data=claims)}"}
