"""Workspace API endpoint tests, including the shared-edit scenario end to end."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.helpers import auth_headers
from tests.test_constants import ALICE, BOB, CAROL, DAVE, POINT, USER_EMAILS


def _headers(user_id: str) -> dict[str, str]:
    return auth_headers(user_id, USER_EMAILS[user_id])


def _login_all(client: TestClient) -> None:
    """First authenticated request creates each user row."""
    for user_id in (ALICE, BOB, CAROL, DAVE):
        assert client.get("/api/auth/me", headers=_headers(user_id)).status_code == 200


def _workspace(client: TestClient, owner: str, title: str = "Main St retail") -> dict:
    response = client.post("/api/workspaces", json={"title": title}, headers=_headers(owner))
    assert response.status_code == 201, response.text
    return response.json()


def _prospect(client: TestClient, owner: str, name: str = "p1") -> dict:
    response = client.post(
        "/api/prospects", json={"name": name, "geometry": POINT}, headers=_headers(owner)
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestWorkspaceEndpoints:
    def test_create_and_get(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        assert ws["owner_id"] == BOB
        assert ws["role"] == "owner"

        fetched = any_api_client.get(f"/api/workspaces/{ws['id']}", headers=_headers(BOB))
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Main St retail"

        stranger = any_api_client.get(f"/api/workspaces/{ws['id']}", headers=_headers(ALICE))
        assert stranger.status_code == 403

    def test_list_scopes_and_archive(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        any_api_client.post(
            f"/api/workspaces/{ws['id']}/members",
            json={"user_id": CAROL},
            headers=_headers(BOB),
        )

        shared = any_api_client.get(
            "/api/workspaces", params={"scope": "shared"}, headers=_headers(CAROL)
        ).json()
        assert [w["id"] for w in shared] == [ws["id"]]
        assert shared[0]["role"] == "viewer"

        archived = any_api_client.post(f"/api/workspaces/{ws['id']}/archive", headers=_headers(BOB))
        assert archived.json() == {"ok": True}
        assert any_api_client.get("/api/workspaces", headers=_headers(BOB)).json() == []
        with_archived = any_api_client.get(
            "/api/workspaces", params={"include_archived": "true"}, headers=_headers(BOB)
        ).json()
        assert [w["id"] for w in with_archived] == [ws["id"]]

    def test_bad_scope_422(self, any_api_client: TestClient) -> None:
        response = any_api_client.get(
            "/api/workspaces", params={"scope": "all"}, headers=_headers(BOB)
        )
        assert response.status_code == 422

    def test_delete_requires_owner(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        any_api_client.post(
            f"/api/workspaces/{ws['id']}/members",
            json={"user_id": CAROL, "role": "editor"},
            headers=_headers(BOB),
        )
        assert any_api_client.delete(f"/api/workspaces/{ws['id']}", headers=_headers(CAROL)).status_code == 403
        assert any_api_client.delete(f"/api/workspaces/{ws['id']}", headers=_headers(BOB)).status_code == 204
        assert any_api_client.get(f"/api/workspaces/{ws['id']}", headers=_headers(BOB)).status_code == 403


class TestLinkEndpoints:
    def test_link_is_idempotent_and_unlink_reports(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        p = _prospect(any_api_client, ALICE)
        url = f"/api/workspaces/{ws['id']}/prospects"

        first = any_api_client.post(url, json={"prospect_id": p["id"]}, headers=_headers(BOB))
        second = any_api_client.post(url, json={"prospect_id": p["id"]}, headers=_headers(BOB))
        assert first.json() == {"ok": True, "created": True}
        assert second.json() == {"ok": True, "created": False}

        listed = any_api_client.get(url, headers=_headers(BOB)).json()
        assert [x["id"] for x in listed] == [p["id"]]
        assert listed[0]["owner_id"] == ALICE

        assert any_api_client.delete(f"{url}/{p['id']}", headers=_headers(BOB)).status_code == 204
        missing = any_api_client.delete(f"{url}/{p['id']}", headers=_headers(BOB))
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Not linked"

    def test_link_unknown_prospect_404(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        response = any_api_client.post(
            f"/api/workspaces/{ws['id']}/prospects",
            json={"prospect_id": "no-such-prospect"},
            headers=_headers(BOB),
        )
        assert response.status_code == 404


class TestMemberEndpoints:
    def test_member_lifecycle(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        base = f"/api/workspaces/{ws['id']}/members"

        added = any_api_client.post(base, json={"email": "carol@example.com"}, headers=_headers(BOB))
        assert added.status_code == 201
        assert added.json()["role"] == "viewer"

        members = any_api_client.get(base, headers=_headers(CAROL)).json()
        assert [(m["user_id"], m["role"]) for m in members] == [(BOB, "owner"), (CAROL, "viewer")]

        patched = any_api_client.patch(f"{base}/{CAROL}", json={"role": "editor"}, headers=_headers(BOB))
        assert patched.json()["role"] == "editor"

        no_op = any_api_client.patch(f"{base}/{CAROL}", json={"role": "owner"}, headers=_headers(BOB))
        assert no_op.status_code == 200
        assert no_op.json()["role"] == "editor"

        assert any_api_client.delete(f"{base}/{CAROL}", headers=_headers(BOB)).status_code == 204
        assert any_api_client.delete(f"{base}/{CAROL}", headers=_headers(BOB)).status_code == 404

    def test_owner_row_is_protected(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        base = f"/api/workspaces/{ws['id']}/members"

        patched = any_api_client.patch(f"{base}/{BOB}", json={"role": "viewer"}, headers=_headers(BOB))
        assert patched.status_code == 409
        assert patched.json()["detail"] == "Cannot change owner role"

        removed = any_api_client.delete(f"{base}/{BOB}", headers=_headers(BOB))
        assert removed.status_code == 409
        assert removed.json()["detail"] == "Cannot remove owner"

    def test_add_requires_user_or_email(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        response = any_api_client.post(
            f"/api/workspaces/{ws['id']}/members", json={"role": "editor"}, headers=_headers(BOB)
        )
        assert response.status_code == 422

    def test_add_unknown_email_404(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        ws = _workspace(any_api_client, BOB)
        response = any_api_client.post(
            f"/api/workspaces/{ws['id']}/members",
            json={"email": "ghost@example.com"},
            headers=_headers(BOB),
        )
        assert response.status_code == 404


class TestSharedEditScenario:
    def test_carol_edits_alices_prospect_until_removed(self, any_api_client: TestClient) -> None:
        _login_all(any_api_client)
        p1 = _prospect(any_api_client, ALICE, "p1")
        w1 = _workspace(any_api_client, BOB, "w1")

        linked = any_api_client.post(
            f"/api/workspaces/{w1['id']}/prospects",
            json={"prospect_id": p1["id"]},
            headers=_headers(BOB),
        )
        assert linked.status_code == 201
        any_api_client.post(
            f"/api/workspaces/{w1['id']}/members",
            json={"user_id": CAROL, "role": "editor"},
            headers=_headers(BOB),
        )

        edited = any_api_client.patch(
            f"/api/prospects/{p1['id']}", json={"status": "contacted"}, headers=_headers(CAROL)
        )
        assert edited.status_code == 200
        assert edited.json()["owner_id"] == ALICE
        own_view = any_api_client.get(f"/api/prospects/{p1['id']}", headers=_headers(ALICE)).json()
        assert own_view["status"] == "contacted"

        removed = any_api_client.delete(
            f"/api/workspaces/{w1['id']}/members/{CAROL}", headers=_headers(BOB)
        )
        assert removed.status_code == 204

        denied = any_api_client.patch(
            f"/api/prospects/{p1['id']}", json={"status": "listing"}, headers=_headers(CAROL)
        )
        assert denied.status_code == 403
        after = any_api_client.get(f"/api/prospects/{p1['id']}", headers=_headers(ALICE)).json()
        assert after["status"] == "contacted"
