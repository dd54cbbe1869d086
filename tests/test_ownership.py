"""Ownership lookup tests. Both backends must name the same owner for the same id."""

from __future__ import annotations

from levelcre.services.ownership import find_owner_of
from levelcre.storage import DatabaseStore, MemoryStore
from tests.helpers import make_prospect
from tests.test_constants import ALICE, BOB, CAROL


class TestFindOwnerOf:
    def test_finds_owner_among_many_users(self, store, users) -> None:
        make_prospect(store, BOB, "Bob's lot")
        target = make_prospect(store, ALICE, "Alice's lot")
        make_prospect(store, CAROL, "Carol's lot")
        assert find_owner_of(store, target.id) == ALICE

    def test_unknown_id_is_none(self, store, users) -> None:
        make_prospect(store, ALICE)
        assert find_owner_of(store, "no-such-prospect") is None

    def test_empty_id_is_none(self, store, users) -> None:
        assert find_owner_of(store, "") is None

    def test_deleted_prospect_has_no_owner(self, store, users) -> None:
        p = make_prospect(store, ALICE)
        assert store.delete_prospect(ALICE, p.id) is True
        assert find_owner_of(store, p.id) is None

    def test_owner_scoped_lookup(self, store, users) -> None:
        p = make_prospect(store, ALICE)
        assert store.get_prospect_owned_by(ALICE, p.id) is not None
        assert store.get_prospect_owned_by(BOB, p.id) is None
        assert store.get_prospect(p.id).owner_id == ALICE


def test_backends_agree_on_owners(db) -> None:
    """Same records in both stores; every lookup gives the same answer."""
    stores = [DatabaseStore(db), MemoryStore()]
    for s in stores:
        for user_id in (ALICE, BOB, CAROL):
            s.ensure_user(user_id)

    ids_by_store: list[dict[str, str]] = []
    for s in stores:
        ids = {}
        for owner, name in [(ALICE, "a1"), (BOB, "b1"), (ALICE, "a2"), (CAROL, "c1")]:
            ids[name] = make_prospect(s, owner, name).id
        ids_by_store.append(ids)

    for name, expected in [("a1", ALICE), ("b1", BOB), ("a2", ALICE), ("c1", CAROL)]:
        answers = [find_owner_of(s, ids[name]) for s, ids in zip(stores, ids_by_store)]
        assert answers == [expected, expected]

    assert [find_owner_of(s, "missing") for s in stores] == [None, None]
