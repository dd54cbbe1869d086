"""Ownership lookup for prospects, independent of the caller."""

from __future__ import annotations

from levelcre.storage.base import ResourceStore


def find_owner_of(store: ResourceStore, prospect_id: str) -> str | None:
    """Return the id of the user who owns the prospect, or None if no one does.

    The relational store answers with one indexed lookup; the memory store scans
    every owner's collection. Both must agree for the same stored state.
    """
    if not prospect_id:
        return None
    return store.find_prospect_owner_anywhere(prospect_id)
