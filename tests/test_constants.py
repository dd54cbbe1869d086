"""
Centralized test credentials and fixture data.

Secrets load from environment variables when available, with clearly
non-production placeholders as fallbacks.
"""

from __future__ import annotations

import os

# App config used by conftest and API tests
TEST_SECRET_KEY = os.environ.get("TEST_SECRET_KEY") or "test-secret-key"

# Users for the sharing scenarios
ALICE = "alice"
BOB = "bob"
CAROL = "carol"
DAVE = "dave"

USER_EMAILS = {
    ALICE: "alice@example.com",
    BOB: "bob@example.com",
    CAROL: "carol@example.com",
    DAVE: "dave@example.com",
}

# GeoJSON geometries as drawn on the map
POINT = {"type": "Point", "coordinates": [-104.9903, 39.7392]}
POLYGON = {
    "type": "Polygon",
    "coordinates": [
        [
            [-104.99, 39.74],
            [-104.98, 39.74],
            [-104.98, 39.73],
            [-104.99, 39.73],
            [-104.99, 39.74],
        ]
    ],
}
