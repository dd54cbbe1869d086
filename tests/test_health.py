"""
Health endpoint tests.
"""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient


def test_health_returns_ok_when_db_connected(client: TestClient) -> None:
    """Health endpoint returns 200 with database connected."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["storage"] == "database"
    assert data["database"] == "connected"
    assert "version" in data


def test_health_returns_503_when_db_unreachable(client: TestClient) -> None:
    """Health endpoint returns 503 when database is unreachable."""
    from levelcre.db import engine

    with (
        patch("levelcre.main.check_db_connection"),  # no-op: lifespan succeeds
        patch.object(engine, "connect", side_effect=Exception("Connection refused")),
    ):
        response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "disconnected"
    assert "version" in data


def test_health_memory_backend_skips_database() -> None:
    """With the memory backend the database is never touched."""
    from levelcre.db import engine
    from levelcre.main import create_app

    settings = MagicMock(
        app_name="Level CRE",
        debug=False,
        storage_backend="memory",
        demo_data_path="",
    )
    with (
        patch("levelcre.main.get_settings", return_value=settings),
        patch.object(engine, "connect", side_effect=AssertionError("database used")),
    ):
        app = create_app()
        response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["storage"] == "memory"
    assert app.state.memory_store is not None
