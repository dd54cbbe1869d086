"""Alembic migration tests on a throwaway SQLite file."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from alembic import command
from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parents[1]
TABLES = {"users", "prospects", "workspaces", "workspace_members", "workspace_prospects"}


@pytest.fixture
def alembic_config(tmp_path: Path) -> tuple[Config, str]:
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg, url


def test_upgrade_creates_tables(alembic_config) -> None:
    cfg, url = alembic_config
    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert TABLES <= set(inspector.get_table_names())
        link_fks = inspector.get_foreign_keys("workspace_prospects")
        assert {fk["referred_table"] for fk in link_fks} == {"workspaces", "prospects"}
        assert all(fk["options"].get("ondelete") == "CASCADE" for fk in link_fks)
        member_pk = inspector.get_pk_constraint("workspace_members")["constrained_columns"]
        assert member_pk == ["workspace_id", "user_id"]
    finally:
        engine.dispose()


def test_migration_matches_models(alembic_config) -> None:
    """Every model column exists in the migrated schema."""
    from levelcre.db import Base

    cfg, url = alembic_config
    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        for table in Base.metadata.sorted_tables:
            migrated = {c["name"] for c in inspector.get_columns(table.name)}
            assert set(table.columns.keys()) == migrated, table.name
    finally:
        engine.dispose()


def test_downgrade_drops_tables(alembic_config) -> None:
    cfg, url = alembic_config
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert not TABLES & set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
