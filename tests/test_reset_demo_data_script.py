"""Tests for scripts/reset_demo_data.py."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from levelcre.storage import MemoryStore
from tests.helpers import make_prospect

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "reset_demo_data.py"


@pytest.fixture
def reset_script():
    spec = importlib.util.spec_from_file_location("reset_demo_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_reset_clears_file(reset_script, tmp_path: Path, capsys) -> None:
    path = tmp_path / "demo.json"
    store = MemoryStore(path)
    store.ensure_user("alice")
    make_prospect(store, "alice")

    assert reset_script.main([str(path)]) == 0
    data = json.loads(path.read_text())
    assert all(v == {} for v in data.values())
    assert "reset demo data" in capsys.readouterr().out


def test_reset_without_path_fails(reset_script, capsys) -> None:
    assert reset_script.main([]) == 1
    assert "DEMO_DATA_PATH" in capsys.readouterr().err


def test_reset_invalid_json(reset_script, tmp_path: Path) -> None:
    path = tmp_path / "demo.json"
    path.write_text("{not json")
    assert reset_script.main([str(path)]) == 1
