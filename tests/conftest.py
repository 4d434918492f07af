from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the package importable when running the tests from a source checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from course_manager.models import Course


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "courses.json"


@pytest.fixture()
def three_courses():
    return [
        Course(id="c-1", title="Algebra", price=10),
        Course(id="c-2", title="Biology", price=20),
        Course(id="c-3", title="Chemistry", price=30.5),
    ]


@pytest.fixture()
def cli_env(tmp_path, monkeypatch):
    """Run the CLI inside tmp_path with a config that disables prompt timeouts."""
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"INPUT_TIMEOUT": 0}), encoding="utf-8")
    return tmp_path, config_path


@pytest.fixture()
def answers(monkeypatch):
    """Feed a fixed list of answers to input() in order."""
    def _feed(*values):
        remaining = iter(values)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(remaining))
    return _feed
