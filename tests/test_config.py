"""
Tests for config loading and settings resolution.
"""
from __future__ import annotations

import argparse
import base64
import json
import logging
import os

from course_manager import config as core_config
from course_manager import settings


def _args(**kwargs):
    defaults = dict(db=None, log_dir=None, log_level=None, log_max_bytes=None,
                    log_backups=None, db_backup_keep=None, dry_run=False)
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def test_load_config_json_keeps_known_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"LOG_LEVEL": "DEBUG", "UNKNOWN": 1}), encoding="utf-8")
    assert core_config.load_config(str(path)) == {"LOG_LEVEL": "DEBUG"}


def test_load_config_base64(tmp_path):
    path = tmp_path / "config.b64"
    payload = base64.b64encode(json.dumps({"DB_BACKUP_KEEP": 2}).encode("utf-8")).decode("ascii")
    path.write_text(payload, encoding="utf-8")
    assert core_config.load_config(str(path)) == {"DB_BACKUP_KEEP": 2}


def test_load_config_missing_returns_none(tmp_path):
    assert core_config.load_config(str(tmp_path / "missing.json")) is None


def test_load_config_garbage_returns_none(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text("{{ not json at all", encoding="utf-8")
    assert core_config.load_config(str(path)) is None
    assert "Failed to parse config file" in capsys.readouterr().out


def test_load_config_non_object_returns_none(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert core_config.load_config(str(path)) is None


def test_default_config_path_linux(monkeypatch, tmp_path):
    monkeypatch.setattr(core_config.platform, "system", lambda: "Linux")
    monkeypatch.setattr(core_config.Path, "home", classmethod(lambda cls: tmp_path))
    expected = os.path.join(str(tmp_path), ".config", "course_manager", "config.json")
    assert core_config.get_default_config_path() == expected


def test_resolve_settings_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resolved = core_config.resolve_settings(_args())
    assert resolved["DB_PATH"] == os.path.join(str(tmp_path), settings.DEFAULT_DB_FILENAME)
    assert resolved["DRY_RUN"] is False
    assert resolved["LOG_LEVEL"] == settings.LOG_LEVEL
    assert resolved["INPUT_TIMEOUT"] == settings.INPUT_TIMEOUT


def test_resolve_settings_precedence(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = {"DB_PATH": "from_config.json", "LOG_LEVEL": "WARNING", "DB_BACKUP_KEEP": 9}
    resolved = core_config.resolve_settings(_args(db="from_cli.json", db_backup_keep=1), config)
    assert resolved["DB_PATH"] == os.path.join(str(tmp_path), "from_cli.json")
    assert resolved["LOG_LEVEL"] == "WARNING"
    assert resolved["DB_BACKUP_KEEP"] == 1


def test_resolve_settings_dry_run_from_config_string():
    assert core_config.resolve_settings(_args(), {"DRY_RUN": "yes"})["DRY_RUN"] is True
    assert core_config.resolve_settings(_args(), {"DRY_RUN": "false"})["DRY_RUN"] is False
    assert core_config.resolve_settings(_args(dry_run=True), {"DRY_RUN": False})["DRY_RUN"] is True


def test_resolve_settings_non_integer_values_fall_back(caplog):
    config = {"INPUT_TIMEOUT": "sixty", "LOG_MAX_BYTES": "lots", "LOG_BACKUP_COUNT": [], "DB_BACKUP_KEEP": "3"}
    with caplog.at_level(logging.WARNING, logger="course_manager.config"):
        resolved = core_config.resolve_settings(_args(), config)
    assert resolved["INPUT_TIMEOUT"] == settings.INPUT_TIMEOUT
    assert resolved["LOG_MAX_BYTES"] == settings.LOG_MAX_BYTES
    assert resolved["LOG_BACKUP_COUNT"] == settings.LOG_BACKUP_COUNT
    assert resolved["DB_BACKUP_KEEP"] == 3
    warned = [r for r in caplog.records if r.name == "course_manager.config"]
    assert len(warned) == 3
