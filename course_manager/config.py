"""Configuration helpers."""

import base64
import json
import logging
import os
import platform
from pathlib import Path

from . import settings

logger = logging.getLogger("course_manager.config")

KNOWN_KEYS = [
    "DB_PATH",
    "DRY_RUN",
    "LOG_DIR",
    "LOG_LEVEL",
    "LOG_MAX_BYTES",
    "LOG_BACKUP_COUNT",
    "DB_BACKUP_KEEP",
    "INPUT_TIMEOUT",
]


def get_default_config_path(verbose=False):
    """
    Get the default config file path for the current operating system.
    - Windows: %APPDATA%\\course_manager\\config.json
    - macOS: ~/Library/Application Support/course_manager/config.json
    - Linux: ~/.config/course_manager/config.json
    The directory is not created; a missing config simply means defaults.
    """
    system = platform.system().lower()
    if system == "windows":
        appdata = os.environ.get("APPDATA", str(Path.home()))
        config_dir = os.path.join(appdata, "course_manager")
    elif system == "darwin":  # macOS
        config_dir = os.path.join(str(Path.home()), "Library", "Application Support", "course_manager")
    else:  # Linux and others
        config_dir = os.path.join(str(Path.home()), ".config", "course_manager")
    config_path = os.path.join(config_dir, "config.json")
    if verbose:
        print(f"[Config] OS detected: {system}")
        print(f"[Config] Config file path: {config_path}")
    return config_path


def _decode_config(raw):
    try:
        return json.loads(raw)
    except ValueError:
        pass
    # Not plain JSON: try base64-encoded JSON.
    json_str = base64.b64decode(raw.encode("utf-8"), validate=True).decode("utf-8")
    return json.loads(json_str)


def load_config(config_path=None, verbose=False):
    """
    Load configuration from a JSON or base64-encoded JSON file and return the known keys as a dict.
    Returns None when the file is missing, unreadable or does not hold a JSON object.
    """
    if config_path is None:
        config_path = get_default_config_path(verbose=verbose)
    if not os.path.exists(config_path):
        if verbose:
            print(f"[Config] Config file not found at {config_path}. Using defaults.")
        return None
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        print(f"Failed to read config file: {e}")
        return None
    try:
        config = _decode_config(raw)
    except (ValueError, UnicodeDecodeError) as e:
        print(f"Failed to parse config file as JSON or base64: {e}")
        logger.warning("Ignoring unparsable config %s: %s", config_path, e)
        return None
    if not isinstance(config, dict):
        print(f"Notice: Config at {config_path} is not a JSON object. Using defaults.")
        return None

    result = {key: config[key] for key in KNOWN_KEYS if key in config}
    if verbose:
        print(f"[Config] Configuration loaded from {config_path}")
        for k, v in result.items():
            print(f"[Config] {k}: {v}")
    return result


INT_KEYS = ["LOG_MAX_BYTES", "LOG_BACKUP_COUNT", "DB_BACKUP_KEEP", "INPUT_TIMEOUT"]


def _int(key, value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s=%r; using %r", key, value, default)
        print(f"Notice: {key} must be an integer, got {value!r}. Using {default}.")
        return default


def _bool(value):
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def resolve_settings(args, config=None):
    """
    Merge package defaults, config file values and CLI flags (in that order of precedence)
    into one dict that is passed explicitly to the commands.
    """
    config = config or {}
    defaults = {
        "DB_PATH": os.path.join(os.getcwd(), settings.DEFAULT_DB_FILENAME),
        "DRY_RUN": settings.DRY_RUN,
        "LOG_DIR": settings.LOG_DIR or os.getcwd(),
        "LOG_LEVEL": settings.LOG_LEVEL,
        "LOG_MAX_BYTES": settings.LOG_MAX_BYTES,
        "LOG_BACKUP_COUNT": settings.LOG_BACKUP_COUNT,
        "DB_BACKUP_KEEP": settings.DB_BACKUP_KEEP,
        "INPUT_TIMEOUT": settings.INPUT_TIMEOUT,
    }
    resolved = dict(defaults)
    for key, value in config.items():
        if value not in (None, ""):
            resolved[key] = value

    overrides = {
        "DB_PATH": getattr(args, "db", None),
        "LOG_DIR": getattr(args, "log_dir", None),
        "LOG_LEVEL": getattr(args, "log_level", None),
        "LOG_MAX_BYTES": getattr(args, "log_max_bytes", None),
        "LOG_BACKUP_COUNT": getattr(args, "log_backups", None),
        "DB_BACKUP_KEEP": getattr(args, "db_backup_keep", None),
    }
    for key, value in overrides.items():
        if value is not None:
            resolved[key] = value
    if getattr(args, "dry_run", False):
        resolved["DRY_RUN"] = True
    resolved["DRY_RUN"] = _bool(resolved["DRY_RUN"])
    for key in INT_KEYS:
        resolved[key] = _int(key, resolved[key], defaults[key])

    resolved["DB_PATH"] = os.path.abspath(os.path.expanduser(str(resolved["DB_PATH"])))
    return resolved
