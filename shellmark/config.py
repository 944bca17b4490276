"""Persistent JSON config helpers.

Stores the browser tick interval, a bookmark directory override, and the
default log level. All access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "shellmark"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_ENV = "SHELLMARK_CONFIG"
DEFAULT_REFRESH_INTERVAL_MS = 1000


def config_path() -> Path:
    """Return the active config path, honoring ``$SHELLMARK_CONFIG``."""
    override = os.environ.get(CONFIG_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_refresh_interval_seconds() -> float:
    """Return the browser tick interval.

    Only positive integers are accepted; anything else (booleans included)
    falls back to the default.
    """
    value = load_config().get("refresh_interval_ms")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        value = DEFAULT_REFRESH_INTERVAL_MS
    return value / 1000.0


def load_data_dir_override() -> Path | None:
    """Return the configured bookmark directory, or ``None`` when unset/invalid."""
    value = load_config().get("data_dir")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return Path(stripped).expanduser() if stripped else None


def load_log_level() -> str | None:
    """Return the configured log level name, or ``None`` when unset/invalid."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped.upper() if stripped else None
