"""Data-directory resolution and path display helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_data_dir

from .config import APP_NAME, load_data_dir_override
from .errors import BookmarkStoreError

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "SHELLMARK_DATA_DIR"


def data_dir() -> Path:
    """Resolve the bookmark directory.

    Precedence: ``$SHELLMARK_DATA_DIR``, then ``data_dir`` from the config
    file, then the platform user-data directory.
    """
    override = os.environ.get(DATA_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    configured = load_data_dir_override()
    if configured is not None:
        return configured
    return Path(user_data_dir(APP_NAME, appauthor=False))


def get_or_create_data_dir() -> Path:
    """Return the data directory, creating it on first use."""
    path = data_dir()
    if path.is_dir():
        return path
    if path.exists():
        raise BookmarkStoreError(
            "Couldn't access app's data dir. Please, check the access rights.",
            path,
        )
    logger.info("Creating a data folder for shellmark at: %s", friendly_path(path))
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BookmarkStoreError(
            "Couldn't create a data folder for shellmark. Please, check the access rights.",
            path,
        ) from exc
    logger.info("Successfully created the data folder!")
    return path


def simplify_path(path: Path) -> Path:
    """Strip the Windows extended-length prefix (``\\\\?\\``) when present."""
    raw = str(path)
    if raw.startswith("\\\\?\\UNC\\"):
        return Path("\\\\" + raw[8:])
    if raw.startswith("\\\\?\\"):
        return Path(raw[4:])
    return path


def friendly_path(path: Path, home: Path | None = None) -> str:
    """Render ``path`` for display, abbreviating the home directory as ``~``."""
    path = simplify_path(Path(path))
    if home is None:
        home = Path.home()
    try:
        relative = path.relative_to(home)
    except ValueError:
        return str(path)
    if relative == Path("."):
        return "~"
    return str(Path("~") / relative)
