"""``shellmark add``: create or replace a bookmark."""

from __future__ import annotations

import logging
from pathlib import Path

from .bookmarks import Bookmark, BookmarkStore
from .errors import BookmarkStoreError
from .storage import friendly_path

logger = logging.getLogger(__name__)


def default_bookmark_name(dest: Path) -> str:
    """Base name of ``dest``; filesystem roots fall back to the friendly path."""
    return dest.name or friendly_path(dest)


def resolve_dest(dest: str | None, cwd: Path | None = None) -> Path:
    base = Path.cwd() if cwd is None else cwd
    if dest is None:
        return base.resolve()
    target = Path(dest).expanduser()
    if not target.is_absolute():
        target = base / target
    try:
        return target.resolve(strict=True)
    except OSError as exc:
        raise BookmarkStoreError(f"Destination not found: {dest}", target) from exc


def add_cmd(
    store: BookmarkStore,
    dest: str | None = None,
    name: str | None = None,
    force: bool = False,
    cwd: Path | None = None,
) -> bool:
    """Add a bookmark and persist the list.

    Returns whether the store was updated. An existing bookmark with the same
    name is only replaced when ``force`` is set.
    """
    target = resolve_dest(dest, cwd)
    name = name if name else default_bookmark_name(target)
    bookmarks = store.load()
    existing_idx = next((idx for idx, bm in enumerate(bookmarks) if bm.name == name), None)
    if existing_idx is not None:
        existing = bookmarks[existing_idx]
        if not force:
            logger.warning(
                "A bookmark with name %s already exists pointing at: %s",
                existing.name,
                friendly_path(existing.dest),
            )
            logger.info(
                "Consider using `--force` to replace the bookmark, or --name to give it a different name"
            )
            return False
        del bookmarks[existing_idx]

    bookmarks.append(Bookmark(name=name, dest=target))
    store.save(bookmarks)
    logger.info("Added a bookmark %s pointing at %s", name, friendly_path(target))
    return True
