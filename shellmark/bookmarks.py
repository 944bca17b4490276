"""Bookmark records and their JSON-file store.

The file holds a pretty-printed JSON array of ``{"name", "dest"}`` objects.
A missing or blank file is an empty list; anything else that does not decode
to that shape is a fatal parse error.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import BookmarkParseError, BookmarkStoreError
from .storage import get_or_create_data_dir

logger = logging.getLogger(__name__)

BOOKMARKS_FILENAME = "bookmarks.json"


@dataclass(frozen=True)
class Bookmark:
    name: str
    dest: Path

    def to_json(self) -> dict[str, str]:
        return {"name": self.name, "dest": str(self.dest)}

    @classmethod
    def from_json(cls, raw: object) -> Bookmark:
        if not isinstance(raw, dict):
            raise BookmarkParseError(f"Expected a bookmark object, got {type(raw).__name__}")
        name = raw.get("name")
        dest = raw.get("dest")
        if not isinstance(name, str) or not isinstance(dest, str):
            raise BookmarkParseError(f"Bookmark entry needs string 'name' and 'dest': {raw!r}")
        return cls(name=name, dest=Path(dest))


def parse_bookmarks(content: str) -> list[Bookmark]:
    """Decode bookmark file content; blank content is an empty list."""
    if not content.strip():
        return []
    try:
        data = json.loads(content)
    except ValueError as exc:
        raise BookmarkParseError(f"Couldn't parse bookmarks JSON: {exc}") from exc
    if not isinstance(data, list):
        raise BookmarkParseError("Couldn't parse bookmarks JSON: top-level value must be a list")
    return [Bookmark.from_json(item) for item in data]


def dump_bookmarks(bookmarks: Sequence[Bookmark]) -> str:
    return json.dumps([bookmark.to_json() for bookmark in bookmarks], indent=2)


class BookmarkStore:
    """Load and save the bookmark list stored at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def default(cls) -> BookmarkStore:
        """Store backed by ``bookmarks.json`` in the resolved data directory."""
        return cls(get_or_create_data_dir() / BOOKMARKS_FILENAME)

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as exc:
            raise BookmarkStoreError(
                "Couldn't open/create a bookmarks file. Please, check access rights.",
                self.path,
            ) from exc

    def load(self) -> list[Bookmark]:
        self._ensure_file()
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise BookmarkStoreError(f"Couldn't read bookmarks file: {self.path}", self.path) from exc
        try:
            bookmarks = parse_bookmarks(content)
        except BookmarkParseError as exc:
            exc.path = self.path
            raise
        logger.debug("Loaded %d bookmarks from %s", len(bookmarks), self.path)
        return bookmarks

    def save(self, bookmarks: Sequence[Bookmark]) -> None:
        """Replace the stored list with ``bookmarks``.

        Content is written to a sibling temp file first and moved into place,
        so a failed write never leaves a truncated bookmark file behind.
        """
        content = dump_bookmarks(bookmarks)
        self._ensure_file()
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=str(self.path.parent),
            )
        except OSError as exc:
            raise BookmarkStoreError(f"Couldn't write bookmarks file: {self.path}", self.path) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise BookmarkStoreError(f"Couldn't write bookmarks file: {self.path}", self.path) from exc
        logger.debug("Saved %d bookmarks to %s", len(bookmarks), self.path)

