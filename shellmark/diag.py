"""``shellmark diag``: report where bookmarks live and how many there are."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .bookmarks import BookmarkStore


@dataclass(frozen=True)
class Diag:
    data_dir: Path
    bookmark_count: int

    def __str__(self) -> str:
        return f"Data directory: {self.data_dir}\nBookmark count: {self.bookmark_count}\n"


def diag_cmd(store: BookmarkStore) -> Diag:
    return Diag(data_dir=store.path.parent, bookmark_count=len(store.load()))
