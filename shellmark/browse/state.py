"""Value types for the interactive browser.

All types are frozen dataclasses. Transitions build new values with
``dataclasses.replace`` so a state held by the loop is never mutated in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from ..bookmarks import Bookmark


class Mode(Enum):
    NORMAL = "normal"
    PENDING_DELETE = "pending_delete"
    HELP = "help"


class MoveDirection(Enum):
    DOWN = 1
    UP = -1

    @property
    def increment(self) -> int:
        return self.value


@dataclass(frozen=True)
class InputBuffer:
    """Editable query text with a cursor offset in ``[0, len(chars)]``."""

    chars: tuple[str, ...] = ()
    cursor: int = 0

    def insert_char(self, ch: str) -> InputBuffer:
        chars = self.chars[: self.cursor] + (ch,) + self.chars[self.cursor :]
        return InputBuffer(chars=chars, cursor=self.cursor + 1)

    def delete_char_backwards(self) -> InputBuffer:
        if not self.chars or self.cursor == 0:
            return self
        chars = self.chars[: self.cursor - 1] + self.chars[self.cursor :]
        return InputBuffer(chars=chars, cursor=self.cursor - 1)

    def clear(self) -> InputBuffer:
        return InputBuffer()

    @property
    def text(self) -> str:
        return "".join(self.chars)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Selection:
    """Candidate ordering plus the highlighted position inside it.

    ``candidates`` holds indices into the bookmark list, ``selected`` indexes
    into ``candidates``. ``selected`` is ``None`` exactly when there are no
    candidates.
    """

    candidates: tuple[int, ...] = ()
    selected: int | None = None

    @classmethod
    def from_candidates(
        cls,
        candidates: Sequence[int],
        previous_selected: int | None = None,
    ) -> Selection:
        candidates = tuple(candidates)
        if not candidates:
            return cls(candidates=(), selected=None)
        if previous_selected is None:
            return cls(candidates=candidates, selected=0)
        return cls(candidates=candidates, selected=min(previous_selected, len(candidates) - 1))

    @classmethod
    def from_bookmarks(
        cls,
        bookmarks: Sequence[Bookmark],
        previous_selected: int | None = None,
    ) -> Selection:
        return cls.from_candidates(range(len(bookmarks)), previous_selected)

    def move_highlight(self, direction: MoveDirection) -> Selection:
        if not self.candidates:
            return self
        if self.selected is None:
            return replace(self, selected=0)
        new_selected = max(0, min(len(self.candidates) - 1, self.selected + direction.increment))
        return replace(self, selected=new_selected)

    @property
    def selected_bookmark_index(self) -> int | None:
        if self.selected is None:
            return None
        return self.candidates[self.selected]


@dataclass(frozen=True)
class BrowseState:
    """Everything the browser knows about the running session."""

    bookmarks: tuple[Bookmark, ...]
    input: InputBuffer = field(default_factory=InputBuffer)
    selection: Selection = field(default_factory=Selection)
    mode: Mode = Mode.NORMAL
    last_refresh_at: float | None = None

    @classmethod
    def initial(cls, bookmarks: Sequence[Bookmark]) -> BrowseState:
        bookmarks = tuple(bookmarks)
        return cls(bookmarks=bookmarks, selection=Selection.from_bookmarks(bookmarks))

    def selected_bookmark(self) -> Bookmark | None:
        bookmark_idx = self.selection.selected_bookmark_index
        if bookmark_idx is None:
            return None
        return self.bookmarks[bookmark_idx]


# Commands


@dataclass(frozen=True)
class ExitApp:
    pass


@dataclass(frozen=True)
class DefaultAction:
    pass


@dataclass(frozen=True)
class OpenSelInEditor:
    pass


@dataclass(frozen=True)
class EnterSelDir:
    pass


@dataclass(frozen=True)
class DelSelBookmark:
    pass


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class DeleteCharBack:
    pass


@dataclass(frozen=True)
class ClearInput:
    pass


@dataclass(frozen=True)
class MoveSel:
    direction: MoveDirection


@dataclass(frozen=True)
class EnterMode:
    mode: Mode


Command = (
    ExitApp
    | DefaultAction
    | OpenSelInEditor
    | EnterSelDir
    | DelSelBookmark
    | InsertChar
    | DeleteCharBack
    | ClearInput
    | MoveSel
    | EnterMode
)


# Terminal actions


@dataclass(frozen=True)
class ChangeDir:
    dest: Path


@dataclass(frozen=True)
class OpenInEditor:
    dest: Path


Action = ChangeDir | OpenInEditor


@dataclass(frozen=True)
class Continue:
    state: BrowseState


@dataclass(frozen=True)
class Terminate:
    action: Action | None = None


HandleResult = Continue | Terminate
