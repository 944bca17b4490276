"""Command handling for the interactive browser.

``handle_command`` is the whole state machine: it maps the current state and
one command to either the next state or the action that ends the session.
I/O (metadata lookups, persisting a deletion) happens synchronously here.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from ..bookmarks import Bookmark, BookmarkStore
from ..errors import MetadataError, UnboundCommandError
from ..search import FuzzyMatcher, find_matches
from ..editor import is_editor_set
from .state import (
    Action,
    BrowseState,
    ChangeDir,
    ClearInput,
    Command,
    Continue,
    DefaultAction,
    DeleteCharBack,
    DelSelBookmark,
    EnterMode,
    EnterSelDir,
    ExitApp,
    HandleResult,
    InputBuffer,
    InsertChar,
    Mode,
    MoveSel,
    OpenInEditor,
    OpenSelInEditor,
    Selection,
    Terminate,
)

logger = logging.getLogger(__name__)

PATH_KIND_FILE = "file"
PATH_KIND_DIR = "dir"


def path_kind(path: Path) -> str:
    """Return ``"file"`` for regular files and ``"dir"`` for everything else."""
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise MetadataError(path, exc) from exc
    return PATH_KIND_FILE if stat.S_ISREG(mode) else PATH_KIND_DIR


@dataclass(frozen=True)
class BrowseDeps:
    """Collaborators used while handling commands."""

    store: BookmarkStore
    matcher: FuzzyMatcher
    path_kind: Callable[[Path], str] = path_kind
    editor_configured: Callable[[], bool] = is_editor_set
    home: Path | None = None


def refresh_selection(state: BrowseState, deps: BrowseDeps) -> BrowseState:
    """Recompute candidates for the current query, keeping the highlight if possible."""
    query = state.input.text
    previous = state.selection.selected
    if not query:
        selection = Selection.from_bookmarks(state.bookmarks, previous)
    else:
        candidates = find_matches(deps.matcher, state.bookmarks, query, deps.home)
        selection = Selection.from_candidates(candidates, previous)
    return replace(state, selection=selection)


def _default_action(bookmark: Bookmark, deps: BrowseDeps) -> Action:
    if deps.path_kind(bookmark.dest) == PATH_KIND_FILE:
        if deps.editor_configured():
            return OpenInEditor(bookmark.dest)
        return ChangeDir(bookmark.dest.parent)
    return ChangeDir(bookmark.dest)


def _enter_dir_action(bookmark: Bookmark, deps: BrowseDeps) -> Action:
    if deps.path_kind(bookmark.dest) == PATH_KIND_FILE:
        return ChangeDir(bookmark.dest.parent)
    return ChangeDir(bookmark.dest)


def _delete_selected(state: BrowseState, deps: BrowseDeps) -> BrowseState:
    bookmark_idx = state.selection.selected_bookmark_index
    if bookmark_idx is None:
        return replace(state, mode=Mode.NORMAL)
    removed = state.bookmarks[bookmark_idx]
    bookmarks = state.bookmarks[:bookmark_idx] + state.bookmarks[bookmark_idx + 1 :]
    deps.store.save(bookmarks)
    logger.debug("Deleted bookmark %s -> %s", removed.name, removed.dest)
    new_state = refresh_selection(replace(state, bookmarks=bookmarks), deps)
    return replace(new_state, mode=Mode.NORMAL)


def _with_input(state: BrowseState, new_input: InputBuffer, deps: BrowseDeps) -> BrowseState:
    return refresh_selection(replace(state, input=new_input), deps)


def handle_command(state: BrowseState, command: Command, deps: BrowseDeps) -> HandleResult:
    """Apply ``command`` to ``state``.

    Commands that need a selection are no-ops without one. Metadata and
    store failures propagate to the caller.
    """
    if isinstance(command, ExitApp):
        return Terminate(None)

    if isinstance(command, (DefaultAction, OpenSelInEditor, EnterSelDir)):
        bookmark = state.selected_bookmark()
        if bookmark is None:
            return Continue(state)
        if isinstance(command, DefaultAction):
            return Terminate(_default_action(bookmark, deps))
        if isinstance(command, OpenSelInEditor):
            return Terminate(OpenInEditor(bookmark.dest))
        return Terminate(_enter_dir_action(bookmark, deps))

    if isinstance(command, DelSelBookmark):
        return Continue(_delete_selected(state, deps))

    if isinstance(command, InsertChar):
        return Continue(_with_input(state, state.input.insert_char(command.char), deps))

    if isinstance(command, DeleteCharBack):
        return Continue(_with_input(state, state.input.delete_char_backwards(), deps))

    if isinstance(command, ClearInput):
        return Continue(_with_input(state, state.input.clear(), deps))

    if isinstance(command, MoveSel):
        return Continue(replace(state, selection=state.selection.move_highlight(command.direction)))

    if isinstance(command, EnterMode):
        if command.mode == state.mode:
            return Continue(state)
        return Continue(replace(state, mode=command.mode))

    raise UnboundCommandError(f"No handler for command {command!r}")
