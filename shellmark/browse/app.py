"""Interactive browse session bootstrap.

Loads bookmarks before any UI is drawn, then runs the event loop inside raw
mode on the controlling terminal and returns the terminating action.
"""

from __future__ import annotations

import logging
import string
import sys
import termios

from .. import logging_setup
from ..bookmarks import BookmarkStore
from ..config import load_refresh_interval_seconds
from ..errors import ShellmarkError
from ..input import KEY_TOKENS
from ..render import draw_browser
from ..search import FuzzyMatcher
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .commands import BrowseDeps
from .keybindings import check_mode_transitions, setup_keybindings
from .loop import MergedEventSource, run_event_loop
from .state import Action, BrowseState, Mode

logger = logging.getLogger(__name__)

PROBE_KEYS: list[str] = [*KEY_TOKENS, *string.ascii_letters, *string.digits, *string.punctuation, " "]


def browse_cmd(
    store: BookmarkStore,
    no_color: bool = False,
    refresh_interval: float | None = None,
) -> Action | None:
    """Run the interactive browser and return the chosen action, if any."""
    bookmarks = store.load()
    keymap = setup_keybindings()
    check_mode_transitions(keymap, PROBE_KEYS)
    deps = BrowseDeps(store=store, matcher=FuzzyMatcher())
    state = BrowseState.initial(bookmarks)

    stdin_fd = sys.stdin.fileno()
    ui_fd = sys.stderr.fileno()
    try:
        terminal = TerminalController(stdin_fd, ui_fd)
    except termios.error as exc:
        raise ShellmarkError("browse needs an interactive terminal on stdin") from exc

    theme = resolve_theme(no_color)
    help_descriptions = keymap.descriptions(Mode.NORMAL)
    if refresh_interval is None:
        refresh_interval = load_refresh_interval_seconds()

    def render(new_state: BrowseState) -> None:
        draw_browser(ui_fd, new_state, terminal.size(), help_descriptions, theme)

    logger.debug("Browsing %d bookmarks", len(bookmarks))
    with (
        logging_setup.stream_output_suspended(),
        terminal.raw_mode(),
        MergedEventSource(stdin_fd, refresh_interval, size_source=terminal.size) as events,
    ):
        return run_event_loop(events, state, keymap, deps, render)
