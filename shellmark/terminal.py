"""Terminal control helpers for the browse session.

The UI is drawn on stderr so stdout stays free for the action text read by
the shell wrapper. Owns raw-mode lifecycle and alternate-screen switching.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty


def terminal_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, lines)`` for ``fd``, falling back to the environment."""
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


class TerminalController:
    """Manage terminal mode transitions for the UI output descriptor."""

    def __init__(self, stdin_fd: int, ui_fd: int) -> None:
        """Capture tty state and bind stdin/UI file descriptors."""
        self.stdin_fd = stdin_fd
        self.ui_fd = ui_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.ui_fd, b"\x1b[?1049h\x1b[H\x1b[2J")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        os.write(self.ui_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        return terminal_size(self.ui_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
