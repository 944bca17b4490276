"""``$EDITOR`` detection.

The browser never launches the editor itself; it only decides whether an
editor action makes sense and leaves the launch to the calling shell.
"""

from __future__ import annotations

import os
import shlex

EDITOR_ENV = "EDITOR"


def editor_command() -> list[str]:
    """Return ``$EDITOR`` split into argv words, or ``[]`` when unset/blank."""
    editor_env = os.environ.get(EDITOR_ENV, "").strip()
    if not editor_env:
        return []
    try:
        return shlex.split(editor_env)
    except ValueError:
        return [editor_env]


def is_editor_set() -> bool:
    return bool(editor_command())
