"""Rendering of terminal actions as text for the calling shell.

``plain`` prints bare data; the other flavours print a command the shell
wrapper installed by ``shellmark plug`` evaluates.
"""

from __future__ import annotations

import shlex
from enum import Enum

from .browse.state import Action, ChangeDir, OpenInEditor
from .editor import is_editor_set
from .storage import simplify_path

EDITOR_NOT_SET_MESSAGE = "$EDITOR environment variable is not set"


class OutputType(Enum):
    PLAIN = "plain"
    POSIX = "posix"
    FISH = "fish"
    POWERSHELL = "powershell"

    @classmethod
    def parse(cls, value: str) -> OutputType:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unexpected out: {value}. Possible values are: {', '.join(OUTPUT_TYPE_NAMES)}"
            ) from None


OUTPUT_TYPE_NAMES: tuple[str, ...] = tuple(out.value for out in OutputType)


def _change_dir_output(dest: str, out_type: OutputType) -> str:
    if out_type is OutputType.PLAIN:
        return dest
    if out_type is OutputType.POWERSHELL:
        return f"Push-Location '{dest}'"
    return f"cd {shlex.quote(dest)}"


def _open_in_editor_output(dest: str, out_type: OutputType, editor_set: bool) -> str:
    if out_type is OutputType.POWERSHELL:
        return f"Push-Location '{dest}'"
    if editor_set:
        if out_type is OutputType.PLAIN:
            return dest
        return f"$EDITOR '{dest}'"
    if out_type is OutputType.PLAIN:
        return EDITOR_NOT_SET_MESSAGE
    return 'echo "\\$EDITOR environment variable is not set"'


def render_output(action: Action | None, out_type: OutputType, editor_set: bool | None = None) -> str | None:
    """Text printed on stdout for ``action``; ``None`` means print nothing."""
    if action is None:
        return None
    dest = str(simplify_path(action.dest))
    if isinstance(action, ChangeDir):
        return _change_dir_output(dest, out_type)
    if isinstance(action, OpenInEditor):
        if editor_set is None:
            editor_set = is_editor_set()
        return _open_in_editor_output(dest, out_type, editor_set)
    raise TypeError(f"Unknown action: {action!r}")
