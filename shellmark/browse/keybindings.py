"""Default key bindings for the browser modes."""

from __future__ import annotations

from .. import keymap as keys
from ..errors import UnboundCommandError
from ..keymap import ModeKeymap
from .state import (
    ClearInput,
    Command,
    DefaultAction,
    DeleteCharBack,
    DelSelBookmark,
    EnterMode,
    EnterSelDir,
    ExitApp,
    InsertChar,
    Mode,
    MoveDirection,
    MoveSel,
    OpenSelInEditor,
)


def setup_keybindings() -> ModeKeymap[Command]:
    mapping: ModeKeymap[Command] = ModeKeymap()

    # Normal
    mapping.bind(Mode.NORMAL, keys.ctrl("c"), ExitApp(), "exit")
    mapping.bind(
        Mode.NORMAL,
        keys.ctrl("n") | keys.arrow_down(),
        MoveSel(MoveDirection.DOWN),
        "move selection down",
    )
    mapping.bind(
        Mode.NORMAL,
        keys.ctrl("p") | keys.arrow_up(),
        MoveSel(MoveDirection.UP),
        "move selection up",
    )
    mapping.bind(Mode.NORMAL, keys.enter(), DefaultAction(), "cd to dir / open file in $EDITOR")
    mapping.bind(Mode.NORMAL, keys.ctrl("o"), OpenSelInEditor(), "open in $EDITOR")
    mapping.bind(Mode.NORMAL, keys.tab(), EnterSelDir(), "cd to dir (parent dir for files)")
    mapping.bind(Mode.NORMAL, keys.ctrl("k"), EnterMode(Mode.PENDING_DELETE), "delete bookmark")
    mapping.bind(Mode.NORMAL, keys.backspace(), DeleteCharBack(), "delete char")
    mapping.bind(Mode.NORMAL, keys.ctrl_backspace() | keys.ctrl("u"), ClearInput(), "clear input")
    mapping.bind(Mode.NORMAL, keys.f1(), EnterMode(Mode.HELP), "help")
    mapping.bind_with_input(Mode.NORMAL, keys.any_char(), InsertChar)

    # PendingDelete
    mapping.bind(Mode.PENDING_DELETE, keys.ctrl("c"), ExitApp(), "exit")
    mapping.bind(Mode.PENDING_DELETE, keys.char("y"), DelSelBookmark(), "confirm delete")
    mapping.bind(Mode.PENDING_DELETE, keys.char("n") | keys.esc(), EnterMode(Mode.NORMAL), "cancel")

    # Help
    mapping.bind(Mode.HELP, keys.ctrl("c"), ExitApp(), "exit")
    mapping.bind(Mode.HELP, keys.esc() | keys.f1() | keys.char("q"), EnterMode(Mode.NORMAL), "close help")

    return mapping


def check_mode_transitions(mapping: ModeKeymap[Command], probe_keys: list[str]) -> None:
    """Verify that ``probe_keys`` only produce commands allowed in each mode.

    ``PendingDelete`` and ``Help`` are entered from ``Normal`` and only lead
    back to it; deletion is confirmed from ``PendingDelete`` only.
    """
    for mode in mapping.modes():
        for key in probe_keys:
            command = mapping.process(mode, key)
            if isinstance(command, EnterMode):
                if mode is Mode.NORMAL and command.mode is Mode.NORMAL:
                    continue
                if (mode is Mode.NORMAL) == (command.mode is Mode.NORMAL):
                    raise UnboundCommandError(f"{key!r} in {mode.value} mode enters {command.mode.value}")
            if isinstance(command, DelSelBookmark) and mode is not Mode.PENDING_DELETE:
                raise UnboundCommandError(f"{key!r} in {mode.value} mode deletes without confirmation")
