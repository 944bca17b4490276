"""Unit tests for the default browser key tables."""

from __future__ import annotations

import unittest

from shellmark.browse.app import PROBE_KEYS
from shellmark.browse.keybindings import check_mode_transitions, setup_keybindings
from shellmark.browse.state import (
    ClearInput,
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
from shellmark.errors import UnboundCommandError
from shellmark.keymap import ModeKeymap, char


class NormalModeBindingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.keymap = setup_keybindings()

    def _process(self, key: str):
        return self.keymap.process(Mode.NORMAL, key)

    def test_navigation_keys(self) -> None:
        self.assertEqual(self._process("CTRL_N"), MoveSel(MoveDirection.DOWN))
        self.assertEqual(self._process("DOWN"), MoveSel(MoveDirection.DOWN))
        self.assertEqual(self._process("CTRL_P"), MoveSel(MoveDirection.UP))
        self.assertEqual(self._process("UP"), MoveSel(MoveDirection.UP))

    def test_action_keys(self) -> None:
        self.assertEqual(self._process("CTRL_C"), ExitApp())
        self.assertEqual(self._process("ENTER"), DefaultAction())
        self.assertEqual(self._process("CTRL_O"), OpenSelInEditor())
        self.assertEqual(self._process("TAB"), EnterSelDir())
        self.assertEqual(self._process("CTRL_K"), EnterMode(Mode.PENDING_DELETE))
        self.assertEqual(self._process("F1"), EnterMode(Mode.HELP))

    def test_editing_keys(self) -> None:
        self.assertEqual(self._process("BACKSPACE"), DeleteCharBack())
        self.assertEqual(self._process("CTRL_BACKSPACE"), ClearInput())
        self.assertEqual(self._process("CTRL_U"), ClearInput())

    def test_printable_characters_insert_themselves(self) -> None:
        for ch in ("a", "Z", "7", " ", "/", "é", "y", "n", "q"):
            self.assertEqual(self._process(ch), InsertChar(ch))

    def test_unknown_tokens_are_unbound(self) -> None:
        self.assertIsNone(self._process("HOME"))
        self.assertIsNone(self._process("ESC"))

    def test_help_descriptions_list_named_bindings(self) -> None:
        descriptions = dict(self.keymap.descriptions(Mode.NORMAL))

        self.assertEqual(descriptions["C-n/Down"], "move selection down")
        self.assertEqual(descriptions["C-Backspace/C-u"], "clear input")
        self.assertEqual(descriptions["F1"], "help")
        self.assertNotIn(None, descriptions)


class ConfirmAndHelpBindingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.keymap = setup_keybindings()

    def test_pending_delete_accepts_only_confirm_cancel_and_exit(self) -> None:
        self.assertEqual(self.keymap.process(Mode.PENDING_DELETE, "y"), DelSelBookmark())
        self.assertEqual(self.keymap.process(Mode.PENDING_DELETE, "n"), EnterMode(Mode.NORMAL))
        self.assertEqual(self.keymap.process(Mode.PENDING_DELETE, "ESC"), EnterMode(Mode.NORMAL))
        self.assertEqual(self.keymap.process(Mode.PENDING_DELETE, "CTRL_C"), ExitApp())
        self.assertIsNone(self.keymap.process(Mode.PENDING_DELETE, "ENTER"))
        self.assertIsNone(self.keymap.process(Mode.PENDING_DELETE, "a"))

    def test_help_closes_on_esc_f1_or_q(self) -> None:
        for key in ("ESC", "F1", "q"):
            self.assertEqual(self.keymap.process(Mode.HELP, key), EnterMode(Mode.NORMAL))
        self.assertEqual(self.keymap.process(Mode.HELP, "CTRL_C"), ExitApp())
        self.assertIsNone(self.keymap.process(Mode.HELP, "a"))


class ModeTransitionCheckTests(unittest.TestCase):
    def test_default_keymap_passes(self) -> None:
        check_mode_transitions(setup_keybindings(), list(PROBE_KEYS))

    def test_delete_outside_confirmation_is_rejected(self) -> None:
        keymap: ModeKeymap = ModeKeymap()
        keymap.bind(Mode.NORMAL, char("d"), DelSelBookmark(), "delete")

        with self.assertRaises(UnboundCommandError):
            check_mode_transitions(keymap, ["d"])

    def test_direct_jump_between_overlay_modes_is_rejected(self) -> None:
        keymap: ModeKeymap = ModeKeymap()
        keymap.bind(Mode.HELP, char("d"), EnterMode(Mode.PENDING_DELETE), "delete")

        with self.assertRaises(UnboundCommandError):
            check_mode_transitions(keymap, ["d"])


if __name__ == "__main__":
    unittest.main()
