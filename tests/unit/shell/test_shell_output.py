"""Unit tests for rendering terminal actions for the calling shell."""

from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest import mock

from shellmark.browse.state import ChangeDir, OpenInEditor
from shellmark.editor import editor_command, is_editor_set
from shellmark.shell import EDITOR_NOT_SET_MESSAGE, OutputType, render_output

DEST = Path("/home/u/proj")


class OutputTypeTests(unittest.TestCase):
    def test_parse_known_values(self) -> None:
        self.assertIs(OutputType.parse("plain"), OutputType.PLAIN)
        self.assertIs(OutputType.parse("powershell"), OutputType.POWERSHELL)

    def test_parse_unknown_value_lists_choices(self) -> None:
        with self.assertRaises(ValueError) as caught:
            OutputType.parse("zsh")

        self.assertIn("plain, posix, fish, powershell", str(caught.exception))


class RenderOutputTests(unittest.TestCase):
    def test_no_action_prints_nothing(self) -> None:
        for out_type in OutputType:
            self.assertIsNone(render_output(None, out_type))

    def test_change_dir(self) -> None:
        action = ChangeDir(DEST)

        self.assertEqual(render_output(action, OutputType.PLAIN), "/home/u/proj")
        self.assertEqual(render_output(action, OutputType.POSIX), "cd /home/u/proj")
        self.assertEqual(render_output(action, OutputType.FISH), "cd /home/u/proj")
        self.assertEqual(render_output(action, OutputType.POWERSHELL), "Push-Location '/home/u/proj'")

    def test_change_dir_quotes_paths_for_eval(self) -> None:
        action = ChangeDir(Path("/home/u/my proj"))

        self.assertEqual(render_output(action, OutputType.POSIX), "cd '/home/u/my proj'")
        self.assertEqual(render_output(action, OutputType.FISH), "cd '/home/u/my proj'")
        self.assertEqual(render_output(action, OutputType.PLAIN), "/home/u/my proj")
        self.assertEqual(
            render_output(ChangeDir(Path("/tmp/it's")), OutputType.POSIX),
            "cd '/tmp/it'\"'\"'s'",
        )

    def test_open_in_editor_with_editor(self) -> None:
        action = OpenInEditor(DEST)

        self.assertEqual(render_output(action, OutputType.PLAIN, editor_set=True), "/home/u/proj")
        self.assertEqual(render_output(action, OutputType.POSIX, editor_set=True), "$EDITOR '/home/u/proj'")
        self.assertEqual(render_output(action, OutputType.FISH, editor_set=True), "$EDITOR '/home/u/proj'")
        self.assertEqual(
            render_output(action, OutputType.POWERSHELL, editor_set=True),
            "Push-Location '/home/u/proj'",
        )

    def test_open_in_editor_without_editor(self) -> None:
        action = OpenInEditor(DEST)

        self.assertEqual(render_output(action, OutputType.PLAIN, editor_set=False), EDITOR_NOT_SET_MESSAGE)
        self.assertEqual(
            render_output(action, OutputType.POSIX, editor_set=False),
            'echo "\\$EDITOR environment variable is not set"',
        )

    def test_editor_detection_follows_environment(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "code --wait"}):
            self.assertEqual(editor_command(), ["code", "--wait"])
            self.assertTrue(is_editor_set())
            self.assertEqual(render_output(OpenInEditor(DEST), OutputType.PLAIN), "/home/u/proj")
        with mock.patch.dict(os.environ, {"EDITOR": "  "}):
            self.assertEqual(editor_command(), [])
            self.assertFalse(is_editor_set())


if __name__ == "__main__":
    unittest.main()
