"""Regression tests for raw-key decoding.

Covers ESC timing, CSI/SS3 sequences, control-key tokens, and UTF-8 input.
"""

from __future__ import annotations

import os
import time
import unittest

from shellmark import input as input_mod


class ReadKeyTokenTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_arrow_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1bOA\x1bOB", 4),
            ["UP", "DOWN", "UP", "DOWN"],
        )

    def test_f1_variants(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1bOP\x1b[11~\x1b[[A", 3),
            ["F1", "F1", "F1"],
        )

    def test_modified_sequences_collapse_to_esc(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5Ax", 2), ["ESC", "x"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\x0e\x10\x0b\x0f\x15\x08\x7f\t\r", 10),
            [
                "CTRL_C",
                "CTRL_N",
                "CTRL_P",
                "CTRL_K",
                "CTRL_O",
                "CTRL_U",
                "CTRL_BACKSPACE",
                "BACKSPACE",
                "TAB",
                "ENTER",
            ],
        )

    def test_multibyte_utf8_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é→".encode("utf-8"), 2), ["é", "→"])

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")

    def test_key_tokens_cover_named_keys(self) -> None:
        for token in ("CTRL_C", "ENTER", "UP", "DOWN", "F1", "ESC", "DELETE"):
            self.assertIn(token, input_mod.KEY_TOKENS)


if __name__ == "__main__":
    unittest.main()
