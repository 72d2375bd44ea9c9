"""Regression tests for raw-key decoding.

Covers ESC timing, arrow and paging sequences, and control-key token mapping.
"""

from __future__ import annotations

import os
import time
import unittest

from comrad import input as input_mod


class ReadKeyTests(unittest.TestCase):
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
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=5)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")

    def test_arrow_sequences_in_csi_and_ss3_form(self) -> None:
        keys = self._read_all(b"\x1b[A\x1b[B\x1bOA\x1bOB", 4)
        self.assertEqual(keys, ["UP", "DOWN", "UP", "DOWN"])

    def test_paging_and_home_end_sequences(self) -> None:
        keys = self._read_all(b"\x1b[5~\x1b[6~\x1b[H\x1b[F\x1b[1~\x1b[4~", 6)
        self.assertEqual(keys, ["PAGE_UP", "PAGE_DOWN", "HOME", "END", "HOME", "END"])

    def test_modified_arrow_keeps_base_meaning(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5B", 1), ["DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys_are_named(self) -> None:
        keys = self._read_all(b"\x03\x04\x15\r\x7f\x08\t", 7)
        self.assertEqual(keys, ["CTRL_C", "CTRL_D", "CTRL_U", "ENTER", "BACKSPACE", "BACKSPACE", "TAB"])

    def test_printable_and_utf8_characters_pass_through(self) -> None:
        keys = self._read_all("jé/".encode("utf-8"), 3)
        self.assertEqual(keys, ["j", "é", "/"])


if __name__ == "__main__":
    unittest.main()
