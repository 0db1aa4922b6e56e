"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, control keys, and UTF-8 text input.
"""

import os
import time
import unittest

from kura.input import reader as reader_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = reader_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_ss3_arrow_sequence_is_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOB", 1), ["DOWN"])

    def test_tilde_sequences_map_to_home_end_delete(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1~\x1b[4~\x1b[3~", 3), ["HOME", "END", "DELETE"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\r\n\x7f\x08\x15\t", 7),
            ["CTRL_C", "ENTER_CR", "ENTER_LF", "BACKSPACE", "BACKSPACE", "CTRL_U", "TAB"],
        )

    def test_utf8_text_is_returned_as_one_key(self) -> None:
        self.assertEqual(self._read_all("蔵x".encode("utf-8"), 2), ["蔵", "x"])

    def test_timeout_returns_empty_string(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
