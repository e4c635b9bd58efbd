"""Regression tests for raw-key decoding.

Covers ESC timing, arrow and paging sequences, control-key token mapping and
multi-byte characters typed into the picker query.
"""

import os
import time
import unittest

from lazyapropos.picker import reader as reader_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def _read_all(self, data: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            return [reader_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_home_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1bOH\x1b[F", 4),
            ["UP", "DOWN", "HOME", "END"],
        )

    def test_page_keys(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[5~\x1b[6~", 2), ["PAGE_UP", "PAGE_DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_named_control_bytes(self) -> None:
        self.assertEqual(
            self._read_all(b"\t\r\x7f\x00", 4),
            ["TAB", "ENTER", "BACKSPACE", "CTRL_SPACE"],
        )

    def test_ctrl_letters_are_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x04\x0f\x02\x1a", 4), ["CTRL_D", "CTRL_O", "CTRL_B", "CTRL_Z"])

    def test_utf8_character_is_read_whole(self) -> None:
        self.assertEqual(self._read_all("λ".encode("utf-8"), 1), ["λ"])

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = reader_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")


if __name__ == "__main__":
    unittest.main()
