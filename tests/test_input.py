"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, control-key tokens, and UTF-8 input.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from gitstage import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        os.write(self.write_fd, b"\x1b")
        started = time.monotonic()
        key = input_mod.read_key(self.read_fd)
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        # Esc waits briefly for sequence bytes, but should not require another key press.
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        os.write(self.write_fd, b"\x1b[A\x1b[B\x1bOC\x1b[D")

        keys = [input_mod.read_key(self.read_fd) for _ in range(4)]

        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        os.write(self.write_fd, b"\x1bq")

        first = input_mod.read_key(self.read_fd)
        second = input_mod.read_key(self.read_fd)

        self.assertEqual(first, "ESC")
        self.assertEqual(second, "q")

    def test_control_keys_map_to_tokens(self) -> None:
        os.write(self.write_fd, b"\r\n\x03\x7f\t")

        keys = [input_mod.read_key(self.read_fd) for _ in range(5)]

        self.assertEqual(keys, ["ENTER", "ENTER", "CTRL_C", "BACKSPACE", "TAB"])

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        os.write(self.write_fd, "é=".encode("utf-8"))

        self.assertEqual(input_mod.read_key(self.read_fd), "é")
        self.assertEqual(input_mod.read_key(self.read_fd), "=")


class IterKeysTests(unittest.TestCase):
    def test_iter_keys_stops_at_end_of_input(self) -> None:
        input_mod._PENDING_BYTES.clear()
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"jk=")
            os.close(write_fd)
            keys = list(input_mod.iter_keys(read_fd))
        finally:
            os.close(read_fd)

        self.assertEqual(keys, ["j", "k", "="])


if __name__ == "__main__":
    unittest.main()
