"""Tests for working-tree reads, control-byte sanitizing, and highlighting.

Reads must return content exactly as stored, and highlighting must keep one
output line per source line so the file view can scroll by index.
"""

import re
import tempfile
import unittest
from pathlib import Path

from gitstage.errors import ReadError
from gitstage.highlight import (
    DEFAULT_STYLE,
    WorkingTreeReader,
    colorize_source,
    decode_text,
    normalize_style,
    sanitize_terminal_text,
)

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class DecodeTextTests(unittest.TestCase):
    def test_utf8_is_preferred(self) -> None:
        self.assertEqual(decode_text("héllo".encode("utf-8")), "héllo")

    def test_invalid_utf8_falls_back_to_latin1(self) -> None:
        self.assertEqual(decode_text(b"caf\xe9"), "café")


class WorkingTreeReaderTests(unittest.TestCase):
    def test_reads_content_without_newline_translation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "crlf.txt").write_bytes(b"one\r\ntwo\r\n")
            reader = WorkingTreeReader(root)

            self.assertEqual(reader.read_text("crlf.txt"), "one\r\ntwo\r\n")

    def test_missing_file_raises_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = WorkingTreeReader(Path(tmp))

            with self.assertRaises(ReadError) as ctx:
                reader.read_text("gone.txt")

        self.assertEqual(ctx.exception.path, "gone.txt")
        self.assertIn("gone.txt", str(ctx.exception))


class SanitizeTerminalTextTests(unittest.TestCase):
    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07"), "a\\x1b[2Jb\\x07")

    def test_whitespace_is_preserved(self) -> None:
        text = "a\tb\r\nc\n"
        self.assertIs(sanitize_terminal_text(text), text)


class ColorizeSourceTests(unittest.TestCase):
    def test_python_source_keeps_line_count(self) -> None:
        source = "def f():\n\n    return 1\n"
        rendered = colorize_source(source, "mod.py")

        self.assertIn("\x1b[", rendered)
        self.assertEqual(ANSI_RE.sub("", rendered), source)
        self.assertEqual(len(rendered.splitlines()), 3)

    def test_unknown_extension_uses_plain_text_lexer(self) -> None:
        source = "  leading spaces\n\nlast"
        rendered = colorize_source(source, "notes.unknownext")

        self.assertEqual(ANSI_RE.sub("", rendered), source)

    def test_unknown_style_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), DEFAULT_STYLE)
        self.assertEqual(normalize_style("friendly"), "friendly")


if __name__ == "__main__":
    unittest.main()
