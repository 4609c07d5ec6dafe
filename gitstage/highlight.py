"""File loading, terminal sanitizing, and syntax highlighting for the file view.

Reading never translates newlines, so a viewed file's content is byte-for-byte
what was decoded from disk. Highlighting is display-only.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import ReadError

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def decode_text(data: bytes) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def read_text(path: Path) -> str:
    return decode_text(path.read_bytes())


class WorkingTreeReader:
    """Read repository-relative paths from a working tree, raising ``ReadError``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def read_text(self, path: str) -> str:
        target = self.root / path
        try:
            return read_text(target)
        except OSError as exc:
            logger.info("read failed for %s: %s", target, exc)
            raise ReadError(path, exc.strerror or str(exc)) from exc


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI syntax colors picked from ``path``'s name."""
    formatter = _formatter_for_style(normalize_style(style))
    try:
        lexer = get_lexer_for_filename(Path(path).name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    rendered = pygments_highlight(source, lexer, formatter)
    # Pygments always terminates output with a newline.
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
