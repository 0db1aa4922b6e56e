"""Text loading, sanitization, and Pygments syntax highlighting.

Neutralizes terminal control bytes so viewing a file can never move the
cursor, ring the bell, or otherwise drive the terminal.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def read_text(path: Path) -> str:
    """Decode ``path`` as UTF-8 (a leading BOM is dropped), falling back to latin-1."""
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def sanitize_terminal_text(source: str) -> str:
    """Show C0/C1 control bytes and DEL as ``\\xNN`` so file content cannot drive the terminal.

    Newlines, carriage returns, and tabs pass through.
    """
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def normalize_style(style: str) -> str:
    """Validate a Pygments style name, falling back to the default style."""
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


def colorize_lines(source: str, path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Highlight ``source`` and return one ANSI-styled string per source line.

    The lexer is picked from the file name; unknown types render through the
    plain text lexer. The result always has as many rows as
    ``source.splitlines()``.
    """
    plain = source.splitlines()
    formatter = _formatter_for_style(normalize_style(style))
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = highlight(source, lexer, formatter).splitlines()
    if len(rendered) < len(plain):
        return plain
    return rendered[: len(plain)]
