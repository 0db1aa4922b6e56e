"""ANSI-aware measurement and slicing of styled terminal rows.

Pane rows, popup boxes, and the status line are all built as strings that
mix SGR escape sequences with text. These helpers measure and cut such rows
by display column so composed frames stay aligned with wide characters and
colors present.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"
REVERSE = "\033[7m"


def char_display_width(ch: str, col: int) -> int:
    """Columns ``ch`` occupies when drawn at column ``col``.

    Tabs run to the next stop, combining marks take none, East Asian wide and
    fullwidth characters take two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1


def _segments(text: str) -> Iterator[tuple[str, str]]:
    """Yield ``(escape, char)`` pairs in order; exactly one side is non-empty."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        for ch in text[pos : match.start()]:
            yield "", ch
        yield match.group(0), ""
        pos = match.end()
    for ch in text[pos:]:
        yield "", ch


def display_width(text: str) -> int:
    """Display columns used by ``text`` once escape sequences are removed."""
    col = 0
    for escape, ch in _segments(text):
        if not escape:
            col += char_display_width(ch, col)
    return col


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Cut the column window ``[start_cols, start_cols + max_cols)`` out of ``text``.

    Escapes inside the window are kept verbatim and the last SGR seen before
    the window is replayed at its start, so visible text keeps its style.
    Tabs become spaces. A wide character cut by the left edge shows as
    padding; one that would overflow the right edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""
    start = max(0, start_cols)
    end = start + max_cols
    out: list[str] = []
    carried_sgr = ""
    col = 0
    for escape, ch in _segments(text):
        if escape:
            if col < start:
                if escape.endswith("m"):
                    carried_sgr = escape
                continue
            out.append(escape)
            continue
        width = char_display_width(ch, col)
        if col + width > end:
            break
        if col + width > start:
            if carried_sgr:
                out.append(carried_sgr)
                carried_sgr = ""
            if col < start:
                out.append(" " * (col + width - start))
            elif ch == "\t":
                out.append(" " * width)
            else:
                out.append(ch)
        col += width
    return "".join(out)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Keep at most the first ``max_cols`` display columns of ``text``."""
    return slice_ansi_line(text, 0, max_cols)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad with spaces to exactly ``width``.

    Styled content is closed with a reset so padding is never colored.
    """
    clipped = clip_ansi_line(text, width)
    padding = " " * max(0, width - display_width(clipped))
    if "\033" in clipped:
        return clipped + RESET + padding
    return clipped + padding


def selected_with_ansi(text: str) -> str:
    """Wrap a row in reverse video, re-applying it after every internal reset."""
    if not text:
        return text
    return REVERSE + text.replace(RESET, "\033[0;7m") + RESET
