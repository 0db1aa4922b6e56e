"""Text viewer document loading and line-number arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import stat

from ..errors import DecodeError
from .syntax import DEFAULT_STYLE, colorize_lines, read_text, sanitize_terminal_text

BINARY_SNIFF_BYTES = 8192
COLORIZE_MAX_FILE_BYTES = 256_000


@dataclass(frozen=True)
class TextDocument:
    path: Path
    lines: tuple[str, ...]
    rendered_lines: tuple[str, ...]

    @property
    def total_lines(self) -> int:
        return len(self.lines)


def regular_file_size(path: Path) -> int:
    """Size of ``path`` in bytes; anything but a regular file raises ``DecodeError``.

    Reading a FIFO or device blocks the event loop.
    """
    try:
        st = path.stat()
    except OSError as exc:
        raise DecodeError(path, exc.strerror or "cannot read file") from exc
    if not stat.S_ISREG(st.st_mode):
        raise DecodeError(path, "not a regular file")
    return st.st_size


def _looks_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        return b"\x00" in handle.read(BINARY_SNIFF_BYTES)


def load_text_document(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> TextDocument:
    """Read ``path`` for the text viewer.

    Raises ``DecodeError`` for binary files and anything unreadable. Files
    larger than ``COLORIZE_MAX_FILE_BYTES`` are shown without highlighting.
    """
    file_size = regular_file_size(path)
    try:
        if _looks_binary(path):
            raise DecodeError(path, "binary file")
        source = sanitize_terminal_text(read_text(path))
    except OSError as exc:
        raise DecodeError(path, exc.strerror or "cannot read file") from exc
    lines = tuple(source.splitlines())
    if no_color or file_size > COLORIZE_MAX_FILE_BYTES:
        rendered = lines
    else:
        rendered = tuple(colorize_lines(source, path, style))
    return TextDocument(path=path, lines=lines, rendered_lines=rendered)


def clamp_scroll_line(line: int, total_lines: int) -> int:
    """Clamp ``line`` into ``[0, total_lines - 1]`` (0 for empty documents)."""
    return max(0, min(line, total_lines - 1))


def relative_line_label(index: int, scroll_line: int) -> int:
    """Line number shown for row ``index``: distance to the current line.

    The current line itself shows its absolute (0-based) index.
    """
    if index == scroll_line:
        return index
    return abs(index - scroll_line)


def viewport_top(scroll_line: int, total_lines: int, visible_rows: int) -> int:
    """First visible line: the current line, pulled up so the last page stays full."""
    rows = max(1, visible_rows)
    return max(0, min(scroll_line, total_lines - rows))


@dataclass
class ViewerState:
    """Documents backing the viewer modes; the mode itself tracks position."""

    document: TextDocument | None = None
    image_path: Path | None = None

    def open_text(self, document: TextDocument) -> None:
        self.document = document
        self.image_path = None

    def open_image(self, path: Path) -> None:
        self.document = None
        self.image_path = path

    def close(self) -> None:
        self.document = None
        self.image_path = None
