"""Image decoding and half-block ANSI rendering via Pillow.

Each terminal cell shows two vertical pixels: the upper half block's
foreground is the top pixel and its background the bottom pixel.
"""

from __future__ import annotations

import functools
from pathlib import Path

from PIL import Image

from ..errors import DecodeError
from .text import regular_file_size

HALF_BLOCK = "▀"
KITTY_SUFFIXES = frozenset({".png"})

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def probe_image(path: Path) -> tuple[int, int]:
    """Check that ``path`` decodes as an image and return its pixel size."""
    regular_file_size(path)
    try:
        with Image.open(path) as image:
            size = image.size
            image.verify()
    except _DECODE_ERRORS as exc:
        raise DecodeError(path, f"cannot decode image ({exc.__class__.__name__})") from exc
    return size


def supports_kitty_format(path: Path) -> bool:
    """Kitty's file transmission here is PNG-only."""
    return path.suffix.lower() in KITTY_SUFFIXES


def _fg(rgb: tuple[int, int, int]) -> str:
    return f"\033[38;2;{rgb[0]};{rgb[1]};{rgb[2]}m"


def _bg(rgb: tuple[int, int, int]) -> str:
    return f"\033[48;2;{rgb[0]};{rgb[1]};{rgb[2]}m"


@functools.lru_cache(maxsize=8)
def _render_cached(path_str: str, mtime_ns: int, width_cells: int, height_cells: int) -> tuple[str, ...]:
    with Image.open(path_str) as source:
        image = source.convert("RGB")
    image.thumbnail((width_cells, height_cells * 2), Image.Resampling.LANCZOS)
    width, height = image.size
    pixels = image.load()
    rows: list[str] = []
    for y in range(0, height, 2):
        parts: list[str] = []
        for x in range(width):
            top = pixels[x, y]
            if y + 1 < height:
                parts.append(_fg(top) + _bg(pixels[x, y + 1]) + HALF_BLOCK)
            else:
                parts.append("\033[49m" + _fg(top) + HALF_BLOCK)
        parts.append("\033[0m")
        rows.append("".join(parts))
    return tuple(rows)


def render_half_blocks(path: Path, width_cells: int, height_cells: int) -> tuple[str, ...]:
    """Render ``path`` scaled to fit ``width_cells`` x ``height_cells`` terminal cells.

    Raises ``DecodeError`` when the image cannot be decoded.
    """
    if width_cells <= 0 or height_cells <= 0:
        return ()
    try:
        mtime_ns = path.stat().st_mtime_ns
        return _render_cached(str(path), mtime_ns, width_cells, height_cells)
    except _DECODE_ERRORS as exc:
        raise DecodeError(path, f"cannot decode image ({exc.__class__.__name__})") from exc
