"""Text and image viewer rendering."""

from __future__ import annotations

from pathlib import Path

from ..ansi import fit_ansi_line
from ..errors import DecodeError
from ..mode import TextView
from ..ui_theme import DEFAULT_THEME, UITheme
from ..viewer import TextDocument, relative_line_label, render_half_blocks, viewport_top


def render_text_view(
    mode: TextView,
    document: TextDocument | None,
    width: int,
    rows: int,
    theme: UITheme | None = None,
) -> list[str]:
    """Return ``rows + 1`` lines: a title, then numbered document lines.

    Numbers are relative to the current line; the current line shows its own
    index.
    """
    active_theme = theme or DEFAULT_THEME
    title = f" {mode.file_path.name} "
    out = [fit_ansi_line(f"{active_theme.pane_title_active}{title}{active_theme.reset}", width)]
    lines = document.rendered_lines if document is not None else ()
    total = len(lines)
    number_width = len(str(max(total - 1, 0)))
    top = viewport_top(mode.scroll_line, total, rows)
    for row in range(rows):
        idx = top + row
        if idx >= total:
            out.append(" " * width)
            continue
        current = idx == mode.scroll_line
        color = active_theme.line_number_current if current else active_theme.line_number
        label = f"{relative_line_label(idx, mode.scroll_line):>{number_width}}"
        number = f"{color}{label}{active_theme.reset}" if color else label
        out.append(fit_ansi_line(f"{number} {lines[idx]}", width))
    return out


def render_image_pane(
    path: Path,
    width: int,
    rows: int,
    theme: UITheme | None = None,
    draw_pixels: bool = True,
) -> list[str]:
    """Return ``rows + 1`` lines: a title, then the half-block picture.

    With ``draw_pixels`` off the body is left blank for an out-of-band
    renderer (kitty graphics) to paint over.
    """
    active_theme = theme or DEFAULT_THEME
    out = [fit_ansi_line(f"{active_theme.pane_title_active} {path.name} {active_theme.reset}", width)]
    body: tuple[str, ...] = ()
    if draw_pixels:
        try:
            body = render_half_blocks(path, width, rows)
        except DecodeError as exc:
            body = (f"{active_theme.status_error}{exc}{active_theme.reset}",)
    for row in range(rows):
        out.append(fit_ansi_line(body[row], width) if row < len(body) else " " * width)
    return out
