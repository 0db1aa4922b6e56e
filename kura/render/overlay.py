"""Centered popup boxes drawn over already-rendered rows."""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width, fit_ansi_line, slice_ansi_line
from ..ui_theme import DEFAULT_THEME, UITheme


def build_box(title: str, lines: list[str], width: int, theme: UITheme | None = None) -> list[str]:
    """Frame ``lines`` in a box exactly ``width`` columns wide."""
    active_theme = theme or DEFAULT_THEME
    border = active_theme.prompt_border
    reset = active_theme.reset if border else ""
    inner = max(1, width - 2)
    heading = clip_ansi_line(f" {title} ", inner)
    top_fill = "─" * max(0, inner - display_width(heading))
    out = [f"{border}┌{reset}{active_theme.prompt_title}{heading}{active_theme.reset}{border}{top_fill}┐{reset}"]
    for line in lines:
        out.append(f"{border}│{reset}{fit_ansi_line(line, inner)}{border}│{reset}")
    out.append(f"{border}└{'─' * inner}┘{reset}")
    return out


def overlay_rows(rows: list[str], box: list[str], width: int) -> list[str]:
    """Splice ``box`` into the middle of ``rows`` (each ``width`` columns wide)."""
    if not rows or not box:
        return rows
    box_width = max(display_width(line) for line in box)
    box_width = min(box_width, width)
    col = max(0, (width - box_width) // 2)
    top = max(0, (len(rows) - len(box)) // 2)
    out = list(rows)
    for offset, line in enumerate(box):
        row = top + offset
        if row >= len(out):
            break
        base = out[row]
        left = fit_ansi_line(clip_ansi_line(base, col), col) if col else ""
        right_start = col + box_width
        right = slice_ansi_line(base, right_start, max(0, width - right_start))
        out[row] = f"{left}\033[0m{clip_ansi_line(line, box_width)}\033[0m{right}"
    return out
