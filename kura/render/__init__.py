"""Frame composition for the two-pane terminal view.

Builds full ANSI frames from controller state without mutating it. Layout,
top to bottom: a centered header, pane titles plus listings (or the text
viewer across the full width), then one status line.
"""

from __future__ import annotations

import os
import sys

from ..ansi import clip_ansi_line, display_width, fit_ansi_line, selected_with_ansi
from ..controller import AppController
from ..filesystem import SORT_OPTIONS
from ..mode import ConfirmDelete, ImageView, PaneId, Rename, Search, Sort, TextView, mode_label
from ..ui_theme import DEFAULT_THEME, UITheme
from .overlay import build_box, overlay_rows
from .panes import format_entry_row, format_title, render_pane
from .viewer import render_image_pane, render_text_view

HEADER_GLYPH = "蔵"
HEADER_TITLE = "kura"
CHROME_ROWS = 3
DIVIDER = "│"


def content_rows_for_height(height: int) -> int:
    """Listing rows left after the header, pane titles, and status line."""
    return max(1, height - CHROME_ROWS)


def pane_widths(width: int) -> tuple[int, int]:
    """Column widths of the left and right panes around the divider."""
    left = max(1, (width - 1) // 2)
    right = max(1, width - left - 1)
    return left, right


def image_geometry(controller: AppController, width: int, height: int) -> tuple[int, int, int, int] | None:
    """1-based ``(col, row, width, height)`` cell box for an out-of-band image."""
    mode = controller.mode
    if not isinstance(mode, ImageView):
        return None
    left, right = pane_widths(width)
    col = 1 if mode.pane_id is PaneId.LEFT else left + 2
    pane_width = left if mode.pane_id is PaneId.LEFT else right
    return col, 3, pane_width, content_rows_for_height(height)


def build_header(width: int, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    plain = f"{HEADER_GLYPH} {HEADER_TITLE}"
    pad = max(0, (width - display_width(plain)) // 2)
    styled = (
        f"{active_theme.header_accent}{HEADER_GLYPH}{active_theme.reset} "
        f"{active_theme.header_title}{HEADER_TITLE}{active_theme.reset}"
    )
    return fit_ansi_line(" " * pad + styled, width)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_texts(controller: AppController) -> tuple[str, str]:
    """Left and right halves of the status line for the current state."""
    mode = controller.mode
    parts = [mode_label(mode)]
    if isinstance(mode, Search):
        parts.append(f"/{mode.query}")
    elif isinstance(mode, Rename):
        parts.append(f"rename: {mode.original} -> {mode.buffer}")
    pending = controller.pending
    typed = pending.digit_buffer + pending.partial_key_sequence
    if typed:
        parts.append(typed)
    if controller.status_message:
        parts.append(controller.status_message)

    if isinstance(mode, TextView):
        right = f"{mode.scroll_line + 1}/{mode.total_lines}" if mode.total_lines else "0/0"
    else:
        pane = controller.active_pane
        right = f"{pane.cursor_index + 1}/{len(pane.entries)}" if pane.entries else "0/0"
        if pane.marked:
            right = f"{len(pane.marked)} marked  {right}"
    return "  ".join(parts), right


def _confirm_box(mode: ConfirmDelete, width: int, theme: UITheme) -> list[str]:
    prompt = f"Delete {len(mode.targets)} item(s)? (y/N)"
    box_width = min(width, max(len(prompt) + 4, width * 2 // 5))
    inner = box_width - 2
    pad = max(0, (inner - len(prompt)) // 2)
    return build_box("Confirm Deletion", [" " * pad + prompt], box_width, theme)


def _sort_box(mode: Sort, width: int, theme: UITheme) -> list[str]:
    labels = [order.label for order in SORT_OPTIONS]
    box_width = min(width, max(max(len(label) for label in labels) + 4, width * 2 // 5))
    lines = []
    for idx, label in enumerate(labels):
        row = fit_ansi_line(f" {label}", box_width - 2)
        lines.append(selected_with_ansi(row) if idx == mode.selected else row)
    return build_box("Sort By", lines, box_width, theme)


def build_frame(
    controller: AppController,
    width: int,
    height: int,
    theme: UITheme | None = None,
    *,
    kitty_images: bool = False,
) -> list[str]:
    """Return exactly ``height`` rows, each ``width`` display columns wide."""
    active_theme = theme or DEFAULT_THEME
    width = max(2, width)
    height = max(CHROME_ROWS + 1, height)
    rows = content_rows_for_height(height)
    mode = controller.mode

    if isinstance(mode, TextView):
        body = render_text_view(mode, controller.viewer.document, width, rows, active_theme)
    else:
        left_width, right_width = pane_widths(width)
        columns: dict[PaneId, list[str]] = {}
        for pane_id, pane_width in ((PaneId.LEFT, left_width), (PaneId.RIGHT, right_width)):
            if isinstance(mode, ImageView) and mode.pane_id is pane_id:
                columns[pane_id] = render_image_pane(
                    mode.file_path,
                    pane_width,
                    rows,
                    active_theme,
                    draw_pixels=not kitty_images,
                )
            else:
                columns[pane_id] = render_pane(
                    controller.panes[pane_id],
                    pane_width,
                    rows,
                    pane_id is controller.active_pane_id,
                    active_theme,
                )
        divider = f"{active_theme.divider}{DIVIDER}{active_theme.reset}" if active_theme.divider else DIVIDER
        body = [
            f"{left}{divider}{right}"
            for left, right in zip(columns[PaneId.LEFT], columns[PaneId.RIGHT])
        ]

    if isinstance(mode, ConfirmDelete):
        body = overlay_rows(body, _confirm_box(mode, width, active_theme), width)
    elif isinstance(mode, Sort):
        body = overlay_rows(body, _sort_box(mode, width, active_theme), width)

    left_text, right_text = status_texts(controller)
    status = build_status_line(left_text, width, right_text)
    if controller.status_is_error and controller.status_message and active_theme.status_error:
        status = f"{active_theme.status_error}{status}{active_theme.reset}"
    return [build_header(width, active_theme), *body, clip_ansi_line(status, width)]


def render_frame_text(rows: list[str]) -> str:
    return "\033[H\033[J" + "\r\n".join(rows)


def draw_frame(
    controller: AppController,
    width: int,
    height: int,
    theme: UITheme | None = None,
    *,
    kitty_images: bool = False,
) -> None:
    """Write one full frame to stdout."""
    frame = render_frame_text(build_frame(controller, width, height, theme, kitty_images=kitty_images))
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "build_frame",
    "build_header",
    "build_status_line",
    "content_rows_for_height",
    "draw_frame",
    "format_entry_row",
    "format_title",
    "image_geometry",
    "pane_widths",
    "render_frame_text",
    "status_texts",
]
