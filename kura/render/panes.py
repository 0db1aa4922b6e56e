"""Formatting for directory-listing panes."""

from __future__ import annotations

from pathlib import Path

from ..ansi import fit_ansi_line, selected_with_ansi
from ..filesystem import Entry
from ..pane import PaneState, classify
from ..ui_theme import DEFAULT_THEME, UITheme


def _styled(text: str, color: str, theme: UITheme) -> str:
    if not color:
        return text
    return f"{color}{text}{theme.reset}"


def format_title(directory: Path, width: int) -> str:
    """Pane title showing the tail of ``directory`` when it does not fit."""
    label = str(directory)
    room = max(1, width - 2)
    if len(label) > room:
        label = "…" + label[-(room - 1) :] if room > 1 else "…"
    return f" {label} "


def format_entry_row(entry: Entry, marked: bool, theme: UITheme | None = None) -> str:
    """Render one listing row: mark column, then the colored name."""
    active_theme = theme or DEFAULT_THEME
    marker = _styled("*", active_theme.mark, active_theme) if marked else " "
    name = entry.display_name + ("/" if entry.is_directory else "")
    color = active_theme.entry_color(classify(entry))
    return f"{marker} {_styled(name, color, active_theme)}"


def render_pane(
    pane: PaneState,
    width: int,
    rows: int,
    active: bool,
    theme: UITheme | None = None,
) -> list[str]:
    """Return ``rows + 1`` fixed-width lines: the title, then visible entries."""
    active_theme = theme or DEFAULT_THEME
    title_color = active_theme.pane_title_active if active else active_theme.pane_title_inactive
    out = [fit_ansi_line(_styled(format_title(pane.current_directory, width), title_color, active_theme), width)]
    if not pane.entries:
        out.append(fit_ansi_line(_styled("  (empty)", active_theme.divider, active_theme), width))
        out.extend(" " * width for _ in range(rows - 1))
        return out
    for row in range(rows):
        idx = pane.scroll_offset + row
        if idx >= len(pane.entries):
            out.append(" " * width)
            continue
        entry = pane.entries[idx]
        line = fit_ansi_line(format_entry_row(entry, entry.path in pane.marked, active_theme), width)
        if active and idx == pane.cursor_index:
            line = selected_with_ansi(line)
        out.append(line)
    return out
