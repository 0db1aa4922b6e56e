"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (panes, viewer chrome, prompts). Syntax
highlighting style for the text viewer remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .pane import EntryClass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    divider: str
    header_accent: str
    header_title: str
    pane_title_active: str
    pane_title_inactive: str
    entry_directory: str
    entry_hidden: str
    entry_executable: str
    entry_default: str
    mark: str
    line_number: str
    line_number_current: str
    prompt_border: str
    prompt_title: str
    status_error: str

    def entry_color(self, entry_class: EntryClass) -> str:
        """ANSI prefix for an entry of ``entry_class``."""
        if entry_class is EntryClass.DIRECTORY:
            return self.entry_directory
        if entry_class is EntryClass.HIDDEN:
            return self.entry_hidden
        if entry_class is EntryClass.EXECUTABLE:
            return self.entry_executable
        return self.entry_default


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2m",
    header_accent="\033[1;35m",
    header_title="\033[1m",
    pane_title_active="\033[1;33m",
    pane_title_inactive="\033[1;37m",
    entry_directory="\033[34m",
    entry_hidden="\033[31m",
    entry_executable="\033[32m",
    entry_default="",
    mark="\033[1;33m",
    line_number="\033[90m",
    line_number_current="\033[1;33m",
    prompt_border="\033[38;5;45m",
    prompt_title="\033[1;38;5;45m",
    status_error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2;38;5;31m",
    header_accent="\033[1;38;5;45m",
    header_title="\033[1;38;5;153m",
    pane_title_active="\033[1;38;5;45m",
    pane_title_inactive="\033[2;38;5;110m",
    entry_directory="\033[1;38;5;39m",
    entry_hidden="\033[38;5;203m",
    entry_executable="\033[38;5;42m",
    entry_default="",
    mark="\033[1;38;5;215m",
    line_number="\033[38;5;67m",
    line_number_current="\033[1;38;5;153m",
    prompt_border="\033[38;5;39m",
    prompt_title="\033[1;38;5;39m",
    status_error="\033[1;38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    divider="",
    header_accent="",
    header_title="",
    pane_title_active="",
    pane_title_inactive="",
    entry_directory="",
    entry_hidden="",
    entry_executable="",
    entry_default="",
    mark="",
    line_number="",
    line_number_current="",
    prompt_border="",
    prompt_title="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme`` and the config file (``plain`` is implied by ``--no-color``)."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    candidate = (name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Palette for ``name``; ``no_color`` always wins and selects the plain palette."""
    return PLAIN_THEME if no_color else _THEMES[normalize_theme_name(name)]
