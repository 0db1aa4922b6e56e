"""Read-only JSON config helpers.

The config file supplies defaults for the UI theme, the Pygments style, and
the initial sort order. All access is defensive: a missing or malformed file
falls back to defaults, and the session never writes it back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..filesystem import SortOrder
from ..ui_theme import normalize_theme_name
from ..viewer.syntax import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "kura"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name(data: dict[str, object]) -> str | None:
    return _load_string(data, "theme")


def load_style_name(data: dict[str, object]) -> str | None:
    return _load_string(data, "style")


def load_sort_order(data: dict[str, object]) -> SortOrder | None:
    value = _load_string(data, "sort")
    if value is None:
        return None
    return SortOrder.parse(value)


@dataclass(frozen=True)
class AppOptions:
    """Resolved session settings handed to the runtime."""

    theme_name: str = "default"
    style: str = DEFAULT_STYLE
    sort_order: SortOrder = SortOrder.NAME
    no_color: bool = False

    @classmethod
    def resolve(
        cls,
        config: dict[str, object],
        *,
        theme: str | None = None,
        style: str | None = None,
        sort: str | None = None,
        no_color: bool = False,
    ) -> "AppOptions":
        """Merge CLI values over config values over built-in defaults."""
        sort_order = SortOrder.parse(sort, None) if sort else load_sort_order(config)
        return cls(
            theme_name=normalize_theme_name(theme or load_theme_name(config)),
            style=style or load_style_name(config) or DEFAULT_STYLE,
            sort_order=sort_order or SortOrder.NAME,
            no_color=no_color,
        )
