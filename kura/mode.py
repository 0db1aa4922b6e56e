"""Interaction modes as one exhaustive tagged variant.

Exactly one mode is active at a time; each variant carries only the data
that mode needs, so combinations like visual-select inside the image viewer
cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


class PaneId(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> "PaneId":
        return PaneId.RIGHT if self is PaneId.LEFT else PaneId.LEFT


@dataclass(frozen=True)
class Browse:
    """Plain directory navigation."""


@dataclass(frozen=True)
class VisualSelect:
    """Anchored range selection.

    ``preserved_marks`` holds the marks that existed before the visual session
    started; they are unioned with the live range.
    """

    anchor_index: int
    preserved_marks: frozenset[Path] = frozenset()


@dataclass(frozen=True)
class TextView:
    file_path: Path
    scroll_line: int
    total_lines: int


@dataclass(frozen=True)
class ImageView:
    """Image shown in ``pane_id``, the pane opposite the active one."""

    file_path: Path
    pane_id: PaneId


@dataclass(frozen=True)
class ConfirmDelete:
    targets: tuple[Path, ...]


@dataclass(frozen=True)
class Search:
    """Incremental name search; matching starts after ``origin_index``."""

    query: str
    origin_index: int


@dataclass(frozen=True)
class Rename:
    path: Path
    original: str
    buffer: str


@dataclass(frozen=True)
class Sort:
    selected: int = 0


Mode = Union[Browse, VisualSelect, TextView, ImageView, ConfirmDelete, Search, Rename, Sort]

PROMPT_MODES = (ConfirmDelete, Search, Rename, Sort)


def is_prompt(mode: Mode) -> bool:
    """Return whether ``mode`` consumes raw keys instead of commands."""
    return isinstance(mode, PROMPT_MODES)


def mode_label(mode: Mode) -> str:
    """Short label shown in the status line."""
    if isinstance(mode, VisualSelect):
        return "VISUAL"
    if isinstance(mode, TextView):
        return "VIEW"
    if isinstance(mode, ImageView):
        return "IMAGE"
    if isinstance(mode, ConfirmDelete):
        return "CONFIRM"
    if isinstance(mode, Search):
        return "SEARCH"
    if isinstance(mode, Rename):
        return "RENAME"
    if isinstance(mode, Sort):
        return "SORT"
    return "BROWSE"
