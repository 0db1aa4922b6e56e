"""Domain datatypes for directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """Immutable snapshot of one directory child taken at listing time."""

    path: Path
    display_name: str
    is_directory: bool
    is_hidden: bool
    is_executable: bool
    size: int | None = None
    modified_time: int | None = None
    created_time: int | None = None


class SortOrder(Enum):
    """Listing orders offered by the sort popup, in popup order."""

    MODIFIED = "modified"
    CREATED = "created"
    SIZE = "size"
    NAME = "name"

    @property
    def label(self) -> str:
        return SORT_LABELS[self]

    @classmethod
    def parse(cls, value: str | None, default: "SortOrder | None" = None) -> "SortOrder":
        """Return the order named ``value``, falling back to ``default`` or NAME."""
        fallback = default if default is not None else cls.NAME
        if not value:
            return fallback
        candidate = str(value).strip().lower()
        for order in cls:
            if order.value == candidate:
                return order
        return fallback


SORT_LABELS: dict[SortOrder, str] = {
    SortOrder.MODIFIED: "Last modified date",
    SortOrder.CREATED: "Creation date",
    SortOrder.SIZE: "File size",
    SortOrder.NAME: "Alphabetical",
}

SORT_OPTIONS: tuple[SortOrder, ...] = tuple(SortOrder)


__all__ = [
    "Entry",
    "SortOrder",
    "SORT_LABELS",
    "SORT_OPTIONS",
]
