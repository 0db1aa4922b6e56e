"""Filesystem-backed directory listings and mutations."""

from .fs import (
    copy_path,
    delete_path,
    entry_for_path,
    find_match,
    is_image,
    list_directory,
    path_exists,
    rename_path,
    sort_entries,
)
from .types import SORT_LABELS, SORT_OPTIONS, Entry, SortOrder

__all__ = [
    "Entry",
    "SortOrder",
    "SORT_LABELS",
    "SORT_OPTIONS",
    "copy_path",
    "delete_path",
    "entry_for_path",
    "find_match",
    "is_image",
    "list_directory",
    "path_exists",
    "rename_path",
    "sort_entries",
]
