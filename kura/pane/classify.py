"""Color classification for listing entries."""

from __future__ import annotations

from enum import Enum

from ..filesystem import Entry


class EntryClass(Enum):
    DIRECTORY = "directory"
    HIDDEN = "hidden"
    EXECUTABLE = "executable"
    DEFAULT = "default"


def classify(entry: Entry) -> EntryClass:
    """Classify ``entry`` with precedence Directory > Hidden > Executable > Default."""
    if entry.is_directory:
        return EntryClass.DIRECTORY
    if entry.is_hidden:
        return EntryClass.HIDDEN
    if entry.is_executable:
        return EntryClass.EXECUTABLE
    return EntryClass.DEFAULT
