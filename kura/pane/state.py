"""Per-pane listing, cursor, scroll, and mark bookkeeping.

All navigation is pure index arithmetic over the current listing; the
listing itself is only ever replaced wholesale (``replace_listing``), which
is also where marks are pruned and the cursor is re-clamped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..filesystem import Entry, SortOrder, list_directory, sort_entries


@dataclass
class PaneState:
    current_directory: Path
    entries: list[Entry] = field(default_factory=list)
    cursor_index: int = 0
    scroll_offset: int = 0
    marked: set[Path] = field(default_factory=set)
    sort_order: SortOrder = SortOrder.NAME

    @classmethod
    def open(cls, directory: Path, sort_order: SortOrder = SortOrder.NAME) -> "PaneState":
        """List ``directory`` and return a pane with the cursor on the first entry.

        Raises ``FilesystemError`` when the directory cannot be listed.
        """
        pane = cls(current_directory=directory, sort_order=sort_order)
        pane.replace_listing(directory, list_directory(directory, sort_order))
        return pane

    @property
    def cursor_entry(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor_index]

    @property
    def last_index(self) -> int:
        return max(0, len(self.entries) - 1)

    def index_of(self, path: Path) -> int | None:
        for idx, entry in enumerate(self.entries):
            if entry.path == path:
                return idx
        return None

    def set_cursor(self, index: int) -> bool:
        """Move the cursor to ``index`` (clamped), returning whether it moved."""
        target = max(0, min(index, self.last_index))
        if target == self.cursor_index:
            return False
        self.cursor_index = target
        return True

    def move_down(self, count: int = 1) -> bool:
        return self.set_cursor(self.cursor_index + max(1, count))

    def move_up(self, count: int = 1) -> bool:
        return self.set_cursor(self.cursor_index - max(1, count))

    def goto_top(self) -> bool:
        return self.set_cursor(0)

    def goto_bottom(self) -> bool:
        return self.set_cursor(self.last_index)

    def ensure_cursor_visible(self, visible_rows: int) -> bool:
        """Scroll the minimum amount that keeps the cursor on screen."""
        rows = max(1, visible_rows)
        previous = self.scroll_offset
        if self.cursor_index < self.scroll_offset:
            self.scroll_offset = self.cursor_index
        elif self.cursor_index >= self.scroll_offset + rows:
            self.scroll_offset = self.cursor_index - rows + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, len(self.entries) - rows)))
        return self.scroll_offset != previous

    def toggle_mark(self) -> bool:
        """Toggle the cursor entry's mark; returns ``False`` on an empty listing."""
        entry = self.cursor_entry
        if entry is None:
            return False
        if entry.path in self.marked:
            self.marked.discard(entry.path)
        else:
            self.marked.add(entry.path)
        return True

    def mark_range(self, first: int, second: int, preserved: frozenset[Path] = frozenset()) -> None:
        """Replace marks with the closed index interval plus ``preserved`` marks."""
        if not self.entries:
            self.marked = set(preserved)
            return
        lo = max(0, min(first, second))
        hi = min(self.last_index, max(first, second))
        self.marked = set(preserved) | {entry.path for entry in self.entries[lo : hi + 1]}

    def marked_paths(self) -> list[Path]:
        """Marked paths in listing order."""
        return [entry.path for entry in self.entries if entry.path in self.marked]

    def selection_targets(self) -> list[Path]:
        """Marked paths, or the cursor entry alone when nothing is marked."""
        marked = self.marked_paths()
        if marked:
            return marked
        entry = self.cursor_entry
        return [entry.path] if entry is not None else []

    def replace_listing(
        self,
        directory: Path,
        entries: list[Entry],
        cursor_path: Path | None = None,
        fallback_index: int = 0,
    ) -> None:
        """Swap in a new listing, pruning marks and re-clamping the cursor.

        The cursor lands on ``cursor_path`` when present in ``entries``,
        otherwise on ``fallback_index`` clamped into range.
        """
        if directory != self.current_directory:
            self.scroll_offset = 0
        self.current_directory = directory
        self.entries = list(entries)
        present = {entry.path for entry in self.entries}
        self.marked &= present
        index = self.index_of(cursor_path) if cursor_path is not None else None
        if index is None:
            index = fallback_index
        self.cursor_index = max(0, min(index, self.last_index))
        self.scroll_offset = max(0, min(self.scroll_offset, self.cursor_index))

    def reload(self) -> None:
        """Re-list the current directory keeping the cursor on the same path if possible."""
        entry = self.cursor_entry
        entries = list_directory(self.current_directory, self.sort_order)
        self.replace_listing(
            self.current_directory,
            entries,
            cursor_path=entry.path if entry is not None else None,
            fallback_index=self.cursor_index,
        )

    def change_directory(self, directory: Path, focus_path: Path | None = None) -> None:
        """Show ``directory``, cursor on ``focus_path`` if listed (else first entry).

        The listing is left untouched when ``list_directory`` fails.
        """
        entries = list_directory(directory, self.sort_order)
        self.replace_listing(directory, entries, cursor_path=focus_path)

    def go_to_parent(self) -> bool:
        """Show the parent directory with the cursor on the directory just left."""
        current = self.current_directory
        parent = current.parent
        if parent == current:
            return False
        self.change_directory(parent, focus_path=current)
        return True

    def apply_sort(self, order: SortOrder) -> None:
        """Reorder the current listing in memory and move the cursor to the top."""
        self.sort_order = order
        self.entries = sort_entries(self.entries, order)
        self.cursor_index = 0
        self.scroll_offset = 0
