"""Pane cursor, scroll, and mark bookkeeping."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from kura.filesystem import Entry, SortOrder
from kura.pane import EntryClass, PaneState, classify


def _entries(root: Path, count: int) -> list[Entry]:
    return [
        Entry(root / f"f{idx:02d}", f"f{idx:02d}", False, False, False, size=idx)
        for idx in range(count)
    ]


def _pane(count: int) -> PaneState:
    root = Path("/virtual")
    pane = PaneState(current_directory=root)
    pane.replace_listing(root, _entries(root, count))
    return pane


class NavigationTests(unittest.TestCase):
    def test_moves_clamp_without_wraparound(self) -> None:
        pane = _pane(5)
        self.assertTrue(pane.move_down(3))
        self.assertEqual(pane.cursor_index, 3)
        pane.move_down(10)
        self.assertEqual(pane.cursor_index, 4)
        self.assertFalse(pane.move_down())
        pane.move_up(99)
        self.assertEqual(pane.cursor_index, 0)

    def test_top_and_bottom(self) -> None:
        pane = _pane(7)
        pane.goto_bottom()
        self.assertEqual(pane.cursor_index, 6)
        pane.goto_top()
        self.assertEqual(pane.cursor_index, 0)

    def test_empty_listing_is_a_no_op(self) -> None:
        pane = _pane(0)
        self.assertFalse(pane.move_down())
        self.assertFalse(pane.toggle_mark())
        self.assertIsNone(pane.cursor_entry)
        self.assertEqual(pane.selection_targets(), [])

    def test_scroll_moves_only_enough_to_show_cursor(self) -> None:
        pane = _pane(30)
        pane.move_down(12)
        pane.ensure_cursor_visible(10)
        self.assertEqual(pane.scroll_offset, 3)
        pane.move_up(1)
        pane.ensure_cursor_visible(10)
        self.assertEqual(pane.scroll_offset, 3)
        pane.goto_top()
        pane.ensure_cursor_visible(10)
        self.assertEqual(pane.scroll_offset, 0)


class MarkTests(unittest.TestCase):
    def test_visual_range_from_anchor(self) -> None:
        pane = _pane(10)
        pane.set_cursor(2)
        pane.mark_range(2, 2)
        pane.move_down(3)
        pane.mark_range(2, pane.cursor_index)
        marked = {pane.index_of(path) for path in pane.marked}
        self.assertEqual(marked, {2, 3, 4, 5})

    def test_range_keeps_preserved_marks_and_shrinks(self) -> None:
        pane = _pane(10)
        preserved = frozenset({pane.entries[8].path})
        pane.mark_range(2, 5, preserved)
        pane.mark_range(2, 3, preserved)
        self.assertEqual({pane.index_of(path) for path in pane.marked}, {2, 3, 8})

    def test_selection_targets_prefer_marks_in_listing_order(self) -> None:
        pane = _pane(5)
        pane.set_cursor(3)
        pane.toggle_mark()
        pane.set_cursor(1)
        pane.toggle_mark()
        self.assertEqual(pane.selection_targets(), [pane.entries[1].path, pane.entries[3].path])
        pane.toggle_mark()
        pane.set_cursor(3)
        pane.toggle_mark()
        self.assertEqual(pane.selection_targets(), [pane.entries[3].path])

    def test_replacing_listing_prunes_missing_marks_and_clamps_cursor(self) -> None:
        pane = _pane(6)
        pane.marked = {pane.entries[1].path, pane.entries[5].path}
        pane.set_cursor(5)
        root = pane.current_directory
        pane.replace_listing(root, _entries(root, 3), cursor_path=pane.entries[5].path, fallback_index=5)
        self.assertEqual(pane.marked, {root / "f01"})
        self.assertEqual(pane.cursor_index, 2)


class DirectoryTests(unittest.TestCase):
    def test_parent_puts_cursor_on_directory_just_left(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("a", "b", "c"):
                (root / name).mkdir()
            pane = PaneState.open(root / "b")
            self.assertTrue(pane.go_to_parent())
            self.assertEqual(pane.current_directory, root)
            self.assertEqual(pane.cursor_entry.path, root / "b")

    def test_parent_of_root_does_nothing(self) -> None:
        pane = PaneState(current_directory=Path("/"))
        self.assertFalse(pane.go_to_parent())

    def test_apply_sort_reorders_and_resets_cursor(self) -> None:
        pane = _pane(4)
        pane.set_cursor(2)
        pane.apply_sort(SortOrder.SIZE)
        self.assertEqual(pane.cursor_index, 0)
        self.assertEqual([entry.display_name for entry in pane.entries], ["f03", "f02", "f01", "f00"])
        self.assertIs(pane.sort_order, SortOrder.SIZE)

    def test_apply_sort_keeps_marks_by_path(self) -> None:
        pane = _pane(4)
        pane.set_cursor(1)
        pane.toggle_mark()
        marked_before = set(pane.marked)

        pane.apply_sort(SortOrder.SIZE)

        self.assertEqual(pane.marked, marked_before)
        self.assertEqual(pane.marked_paths(), [Path("/virtual/f01")])


class ClassifyTests(unittest.TestCase):
    def test_precedence(self) -> None:
        path = Path("/virtual/x")
        self.assertIs(classify(Entry(path, ".x", True, True, True)), EntryClass.DIRECTORY)
        self.assertIs(classify(Entry(path, ".x", False, True, True)), EntryClass.HIDDEN)
        self.assertIs(classify(Entry(path, "x", False, False, True)), EntryClass.EXECUTABLE)
        self.assertIs(classify(Entry(path, "x", False, False, False)), EntryClass.DEFAULT)


if __name__ == "__main__":
    unittest.main()
