"""Interaction state machine for the two-pane file manager.

``AppController`` owns both panes, the active-pane selector, the clipboard,
the viewer documents, the current mode, and the pending key input. The event
loop feeds it one key at a time through ``handle_key``; commands resolved by
the key accumulator go through ``apply``. Filesystem failures never escape:
they become transient status messages and the in-memory state stays
consistent.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from .clipboard import Clipboard
from .deletion import delete_targets
from .errors import DecodeError, FilesystemError
from .filesystem import SORT_OPTIONS, SortOrder, find_match, is_image, rename_path
from .input import Command, CommandKind, KeyAccumulator, KeyComboBinding, KeyComboRegistry, PendingInput
from .mode import (
    Browse,
    ConfirmDelete,
    ImageView,
    Mode,
    PaneId,
    Rename,
    Search,
    Sort,
    TextView,
    VisualSelect,
    is_prompt,
)
from .pane import PaneState
from .viewer import ViewerState, clamp_scroll_line, load_text_document, probe_image
from .viewer.syntax import DEFAULT_STYLE

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0
DEFAULT_VIEWPORT_ROWS = 20

CONFIRM_KEYS = ("y", "Y", "ENTER")
CANCEL_KEYS = ("n", "N", "ESC", "q", "CTRL_C")


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def _edit_buffer(buffer: str, key: str) -> str | None:
    """Apply a line-editing key to ``buffer``; ``None`` when ``key`` is not an edit."""
    if key == "BACKSPACE":
        return buffer[:-1]
    if key == "CTRL_U":
        return ""
    if _is_text_key(key):
        return buffer + key
    return None


class AppController:
    """Single owner of all interactive state, driven one key at a time."""

    def __init__(
        self,
        left: PaneState,
        right: PaneState,
        *,
        text_style: str = DEFAULT_STYLE,
        no_color: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.panes: dict[PaneId, PaneState] = {PaneId.LEFT: left, PaneId.RIGHT: right}
        self.active_pane_id = PaneId.LEFT
        self.clipboard = Clipboard()
        self.mode: Mode = Browse()
        self.accumulator = KeyAccumulator()
        self.viewer = ViewerState()
        self.text_style = text_style
        self.no_color = no_color
        self.viewport_rows = DEFAULT_VIEWPORT_ROWS
        self.status_message = ""
        self.status_is_error = False
        self.status_message_until = 0.0
        self.dirty = True
        self._clock = clock

    @classmethod
    def create(
        cls,
        start_directory: Path,
        sort_order: SortOrder = SortOrder.NAME,
        **kwargs,
    ) -> "AppController":
        """Open both panes on ``start_directory``.

        Raises ``FilesystemError`` when the directory cannot be listed.
        """
        directory = start_directory.expanduser().resolve()
        left = PaneState.open(directory, sort_order)
        right = PaneState.open(directory, sort_order)
        return cls(left, right, **kwargs)

    @property
    def pending(self) -> PendingInput:
        return self.accumulator.pending

    @property
    def active_pane(self) -> PaneState:
        return self.panes[self.active_pane_id]

    @property
    def inactive_pane(self) -> PaneState:
        return self.panes[self.active_pane_id.other]

    # Status line ---------------------------------------------------------

    def set_status(self, message: str, *, error: bool = False) -> None:
        """Show ``message`` for ``STATUS_MESSAGE_SECONDS``."""
        self.status_message = message
        self.status_is_error = error
        self.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.dirty = True

    def clear_status(self) -> None:
        self.status_message = ""
        self.status_is_error = False
        self.status_message_until = 0.0

    def expire_status(self) -> bool:
        """Drop the status message once its display time is over."""
        if self.status_message and self._clock() >= self.status_message_until:
            self.clear_status()
            self.dirty = True
            return True
        return False

    def set_viewport_rows(self, rows: int) -> None:
        """Record how many listing rows fit on screen and re-clamp scrolling."""
        rows = max(1, rows)
        if rows != self.viewport_rows:
            self.viewport_rows = rows
            self.dirty = True
        self._sync_scroll()

    def _sync_scroll(self) -> None:
        for pane in self.panes.values():
            if pane.ensure_cursor_visible(self.viewport_rows):
                self.dirty = True

    # Entry points ---------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Process one raw key token; returns ``True`` when the app should quit.

        Prompt modes consume raw keys directly; every other mode goes through
        the key accumulator.
        """
        if is_prompt(self.mode):
            self.accumulator.reset()
            should_quit = self._handle_prompt_key(key)
        else:
            command = self.accumulator.feed(key)
            should_quit = self.apply(command) if command is not None else False
        self._sync_scroll()
        self.dirty = True
        return should_quit

    def apply(self, command: Command) -> bool:
        """Apply one resolved command in the current mode.

        Returns ``True`` for quit. Commands that make no sense in the current
        mode are ignored.
        """
        mode = self.mode
        if is_prompt(mode):
            return False
        if command.kind is CommandKind.QUIT:
            return True
        if isinstance(mode, VisualSelect):
            self._apply_visual(mode, command)
        elif isinstance(mode, TextView):
            self._apply_text_view(mode, command)
        elif isinstance(mode, ImageView):
            if command.kind in {CommandKind.ENTER, CommandKind.ESCAPE}:
                self._close_viewer()
        else:
            self._apply_browse(command)
        self._sync_scroll()
        self.dirty = True
        return False

    # Browse -----------------------------------------------------------------

    def _apply_browse(self, command: Command) -> None:
        pane = self.active_pane
        count = command.count

        def left_edge() -> None:
            if self.active_pane_id is PaneId.LEFT:
                self._go_to_parent(pane)
            else:
                self._switch_pane()

        def right_edge() -> None:
            if self.active_pane_id is PaneId.LEFT:
                self._switch_pane()
            else:
                self._go_to_parent(pane)

        browse_bindings = KeyComboRegistry(
            KeyComboBinding((CommandKind.MOVE_DOWN,), lambda: pane.move_down(count)),
            KeyComboBinding((CommandKind.MOVE_UP,), lambda: pane.move_up(count)),
            KeyComboBinding((CommandKind.GOTO_TOP,), pane.goto_top),
            KeyComboBinding((CommandKind.GOTO_BOTTOM,), pane.goto_bottom),
            KeyComboBinding((CommandKind.LEFT,), left_edge),
            KeyComboBinding((CommandKind.RIGHT,), right_edge),
            KeyComboBinding((CommandKind.ENTER,), self._open_cursor_entry),
            KeyComboBinding((CommandKind.ESCAPE,), self.clear_status),
            KeyComboBinding((CommandKind.TOGGLE_VISUAL,), self._enter_visual),
            KeyComboBinding((CommandKind.TOGGLE_MARK,), pane.toggle_mark),
            KeyComboBinding((CommandKind.COPY,), self._copy_selection),
            KeyComboBinding((CommandKind.PASTE,), self._paste),
            KeyComboBinding((CommandKind.DELETE,), self._request_delete),
            KeyComboBinding((CommandKind.DELETE_NOW,), self._delete_now),
            KeyComboBinding((CommandKind.SEARCH,), self._begin_search),
            KeyComboBinding((CommandKind.RENAME,), self._begin_rename),
            KeyComboBinding((CommandKind.SORT,), self._begin_sort),
        )
        browse_bindings.dispatch(command.kind)

    def _switch_pane(self) -> None:
        self.active_pane_id = self.active_pane_id.other

    def _go_to_parent(self, pane: PaneState) -> None:
        try:
            pane.go_to_parent()
        except FilesystemError as exc:
            self.set_status(str(exc), error=True)

    def _open_cursor_entry(self) -> None:
        pane = self.active_pane
        entry = pane.cursor_entry
        if entry is None:
            return
        if entry.is_directory:
            try:
                pane.change_directory(entry.path)
            except FilesystemError as exc:
                self.set_status(str(exc), error=True)
            return
        if is_image(entry.path):
            try:
                probe_image(entry.path)
            except DecodeError as exc:
                self.set_status(str(exc), error=True)
                return
            self.viewer.open_image(entry.path)
            self.mode = ImageView(file_path=entry.path, pane_id=self.active_pane_id.other)
            return
        try:
            document = load_text_document(entry.path, self.text_style, self.no_color)
        except DecodeError as exc:
            self.set_status(str(exc), error=True)
            return
        self.viewer.open_text(document)
        self.mode = TextView(file_path=entry.path, scroll_line=0, total_lines=document.total_lines)

    def _enter_visual(self) -> None:
        pane = self.active_pane
        if not pane.entries:
            return
        preserved = frozenset(pane.marked)
        anchor = pane.cursor_index
        pane.mark_range(anchor, anchor, preserved)
        self.mode = VisualSelect(anchor_index=anchor, preserved_marks=preserved)

    def _copy_selection(self) -> None:
        targets = self.active_pane.selection_targets()
        if not targets:
            self.set_status("nothing to copy")
            return
        self.clipboard.copy(targets, self.active_pane_id)
        self.set_status(f"copied {len(targets)} item(s)")

    def _paste(self) -> None:
        if self.clipboard.is_empty:
            self.set_status("clipboard is empty")
            return
        report = self.clipboard.paste_into(self.active_pane.current_directory)
        self._refresh_panes()
        self.set_status(report.summary(), error=not report.ok)

    def _request_delete(self) -> None:
        targets = self.active_pane.selection_targets()
        if not targets:
            self.set_status("nothing to delete")
            return
        self.mode = ConfirmDelete(targets=tuple(targets))

    def _delete_now(self) -> None:
        targets = self.active_pane.selection_targets()
        if not targets:
            self.set_status("nothing to delete")
            return
        self._delete(targets)

    def _delete(self, targets: list[Path]) -> None:
        report = delete_targets(targets)
        self._refresh_panes()
        self.set_status(report.summary(), error=not report.ok)

    def _begin_search(self) -> None:
        self.mode = Search(query="", origin_index=self.active_pane.cursor_index)

    def _begin_rename(self) -> None:
        entry = self.active_pane.cursor_entry
        if entry is None:
            self.set_status("nothing to rename")
            return
        self.mode = Rename(path=entry.path, original=entry.display_name, buffer=entry.display_name)

    def _begin_sort(self) -> None:
        self.mode = Sort(selected=SORT_OPTIONS.index(self.active_pane.sort_order))

    def _refresh_panes(self) -> None:
        for pane in self.panes.values():
            self._refresh_pane(pane)

    def _refresh_pane(self, pane: PaneState) -> None:
        """Reload ``pane``; if its directory is gone, fall back to the nearest listable ancestor."""
        try:
            pane.reload()
            return
        except FilesystemError as exc:
            logger.warning("reload failed: %s", exc)
        candidate = pane.current_directory
        while candidate.parent != candidate:
            candidate = candidate.parent
            try:
                pane.change_directory(candidate)
            except FilesystemError:
                continue
            self.set_status(f"directory vanished, showing {candidate}", error=True)
            return
        self.set_status(f"cannot list {pane.current_directory}", error=True)

    # Visual select ----------------------------------------------------------

    def _apply_visual(self, mode: VisualSelect, command: Command) -> None:
        pane = self.active_pane
        kind = command.kind
        motions = {
            CommandKind.MOVE_DOWN: lambda: pane.move_down(command.count),
            CommandKind.MOVE_UP: lambda: pane.move_up(command.count),
            CommandKind.GOTO_TOP: pane.goto_top,
            CommandKind.GOTO_BOTTOM: pane.goto_bottom,
        }
        motion = motions.get(kind)
        if motion is not None:
            motion()
            pane.mark_range(mode.anchor_index, pane.cursor_index, mode.preserved_marks)
            return
        if kind in {CommandKind.TOGGLE_VISUAL, CommandKind.ESCAPE}:
            self.mode = Browse()
            return
        if kind in {CommandKind.COPY, CommandKind.DELETE, CommandKind.DELETE_NOW}:
            self.mode = Browse()
            self._apply_browse(command)

    # Viewers ----------------------------------------------------------------

    def _apply_text_view(self, mode: TextView, command: Command) -> None:
        kind = command.kind
        if kind in {CommandKind.ENTER, CommandKind.ESCAPE}:
            self._close_viewer()
            return
        if kind is CommandKind.MOVE_DOWN:
            target = mode.scroll_line + command.count
        elif kind is CommandKind.MOVE_UP:
            target = mode.scroll_line - command.count
        elif kind is CommandKind.GOTO_TOP:
            target = 0
        elif kind is CommandKind.GOTO_BOTTOM:
            target = mode.total_lines - 1
        else:
            return
        self.mode = replace(mode, scroll_line=clamp_scroll_line(target, mode.total_lines))

    def _close_viewer(self) -> None:
        self.viewer.close()
        self.mode = Browse()

    # Prompts ----------------------------------------------------------------

    def _handle_prompt_key(self, key: str) -> bool:
        mode = self.mode
        if isinstance(mode, ConfirmDelete):
            self._handle_confirm_key(mode, key)
        elif isinstance(mode, Search):
            self._handle_search_key(mode, key)
        elif isinstance(mode, Rename):
            self._handle_rename_key(mode, key)
        elif isinstance(mode, Sort):
            self._handle_sort_key(mode, key)
        return False

    def _handle_confirm_key(self, mode: ConfirmDelete, key: str) -> None:
        def confirm() -> None:
            self.mode = Browse()
            self._delete(list(mode.targets))

        def cancel() -> None:
            self.mode = Browse()
            self.set_status("delete cancelled")

        # Keys outside the answer set are swallowed.
        KeyComboRegistry(
            KeyComboBinding(CONFIRM_KEYS, confirm),
            KeyComboBinding(CANCEL_KEYS, cancel),
        ).dispatch(key)

    def _handle_search_key(self, mode: Search, key: str) -> None:
        if key in {"ENTER", "ESC", "CTRL_C"}:
            self.mode = Browse()
            return
        query = _edit_buffer(mode.query, key)
        if query is None:
            return
        self.mode = replace(mode, query=query)
        pane = self.active_pane
        if not query:
            pane.set_cursor(mode.origin_index)
            return
        match = find_match(pane.entries, query, mode.origin_index)
        if match is None:
            self.set_status(f"no match for {query!r}", error=True)
            return
        pane.set_cursor(match)

    def _handle_rename_key(self, mode: Rename, key: str) -> None:
        if key in {"ESC", "CTRL_C"}:
            self.mode = Browse()
            return
        if key == "ENTER":
            self.mode = Browse()
            self._commit_rename(mode)
            return
        buffer = _edit_buffer(mode.buffer, key)
        if buffer is not None:
            self.mode = replace(mode, buffer=buffer)

    def _commit_rename(self, mode: Rename) -> None:
        if mode.buffer == mode.original:
            return
        try:
            new_path = rename_path(mode.path, mode.buffer)
        except FilesystemError as exc:
            self.set_status(str(exc), error=True)
            return
        if new_path == mode.path:
            return
        self._refresh_panes()
        pane = self.active_pane
        index = pane.index_of(new_path)
        if index is not None:
            pane.set_cursor(index)
        self.set_status(f"renamed {mode.original} -> {new_path.name}")

    def _handle_sort_key(self, mode: Sort, key: str) -> None:
        total = len(SORT_OPTIONS)
        if key in {"j", "DOWN"}:
            self.mode = replace(mode, selected=(mode.selected + 1) % total)
        elif key in {"k", "UP"}:
            self.mode = replace(mode, selected=(mode.selected - 1) % total)
        elif key == "ENTER":
            order = SORT_OPTIONS[mode.selected]
            self.mode = Browse()
            self.active_pane.apply_sort(order)
            self.set_status(f"sorted by {order.label.lower()}")
        elif key in {"ESC", "q", "CTRL_C"}:
            self.mode = Browse()
