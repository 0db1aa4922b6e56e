"""Key-sequence accumulation: numeric counts and multi-key sequences.

``KeyAccumulator`` consumes one key token at a time and either keeps
buffering (returns ``None``) or resolves a ``Command`` carrying a repeat
count. The pending state is a tiny explicit automaton (``PendingInput``) so
``gg``/count behavior is testable without a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CommandKind(Enum):
    """Discrete actions the controller understands."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    GOTO_TOP = "goto_top"
    GOTO_BOTTOM = "goto_bottom"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"
    TOGGLE_VISUAL = "toggle_visual"
    TOGGLE_MARK = "toggle_mark"
    COPY = "copy"
    PASTE = "paste"
    DELETE = "delete"
    DELETE_NOW = "delete_now"
    SEARCH = "search"
    RENAME = "rename"
    SORT = "sort"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    """A resolved command with its repeat count (always >= 1)."""

    kind: CommandKind
    count: int = 1
    key: str = ""


DEFAULT_KEYMAP: dict[str, CommandKind] = {
    "j": CommandKind.MOVE_DOWN,
    "DOWN": CommandKind.MOVE_DOWN,
    "k": CommandKind.MOVE_UP,
    "UP": CommandKind.MOVE_UP,
    "0": CommandKind.GOTO_TOP,
    "HOME": CommandKind.GOTO_TOP,
    "G": CommandKind.GOTO_BOTTOM,
    "END": CommandKind.GOTO_BOTTOM,
    "h": CommandKind.LEFT,
    "LEFT": CommandKind.LEFT,
    "l": CommandKind.RIGHT,
    "RIGHT": CommandKind.RIGHT,
    "ENTER": CommandKind.ENTER,
    "ESC": CommandKind.ESCAPE,
    "V": CommandKind.TOGGLE_VISUAL,
    "v": CommandKind.TOGGLE_MARK,
    "y": CommandKind.COPY,
    "p": CommandKind.PASTE,
    "x": CommandKind.DELETE,
    "X": CommandKind.DELETE_NOW,
    "/": CommandKind.SEARCH,
    "r": CommandKind.RENAME,
    "s": CommandKind.SORT,
    "q": CommandKind.QUIT,
    "CTRL_C": CommandKind.QUIT,
}

# Two-key sequences, keyed by the full sequence.
SEQUENCE_KEYMAP: dict[str, CommandKind] = {
    "gg": CommandKind.GOTO_TOP,
}

# Counts are meaningless for absolute jumps and are dropped.
COUNTLESS_KINDS = frozenset({CommandKind.GOTO_TOP, CommandKind.GOTO_BOTTOM})

_COUNT_DIGITS = frozenset("123456789")


@dataclass
class PendingInput:
    """Buffered digits and the unfinished prefix of a multi-key sequence."""

    digit_buffer: str = ""
    partial_key_sequence: str = ""

    @property
    def count(self) -> int:
        """Repeat count implied by the digit buffer (1 when empty)."""
        return int(self.digit_buffer) if self.digit_buffer else 1

    @property
    def is_empty(self) -> bool:
        return not self.digit_buffer and not self.partial_key_sequence

    def reset(self) -> None:
        self.digit_buffer = ""
        self.partial_key_sequence = ""


class KeyAccumulator:
    """Turn a stream of key tokens into ``Command`` objects."""

    def __init__(
        self,
        keymap: dict[str, CommandKind] | None = None,
        sequences: dict[str, CommandKind] | None = None,
    ) -> None:
        self.keymap = dict(DEFAULT_KEYMAP if keymap is None else keymap)
        self.sequences = dict(SEQUENCE_KEYMAP if sequences is None else sequences)
        self._sequence_prefixes = {sequence[:-1] for sequence in self.sequences}
        self.pending = PendingInput()

    def reset(self) -> None:
        """Drop any buffered count or partial sequence."""
        self.pending.reset()

    def feed(self, key: str) -> Command | None:
        """Consume one key and return a resolved command, if any.

        A pending partial sequence that ``key`` cannot complete is cancelled
        together with the digit buffer, then ``key`` is processed afresh.
        """
        pending = self.pending
        if pending.partial_key_sequence:
            sequence = pending.partial_key_sequence + key
            kind = self.sequences.get(sequence)
            if kind is not None:
                count = 1 if kind in COUNTLESS_KINDS else pending.count
                pending.reset()
                return Command(kind, count, sequence)
            if sequence in self._sequence_prefixes:
                pending.partial_key_sequence = sequence
                return None
            pending.reset()

        if key in _COUNT_DIGITS or (key == "0" and pending.digit_buffer):
            pending.digit_buffer += key
            return None

        if key in self._sequence_prefixes:
            pending.partial_key_sequence = key
            return None

        kind = self.keymap.get(key)
        count = pending.count
        pending.reset()
        if kind is None:
            return None
        if kind in COUNTLESS_KINDS:
            count = 1
        return Command(kind, count, key)
