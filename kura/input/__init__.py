"""Input-layer public API: raw key decoding and command accumulation."""

from .accumulator import (
    COUNTLESS_KINDS,
    DEFAULT_KEYMAP,
    Command,
    CommandKind,
    KeyAccumulator,
    PendingInput,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Command",
    "CommandKind",
    "COUNTLESS_KINDS",
    "DEFAULT_KEYMAP",
    "KeyAccumulator",
    "PendingInput",
    "KeyComboBinding",
    "KeyComboRegistry",
]
