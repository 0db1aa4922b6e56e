"""Dispatch tables from keys or command kinds to handlers.

The controller builds a fresh table per call from closures over its current
state, so handlers always see live values such as the pending repeat count.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass

Handler = Callable[[], object]


@dataclass(frozen=True)
class KeyComboBinding:
    """Several keys (raw tokens or ``CommandKind`` members) sharing one handler."""

    combos: tuple[Hashable, ...]
    handler: Handler


class KeyComboRegistry:
    def __init__(self, *bindings: KeyComboBinding) -> None:
        self._handlers: dict[Hashable, Handler] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Add ``binding``; a key may be bound only once per table."""
        for combo in binding.combos:
            if combo in self._handlers:
                raise ValueError(f"{combo!r} is already bound")
            self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: Hashable) -> bool:
        """Run the handler bound to ``key``; ``False`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
