"""Pane state and entry classification."""

from .classify import EntryClass, classify
from .state import PaneState

__all__ = ["EntryClass", "PaneState", "classify"]
