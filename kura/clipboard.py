"""Clipboard contents and the paste conflict policy.

Paste never overwrites: an item whose name already exists in the
destination directory is skipped and reported. Failures are collected per
item so one bad entry never aborts the rest of the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import FilesystemError
from .filesystem import copy_path, path_exists
from .mode import PaneId

logger = logging.getLogger(__name__)


def _names(paths: tuple[Path, ...]) -> str:
    return ", ".join(path.name for path in paths)


@dataclass(frozen=True)
class PasteReport:
    copied: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()
    failed: tuple[tuple[Path, str], ...] = ()
    source_pane_id: PaneId | None = None

    @property
    def ok(self) -> bool:
        return not self.skipped and not self.failed

    def summary(self) -> str:
        parts = [f"pasted {len(self.copied)}"]
        if self.skipped:
            origin = f" from {self.source_pane_id.value} pane" if self.source_pane_id else ""
            parts.append(f"skipped {len(self.skipped)}{origin} (exists: {_names(self.skipped)})")
        if self.failed:
            details = "; ".join(f"{path.name}: {reason}" for path, reason in self.failed)
            parts.append(f"failed {len(self.failed)} ({details})")
        return ", ".join(parts)


@dataclass
class Clipboard:
    entries: list[Path] = field(default_factory=list)
    source_pane_id: PaneId | None = None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def copy(self, paths: list[Path], source_pane_id: PaneId) -> None:
        """Replace clipboard contents with ``paths``."""
        self.entries = list(paths)
        self.source_pane_id = source_pane_id

    def paste_into(self, directory: Path) -> PasteReport:
        """Copy every clipboard entry into ``directory`` under the skip policy."""
        copied: list[Path] = []
        skipped: list[Path] = []
        failed: list[tuple[Path, str]] = []
        for source in self.entries:
            destination = directory / source.name
            if path_exists(destination):
                logger.info("paste skipped %s: %s already exists", source, destination)
                skipped.append(source)
                continue
            if not path_exists(source):
                failed.append((source, "no longer exists"))
                continue
            try:
                copy_path(source, destination)
            except FilesystemError as exc:
                failed.append((source, exc.reason))
                continue
            copied.append(destination)
        return PasteReport(tuple(copied), tuple(skipped), tuple(failed), self.source_pane_id)
