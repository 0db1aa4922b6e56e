"""Batch deletion with per-entry failure reporting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import FilesystemError
from .filesystem import delete_path


@dataclass(frozen=True)
class DeleteReport:
    deleted: tuple[Path, ...] = ()
    failed: tuple[tuple[Path, str], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        text = f"deleted {len(self.deleted)}"
        if self.failed:
            details = "; ".join(f"{path.name}: {reason}" for path, reason in self.failed)
            text += f", failed {len(self.failed)} ({details})"
        return text


def delete_targets(targets: list[Path] | tuple[Path, ...]) -> DeleteReport:
    """Delete each target independently, collecting failures instead of stopping."""
    deleted: list[Path] = []
    failed: list[tuple[Path, str]] = []
    for path in targets:
        try:
            delete_path(path)
        except FilesystemError as exc:
            failed.append((path, exc.reason))
            continue
        deleted.append(path)
    return DeleteReport(tuple(deleted), tuple(failed))
