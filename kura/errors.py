"""Error taxonomy shared by filesystem helpers, viewers, and the controller.

Every error here is recoverable: the controller turns it into a transient
status message and leaves in-memory state consistent.
"""

from __future__ import annotations

from pathlib import Path


class KuraError(Exception):
    """Base class for recoverable kura failures."""


class FilesystemError(KuraError):
    """Listing, copy, delete, or rename failed for ``path``."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> "FilesystemError":
        """Build from an ``OSError``, preferring its ``strerror`` text."""
        reason = exc.strerror or exc.__class__.__name__
        return cls(path, reason)


class DecodeError(KuraError):
    """A file could not be decoded for the text or image viewer."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path.name}: {reason}")
        self.path = path
        self.reason = reason
