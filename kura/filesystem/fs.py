"""Filesystem listing and mutation helpers for pane listings.

Every failure surfaces as ``FilesystemError`` so callers can report it
without inspecting ``OSError`` subclasses.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from ..errors import FilesystemError
from .types import Entry, SortOrder

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tiff", ".tif", ".webp"})


def _safe_stat(path: Path) -> os.stat_result | None:
    """Stat ``path`` following links, falling back to ``lstat`` for dangling links."""
    try:
        return path.stat()
    except OSError:
        pass
    try:
        return path.lstat()
    except OSError:
        return None


def _created_ns(st: os.stat_result) -> int:
    birth = getattr(st, "st_birthtime", None)
    if birth is not None:
        return int(birth * 1_000_000_000)
    return int(st.st_ctime_ns)


def entry_for_path(path: Path) -> Entry:
    """Build an ``Entry`` snapshot for ``path`` from a fresh stat call."""
    name = path.name or str(path)
    st = _safe_stat(path)
    if st is None:
        return Entry(
            path=path,
            display_name=name,
            is_directory=False,
            is_hidden=name.startswith("."),
            is_executable=False,
        )
    is_directory = stat.S_ISDIR(st.st_mode)
    return Entry(
        path=path,
        display_name=name,
        is_directory=is_directory,
        is_hidden=name.startswith("."),
        is_executable=(not is_directory) and bool(st.st_mode & 0o111),
        size=None if is_directory else int(st.st_size),
        modified_time=int(st.st_mtime_ns),
        created_time=_created_ns(st),
    )


def sort_entries(entries: list[Entry], order: SortOrder) -> list[Entry]:
    """Return ``entries`` in ``order``; ties keep alphabetical order."""
    by_name = sorted(entries, key=lambda entry: (entry.display_name.casefold(), entry.display_name))
    if order == SortOrder.MODIFIED:
        return sorted(by_name, key=lambda entry: entry.modified_time or 0)
    if order == SortOrder.CREATED:
        return sorted(by_name, key=lambda entry: entry.created_time or 0)
    if order == SortOrder.SIZE:
        return sorted(by_name, key=lambda entry: entry.size or 0, reverse=True)
    return by_name


def list_directory(directory: Path, order: SortOrder = SortOrder.NAME) -> list[Entry]:
    """List every child of ``directory`` (hidden included) in ``order``.

    Raises ``FilesystemError`` when the directory cannot be scanned.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                entries.append(entry_for_path(directory / child.name))
    except OSError as exc:
        logger.warning("cannot list %s: %s", directory, exc)
        raise FilesystemError.from_os_error(directory, exc) from exc
    return sort_entries(entries, order)


def find_match(entries: list[Entry], query: str, start: int) -> int | None:
    """Find the next entry after ``start`` whose name contains ``query``.

    Matching is case-insensitive and wraps around; the entry at ``start``
    itself is checked last.
    """
    if not query or not entries:
        return None
    folded = query.casefold()
    total = len(entries)
    for step in range(1, total + 1):
        idx = (start + step) % total
        if folded in entries[idx].display_name.casefold():
            return idx
    return None


def is_image(path: Path) -> bool:
    """Guess image files by suffix."""
    return path.suffix.lower() in IMAGE_SUFFIXES


def path_exists(path: Path) -> bool:
    """Return whether ``path`` exists, counting dangling symlinks."""
    return path.exists() or path.is_symlink()


def copy_path(source: Path, destination: Path) -> None:
    """Copy a file or directory tree from ``source`` to ``destination``.

    ``destination`` must not exist yet. Directories are copied recursively and
    symlinks are copied as links.
    """
    try:
        if source.is_dir() and not source.is_symlink():
            resolved_source = source.resolve()
            resolved_parent = destination.parent.resolve()
            if resolved_parent == resolved_source or resolved_source in resolved_parent.parents:
                raise FilesystemError(source, "cannot copy a directory into itself")
            shutil.copytree(source, destination, symlinks=True)
        else:
            shutil.copy2(source, destination, follow_symlinks=False)
    except OSError as exc:
        logger.warning("copy %s -> %s failed: %s", source, destination, exc)
        raise FilesystemError.from_os_error(source, exc) from exc
    logger.info("copied %s -> %s", source, destination)


def delete_path(path: Path) -> None:
    """Remove a file, symlink, or whole directory tree."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        logger.warning("delete %s failed: %s", path, exc)
        raise FilesystemError.from_os_error(path, exc) from exc
    logger.info("deleted %s", path)


def rename_path(path: Path, new_name: str) -> Path:
    """Rename ``path`` within its directory and return the new path.

    The name is used exactly as typed. Blank names and names with path
    separators are refused, and an existing entry is never overwritten.
    """
    if not new_name.strip() or new_name in {".", ".."}:
        raise FilesystemError(path, f"invalid name {new_name!r}")
    if os.sep in new_name or (os.altsep and os.altsep in new_name):
        raise FilesystemError(path, f"invalid name {new_name!r}")
    target = path.with_name(new_name)
    if target == path:
        return path
    if path_exists(target):
        raise FilesystemError(target, "already exists")
    try:
        path.rename(target)
    except OSError as exc:
        logger.warning("rename %s -> %s failed: %s", path, target, exc)
        raise FilesystemError.from_os_error(path, exc) from exc
    logger.info("renamed %s -> %s", path, target)
    return target
