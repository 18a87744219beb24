"""Bounded directory scanner using os.scandir with explicit stack (DFS)."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from diskmaid import ScanError

logger = logging.getLogger(__name__)

MAX_DEPTH = 5
MAX_ENTRIES = 10_000


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry discovered during scanning.

    Attributes:
        path: Absolute path of the entry, as returned by the OS.
        size: Byte length. Always ``0`` for directories.
        is_dir: Whether the entry is a directory.
        modified: Last modification time in whole seconds since the epoch,
            ``0`` when unavailable.
        depth: Depth of the directory listing that produced the entry.
    """

    path: str
    size: int
    is_dir: bool
    modified: int
    depth: int = 0

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Options controlling scanner limits.

    Attributes:
        max_depth: Deepest directory listing that is read. The root's own
            listing is depth ``0``.
        max_entries: Maximum number of entries returned.
    """

    max_depth: int = MAX_DEPTH
    max_entries: int = MAX_ENTRIES


class EntryFilter(Protocol):
    """Protocol for entry filtering.

    Keeps scanner logic decoupled from matching strategy.
    """

    def should_exclude(self, name: str, is_dir: bool) -> bool: ...


class _NullFilter:
    """Default pass-through filter that excludes nothing."""

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return False


def _mtime_seconds(st: os.stat_result) -> int:
    try:
        seconds = int(st.st_mtime)
    except (OverflowError, ValueError):
        return 0
    return max(seconds, 0)


def _read_entry(dir_entry: os.DirEntry[str], depth: int) -> Entry | None:
    """Build an entry from a directory listing item.

    Best effort: returns ``None`` when metadata cannot be read, and the
    caller drops the item.
    """
    try:
        st = dir_entry.stat()
    except OSError:
        logger.debug("Cannot stat: %s", dir_entry.path)
        return None

    is_dir = stat.S_ISDIR(st.st_mode)
    return Entry(
        path=dir_entry.path,
        size=0 if is_dir else st.st_size,
        is_dir=is_dir,
        modified=_mtime_seconds(st),
        depth=depth,
    )


def scan(
    root: str | Path,
    entry_filter: EntryFilter | None = None,
    options: ScanOptions | None = None,
) -> list[Entry]:
    """Scan root directory and return a flat list of entries.

    Directories are always listed and descended into; files are listed
    when ``entry_filter`` keeps them. Unreadable subdirectories and entries
    whose metadata cannot be read are skipped. Traversal stops descending
    past ``max_depth`` and stops collecting at ``max_entries``.

    Args:
        root: Root directory to scan.
        entry_filter: Optional exclude filter implementation.
        options: Scanner limits. Defaults to ``ScanOptions()``.

    Returns:
        list[Entry]: Entries in traversal order. Callers must not rely on it.

    Raises:
        ScanError: If the root directory itself cannot be listed.
    """
    scan_options = options or ScanOptions()
    active_filter = entry_filter or _NullFilter()
    root_dir = os.path.abspath(root)

    result: list[Entry] = []

    # Stack items: (directory_path, depth)
    stack: list[tuple[str, int]] = [(root_dir, 0)]

    while stack and len(result) < scan_options.max_entries:
        current_dir, depth = stack.pop()

        if depth > scan_options.max_depth:
            continue

        try:
            with os.scandir(current_dir) as it:
                raw_entries = list(it)
        except OSError as exc:
            if depth == 0:
                reason = exc.strerror or str(exc)
                raise ScanError(f"Cannot read directory '{root_dir}': {reason}") from exc
            logger.debug("Cannot list directory: %s", current_dir)
            continue

        # Sort entries by name for deterministic truncation
        raw_entries.sort(key=lambda e: e.name)

        child_dirs: list[tuple[str, int]] = []

        for dir_entry in raw_entries:
            if len(result) >= scan_options.max_entries:
                logger.debug("Entry limit %d reached", scan_options.max_entries)
                break

            entry = _read_entry(dir_entry, depth)
            if entry is None:
                continue

            if active_filter.should_exclude(dir_entry.name, entry.is_dir):
                continue

            result.append(entry)

            if entry.is_dir:
                child_dirs.append((entry.path, depth + 1))

        # Push children in reverse so first-alphabetical is popped first
        for child in reversed(child_dirs):
            stack.append(child)

    return result
