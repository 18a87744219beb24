"""Explicit application state for one browsing session."""

from __future__ import annotations

import logging
import os

from diskmaid import DeleteError, DiskMaidError
from diskmaid.order import DEFAULT_SORT, SortMethod, Summary, aggregate, sort_entries
from diskmaid.scanner import Entry
from diskmaid.units import DEFAULT_UNIT, Unit, format_size

logger = logging.getLogger(__name__)


class Session:
    """Current scan result plus the display choices applied to it.

    The scanner and orderer stay stateless; this object is what callers
    hold between operations. A new scan replaces the previous result.

    Attributes:
        entries: Current records, in ``sort_method`` order.
        sort_method: Ordering applied to ``entries``.
        unit: Unit used in status messages.
        status: Last human-readable status line.
        pending_delete: File awaiting confirmation before deletion.
    """

    def __init__(
        self,
        sort_method: SortMethod = DEFAULT_SORT,
        unit: Unit = DEFAULT_UNIT,
    ) -> None:
        self.entries: list[Entry] = []
        self.sort_method = sort_method
        self.unit = unit
        self.status = "Ready."
        self.pending_delete: str | None = None

    def apply_scan(self, entries: list[Entry]) -> Summary:
        """Replace held entries with a fresh scan result and sort it."""
        self.entries = list(entries)
        self.pending_delete = None
        sort_entries(self.entries, self.sort_method)
        summary = self.summary()
        self.status = (
            f"Scan complete! {summary.file_count} files, {summary.dir_count} dirs. "
            f"Size: {format_size(summary.total_size, self.unit)}"
        )
        return summary

    def fail_scan(self, error: DiskMaidError) -> None:
        self.entries = []
        self.status = f"Scan error: {error}"

    def change_sort(self, method: SortMethod) -> None:
        self.sort_method = method
        sort_entries(self.entries, method)

    def summary(self) -> Summary:
        return aggregate(self.entries)

    def find(self, path: str) -> Entry | None:
        return next((e for e in self.entries if e.path == path), None)

    def remove_entry(self, path: str) -> bool:
        """Drop the record whose path equals ``path`` exactly.

        Returns:
            bool: ``True`` when a record was removed.
        """
        for index, entry in enumerate(self.entries):
            if entry.path == path:
                del self.entries[index]
                return True
        return False

    def _check_deletable(self, path: str) -> None:
        entry = self.find(path)
        if entry is None:
            self.status = f"Failed to delete file: '{path}' is not part of the current scan"
            raise DeleteError(self.status)
        if entry.is_dir:
            self.status = f"Failed to delete file: '{path}' is a directory"
            raise DeleteError(self.status)

    def request_delete(self, path: str) -> None:
        """Mark a listed file for deletion, pending confirmation.

        Raises:
            DeleteError: If ``path`` is not a listed file.
        """
        self._check_deletable(path)
        self.pending_delete = path
        self.status = "Waiting for confirmation..."

    def cancel_delete(self) -> None:
        self.pending_delete = None
        self.status = "Deletion cancelled."

    def confirm_delete(self) -> None:
        """Delete the file marked by ``request_delete``.

        Raises:
            DeleteError: If nothing is pending or removal fails.
        """
        if self.pending_delete is None:
            self.status = "Failed to delete file: no deletion pending"
            raise DeleteError(self.status)
        path = self.pending_delete
        self.pending_delete = None
        self.delete_file(path)

    def delete_file(self, path: str) -> None:
        """Delete a listed file from disk and drop its record.

        The record list is only touched once the file is gone.

        Raises:
            DeleteError: If ``path`` is not a listed file or removal fails.
        """
        self._check_deletable(path)

        self.status = f"Deleting {path}..."
        try:
            os.remove(path)
        except OSError as exc:
            self.status = f"Failed to delete file: {exc}"
            raise DeleteError(self.status) from exc

        self.remove_entry(path)
        logger.debug("Deleted %s", path)
        self.status = f"Successfully deleted: {path}"
