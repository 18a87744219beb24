"""Entry filtering: extension-based file matching."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

MATCH_ALL_PATTERNS: frozenset[str] = frozenset({"*", "*.*"})
DEFAULT_PATTERN = "*"


class ExtensionFilter:
    """Filter files by a ``*.<ext>`` pattern.

    Only three pattern shapes are recognised: ``*`` and ``*.*`` match
    every file, ``*.<ext>`` matches files whose extension equals
    ``<ext>`` case-insensitively. Any other pattern matches every file.
    Directories are never excluded.
    """

    def __init__(self, pattern: str = DEFAULT_PATTERN) -> None:
        """Initialize extension filter.

        Args:
            pattern: Filter pattern as entered by the user.
        """
        self.pattern = pattern
        self._extension: str | None = None

        if pattern in MATCH_ALL_PATTERNS:
            return
        if pattern.startswith("*."):
            extension = pattern
            while extension.startswith("*."):
                extension = extension.removeprefix("*.")
            self._extension = extension.lower()
            return
        # TODO: decide whether plain names and ``?`` wildcards should be supported.
        logger.debug("Unsupported filter pattern %r, matching all files", pattern)

    @property
    def matches_everything(self) -> bool:
        return self._extension is None

    def matches(self, name: str) -> bool:
        """Return whether a file name passes the filter.

        Args:
            name: File basename.

        Returns:
            bool: ``True`` when the file should be listed.
        """
        if self._extension is None:
            return True
        suffix = os.path.splitext(name)[1]
        if not suffix:
            return False
        return suffix[1:].lower() == self._extension

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            name: Entry name.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` for files rejected by the pattern.
        """
        if is_dir:
            return False
        return not self.matches(name)
