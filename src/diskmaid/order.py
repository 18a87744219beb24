"""Sort methods and aggregate totals for scan results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from diskmaid.scanner import Entry


class SortMethod(str, Enum):
    """Ordering applied to a scan result.

    Values are the identifiers used on the command line and in settings.
    """

    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    SIZE_DESC = "size-desc"
    SIZE_ASC = "size-asc"
    MODIFIED_DESC = "newest"
    MODIFIED_ASC = "oldest"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, text: str) -> SortMethod:
        """Parse a sort method identifier.

        Raises:
            ValueError: If ``text`` is not a known identifier.
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown sort method '{text}'. Known methods: {known}") from None

    def __str__(self) -> str:
        return self.value


_LABELS: dict[SortMethod, str] = {
    SortMethod.NAME_ASC: "Name (A-Z)",
    SortMethod.NAME_DESC: "Name (Z-A)",
    SortMethod.SIZE_DESC: "Size (Largest First)",
    SortMethod.SIZE_ASC: "Size (Smallest First)",
    SortMethod.MODIFIED_DESC: "Date (Newest First)",
    SortMethod.MODIFIED_ASC: "Date (Oldest First)",
}

DEFAULT_SORT = SortMethod.NAME_ASC


def _name_key(entry: Entry) -> str:
    return entry.path.lower()


def _size_key(entry: Entry) -> int:
    return entry.size


def _modified_key(entry: Entry) -> int:
    return entry.modified


# method -> (key, reverse)
_SORT_KEYS: dict[SortMethod, tuple[Callable[[Entry], object], bool]] = {
    SortMethod.NAME_ASC: (_name_key, False),
    SortMethod.NAME_DESC: (_name_key, True),
    SortMethod.SIZE_DESC: (_size_key, True),
    SortMethod.SIZE_ASC: (_size_key, False),
    SortMethod.MODIFIED_DESC: (_modified_key, True),
    SortMethod.MODIFIED_ASC: (_modified_key, False),
}


def sort_entries(entries: list[Entry], method: SortMethod) -> None:
    """Sort entries in place.

    The sort is stable and uses only the method's primary key, so equal
    keys keep their input order. Directories and files are not separated;
    directories carry size ``0``.

    Args:
        entries: Entries to reorder.
        method: Ordering to apply.
    """
    key, reverse = _SORT_KEYS[method]
    entries.sort(key=key, reverse=reverse)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Summary:
    """Aggregate counts for a scan result.

    Attributes:
        file_count: Number of non-directory entries.
        dir_count: Number of directory entries.
        total_size: Sum of file sizes in bytes. Directories contribute nothing.
    """

    file_count: int = 0
    dir_count: int = 0
    total_size: int = 0


def aggregate(entries: list[Entry]) -> Summary:
    """Count files and directories and total the file sizes."""
    file_count = 0
    dir_count = 0
    total_size = 0
    for entry in entries:
        if entry.is_dir:
            dir_count += 1
        else:
            file_count += 1
            total_size += entry.size
    return Summary(file_count=file_count, dir_count=dir_count, total_size=total_size)
