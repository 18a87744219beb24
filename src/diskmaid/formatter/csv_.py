"""CSV output formatter for diskmaid.

Columns are described by ``CsvColumn`` values so that new per-entry
fields can be exported by appending a column to the list passed to
``format_csv``.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Callable

from diskmaid.scanner import Entry


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes an entry and returns a string value.
    """

    name: str
    extract: Callable[[Entry], str]


def _extract_path(entry: Entry) -> str:
    return entry.path


def _extract_is_dir(entry: Entry) -> str:
    return "true" if entry.is_dir else "false"


def _extract_size(entry: Entry) -> str:
    return str(entry.size)


def _extract_modified(entry: Entry) -> str:
    return str(entry.modified)


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="path", extract=_extract_path),
    CsvColumn(name="is_dir", extract=_extract_is_dir),
    CsvColumn(name="size", extract=_extract_size),
    CsvColumn(name="modified", extract=_extract_modified),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        files_only: When ``True``, directory rows are excluded from output.
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
    """

    files_only: bool = False
    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))


def format_csv(
    entries: list[Entry],
    options: CsvOptions | None = None,
) -> str:
    """Render entries as CSV text.

    Output always starts with a header row. Each subsequent row is one
    entry, in the order given. ``size`` is in bytes and ``modified`` in
    epoch seconds, regardless of the display unit.

    Args:
        entries: Sorted entries to render.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()
    columns = opts.columns

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow([col.name for col in columns])

    for entry in entries:
        if opts.files_only and entry.is_dir:
            continue
        writer.writerow([col.extract(entry) for col in columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
