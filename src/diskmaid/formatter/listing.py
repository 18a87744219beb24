"""Plain listing formatter: one line per entry with its size."""

from __future__ import annotations

from dataclasses import dataclass

from diskmaid.scanner import Entry
from diskmaid.units import DEFAULT_UNIT, Unit, format_size

DEFAULT_LIMIT = 200


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Options for listing output.

    Attributes:
        unit: Unit used for file sizes.
        limit: Maximum number of entry lines. ``None`` means unlimited.
        status: Optional status line appended after the entries.
    """

    unit: Unit = DEFAULT_UNIT
    limit: int | None = DEFAULT_LIMIT
    status: str | None = None


def format_entry_line(entry: Entry, unit: Unit) -> str:
    if entry.is_dir:
        return f"[DIR] {entry.path}"
    return f"{format_size(entry.size, unit)} - {entry.path}"


def format_listing(
    entries: list[Entry],
    options: ListingOptions | None = None,
) -> str:
    """Render entries as a plain listing.

    Rules:
      1. Entries are printed in the given order.
      2. Directories render as ``[DIR] <path>``.
      3. Files render as ``<size> <unit> - <path>``.
      4. Past ``limit`` lines, a ``... and N more items`` line is shown.

    Args:
        entries: Sorted entries to render.
        options: Rendering options.

    Returns:
        str: Newline-joined listing.
    """
    opts = options or ListingOptions()
    lines: list[str] = []

    if entries:
        lines.append(f"Found {len(entries)} items:")
        shown = entries if opts.limit is None else entries[: opts.limit]
        lines.extend(format_entry_line(e, opts.unit) for e in shown)
        hidden = len(entries) - len(shown)
        if hidden > 0:
            lines.append(f"... and {hidden} more items")

    if opts.status:
        lines.append(opts.status)

    return "\n".join(lines)
