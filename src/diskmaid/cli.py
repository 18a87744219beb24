"""CLI entry point for diskmaid: I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable

from diskmaid import DeleteError, DiskMaidError, ScanError
from diskmaid.config import AppConfig, load_config, save_config
from diskmaid.filter import ExtensionFilter
from diskmaid.formatter.listing import DEFAULT_LIMIT, ListingOptions, format_listing
from diskmaid.order import SortMethod
from diskmaid.scanner import scan
from diskmaid.session import Session
from diskmaid.units import Unit

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``diskmaid`` command.
    """
    parser = argparse.ArgumentParser(
        prog="diskmaid",
        description="list files under a directory with sizes, sorted, and clean them up",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to scan (default: configured path, else home directory)",
    )
    parser.add_argument(
        "-f",
        "--filter",
        default=None,
        dest="scan_filter",
        help="File filter: '*', '*.*' or '*.EXT' (default: from settings, '*')",
    )
    parser.add_argument(
        "-s",
        "--sort",
        choices=[m.value for m in SortMethod],
        default=None,
        dest="sort_method",
        help="Sort order (default: from settings, name-asc)",
    )
    parser.add_argument(
        "-u",
        "--unit",
        type=str.upper,
        choices=[u.value for u in Unit],
        default=None,
        help="Unit for sizes: KB, MB or GB (default: from settings, MB)",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum entries listed, 0 for all (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output as CSV (path, is_dir, size, modified)",
    )
    parser.add_argument(
        "-F",
        "--files-only",
        action="store_true",
        dest="files_only",
        help="Omit directory rows from CSV output",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "--delete",
        action="append",
        default=[],
        dest="delete_paths",
        metavar="PATH",
        help="Delete a scanned file (can be specified multiple times)",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        dest="assume_yes",
        help="Delete without asking for confirmation",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        dest="save_defaults",
        help="Store the effective filter, unit, directory and sort as defaults",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        dest="config_path",
        help="Settings file to use instead of the per-user one",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped entries and other diagnostics to stderr",
    )
    return parser


def run_diskmaid(argv: list[str] | None = None) -> str:
    """Run diskmaid with provided CLI args and return formatted output.

    Apart from ``--delete`` (which prompts unless ``--yes`` is given) and
    ``--save-defaults`` this function does not touch the filesystem beyond
    reading, and is the primary test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        DiskMaidError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Resolve directory and validate it is a directory.

    Args:
        directory: Directory to scan.

    Returns:
        Path: Absolute root path, with symlinks kept as given.

    Raises:
        DiskMaidError: If directory does not exist or is not a directory.
    """
    root = Path(directory).expanduser()
    if not root.exists():
        raise DiskMaidError("Error: Path does not exist!")
    if not root.is_dir():
        raise DiskMaidError("Error: Path is not a directory!")
    return Path(os.path.abspath(root))


def _default_directory(config: AppConfig) -> str:
    return config.default_path or str(Path.home())


def _validate_option_combinations(args: argparse.Namespace) -> None:
    """Validate incompatible CLI option combinations.

    Args:
        args: Parsed CLI namespace.

    Raises:
        DiskMaidError: If incompatible options are combined.
    """
    if args.limit < 0:
        raise DiskMaidError("--limit must not be negative")
    if args.files_only and not args.csv_mode:
        raise DiskMaidError("--files-only (-F) requires --csv")
    if args.csv_mode and args.delete_paths:
        raise DiskMaidError("--csv is incompatible with --delete")


def _match_scanned_path(session: Session, raw_path: str) -> str:
    """Map a user-supplied path to the exact path of a scanned record.

    Raises:
        DiskMaidError: If no scanned file has that path.
    """
    candidate = Path(raw_path).expanduser()
    for path in (
        os.path.abspath(candidate),
        str(candidate.absolute().parent.resolve() / candidate.name),
    ):
        if session.find(path) is not None:
            return path
    raise DiskMaidError(f"'{raw_path}' is not part of the scan result")


def _always_confirm(path: str) -> bool:
    return True


def _ask_confirmation(path: str) -> bool:
    """Prompt on the terminal; anything but ``y``/``yes`` declines."""
    try:
        answer = input(f"Are you sure? Delete {path} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _delete_files(
    session: Session,
    raw_paths: list[str],
    confirm: Callable[[str], bool],
) -> list[str]:
    """Delete requested files and return one status line per file.

    All paths are checked against the scan result before anything is
    deleted. Each file is deleted only once ``confirm`` accepts it. A
    failed deletion is reported and the remaining files are still
    processed.
    """
    paths = [_match_scanned_path(session, raw) for raw in raw_paths]
    messages: list[str] = []
    for path in paths:
        try:
            session.request_delete(path)
            if confirm(path):
                session.confirm_delete()
            else:
                session.cancel_delete()
        except DeleteError as exc:
            logger.warning("%s", exc)
        messages.append(session.status)
    return messages


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the scan/sort/format pipeline for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        DiskMaidError: On any user-facing validation or I/O error.
    """
    _validate_option_combinations(args)
    config = load_config(args.config_path)

    root = _resolve_root(args.directory or _default_directory(config))
    scan_filter = args.scan_filter or config.scan_filter
    sort_method = SortMethod(args.sort_method) if args.sort_method else config.default_sort
    unit = Unit(args.unit) if args.unit else config.unit

    session = Session(sort_method=sort_method, unit=unit)
    try:
        entries = scan(root, ExtensionFilter(scan_filter))
    except ScanError as exc:
        session.fail_scan(exc)
        raise DiskMaidError(session.status) from exc
    session.apply_scan(entries)
    messages = [session.status]

    if args.save_defaults:
        saved = AppConfig(
            scan_filter=scan_filter,
            unit=unit,
            default_path=str(root) if args.directory else config.default_path,
            default_sort=sort_method,
        )
        save_config(saved, args.config_path)
        messages.append("Settings saved successfully!")

    if args.csv_mode:
        from diskmaid.formatter.csv_ import CsvOptions, format_csv

        return format_csv(session.entries, CsvOptions(files_only=args.files_only))

    if args.delete_paths:
        confirm = _always_confirm if args.assume_yes else _ask_confirmation
        messages.extend(_delete_files(session, args.delete_paths, confirm))

    listing_opts = ListingOptions(
        unit=unit,
        limit=args.limit or None,
        status="\n".join(messages),
    )
    return format_listing(session.entries, listing_opts)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _escape_unencodable_stdout() -> None:
    """Backslash-escape file names that stdout cannot encode instead of failing."""
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="backslashreplace")


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Undecodable file names are written back as their original bytes to
    ``-o`` files and backslash-escaped on stdout.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args.verbose)
    _escape_unencodable_stdout()

    try:
        output = _run_with_args(args)
    except DiskMaidError as exc:
        sys.stderr.write(f"diskmaid: {exc}\n")
        sys.exit(1)

    if args.output_file:
        try:
            Path(args.output_file).write_text(
                output + "\n", encoding="utf-8", errors="surrogateescape", newline=""
            )
        except OSError as exc:
            sys.stderr.write(f"diskmaid: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(output + "\n")
