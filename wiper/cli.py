"""Command-line front door for wiper.

Parses CLI options, resolves the scan root and filter, then dispatches into
the interactive runtime (or the plain listing when stdin is not a terminal).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import load_default_filter
from .errors import ConfigurationError, TerminalError
from .runtime import run_app
from .scan import DEFAULT_FILTER
from .ui_theme import available_theme_names


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiper",
        description="Find directories matching a pattern, review their sizes, and delete them.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Root directory to scan. Defaults to the current directory.")
    parser.add_argument(
        "--filter",
        default=None,
        help=f"Regex searched against entry names (default: config 'filter' or {DEFAULT_FILTER!r}).",
    )
    parser.add_argument(
        "--prune",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Do not look for further matches inside a matched directory (default: on).",
    )
    parser.add_argument("--exact", action="store_true", help="Treat the filter as an exact entry name, not a regex.")
    parser.add_argument("--match-path", action="store_true", help="Search the regex against the full path.")
    parser.add_argument("--read-only", action="store_true", help="Browse results without selection or deletion.")
    parser.add_argument("--list", action="store_true", help="Print the scan results and exit.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the UI.")
    parser.add_argument("--tick-ms", type=_positive_int, default=None, help="Tick period in milliseconds.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch wiper.

    Configuration and terminal errors end the process with their message and
    a non-zero status.
    """
    args = build_parser().parse_args(argv)
    root = Path(args.path).expanduser()
    filter_text = args.filter if args.filter is not None else (load_default_filter() or DEFAULT_FILTER)

    try:
        run_app(
            root,
            filter_text,
            prune=args.prune,
            exact=args.exact,
            match_full_path=args.match_path,
            read_only=args.read_only,
            list_only=args.list,
            theme_name=args.theme,
            no_color=args.no_color,
            tick_ms=args.tick_ms,
            log_file=args.log_file,
        )
    except (ConfigurationError, TerminalError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
