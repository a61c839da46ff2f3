"""Command-line front door for refer.

Parses the file list and options, sets up logging, and dispatches into the
interactive session. Session failures surface as ``SystemExit`` only after
the terminal has been restored.
"""

from __future__ import annotations

import argparse
import logging
import os

from .app import run_app
from .config import MAX_TICK_MS, coerce_tick_ms
from .crash import CrashReport
from .ui_theme import available_theme_names

LOG_FILE_ENV = "REFER_LOG_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _tick_ms(value: str) -> int:
    """argparse type for the polling tick in milliseconds."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if coerce_tick_ms(parsed) is None:
        raise argparse.ArgumentTypeError(f"value must be between 1 and {MAX_TICK_MS}")
    return parsed


def configure_logging(log_file: str | None) -> None:
    """Send package logs to ``log_file``; without one they are discarded.

    Nothing may be written to the terminal while the alternate screen is up.
    """
    package_logger = logging.getLogger("refer")
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refer",
        description="View and collect files in a full-screen terminal UI.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="File identifiers to open.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument(
        "--tick-ms",
        type=_tick_ms,
        default=None,
        help="Input polling interval in milliseconds (default: config or 16).",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get(LOG_FILE_ENV),
        help=f"Write debug logs to this file (default: ${LOG_FILE_ENV}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the session; an empty file list is a no-op."""
    args = build_parser().parse_args(argv)
    if not args.files:
        return
    configure_logging(args.log_file)
    try:
        run_app(args.files, theme_name=args.theme, tick_ms=args.tick_ms)
    except CrashReport as report:
        raise SystemExit(report.message) from None


if __name__ == "__main__":
    main()
