"""Command-line front door for blake.

Parses CLI options, configures logging, and validates the target file.
Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import BlakeError
from .formatters import FORMATTER_NAMES
from .runtime import run_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_ENV = "BLAKE_LOG"


def _configure_logging(log_file: str | None) -> None:
    """Log to ``log_file`` at DEBUG, or silence logging entirely.

    The TUI owns the terminal, so nothing may reach stderr while it runs.
    """
    if log_file:
        logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)
    else:
        logging.getLogger().addHandler(logging.NullHandler())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blake",
        description="Browse git blame interactively and drill back through a file's history.",
    )
    parser.add_argument("path", help="File to blame.")
    parser.add_argument("--config", metavar="PATH", default=None, help="Config file (default: platform config dir).")
    parser.add_argument(
        "--formatter",
        default=None,
        help=f"Diff formatter ({', '.join(FORMATTER_NAMES)}); overrides general.diff_formatter.",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=None,
        help=f"Write debug logs to PATH (default: ${LOG_FILE_ENV} if set).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch blake on one file.

    Exits with a message when the file is missing, stdin is not a terminal,
    or startup fails (not a repository, formatter unavailable, blame error).
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_file or os.environ.get(LOG_FILE_ENV))

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("blake needs an interactive terminal")

    config_path = Path(args.config) if args.config else None
    try:
        run_app(path, config_path=config_path, formatter_name=args.formatter)
    except BlakeError as exc:
        logging.getLogger(__name__).error("startup failed: %s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
