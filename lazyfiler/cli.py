"""Command-line front door for lazyfiler.

Parses CLI options, resolves the start directory, and dispatches into the
interactive runtime.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import FilerError
from .runtime import run_filer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfiler",
        description="Keyboard-driven terminal file manager with a trash-backed undo history.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument("--log", action="store_true", help="Write a debug log under the config directory.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--choosedir",
        metavar="FILE",
        default=None,
        help="Write the last working directory to FILE on exit.",
    )
    return parser


def stdio_is_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def resolve_start_dir(raw: str | None, default_path: Path) -> Path:
    """Return the directory to open; a file argument opens its parent."""
    path = Path(raw).expanduser() if raw else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    path = path.absolute()
    return path if path.is_dir() else path.parent


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazyfiler.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    if not stdio_is_terminal():
        raise SystemExit("lazyfiler needs an interactive terminal.")
    start = resolve_start_dir(args.path, default_path or Path.cwd())
    choosedir = Path(args.choosedir).expanduser() if args.choosedir else None
    try:
        run_filer(start, no_color=args.no_color, log=args.log, choosedir=choosedir)
    except FilerError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
