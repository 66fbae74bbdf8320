"""Runtime composition layer for lazyfiler.

Loads configuration and session, builds the engine, wires the terminal,
renderer and key handler together, and runs the loop.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from ..errors import IoError
from ..formatting import display_count
from ..render import compute_layout, draw_progress, draw_screen
from ..ui_theme import resolve_theme
from ..vault import TrashVault
from . import config as config_module
from .config import read_config
from .engine import FilerEngine
from .logs import configure_logging, logging_requested
from .loop import KeyHandler, UIState, check_terminal_size, run_main_loop
from .session import read_session, write_session
from .terminal import TerminalController

LOGGER = logging.getLogger(__name__)

TRASH_DIRNAME = "trash"
LOG_DIRNAME = "log"


def trash_dir() -> Path:
    return config_module.config_dir() / TRASH_DIRNAME


def log_dir() -> Path:
    return config_module.config_dir() / LOG_DIRNAME


def write_choosedir(target: Path, directory: Path) -> None:
    """Write the last working directory for shell ``cd`` integration."""
    try:
        target.write_text(f"{directory}\n", encoding="utf-8")
    except OSError as exc:
        raise IoError(f"Cannot write {target}", exc) from exc


def run_filer(
    path: Path,
    *,
    no_color: bool = False,
    log: bool = False,
    choosedir: Path | None = None,
) -> Path:
    """Run the interactive file manager rooted at ``path``; return the last directory."""
    configure_logging(logging_requested(log), log_dir())
    config = read_config()
    session = read_session()
    vault = TrashVault(trash_dir())
    vault.ensure()

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    cols, rows = terminal.terminal_size()
    check_terminal_size(cols, rows)

    theme = resolve_theme(config.colors, no_color=no_color)

    def launch(argv: Sequence[str], cwd: Path | None = None) -> None:
        with terminal.suspended():
            subprocess.run(list(argv), cwd=cwd, check=False)

    engine = FilerEngine(path, vault, config, session, launcher=launch)

    def list_rows(term_cols: int, term_rows: int) -> int:
        layout = compute_layout(term_cols, term_rows, preview=engine.side_pane_visible, split=session.split)
        return layout.listing.height

    engine.resize(list_rows(cols, rows))
    ui = UIState()
    handler = KeyHandler(engine, ui)

    def report_count(index: int, total: int) -> None:
        _, term_rows = terminal.terminal_size()
        draw_progress(terminal, theme, term_rows, display_count(index, total), index, total)

    def report_progress(done: int, total: int) -> None:
        _, term_rows = terminal.terminal_size()
        draw_progress(terminal, theme, term_rows, "Processing...", done, total)

    engine.batch_progress = report_count
    engine.progress = report_progress

    def draw(term_cols: int, term_rows: int) -> None:
        draw_screen(terminal, engine, ui, theme, term_cols, term_rows)

    LOGGER.info("Start in %s", engine.current_dir)
    try:
        with terminal.raw_mode():
            run_main_loop(engine, terminal, stdin_fd, handler, draw, list_rows)
    finally:
        write_session(session)
        LOGGER.info("Exit in %s", engine.current_dir)

    if choosedir is not None:
        write_choosedir(choosedir, engine.current_dir)
    return engine.current_dir


__all__ = ["run_filer", "trash_dir", "log_dir", "write_choosedir"]
