"""Terminal control for the file manager session.

Owns raw-mode lifecycle and alternate-screen switching, and encodes the
cursor, clear and color escape sequences the renderer asks for. Output is buffered
and written to the tty in one ``os.write`` per frame.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from ..ui_theme import Color

MIN_ROWS = 4
MIN_COLS = 4


class TerminalController:
    """Manage terminal mode transitions and buffered screen output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._buffer: list[str] = []

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        self.flush()
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Hand the terminal to a child process for the duration of the block."""
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()

    def terminal_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def flush(self) -> None:
        if not self._buffer:
            return
        data = "".join(self._buffer).encode("utf-8", errors="replace")
        self._buffer.clear()
        os.write(self.stdout_fd, data)

    def move_to(self, col: int, row: int) -> None:
        """Move to zero-based ``(col, row)``."""
        self.write(f"\x1b[{max(0, row) + 1};{max(0, col) + 1}H")

    def clear_current_line(self) -> None:
        self.write("\x1b[2K")

    def clear_until_newline(self) -> None:
        self.write("\x1b[K")

    def clear_all(self) -> None:
        self.write("\x1b[2J")

    def set_foreground(self, color: Color) -> None:
        self.write(color.sgr(38))

    def set_background(self, color: Color) -> None:
        self.write(color.sgr(48))

    def reset_color(self) -> None:
        self.write("\x1b[0m")

    def hide_cursor(self) -> None:
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self.write("\x1b[?25h")


__all__ = ["MIN_ROWS", "MIN_COLS", "TerminalController"]
