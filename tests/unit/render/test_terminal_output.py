"""Escape-sequence encoding of ``TerminalController`` output.

Output goes to a pipe; tty attribute capture is patched out.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

from lazyfiler.runtime.terminal import TerminalController
from lazyfiler.ui_theme import Color


class TerminalOutputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        with mock.patch("lazyfiler.runtime.terminal.termios.tcgetattr", return_value=[]):
            self.terminal = TerminalController(0, self.write_fd)

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)

    def flushed(self) -> bytes:
        self.terminal.flush()
        return os.read(self.read_fd, 4096)

    def test_output_is_buffered_until_flush(self) -> None:
        self.terminal.move_to(0, 0)
        self.terminal.write("hé")
        self.assertEqual(self.flushed(), "\x1b[1;1Hhé".encode("utf-8"))

    def test_move_to_is_zero_based(self) -> None:
        self.terminal.move_to(4, 2)
        self.assertEqual(self.flushed(), b"\x1b[3;5H")

    def test_clear_and_color_sequences(self) -> None:
        self.terminal.clear_current_line()
        self.terminal.clear_until_newline()
        self.terminal.clear_all()
        self.terminal.set_foreground(Color(ansi=14))
        self.terminal.set_background(Color(rgb=(1, 2, 3)))
        self.terminal.reset_color()
        self.assertEqual(
            self.flushed(),
            b"\x1b[2K\x1b[K\x1b[2J\x1b[38;5;14m\x1b[48;2;1;2;3m\x1b[0m",
        )

    def test_flush_without_output_writes_nothing(self) -> None:
        self.terminal.flush()
        self.terminal.hide_cursor()
        self.assertEqual(self.flushed(), b"\x1b[?25l")


if __name__ == "__main__":
    unittest.main()
