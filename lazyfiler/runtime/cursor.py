"""Cursor/scroll arithmetic for the catalog list.

Pure integer bookkeeping over ``index`` (selected row) and ``skip`` (first
visible row). ``rows`` is passed on every call because the terminal can be
resized between calls. Every operation keeps
``skip <= index < skip + rows`` and ``0 <= index < length``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Cursor:
    index: int = 0
    skip: int = 0

    def copy(self) -> Cursor:
        return Cursor(index=self.index, skip=self.skip)

    def reset(self) -> None:
        self.index = 0
        self.skip = 0

    def move_down(self, length: int, rows: int) -> bool:
        """Move one row down; return ``False`` at the last row."""
        if length == 0 or self.index >= length - 1:
            return False
        self.index += 1
        overflow = self.index - (self.skip + max(1, rows) - 1)
        if overflow > 0:
            self.skip += overflow
        return True

    def move_up(self, rows: int) -> bool:
        """Move one row up; return ``False`` at the first row."""
        if self.index == 0:
            return False
        self.index -= 1
        if self.index < self.skip:
            self.skip = self.index
        # A shrunken viewport can leave the cursor below the window.
        overflow = self.index - (self.skip + max(1, rows) - 1)
        if overflow > 0:
            self.skip += overflow
        return True

    def jump_top(self) -> None:
        self.index = 0
        self.skip = 0

    def jump_bottom(self, length: int, rows: int) -> None:
        """Select the last row and make it the last visible row."""
        if length == 0:
            self.reset()
            return
        rows = max(1, rows)
        self.index = length - 1
        self.skip = length - rows if length > rows else 0

    def focus(self, index: int, length: int, rows: int) -> None:
        """Select ``index`` changing ``skip`` only as much as needed to show it."""
        if length == 0:
            self.reset()
            return
        rows = max(1, rows)
        self.index = max(0, min(index, length - 1))
        if self.index < self.skip:
            self.skip = self.index
        elif self.index >= self.skip + rows:
            self.skip = self.index - rows + 1

    def clamp(self, length: int, rows: int) -> None:
        """Re-establish the invariants after the catalog or viewport changed."""
        if length == 0:
            self.reset()
            return
        rows = max(1, rows)
        self.index = max(0, min(self.index, length - 1))
        self.skip = max(0, min(self.skip, self.index, max(0, length - rows)))
        if self.index >= self.skip + rows:
            self.skip = self.index - rows + 1

    def visible_range(self, length: int, rows: int) -> range:
        return range(self.skip, min(length, self.skip + max(1, rows)))


__all__ = ["Cursor"]
