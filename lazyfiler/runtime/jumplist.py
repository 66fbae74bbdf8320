"""Directory jump list for ``Ctrl-o`` / ``Tab``.

One list of visited directories, oldest first, and a position counted back
from the newest entry. Stepping backward or forward only moves the position;
visiting a directory drops every entry ahead of it, like a branch in the undo
log.
"""

from __future__ import annotations

from pathlib import Path

MAX_JUMP_ENTRIES = 256


def _normalized(path: Path) -> Path:
    try:
        return Path(path).resolve()
    except OSError:
        return Path(path)


class JumpList:
    def __init__(self, start: Path | None = None, max_entries: int = MAX_JUMP_ENTRIES) -> None:
        self.max_entries = max(1, max_entries)
        self.entries: list[Path] = []
        self.pos = 0
        if start is not None:
            self.add(start)

    def _current(self) -> int:
        return len(self.entries) - 1 - self.pos

    def add(self, path: Path) -> None:
        """Record a visit to ``path``; entries ahead of the position are dropped."""
        if self.pos:
            del self.entries[len(self.entries) - self.pos :]
            self.pos = 0
        path = _normalized(path)
        if self.entries and self.entries[-1] == path:
            return
        self.entries.append(path)
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            del self.entries[:overflow]

    def backward(self) -> Path | None:
        index = self._current() - 1
        return self.entries[index] if index >= 0 else None

    def forward(self) -> Path | None:
        return self.entries[self._current() + 1] if self.pos else None

    def step_backward(self) -> None:
        self.pos += 1

    def step_forward(self) -> None:
        self.pos -= 1

    def remove_backward(self) -> None:
        """Forget the entry ``backward()`` returned (its directory vanished)."""
        del self.entries[self._current() - 1]

    def remove_forward(self) -> None:
        del self.entries[self._current() + 1]
        self.pos -= 1


__all__ = ["MAX_JUMP_ENTRIES", "JumpList"]
