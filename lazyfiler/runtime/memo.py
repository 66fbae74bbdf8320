"""Cursor memos kept across directory changes.

Two plain stacks: ``up`` holds the state of each directory we descended out of
(consumed when going back up), ``down`` holds the state of each directory we
ascended out of (consumed when re-entering it). Jumps clear both.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..catalog import Item
from .cursor import Cursor

ASCEND_CONTEXT_ROWS = 3


@dataclass(frozen=True)
class Memo:
    path: Path
    cursor: Cursor
    row: int

    @classmethod
    def capture(cls, path: Path, cursor: Cursor) -> Memo:
        """Snapshot ``cursor`` for ``path``; ``row`` is the on-screen row of the cursor."""
        return cls(path=Path(path), cursor=cursor.copy(), row=cursor.index - cursor.skip)


def cursor_on_name(items: Sequence[Item], name: str, rows: int) -> Cursor:
    """Place the cursor on ``name`` with a few rows of context above it."""
    index = next((idx for idx, item in enumerate(items) if item.name == name), 0)
    skip = 0 if index < ASCEND_CONTEXT_ROWS else index - ASCEND_CONTEXT_ROWS
    cursor = Cursor(index=index, skip=skip)
    cursor.clamp(len(items), rows)
    return cursor


class MemoStack:
    def __init__(self) -> None:
        self.up: list[Memo] = []
        self.down: list[Memo] = []

    def descend(self, current: Memo, target: Path) -> Cursor:
        """Record ``current`` and return the cursor to use inside ``target``."""
        self.up.append(current)
        if self.down:
            memo = self.down.pop()
            if memo.path == target:
                return memo.cursor.copy()
        return Cursor()

    def ascend(self, current: Memo, parent: Path, items: Sequence[Item], rows: int) -> Cursor:
        """Record ``current`` and return the cursor to use in ``parent``.

        ``items`` is the already rebuilt catalog of ``parent``. Without a
        matching memo the cursor lands on the directory just left.
        """
        self.down.append(current)
        if self.up:
            memo = self.up.pop()
            if memo.path == parent:
                cursor = memo.cursor.copy()
                cursor.clamp(len(items), rows)
                return cursor
        return cursor_on_name(items, current.path.name, rows)

    def jump(self) -> Cursor:
        self.up.clear()
        self.down.clear()
        return Cursor()


__all__ = ["ASCEND_CONTEXT_ROWS", "Memo", "MemoStack", "cursor_on_name"]
