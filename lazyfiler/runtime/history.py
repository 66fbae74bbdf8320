"""Undo/redo log for destructive filesystem operations.

The log is pure bookkeeping: it never touches the filesystem. Callers apply
the inverse (or forward) action for the peeked operation and only then
commit the position change, optionally replacing the entry with the paths the
action actually produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..catalog import ItemRef
from ..errors import NothingToRedo, NothingToUndo

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rename:
    original_path: Path
    new_path: Path

    def describe(self) -> str:
        return f"RENAME: {self.original_path} -> {self.new_path}"


@dataclass(frozen=True)
class Put:
    """Items copied into ``target_dir``; ``resulting_paths`` align with ``original_items``."""

    original_items: tuple[ItemRef, ...]
    resulting_paths: tuple[Path, ...]
    target_dir: Path

    def describe(self) -> str:
        return f"PUT: {[str(path) for path in self.resulting_paths]}"


@dataclass(frozen=True)
class Delete:
    """Items moved out of ``source_dir``.

    ``trash_paths`` align with ``original_items``; ``None`` marks an entry that
    was removed without a trash copy (a broken symlink).
    """

    original_items: tuple[ItemRef, ...]
    trash_paths: tuple[Path | None, ...]
    source_dir: Path

    def describe(self) -> str:
        return f"DELETE: {[str(item.path) for item in self.original_items]}"


Operation = Union[Rename, Put, Delete]


class OperationLog:
    """Linear history with a position counter.

    ``pos`` counts how many of the newest operations are currently undone;
    ``0`` means nothing is undone.
    """

    def __init__(self) -> None:
        self.ops: list[Operation] = []
        self.pos = 0

    def __len__(self) -> int:
        return len(self.ops)

    def push(self, op: Operation) -> None:
        """Record ``op``, discarding every undone operation first."""
        if self.pos:
            discarded = self.ops[len(self.ops) - self.pos :]
            del self.ops[len(self.ops) - self.pos :]
            LOGGER.debug("Discarded %d undone operation(s)", len(discarded))
        self.ops.append(op)
        self.pos = 0
        LOGGER.info("%s", op.describe())

    def can_undo(self) -> bool:
        return len(self.ops) > self.pos

    def can_redo(self) -> bool:
        return self.pos > 0

    def peek_undo(self) -> Operation:
        """Return the operation ``undo()`` would return, without moving."""
        if not self.can_undo():
            raise NothingToUndo()
        return self.ops[len(self.ops) - self.pos - 1]

    def peek_redo(self) -> Operation:
        """Return the operation ``redo()`` would return, without moving."""
        if not self.can_redo():
            raise NothingToRedo()
        return self.ops[len(self.ops) - self.pos]

    def undo(self, applied: Operation | None = None) -> Operation:
        """Step back one operation; ``applied`` replaces the stored entry."""
        op = self.peek_undo()
        if applied is not None:
            self.ops[len(self.ops) - self.pos - 1] = op = applied
        self.pos += 1
        LOGGER.info("UNDO: %s", op.describe())
        return op

    def redo(self, applied: Operation | None = None) -> Operation:
        """Step forward one operation; ``applied`` replaces the stored entry."""
        op = self.peek_redo()
        if applied is not None:
            self.ops[len(self.ops) - self.pos] = op = applied
        self.pos -= 1
        LOGGER.info("REDO: %s", op.describe())
        return op


__all__ = ["Rename", "Put", "Delete", "Operation", "OperationLog"]
