"""Yank registers.

``"`` (unnamed) always holds the latest yank or delete. A plain yank also fills
``"0``; every delete shifts into ``"1`` .. ``"9``. Letters name registers that
are only written when asked for, and an upper-case letter appends to its
lower-case register.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from ..catalog import ItemRef

UNNAMED = '"'
NUMBERED_REGISTERS = 9


def is_register_name(name: str) -> bool:
    return len(name) == 1 and (name == UNNAMED or (name.isascii() and name.isalnum()))


class Registers:
    def __init__(self) -> None:
        self.unnamed: list[ItemRef] = []
        self.zero: list[ItemRef] = []
        self.numbered: deque[list[ItemRef]] = deque(maxlen=NUMBERED_REGISTERS)
        self.named: dict[str, list[ItemRef]] = {}

    def _store_named(self, refs: list[ItemRef], name: str) -> None:
        key = name.lower()
        if name.isupper():
            self.named[key] = self.named.get(key, []) + refs
        else:
            self.named[key] = list(refs)

    def yank(self, items: Iterable[ItemRef], name: str | None = None) -> int:
        """Store ``items``; without ``name`` they also go to ``"0``."""
        refs = list(items)
        self.unnamed = refs
        if name is None or name == UNNAMED:
            self.zero = list(refs)
        else:
            self._store_named(refs, name)
        return len(refs)

    def record_delete(self, items: Iterable[ItemRef], name: str | None = None) -> None:
        """Store trash references of deleted items, newest in ``"1``."""
        refs = list(items)
        if not refs:
            return
        self.unnamed = refs
        self.numbered.appendleft(list(refs))
        if name is not None and name != UNNAMED:
            self._store_named(refs, name)

    def get(self, name: str) -> list[ItemRef] | None:
        if name == UNNAMED:
            return self.unnamed
        if name == "0":
            return self.zero
        if name.isascii() and name.isdigit():
            index = int(name) - 1
            return self.numbered[index] if index < len(self.numbered) else None
        return self.named.get(name.lower())

    def lines(self) -> list[str]:
        """Return one ``"x name name ...`` line per non-empty register."""
        rows: list[tuple[str, list[ItemRef]]] = [(UNNAMED, self.unnamed), ("0", self.zero)]
        rows += [(str(index), refs) for index, refs in enumerate(self.numbered, start=1)]
        rows += sorted(self.named.items())
        return [
            " ".join([f'"{name}'] + [ref.name for ref in refs])
            for name, refs in rows
            if refs
        ]


__all__ = ["UNNAMED", "NUMBERED_REGISTERS", "is_register_name", "Registers"]
