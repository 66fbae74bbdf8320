"""Domain datatypes for one directory listing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..preview.classify import PreviewKind


class ItemKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class SortKey(Enum):
    """Catalog ordering; values double as the session-file spelling."""

    NAME = "Name"
    TIME = "Time"

    def toggled(self) -> SortKey:
        return SortKey.TIME if self is SortKey.NAME else SortKey.NAME


@dataclass
class Item:
    """One filesystem entry plus the transient UI state attached to its row.

    ``selected``, ``matches`` and the preview fields never survive a catalog
    rebuild; every rebuild creates fresh ``Item`` objects.
    """

    kind: ItemKind
    name: str
    path: Path
    symlink_dir_path: Path | None = None
    size: int = 0
    ext: str | None = None
    modified: str | None = None
    mtime_ns: int | None = None
    is_hidden: bool = False
    selected: bool = False
    matches: bool = False
    preview_kind: PreviewKind | None = None
    preview_scroll: int = 0
    content: str | None = None
    permissions: int | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is ItemKind.DIRECTORY

    @property
    def is_dir_like(self) -> bool:
        """Return whether the entry is a directory or a symlink to one."""
        return self.is_dir or (self.kind is ItemKind.SYMLINK and self.symlink_dir_path is not None)

    def display_name(self) -> str:
        """Return the name with undecodable bytes replaced for printing."""
        return self.name.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")

    def ref(self) -> ItemRef:
        return ItemRef(kind=self.kind, name=self.name, path=self.path)


@dataclass(frozen=True)
class ItemRef:
    """Immutable snapshot of an item kept by registers and the operation log."""

    kind: ItemKind
    name: str
    path: Path

    @property
    def is_dir(self) -> bool:
        return self.kind is ItemKind.DIRECTORY


__all__ = ["ItemKind", "SortKey", "Item", "ItemRef"]
