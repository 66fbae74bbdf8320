"""Trash directory: delete-by-copy, restore, put and empty."""

from __future__ import annotations

import logging
import os
import shutil
import time
from collections.abc import Callable, Set
from pathlib import Path

from ..catalog import Item, ItemKind, ItemRef
from ..errors import IoError, PutItem, RemoveItem
from .names import ensure_encodable, strip_trash_prefix, trash_name, unique_name
from .walk import ProgressCallback, copy_entry, copy_tree

LOGGER = logging.getLogger(__name__)


def _listdir_names(directory: Path) -> set[str]:
    try:
        return set(os.listdir(directory))
    except OSError as exc:
        raise IoError(f"Cannot read directory {directory}", exc) from exc


def _is_broken_symlink(path: Path) -> bool:
    return path.is_symlink() and not path.exists()


class TrashVault:
    """Flat trash directory whose entries are named ``<unix-seconds>_<name>``."""

    def __init__(self, trash_dir: Path, clock: Callable[[], float] = time.time) -> None:
        self.trash_dir = Path(trash_dir)
        self._clock = clock

    def ensure(self) -> None:
        try:
            self.trash_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IoError(f"Cannot create trash directory {self.trash_dir}", exc) from exc

    def is_trash(self, directory: Path) -> bool:
        try:
            return Path(directory).resolve() == self.trash_dir.resolve()
        except OSError:
            return False

    def check_source(self, directory: Path) -> None:
        """Refuse deleting from inside the trash itself."""
        if self.is_trash(directory):
            raise IoError("Use :empty to clear the trash directory")

    def delete(
        self,
        item: Item | ItemRef,
        *,
        progress: ProgressCallback | None = None,
    ) -> Path | None:
        """Move ``item`` into the trash and return its trash path.

        A broken symlink cannot be copied: it is removed directly and ``None``
        is returned.
        """
        source = Path(item.path)
        ensure_encodable(item.name)

        if _is_broken_symlink(source):
            try:
                source.unlink()
            except OSError as exc:
                raise RemoveItem(source) from exc
            LOGGER.debug("Removed broken symlink %s", source)
            return None

        self.ensure()
        name = unique_name(
            trash_name(item.name, int(self._clock())),
            _listdir_names(self.trash_dir),
            is_dir=item.kind is ItemKind.DIRECTORY,
        )
        destination = self.trash_dir / name
        if item.kind is ItemKind.DIRECTORY:
            copy_tree(source, destination, progress)
        else:
            try:
                copy_entry(source, destination)
            except OSError as exc:
                raise PutItem(source) from exc

        try:
            if item.kind is ItemKind.DIRECTORY:
                shutil.rmtree(source)
            else:
                source.unlink()
        except OSError as exc:
            raise RemoveItem(source) from exc
        return destination

    def put(
        self,
        source: Path,
        target_dir: Path,
        existing: Set[str] | None = None,
        *,
        name: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> Path:
        """Copy ``source`` into ``target_dir`` under a free name; return the new path.

        ``existing`` extends the names already on disk; ``name`` overrides the
        candidate name (defaults to ``source.name``).
        """
        source = Path(source)
        target_dir = Path(target_dir)
        taken = _listdir_names(target_dir)
        if existing:
            taken |= set(existing)
        is_dir = source.is_dir() and not source.is_symlink()
        final = unique_name(ensure_encodable(name or source.name), taken, is_dir=is_dir)
        destination = target_dir / final
        if is_dir:
            copy_tree(source, destination, progress)
        else:
            try:
                copy_entry(source, destination)
            except OSError as exc:
                raise PutItem(source) from exc
        return destination

    def restore(
        self,
        trash_path: Path,
        target_dir: Path,
        existing: Set[str] | None = None,
        *,
        name: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> Path:
        """Copy a trash entry back under its original name; the trash copy stays.

        Without ``name`` the original name is recovered from the trash entry.
        """
        trash_path = Path(trash_path)
        return self.put(
            trash_path,
            target_dir,
            existing,
            name=name or strip_trash_prefix(trash_path.name),
            progress=progress,
        )

    def empty(self) -> None:
        """Remove every trash entry by recreating the directory."""
        try:
            if self.trash_dir.exists():
                shutil.rmtree(self.trash_dir)
        except OSError as exc:
            raise RemoveItem(self.trash_dir) from exc
        self.ensure()
        LOGGER.info("EMPTY: %s", self.trash_dir)


__all__ = ["TrashVault"]
