"""Directory scanning and catalog ordering."""

from __future__ import annotations

import os
import re
import stat
from datetime import datetime
from pathlib import Path

from ..errors import IoError
from .types import Item, ItemKind, SortKey

_DIGIT_RUN_RE = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple[tuple[object, ...], str]:
    """Sort key comparing digit runs numerically and everything else by code point.

    ``re.split`` with a capture group alternates text and digit runs, so every
    position holds the same type across names. The raw name breaks ties such
    as ``"01"`` versus ``"1"``.
    """
    parts = _DIGIT_RUN_RE.split(name)
    return tuple(int(part) if idx % 2 else part for idx, part in enumerate(parts)), name


def format_modified(mtime: float) -> str:
    """Return local ISO-8601 timestamp with second precision."""
    return datetime.fromtimestamp(mtime).astimezone().isoformat(timespec="seconds")


def _extension(name: str) -> str | None:
    suffix = Path(name).suffix
    if not suffix:
        return None
    return suffix[1:].lower()


def read_item(entry: os.DirEntry) -> Item:
    """Build an ``Item`` from one ``os.scandir`` entry.

    A failed ``lstat`` still yields a row (plain file, no size or time), so a
    single unreadable entry never aborts the listing.
    """
    name = entry.name
    path = Path(entry.path)
    hidden = name.startswith(".")
    ext = _extension(name)

    try:
        st = entry.stat(follow_symlinks=False)
    except OSError:
        return Item(kind=ItemKind.FILE, name=name, path=path, ext=ext, is_hidden=hidden)

    if stat.S_ISDIR(st.st_mode):
        kind = ItemKind.DIRECTORY
    elif stat.S_ISLNK(st.st_mode):
        kind = ItemKind.SYMLINK
    else:
        kind = ItemKind.FILE

    symlink_dir_path: Path | None = None
    if kind is ItemKind.SYMLINK:
        try:
            if path.is_dir():
                symlink_dir_path = path.resolve()
        except OSError:
            symlink_dir_path = None

    return Item(
        kind=kind,
        name=name,
        path=path,
        symlink_dir_path=symlink_dir_path,
        size=int(st.st_size),
        ext=None if kind is ItemKind.DIRECTORY else ext,
        modified=format_modified(st.st_mtime),
        mtime_ns=int(st.st_mtime_ns),
        is_hidden=hidden,
        permissions=stat.S_IMODE(st.st_mode),
    )


def sort_items(items: list[Item], sort_key: SortKey) -> list[Item]:
    """Return ``items`` ordered by ``sort_key`` (stable, deterministic)."""
    by_name = sorted(items, key=lambda item: natural_key(item.name))
    if sort_key is SortKey.NAME:
        return by_name
    # Stable descending sort keeps name order among equal times; unknown times sort last.
    return sorted(
        by_name,
        key=lambda item: item.mtime_ns if item.mtime_ns is not None else -1,
        reverse=True,
    )


def rebuild(directory: Path, sort_key: SortKey, show_hidden: bool) -> list[Item]:
    """List ``directory`` as a catalog: directories first, each part sorted.

    Raises ``IoError`` when the directory itself cannot be read.
    """
    dirs: list[Item] = []
    files: list[Item] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                item = read_item(entry)
                if item.kind is ItemKind.DIRECTORY:
                    dirs.append(item)
                else:
                    files.append(item)
    except OSError as exc:
        raise IoError(f"Cannot read directory {directory}", exc) from exc

    result = sort_items(dirs, sort_key) + sort_items(files, sort_key)
    if not show_hidden:
        result = [item for item in result if not item.is_hidden]
    return result


def highlight_matches(items: list[Item], keyword: str | None) -> int:
    """Flag rows whose name contains ``keyword``; return the match count."""
    count = 0
    for item in items:
        item.matches = bool(keyword) and keyword in item.name
        if item.matches:
            count += 1
    return count


def next_match(items: list[Item], start: int, forward: bool = True) -> int | None:
    """Return the next matching row after ``start``, wrapping around."""
    total = len(items)
    if total == 0:
        return None
    step = 1 if forward else -1
    for offset in range(1, total + 1):
        idx = (start + step * offset) % total
        if items[idx].matches:
            return idx
    return None


__all__ = [
    "natural_key",
    "format_modified",
    "read_item",
    "sort_items",
    "rebuild",
    "highlight_matches",
    "next_match",
]
