"""One-level directory preview drawn as a small tree."""

from __future__ import annotations

import os
from pathlib import Path

from ..catalog import natural_key
from ..errors import IoError

BRANCH = "├ "
LAST_BRANCH = "└ "


def directory_listing(path: Path) -> list[str]:
    """Return immediate child names, directories first, each in natural order."""
    dirs: list[str] = []
    files: list[str] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                (dirs if is_dir else files).append(entry.name)
    except OSError as exc:
        raise IoError(f"Cannot read directory {path}", exc) from exc
    dirs.sort(key=natural_key)
    files.sort(key=natural_key)
    return dirs + files


def make_tree(names: list[str]) -> list[str]:
    if not names:
        return []
    lines = [BRANCH + name for name in names[:-1]]
    lines.append(LAST_BRANCH + names[-1])
    return lines


__all__ = ["BRANCH", "LAST_BRANCH", "directory_listing", "make_tree"]
