"""Subtree traversal and recursive copy.

``walk`` is the pure traversal; ``copy_tree`` performs the filesystem work and
reports progress through a callback, so each step can be exercised alone.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path, PurePath

from ..errors import PutItem

LOGGER = logging.getLogger(__name__)

PROGRESS_STEP = 50

ProgressCallback = Callable[[int, int], None]


def walk(root: Path) -> Iterator[tuple[PurePath, bool]]:
    """Yield ``(relative_path, is_dir)`` for every descendant of ``root``.

    Entries come in lexicographic path order (parents before children,
    siblings sorted by name). Symlinks are reported as non-directories and
    never followed.
    """

    def _walk(directory: Path, prefix: PurePath) -> Iterator[tuple[PurePath, bool]]:
        with os.scandir(directory) as entries:
            ordered = sorted(entries, key=lambda entry: entry.name)
        for entry in ordered:
            relative = prefix / entry.name
            is_dir = entry.is_dir(follow_symlinks=False)
            yield relative, is_dir
            if is_dir:
                yield from _walk(Path(entry.path), relative)

    yield from _walk(Path(root), PurePath())


def copy_entry(source: Path, destination: Path) -> None:
    """Copy one non-directory entry; symlinks are recreated, not followed."""
    if source.is_symlink():
        os.symlink(os.readlink(source), destination)
    else:
        shutil.copy2(source, destination)


def copy_directory_stat(source: Path, destination: Path) -> None:
    try:
        shutil.copystat(source, destination, follow_symlinks=False)
    except OSError as exc:
        LOGGER.warning("Copying metadata failed: %s -> %s (%s)", source, destination, exc)
        raise PutItem(source) from exc


def copy_tree(
    source: Path,
    destination: Path,
    progress: ProgressCallback | None = None,
) -> int:
    """Recreate the ``source`` subtree at ``destination``; return entries copied.

    The destination root is created first, then each directory and file in
    ``walk`` order. Directory metadata (mode, timestamps) is copied last,
    deepest first, so writing children does not disturb it. Raises ``PutItem``
    with the offending source path on the first failure and leaves the partial
    copy in place.
    """
    try:
        entries = list(walk(source))
    except OSError as exc:
        raise PutItem(source) from exc
    total = len(entries)

    try:
        destination.mkdir()
    except OSError as exc:
        raise PutItem(source) from exc

    for done, (relative, is_dir) in enumerate(entries, start=1):
        src = source / relative
        dst = destination / relative
        try:
            if is_dir:
                dst.mkdir(parents=True, exist_ok=True)
            else:
                copy_entry(src, dst)
        except OSError as exc:
            LOGGER.warning("Copy failed: %s -> %s (%s)", src, dst, exc)
            raise PutItem(src) from exc
        if progress is not None and done % PROGRESS_STEP == 0:
            progress(done, total)

    directories = [relative for relative, is_dir in entries if is_dir]
    for relative in reversed(directories):
        copy_directory_stat(source / relative, destination / relative)
    copy_directory_stat(source, destination)

    if progress is not None:
        progress(total, total)
    return total


__all__ = ["PROGRESS_STEP", "ProgressCallback", "walk", "copy_entry", "copy_directory_stat", "copy_tree"]
