"""Trash vault: reversible delete and collision-free copy.

This package contains the filesystem side of destructive operations:
- timestamp-prefixed trash naming and ``_copied`` collision renaming
- pure subtree traversal plus recursive copy with progress callbacks
- delete-by-copy, restore, put and empty on the trash directory
"""

from __future__ import annotations

from .names import COPY_SUFFIX, TRASH_PREFIX_LEN, strip_trash_prefix, trash_name, unique_name
from .trash import TrashVault
from .walk import PROGRESS_STEP, copy_tree, walk

__all__ = [
    "COPY_SUFFIX",
    "PROGRESS_STEP",
    "TRASH_PREFIX_LEN",
    "TrashVault",
    "copy_tree",
    "strip_trash_prefix",
    "trash_name",
    "unique_name",
    "walk",
]
