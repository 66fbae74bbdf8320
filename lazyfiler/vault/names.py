"""Naming rules for the trash directory and collision-free copies."""

from __future__ import annotations

from collections.abc import Container
from pathlib import PurePath

from ..errors import EncodeError

COPY_SUFFIX = "_copied"
TRASH_PREFIX_LEN = 11


def unique_name(name: str, existing: Container[str], is_dir: bool = False) -> str:
    """Return ``name`` or the first ``_copied`` variant not in ``existing``.

    Files get the suffix before their final extension (``note_copied.txt``);
    directories and extension-less names get it at the end. Each retry makes
    the name strictly longer, so the loop terminates for any finite set.
    """
    candidate = name
    while candidate in existing:
        if is_dir:
            candidate += COPY_SUFFIX
            continue
        ext = PurePath(candidate).suffix
        if ext:
            candidate = candidate[: -len(ext)] + COPY_SUFFIX + ext
        else:
            candidate += COPY_SUFFIX
    return candidate


def trash_name(name: str, timestamp: int) -> str:
    return f"{timestamp}_{name}"


def strip_trash_prefix(name: str) -> str:
    """Drop the ``<unix-seconds>_`` prefix of a trash entry name."""
    if len(name) > TRASH_PREFIX_LEN and name[: TRASH_PREFIX_LEN - 1].isdigit() and name[TRASH_PREFIX_LEN - 1] == "_":
        return name[TRASH_PREFIX_LEN:]
    return name


def ensure_encodable(name: str) -> str:
    """Raise ``EncodeError`` when ``name`` carries undecodable bytes."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodeError() from exc
    return name


__all__ = [
    "COPY_SUFFIX",
    "TRASH_PREFIX_LEN",
    "unique_name",
    "trash_name",
    "strip_trash_prefix",
    "ensure_encodable",
]
