"""Small text formatters for the footer and status line."""

from __future__ import annotations

import stat

PROGRESS_SLOTS = 5

_SIZE_UNITS = ((1_000_000_000, "GB"), (1_000_000, "MB"), (1_000, "KB"))


def to_proper_size(size: int) -> str:
    """Return ``size`` in decimal units, truncated: ``999B``, ``1KB``, ``12MB``."""
    for unit, label in _SIZE_UNITS:
        if size >= unit:
            return f"{size // unit}{label}"
    return f"{size}B"


def format_permissions(mode: int | None) -> str:
    """Return ``rwxr-xr-x`` style text for permission bits."""
    if mode is None:
        return ""
    return stat.filemode(stat.S_IFREG | mode)[1:]


def format_duration(seconds: float) -> str:
    return f"{seconds:.2f}s"


def display_count(index: int, total: int) -> str:
    return f"{index + 1}/{total}"


def progress_bar(done: int, total: int) -> str:
    """Return a five-slot bar such as ``[»»---]``."""
    filled = PROGRESS_SLOTS if total <= 0 else min(PROGRESS_SLOTS, done * PROGRESS_SLOTS // total)
    return "[" + "»" * filled + "-" * (PROGRESS_SLOTS - filled) + "]"


def format_time(modified: str | None) -> str:
    """Shorten an ISO timestamp to ``YYYY-MM-DD HH:MM``."""
    if not modified or len(modified) < 16:
        return ""
    return f"{modified[:10]} {modified[11:16]}"


def plural(count: int, noun: str, plural_noun: str | None = None) -> str:
    if count == 1:
        return f"{count} {noun}"
    return f"{count} {plural_noun or noun + 's'}"


__all__ = [
    "to_proper_size",
    "format_permissions",
    "format_duration",
    "display_count",
    "progress_bar",
    "format_time",
    "plural",
]
