"""Preview-kind decision for one catalog item."""

from __future__ import annotations

from enum import Enum

from ..catalog import Item
from .sniff import decode_text, is_text

MAX_SIZE = 1_000_000_000
PREVIEW_READ_BYTES = 1_000_000
TAB_WIDTH = 4

IMAGE_EXTENSIONS = frozenset(
    {"avif", "bmp", "gif", "ico", "jpeg", "jpg", "png", "tif", "tiff", "webp"}
)


class PreviewKind(Enum):
    TOO_BIG = "too_big"
    DIRECTORY = "directory"
    IMAGE = "image"
    TEXT = "text"
    BINARY = "binary"
    NOT_READABLE = "not_readable"


def _read_head(item: Item) -> bytes:
    with open(item.path, "rb") as handle:
        return handle.read(PREVIEW_READ_BYTES)


def classify(item: Item) -> PreviewKind:
    """Return how ``item`` should be previewed, caching text content on it.

    Checks run in a fixed order and the first hit wins: size, directory,
    image extension, then content sniffing. A failed read yields
    ``NOT_READABLE``.
    """
    if item.size > MAX_SIZE:
        return PreviewKind.TOO_BIG
    if item.is_dir_like:
        return PreviewKind.DIRECTORY
    if item.ext is not None and item.ext in IMAGE_EXTENSIONS:
        return PreviewKind.IMAGE

    try:
        data = _read_head(item)
    except OSError:
        return PreviewKind.NOT_READABLE
    if not is_text(data):
        return PreviewKind.BINARY
    item.content = decode_text(data).replace("\t", " " * TAB_WIDTH)
    return PreviewKind.TEXT


def ensure_preview(item: Item) -> PreviewKind:
    """Classify ``item`` once; later calls reuse the cached kind."""
    if item.preview_kind is None:
        item.preview_kind = classify(item)
    return item.preview_kind


__all__ = [
    "MAX_SIZE",
    "PREVIEW_READ_BYTES",
    "IMAGE_EXTENSIONS",
    "PreviewKind",
    "classify",
    "ensure_preview",
]
