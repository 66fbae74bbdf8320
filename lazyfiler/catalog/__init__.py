"""Directory catalog model: item datatypes, scanning, and ordering.

This package contains non-UI listing primitives:
- item/kind/sort-key datatypes
- directory scanning with per-entry degraded metadata
- natural-name and modification-time ordering
- search-match flagging over a built catalog
"""

from __future__ import annotations

from .types import Item, ItemKind, ItemRef, SortKey
from .fs import (
    format_modified,
    highlight_matches,
    natural_key,
    next_match,
    read_item,
    rebuild,
    sort_items,
)

__all__ = [
    "Item",
    "ItemKind",
    "ItemRef",
    "SortKey",
    "format_modified",
    "highlight_matches",
    "natural_key",
    "next_match",
    "read_item",
    "rebuild",
    "sort_items",
]
