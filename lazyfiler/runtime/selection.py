"""Anchor-based range selection over catalog rows (visual mode)."""

from __future__ import annotations

from collections.abc import Sequence

from ..catalog import Item


class Selection:
    """Track one visual-mode anchor and mirror the range into ``Item.selected``.

    The selected rows are always the closed interval between ``anchor`` and the
    cursor index. ``anchor is None`` means visual mode is off.
    """

    def __init__(self) -> None:
        self.anchor: int | None = None

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def start(self, items: Sequence[Item], index: int) -> None:
        """Enter visual mode anchored at ``index``."""
        self.clear(items)
        if not items:
            return
        self.anchor = max(0, min(index, len(items) - 1))
        self.update(items, index)

    def update(self, items: Sequence[Item], index: int) -> None:
        """Re-select the range after the cursor moved."""
        if self.anchor is None:
            return
        low, high = sorted((self.anchor, index))
        for idx, item in enumerate(items):
            item.selected = low <= idx <= high

    def clear(self, items: Sequence[Item]) -> None:
        self.anchor = None
        for item in items:
            item.selected = False

    @staticmethod
    def selected(items: Sequence[Item]) -> list[Item]:
        return [item for item in items if item.selected]


__all__ = ["Selection"]
