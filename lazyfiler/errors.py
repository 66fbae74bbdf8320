"""Error types raised by the navigation and operation engine.

Every error derives from ``FilerError`` so the input loop can recover from any
of them with one handler and show ``str(exc)`` as the status message.
``TerminalTooSmall`` is the exception: it aborts start-up.
"""

from __future__ import annotations

from pathlib import Path


class FilerError(Exception):
    """Base class for recoverable engine errors."""


class IoError(FilerError):
    """Read/write/metadata failure; keeps the underlying cause."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return f"Error: {self.message}"
        return f"Error: {self.message} ({self.cause})"


class ItemNotFound(FilerError):
    """Cursor index points outside the catalog."""

    def __str__(self) -> str:
        return "Error: Cannot get item info"


class RemoveItem(FilerError):
    """Removing ``path`` failed during delete or undo."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Error: Cannot remove item: {self.path}"


class PutItem(FilerError):
    """Copying ``path`` failed during delete, put, or restore."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Error: Cannot put item: {self.path}"


class EncodeError(FilerError):
    """A file name is not representable as text."""

    def __str__(self) -> str:
        return "Error: Incorrect encoding"


class OpenItem(FilerError):
    """The configured opener could not be launched."""

    def __str__(self) -> str:
        if not self.args:
            return "Error: Cannot open item"
        return f"Error: Cannot open item: {self.args[0]}"


class TerminalTooSmall(FilerError):
    """Fewer than four rows or columns are available."""

    def __str__(self) -> str:
        return "Error: Too small window size"


class NothingToUndo(FilerError):
    def __str__(self) -> str:
        return "No operations left."


class NothingToRedo(FilerError):
    def __str__(self) -> str:
        return "No operations left."


__all__ = [
    "FilerError",
    "IoError",
    "ItemNotFound",
    "RemoveItem",
    "PutItem",
    "EncodeError",
    "OpenItem",
    "TerminalTooSmall",
    "NothingToUndo",
    "NothingToRedo",
]
