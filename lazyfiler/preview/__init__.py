"""Preview classification and preview-pane content.

This package decides how the item under the cursor is previewed and produces
the lines for the preview pane:
- size/directory/image/text/binary/unreadable classification
- NUL-byte content sniffing with BOM awareness
- one-level directory trees and Pygments-highlighted text
"""

from __future__ import annotations

from .classify import IMAGE_EXTENSIONS, MAX_SIZE, PreviewKind, classify, ensure_preview
from .directory import directory_listing, make_tree
from .highlight import render_text, sanitize_terminal_text
from .sniff import is_text

__all__ = [
    "IMAGE_EXTENSIONS",
    "MAX_SIZE",
    "PreviewKind",
    "classify",
    "directory_listing",
    "ensure_preview",
    "is_text",
    "make_tree",
    "render_text",
    "sanitize_terminal_text",
]
