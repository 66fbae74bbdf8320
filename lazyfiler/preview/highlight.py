"""Text preview sanitization and Pygments highlighting.

Pygments is imported on first use so starting the file manager stays fast.
Terminal control bytes are neutralized before anything reaches the screen.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


@lru_cache(maxsize=None)
def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        LOGGER.warning("Unknown highlight theme %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str):
    from pygments.formatters import Terminal256Formatter

    return Terminal256Formatter(style=style)


def pygments_highlight(source: str, path: Path, style: str | None = DEFAULT_STYLE) -> str | None:
    """Highlight source with Pygments, returning ``None`` when no lexer applies."""
    from pygments import highlight
    from pygments.lexers import get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        return None
    return highlight(source, lexer, _formatter_for_style(normalize_style(style)))


def render_text(source: str, path: Path, *, syntax_highlight: bool, style: str | None) -> list[str]:
    """Return preview lines for ``source``; ANSI-colored when highlighting is on."""
    text = sanitize_terminal_text(source)
    if syntax_highlight:
        rendered = pygments_highlight(text, path, style)
        if rendered:
            text = rendered
    return text.splitlines()


__all__ = [
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "normalize_style",
    "pygments_highlight",
    "render_text",
]
