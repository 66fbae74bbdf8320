"""Persistent JSON configuration.

Holds the opener commands, item colors, and preview highlighting settings.
Every field is read defensively: a missing or malformed value falls back to
its default without affecting the others.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ..preview.highlight import DEFAULT_STYLE
from ..ui_theme import ItemColors, parse_color

LOGGER = logging.getLogger(__name__)

APP_NAME = "lazyfiler"
CONFIG_FILENAME = "config.json"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME
FALLBACK_OPENER = "vi"


@dataclass(frozen=True)
class FilerConfig:
    default_opener: str = FALLBACK_OPENER
    exec_map: dict[str, str] = field(default_factory=dict)
    colors: ItemColors = ItemColors()
    syntax_highlight: bool = False
    theme: str = DEFAULT_STYLE

    def opener_for(self, ext: str | None) -> str:
        """Return the command used to open a file with extension ``ext``."""
        if ext is not None and ext in self.exec_map:
            return self.exec_map[ext]
        return self.default_opener


def config_dir() -> Path:
    return CONFIG_PATH.parent


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        LOGGER.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def to_extension_map(raw: object) -> dict[str, str]:
    """Invert ``{command: [ext, ...]}`` into ``{ext: command}`` with lower-cased extensions."""
    if not isinstance(raw, dict):
        return {}
    mapping: dict[str, str] = {}
    for command, extensions in raw.items():
        if not isinstance(command, str) or not isinstance(extensions, list):
            continue
        for ext in extensions:
            if isinstance(ext, str):
                mapping[ext.lower()] = command
    return mapping


def _load_default_opener(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    editor = os.environ.get("EDITOR", "").strip()
    return editor or FALLBACK_OPENER


def _load_colors(value: object) -> ItemColors:
    defaults = ItemColors()
    if not isinstance(value, dict):
        return defaults
    return ItemColors(
        dir_fg=parse_color(value.get("dir_fg")) or defaults.dir_fg,
        file_fg=parse_color(value.get("file_fg")) or defaults.file_fg,
        symlink_fg=parse_color(value.get("symlink_fg")) or defaults.symlink_fg,
    )


def read_config() -> FilerConfig:
    data = load_config()
    highlight = data.get("syntax_highlight")
    theme = data.get("default_theme")
    return FilerConfig(
        default_opener=_load_default_opener(data.get("default")),
        exec_map=to_extension_map(data.get("exec")),
        colors=_load_colors(data.get("color")),
        syntax_highlight=highlight if isinstance(highlight, bool) else False,
        theme=theme.strip() if isinstance(theme, str) and theme.strip() else DEFAULT_STYLE,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "FilerConfig",
    "config_dir",
    "load_config",
    "read_config",
    "to_extension_map",
]
