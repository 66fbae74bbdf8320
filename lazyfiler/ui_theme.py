"""UI palette and configured item colors.

Item colors come from the configuration as names (``"LightCyan"``),
``{"AnsiValue": n}`` or ``{"Rgb": [r, g, b]}``; a single lookup table turns
each form into an ANSI escape. Syntax highlighting style for text previews is
a separate setting handled by Pygments.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .catalog import ItemKind

NAMED_COLORS: dict[str, int] = {
    "Black": 0,
    "Red": 1,
    "Green": 2,
    "Yellow": 3,
    "Blue": 4,
    "Magenta": 5,
    "Cyan": 6,
    "White": 7,
    "LightBlack": 8,
    "LightRed": 9,
    "LightGreen": 10,
    "LightYellow": 11,
    "LightBlue": 12,
    "LightMagenta": 13,
    "LightCyan": 14,
    "LightWhite": 15,
}


@dataclass(frozen=True)
class Color:
    """Either an 8-bit palette index or a 24-bit RGB triple."""

    ansi: int | None = None
    rgb: tuple[int, int, int] | None = None

    def sgr(self, layer: int = 38) -> str:
        """Return the escape selecting this color; ``layer`` 38 is foreground, 48 background."""
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"\033[{layer};2;{r};{g};{b}m"
        return f"\033[{layer};5;{self.ansi or 0}m"


def _byte(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        return None
    return value


def parse_color(value: object) -> Color | None:
    """Parse one configured color; ``None`` when the value is not understood."""
    if isinstance(value, str):
        code = NAMED_COLORS.get(value.strip())
        return None if code is None else Color(ansi=code)
    if not isinstance(value, dict) or len(value) != 1:
        return None
    if "AnsiValue" in value:
        code = _byte(value["AnsiValue"])
        return None if code is None else Color(ansi=code)
    raw = value.get("Rgb")
    if isinstance(raw, list) and len(raw) == 3:
        channels = [_byte(channel) for channel in raw]
        if all(channel is not None for channel in channels):
            return Color(rgb=(channels[0], channels[1], channels[2]))
    return None


@dataclass(frozen=True)
class ItemColors:
    dir_fg: Color = Color(ansi=NAMED_COLORS["LightCyan"])
    file_fg: Color = Color(ansi=NAMED_COLORS["LightWhite"])
    symlink_fg: Color = Color(ansi=NAMED_COLORS["LightYellow"])


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    header_path: str
    header_readonly: str
    footer: str
    status_info: str
    status_error: str
    preview_border: str
    help_heading: str
    help_key: str
    item_dir: Color | None = None
    item_file: Color | None = None
    item_symlink: Color | None = None
    # ``None`` falls back to reverse video
    selected_bg: Color | None = None
    match_bg: Color | None = None

    def item_color(self, kind: ItemKind) -> Color | None:
        return {
            ItemKind.DIRECTORY: self.item_dir,
            ItemKind.FILE: self.item_file,
            ItemKind.SYMLINK: self.item_symlink,
        }[kind]


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    header_path="\033[1;36m",
    header_readonly="\033[1;31m",
    footer="\033[48;5;238m\033[38;5;252m",
    status_info="\033[38;5;250m",
    status_error="\033[1;38;5;203m",
    preview_border="\033[2m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    item_dir=ItemColors().dir_fg,
    item_file=ItemColors().file_fg,
    item_symlink=ItemColors().symlink_fg,
    selected_bg=Color(ansi=24),
    match_bg=Color(ansi=94),
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    header_path="",
    header_readonly="",
    footer="\033[7m",
    status_info="",
    status_error="",
    preview_border="",
    help_heading="",
    help_key="",
)


def resolve_theme(colors: ItemColors | None = None, *, no_color: bool = False) -> UITheme:
    """Return the concrete theme for the configured item colors and color mode.

    The plain theme keeps reverse video so the cursor row stays visible.
    """
    if no_color:
        return PLAIN_THEME
    if colors is None:
        return DEFAULT_THEME
    return replace(
        DEFAULT_THEME,
        item_dir=colors.dir_fg,
        item_file=colors.file_fg,
        item_symlink=colors.symlink_fg,
    )


__all__ = [
    "NAMED_COLORS",
    "Color",
    "parse_color",
    "ItemColors",
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
