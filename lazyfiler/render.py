"""Screen layout and drawing.

Drawing goes through the terminal collaborator's cursor/clear/write calls;
the engine never sees escape sequences. Layout math and row formatting are
plain functions so they can be tested without a tty.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .catalog import Item
from .formatting import display_count, format_permissions, format_time, progress_bar, to_proper_size
from .help import help_lines
from .preview.highlight import sanitize_terminal_text
from .runtime.session import Split
from .ui_theme import UITheme

if TYPE_CHECKING:
    from .runtime.engine import FilerEngine
    from .runtime.loop import UIState
    from .runtime.terminal import TerminalController

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TIME_WIDTH = 17
CHROME_ROWS = 3


@dataclass(frozen=True)
class Pane:
    col: int
    row: int
    width: int
    height: int


@dataclass(frozen=True)
class Layout:
    listing: Pane
    preview: Pane | None


def compute_layout(cols: int, rows: int, *, preview: bool, split: Split) -> Layout:
    """Split the body between listing and preview.

    Row 0 is the header; the last two rows are the footer and status line.
    """
    body_rows = max(1, rows - CHROME_ROWS)
    if not preview or cols < 8 or body_rows < 3:
        return Layout(Pane(0, 1, cols, body_rows), None)
    if split is Split.VERTICAL:
        list_cols = cols // 2
        return Layout(
            Pane(0, 1, list_cols, body_rows),
            Pane(list_cols + 1, 1, cols - list_cols - 1, body_rows),
        )
    list_rows = max(1, body_rows // 2)
    return Layout(
        Pane(0, 1, cols, list_rows),
        Pane(0, 1 + list_rows + 1, cols, max(1, body_rows - list_rows - 1)),
    )


def display_width(text: str) -> int:
    plain = ANSI_ESCAPE_RE.sub("", text)
    width = 0
    for ch in plain:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1
    return width


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to ``max_cols`` display columns, keeping escapes."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    pos = 0
    while pos < len(text):
        match = ANSI_ESCAPE_RE.match(text, pos)
        if match:
            out.append(match.group(0))
            pos = match.end()
            continue
        ch = text[pos]
        width = 0 if unicodedata.combining(ch) else 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1
        if col + width > max_cols:
            break
        out.append(ch)
        col += width
        pos += 1
    return "".join(out)


def format_item_row(item: Item, width: int) -> str:
    """Return the unstyled text of one listing row, exactly ``width`` columns."""
    name = sanitize_terminal_text(item.display_name()) + ("/" if item.is_dir else "")
    stamp = format_time(item.modified)
    name_cols = width - TIME_WIDTH if stamp and width >= TIME_WIDTH + 12 else width
    left = clip_ansi_line(" " + name, name_cols)
    row = left + " " * (name_cols - display_width(left))
    if name_cols < width:
        row += stamp + " "
    return row


def footer_text(engine: FilerEngine) -> str:
    if not engine.items:
        return " 0/0"
    item = engine.items[engine.cursor.index]
    parts = [display_count(engine.cursor.index, len(engine.items))]
    if item.ext:
        parts.append(item.ext)
    parts.append(to_proper_size(item.size))
    permissions = format_permissions(item.permissions)
    if permissions:
        parts.append(permissions)
    parts.append(f"[{engine.session.sort_by.value}]")
    return " " + " ".join(parts)


def header_text(engine: FilerEngine, theme: UITheme) -> str:
    text = f" {theme.header_path}{engine.current_dir}{theme.reset}"
    if engine.is_read_only:
        text += f" {theme.header_readonly}[RO]{theme.reset}"
    return text


def _draw_line(terminal: TerminalController, col: int, row: int, text: str) -> None:
    terminal.move_to(col, row)
    terminal.write(text)


def _apply_row_style(terminal: TerminalController, theme: UITheme, item: Item, is_cursor: bool) -> None:
    color = theme.item_color(item.kind)
    if color is not None:
        terminal.set_foreground(color)
    if is_cursor:
        terminal.write(theme.reverse)
    elif item.selected:
        if theme.selected_bg is None:
            terminal.write(theme.reverse)
        else:
            terminal.set_background(theme.selected_bg)
    elif item.matches and theme.match_bg is not None:
        terminal.set_background(theme.match_bg)


def _draw_listing(terminal: TerminalController, engine: FilerEngine, pane: Pane, theme: UITheme) -> None:
    visible = engine.cursor.visible_range(len(engine.items), pane.height)
    for offset in range(pane.height):
        idx = visible.start + offset
        terminal.move_to(pane.col, pane.row + offset)
        if idx >= visible.stop:
            terminal.write(" " * pane.width)
            continue
        item = engine.items[idx]
        _apply_row_style(terminal, theme, item, idx == engine.cursor.index)
        terminal.write(format_item_row(item, pane.width))
        terminal.reset_color()


def side_pane_lines(engine: FilerEngine) -> tuple[list[str], int]:
    """Return the lines for the side pane and the first line to show."""
    if engine.show_registers:
        return [sanitize_terminal_text(line) for line in engine.registers.lines()], 0
    preview = engine.current_preview()
    return preview.lines, preview.scroll


def _draw_preview(terminal: TerminalController, engine: FilerEngine, pane: Pane, theme: UITheme) -> None:
    all_lines, scroll = side_pane_lines(engine)
    lines = all_lines[scroll : scroll + pane.height]
    for offset in range(pane.height):
        terminal.move_to(max(0, pane.col - 1), pane.row + offset)
        if pane.col > 0:
            terminal.write(f"{theme.preview_border}│{theme.reset}")
        line = lines[offset] if offset < len(lines) else ""
        clipped = clip_ansi_line(line, pane.width)
        terminal.write(clipped + theme.reset + " " * max(0, pane.width - display_width(clipped)))


def draw_help(terminal: TerminalController, theme: UITheme, cols: int, rows: int) -> None:
    terminal.clear_all()
    for row, line in enumerate(help_lines(theme)[: max(0, rows - 1)]):
        _draw_line(terminal, 1, row, clip_ansi_line(line, cols - 1) + theme.reset)
    _draw_line(terminal, 1, rows - 1, "Press any key to return.")


def draw_progress(terminal: TerminalController, theme: UITheme, rows: int, label: str, done: int, total: int) -> None:
    terminal.move_to(0, rows - 1)
    terminal.write(f"{theme.status_info}{label} {progress_bar(done, total)}")
    terminal.reset_color()
    terminal.clear_until_newline()
    terminal.flush()


def draw_screen(
    terminal: TerminalController,
    engine: FilerEngine,
    ui: UIState,
    theme: UITheme,
    cols: int,
    rows: int,
) -> None:
    """Redraw the whole frame and flush it."""
    terminal.hide_cursor()
    if ui.show_help:
        draw_help(terminal, theme, cols, rows)
        terminal.flush()
        return

    layout = compute_layout(cols, rows, preview=engine.side_pane_visible, split=engine.session.split)
    terminal.move_to(0, 0)
    terminal.clear_current_line()
    terminal.write(clip_ansi_line(header_text(engine, theme), cols) + theme.reset)

    _draw_listing(terminal, engine, layout.listing, theme)
    if layout.preview is not None:
        if engine.session.split is Split.HORIZONTAL:
            _draw_line(terminal, 0, layout.preview.row - 1, f"{theme.preview_border}{'─' * cols}{theme.reset}")
        _draw_preview(terminal, engine, layout.preview, theme)

    footer = footer_text(engine)
    terminal.move_to(0, rows - 2)
    terminal.write(theme.footer + clip_ansi_line(footer, cols).ljust(cols) + theme.reset)

    terminal.move_to(0, rows - 1)
    if ui.prompt is not None:
        line = clip_ansi_line(ui.prompt.prefix + ui.prompt.text, cols - 1)
        terminal.write(line)
        terminal.clear_until_newline()
        terminal.move_to(display_width(line), rows - 1)
        terminal.show_cursor()
    else:
        if ui.status:
            style = theme.status_error if ui.status_is_error else theme.status_info
            terminal.write(style + clip_ansi_line(ui.status, cols))
            terminal.reset_color()
        terminal.clear_until_newline()
    terminal.flush()


__all__ = [
    "Pane",
    "Layout",
    "compute_layout",
    "display_width",
    "clip_ansi_line",
    "format_item_row",
    "footer_text",
    "header_text",
    "side_pane_lines",
    "draw_help",
    "draw_progress",
    "draw_screen",
]
