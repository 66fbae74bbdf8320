"""Layout math, row formatting and frame drawing tests.

Drawing is exercised against a recording terminal stand-in.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyfiler.catalog import Item, ItemKind
from lazyfiler.render import (
    ANSI_ESCAPE_RE,
    clip_ansi_line,
    compute_layout,
    display_width,
    draw_progress,
    draw_screen,
    footer_text,
    format_item_row,
    side_pane_lines,
)
from lazyfiler.runtime.engine import FilerEngine
from lazyfiler.runtime.loop import Prompt, UIState
from lazyfiler.runtime.session import Session, Split
from lazyfiler.ui_theme import DEFAULT_THEME, PLAIN_THEME, Color
from lazyfiler.vault import TrashVault


class _RecordingTerminal:
    def __init__(self) -> None:
        self.chunks: list[str] = []
        self.colors: list[tuple[str, Color]] = []
        self.flushes = 0

    def write(self, text: str) -> None:
        self.chunks.append(text)

    def flush(self) -> None:
        self.flushes += 1

    def move_to(self, col: int, row: int) -> None:
        self.chunks.append(f"<{col},{row}>")

    def clear_current_line(self) -> None:
        pass

    def clear_until_newline(self) -> None:
        pass

    def clear_all(self) -> None:
        self.chunks.append("<clear>")

    def set_foreground(self, color: Color) -> None:
        self.colors.append(("fg", color))
        self.chunks.append(color.sgr(38))

    def set_background(self, color: Color) -> None:
        self.colors.append(("bg", color))
        self.chunks.append(color.sgr(48))

    def reset_color(self) -> None:
        self.chunks.append("\x1b[0m")

    def hide_cursor(self) -> None:
        pass

    def show_cursor(self) -> None:
        pass

    def plain(self) -> str:
        return ANSI_ESCAPE_RE.sub("", "".join(self.chunks))


class LayoutTests(unittest.TestCase):
    def test_listing_takes_whole_body_without_preview(self) -> None:
        layout = compute_layout(80, 24, preview=False, split=Split.VERTICAL)
        self.assertIsNone(layout.preview)
        self.assertEqual((layout.listing.row, layout.listing.height, layout.listing.width), (1, 21, 80))

    def test_vertical_split_shares_columns(self) -> None:
        layout = compute_layout(80, 24, preview=True, split=Split.VERTICAL)
        self.assertEqual(layout.listing.width, 40)
        self.assertEqual(layout.preview.col, 41)
        self.assertEqual(layout.preview.width, 39)
        self.assertEqual(layout.preview.height, layout.listing.height)

    def test_horizontal_split_shares_rows(self) -> None:
        layout = compute_layout(80, 24, preview=True, split=Split.HORIZONTAL)
        self.assertEqual(layout.listing.height, 10)
        self.assertEqual(layout.preview.row, 12)
        self.assertEqual(layout.preview.height, 10)


class RowFormattingTests(unittest.TestCase):
    def test_directory_row_has_slash_and_timestamp(self) -> None:
        item = Item(
            kind=ItemKind.DIRECTORY,
            name="src",
            path=Path("/x/src"),
            modified="2024-05-06T07:08:09+00:00",
        )
        row = format_item_row(item, 40)
        self.assertEqual(len(row), 40)
        self.assertTrue(row.startswith(" src/"))
        self.assertTrue(row.endswith("2024-05-06 07:08 "))

    def test_narrow_rows_drop_timestamp_and_clip_name(self) -> None:
        item = Item(kind=ItemKind.FILE, name="a-very-long-name.txt", path=Path("/x/a"), modified="2024-05-06T07:08")
        row = format_item_row(item, 10)
        self.assertEqual(row, " a-very-lo")

    def test_control_characters_in_names_are_escaped(self) -> None:
        item = Item(kind=ItemKind.FILE, name="bad\x1bname", path=Path("/x/bad"))
        self.assertIn("\\x1b", format_item_row(item, 30))

    def test_clip_keeps_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(clip_ansi_line("\x1b[31mabcdef", 3), "\x1b[31mabc")
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(clip_ansi_line("日本語", 5), "日本")


class FrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.work = root / "work"
        self.work.mkdir()
        (self.work / "docs").mkdir()
        (self.work / "docs" / "guide.md").write_text("", encoding="utf-8")
        (self.work / "readme.txt").write_text("first line\nsecond line\n", encoding="utf-8")
        self.engine = FilerEngine(self.work, TrashVault(root / "trash"), session=Session(), rows=5)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_footer_reports_position_size_and_sort(self) -> None:
        self.engine.move_down()
        footer = footer_text(self.engine)
        self.assertTrue(footer.startswith(" 2/2 txt 23B "))
        self.assertTrue(footer.endswith("[Name]"))

    def test_frame_shows_header_rows_and_status(self) -> None:
        terminal = _RecordingTerminal()
        ui = UIState()
        ui.set_status("2 items yanked.")
        draw_screen(terminal, self.engine, ui, DEFAULT_THEME, 60, 8)
        text = terminal.plain()
        self.assertIn(str(self.work), text)
        self.assertIn(" docs/", text)
        self.assertIn(" readme.txt", text)
        self.assertIn("2 items yanked.", text)
        self.assertEqual(terminal.flushes, 1)

    def test_preview_pane_shows_directory_tree(self) -> None:
        self.engine.session.preview = True
        terminal = _RecordingTerminal()
        draw_screen(terminal, self.engine, UIState(), PLAIN_THEME, 60, 8)
        self.assertIn("└ guide.md", terminal.plain())

    def test_item_colors_go_through_terminal_color_calls(self) -> None:
        terminal = _RecordingTerminal()
        draw_screen(terminal, self.engine, UIState(), DEFAULT_THEME, 60, 8)

        self.assertIn(("fg", DEFAULT_THEME.item_color(ItemKind.DIRECTORY)), terminal.colors)
        self.assertIn(("fg", DEFAULT_THEME.item_color(ItemKind.FILE)), terminal.colors)

    def test_selected_row_uses_background_color(self) -> None:
        terminal = _RecordingTerminal()
        self.engine.start_visual()
        self.engine.move_down()
        self.assertTrue(self.engine.items[0].selected)
        draw_screen(terminal, self.engine, UIState(), DEFAULT_THEME, 60, 8)
        self.assertIn(("bg", DEFAULT_THEME.selected_bg), terminal.colors)

    def test_plain_theme_sets_no_colors(self) -> None:
        terminal = _RecordingTerminal()
        draw_screen(terminal, self.engine, UIState(), PLAIN_THEME, 60, 8)
        self.assertEqual(terminal.colors, [])

    def test_register_pane_replaces_preview(self) -> None:
        self.engine.move_down()
        self.engine.yank()
        self.engine.show_register_pane()
        self.assertEqual(side_pane_lines(self.engine), (['"" readme.txt', '"0 readme.txt'], 0))

        terminal = _RecordingTerminal()
        draw_screen(terminal, self.engine, UIState(), PLAIN_THEME, 60, 8)
        self.assertIn('"0 readme.txt', terminal.plain())
        self.assertNotIn("first line", terminal.plain())

    def test_prompt_replaces_status_line(self) -> None:
        terminal = _RecordingTerminal()
        ui = UIState(prompt=Prompt(kind="filter", prefix="/", text="read"))
        draw_screen(terminal, self.engine, ui, PLAIN_THEME, 60, 8)
        self.assertIn("/read", terminal.plain())

    def test_help_screen_replaces_frame(self) -> None:
        terminal = _RecordingTerminal()
        draw_screen(terminal, self.engine, UIState(show_help=True), PLAIN_THEME, 60, 30)
        text = terminal.plain()
        self.assertIn("OPERATIONS", text)
        self.assertNotIn("readme.txt", text)

    def test_progress_line(self) -> None:
        terminal = _RecordingTerminal()
        draw_progress(terminal, PLAIN_THEME, 10, "2/4", 1, 4)
        self.assertIn("2/4 [»----]", terminal.plain())


if __name__ == "__main__":
    unittest.main()
