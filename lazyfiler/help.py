"""Help screen content.

Plain key/description pairs; the renderer adds color.
"""

from __future__ import annotations

from .ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "MOVE",
        (
            ("j / Down", "Go down."),
            ("k / Up", "Go up."),
            ("h / Left", "Go to parent directory."),
            ("l / Right / Enter", "Open file or change directory."),
            ("gg", "Go to the top."),
            ("G", "Go to the bottom."),
            ("Ctrl+o / Tab", "Jump backward / forward in the directory history."),
        ),
    ),
    (
        "OPERATIONS",
        (
            ("dd", "Delete and yank item."),
            ("yy", "Yank item."),
            ("p", "Put yanked items in the current directory."),
            ("V", "Switch to the select mode."),
            ("  d", "In the select mode, delete and yank selected items."),
            ("  y", "In the select mode, yank selected items."),
            ("u", "Undo put/delete/rename."),
            ("Ctrl+r", "Redo put/delete/rename."),
            ("c", "Rename item."),
            ("i / I", "Create a new file / directory."),
            ('"<reg>yy / "<reg>dd', "Yank / delete into a register (a-z, A-Z appends)."),
            ('"<reg>p', 'Put from a register ("0 last yank, "1-"9 deletes).'),
            ("Ctrl+r <reg>", "While naming an item, insert the register's item names."),
        ),
    ),
    (
        "VIEW",
        (
            ("v", "Toggle preview."),
            ("s", "Toggle preview split (vertical <-> horizontal)."),
            ("J / K", "Scroll preview down / up."),
            ("Backspace", "Toggle hidden items."),
            ("t", "Toggle sort order (name <-> modified time)."),
            ("/", "Filter: highlight names containing the keyword."),
            ("n / N", "Next / previous match."),
            ("Esc", "Return to the normal mode."),
        ),
    ),
    (
        "COMMANDS",
        (
            (":cd [path]", "Go to path (home directory when omitted)."),
            (":e", "Reload the current directory and go to the top."),
            (":empty", "Empty the trash directory."),
            (":trash", "Go to the trash directory."),
            (":reg", "Show registers (v hides them)."),
            (":<command>", "Run a shell command in the current directory."),
            (":h", "Show this help."),
            (":q / ZZ / q", "Exit."),
        ),
    ),
)


def help_lines(theme: UITheme, key_width: int = 22) -> list[str]:
    """Return the help screen as ANSI-colored lines."""
    lines: list[str] = []
    for title, entries in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{title}{theme.reset}")
        for key, description in entries:
            lines.append(f"{theme.help_key}{key.ljust(key_width)}{theme.reset}{description}")
    return lines


__all__ = ["HELP_SECTIONS", "help_lines"]
