"""Catalog scanning and ordering tests.

Covers directories-first grouping, natural name order, time order,
and hidden-entry filtering.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazyfiler.catalog import ItemKind, SortKey, highlight_matches, natural_key, next_match, rebuild
from lazyfiler.errors import IoError


def _touch(path: Path, mtime: int | None = None) -> None:
    path.write_text("x", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))


class NaturalKeyTests(unittest.TestCase):
    def test_digit_runs_compare_numerically(self) -> None:
        names = ["file10", "file2", "file1"]
        self.assertEqual(sorted(names, key=natural_key), ["file1", "file2", "file10"])

    def test_uppercase_sorts_before_lowercase(self) -> None:
        self.assertEqual(sorted(["b", "B", "a"], key=natural_key), ["B", "a", "b"])

    def test_leading_zeros_break_ties_deterministically(self) -> None:
        self.assertEqual(sorted(["1", "01"], key=natural_key), ["01", "1"])


class RebuildTests(unittest.TestCase):
    def test_directories_come_first_then_files_by_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "b.txt")
            (root / "A").mkdir()
            _touch(root / "a.txt")
            (root / "z_dir").mkdir()

            items = rebuild(root, SortKey.NAME, show_hidden=True)

        self.assertEqual([item.name for item in items], ["A", "z_dir", "a.txt", "b.txt"])
        self.assertEqual(items[0].kind, ItemKind.DIRECTORY)
        self.assertEqual(items[2].ext, "txt")
        self.assertIsNone(items[0].ext)

    def test_time_sort_puts_newest_first_within_each_group(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "old.txt", 1_000_000)
            _touch(root / "new.txt", 2_000_000)
            _touch(root / "mid.txt", 1_500_000)

            items = rebuild(root, SortKey.TIME, show_hidden=True)

        self.assertEqual([item.name for item in items], ["new.txt", "mid.txt", "old.txt"])

    def test_hidden_entries_are_filtered_when_requested(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".secret")
            _touch(root / "visible")
            (root / ".config").mkdir()

            shown = rebuild(root, SortKey.NAME, show_hidden=True)
            hidden = rebuild(root, SortKey.NAME, show_hidden=False)

        self.assertEqual([item.name for item in shown], [".config", ".secret", "visible"])
        self.assertEqual([item.name for item in hidden], ["visible"])

    def test_symlink_to_directory_is_listed_with_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            (root / "link").symlink_to(root / "real")

            items = rebuild(root, SortKey.NAME, show_hidden=True)

        self.assertEqual([item.name for item in items], ["real", "link"])
        link = items[1]
        self.assertEqual(link.kind, ItemKind.SYMLINK)
        self.assertTrue(link.is_dir_like)
        self.assertFalse(link.is_dir)

    def test_missing_directory_raises_io_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(IoError):
                rebuild(Path(tmp) / "missing", SortKey.NAME, show_hidden=True)


class MatchTests(unittest.TestCase):
    def test_highlight_and_cycle_matches_with_wraparound(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("alpha", "beta", "gamma", "alphabet"):
                _touch(root / name)
            items = rebuild(root, SortKey.NAME, show_hidden=True)

        self.assertEqual([item.name for item in items], ["alpha", "alphabet", "beta", "gamma"])
        self.assertEqual(highlight_matches(items, "alpha"), 2)
        self.assertEqual(next_match(items, 1, forward=True), 0)
        self.assertEqual(next_match(items, 0, forward=False), 1)
        self.assertEqual(highlight_matches(items, None), 0)
        self.assertIsNone(next_match(items, 0))


if __name__ == "__main__":
    unittest.main()
