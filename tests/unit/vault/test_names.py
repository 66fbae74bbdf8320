"""Collision-free naming and trash-prefix rules."""

from __future__ import annotations

import unittest

from lazyfiler.errors import EncodeError
from lazyfiler.vault.names import ensure_encodable, strip_trash_prefix, trash_name, unique_name


class UniqueNameTests(unittest.TestCase):
    def test_free_name_is_kept(self) -> None:
        self.assertEqual(unique_name("note.txt", {"other.txt"}), "note.txt")

    def test_file_suffix_goes_before_extension(self) -> None:
        self.assertEqual(unique_name("note.txt", {"note.txt"}), "note_copied.txt")
        self.assertEqual(
            unique_name("note.txt", {"note.txt", "note_copied.txt"}),
            "note_copied_copied.txt",
        )

    def test_only_final_extension_is_preserved(self) -> None:
        self.assertEqual(unique_name("archive.tar.gz", {"archive.tar.gz"}), "archive.tar_copied.gz")

    def test_directories_and_bare_names_get_suffix_at_end(self) -> None:
        self.assertEqual(unique_name("photos.2020", {"photos.2020"}, is_dir=True), "photos.2020_copied")
        self.assertEqual(unique_name("Makefile", {"Makefile"}), "Makefile_copied")

    def test_result_is_never_in_existing(self) -> None:
        existing = {"a.txt", "a_copied.txt", "a_copied_copied.txt"}
        result = unique_name("a.txt", existing)
        self.assertNotIn(result, existing)
        self.assertEqual(unique_name(result, existing), result)


class TrashPrefixTests(unittest.TestCase):
    def test_prefix_round_trip(self) -> None:
        name = trash_name("note.txt", 1_700_000_000)
        self.assertEqual(name, "1700000000_note.txt")
        self.assertEqual(strip_trash_prefix(name), "note.txt")

    def test_names_without_prefix_are_untouched(self) -> None:
        self.assertEqual(strip_trash_prefix("note.txt"), "note.txt")
        self.assertEqual(strip_trash_prefix("12345_note.txt"), "12345_note.txt")
        self.assertEqual(strip_trash_prefix("1700000000_"), "1700000000_")


class EncodingTests(unittest.TestCase):
    def test_surrogate_escaped_name_is_rejected(self) -> None:
        self.assertEqual(ensure_encodable("plain"), "plain")
        with self.assertRaises(EncodeError):
            ensure_encodable("bad\udcff")


if __name__ == "__main__":
    unittest.main()
