"""Visual selection and operation log tests."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazyfiler.catalog import Item, ItemKind
from lazyfiler.errors import NothingToRedo, NothingToUndo
from lazyfiler.runtime.history import Delete, OperationLog, Put, Rename
from lazyfiler.runtime.selection import Selection


def _items(*names: str) -> list[Item]:
    return [Item(kind=ItemKind.FILE, name=name, path=Path("/tmp") / name) for name in names]


class SelectionTests(unittest.TestCase):
    def test_range_follows_cursor_in_both_directions(self) -> None:
        items = _items("a", "b", "c", "d", "e")
        selection = Selection()
        selection.start(items, 2)
        self.assertTrue(selection.active)
        self.assertEqual([item.name for item in Selection.selected(items)], ["c"])

        selection.update(items, 4)
        self.assertEqual([item.name for item in Selection.selected(items)], ["c", "d", "e"])

        selection.update(items, 0)
        self.assertEqual([item.name for item in Selection.selected(items)], ["a", "b", "c"])

    def test_clear_unselects_everything(self) -> None:
        items = _items("a", "b")
        selection = Selection()
        selection.start(items, 0)
        selection.update(items, 1)
        selection.clear(items)
        self.assertFalse(selection.active)
        self.assertEqual(Selection.selected(items), [])

    def test_start_on_empty_catalog_stays_inactive(self) -> None:
        selection = Selection()
        selection.start([], 0)
        self.assertFalse(selection.active)


class OperationLogTests(unittest.TestCase):
    def _rename(self, name: str) -> Rename:
        return Rename(Path("/tmp") / name, Path("/tmp") / f"{name}.new")

    def test_undo_and_redo_walk_the_log(self) -> None:
        log = OperationLog()
        first = self._rename("a")
        second = self._rename("b")
        log.push(first)
        log.push(second)

        self.assertIs(log.undo(), second)
        self.assertIs(log.undo(), first)
        with self.assertRaises(NothingToUndo):
            log.undo()
        self.assertIs(log.redo(), first)
        self.assertIs(log.redo(), second)
        with self.assertRaises(NothingToRedo):
            log.redo()

    def test_push_after_undo_discards_the_undone_branch(self) -> None:
        log = OperationLog()
        log.push(self._rename("a"))
        log.push(self._rename("b"))
        log.undo()
        third = self._rename("c")
        log.push(third)

        self.assertEqual(len(log), 2)
        self.assertFalse(log.can_redo())
        with self.assertRaises(NothingToRedo):
            log.redo()
        self.assertIs(log.undo(), third)

    def test_peek_does_not_move_the_position(self) -> None:
        log = OperationLog()
        op = self._rename("a")
        log.push(op)
        self.assertIs(log.peek_undo(), op)
        self.assertIs(log.peek_undo(), op)
        self.assertEqual(log.pos, 0)

    def test_applied_operation_replaces_the_entry(self) -> None:
        log = OperationLog()
        log.push(Delete((), (Path("/trash/1_a"),), Path("/x")))
        restored = Delete((), (Path("/trash/1_a"),), Path("/y"))
        redone = Delete((), (Path("/trash/1_a_copied"),), Path("/y"))

        self.assertIs(log.undo(restored), restored)
        self.assertIs(log.peek_redo(), restored)
        self.assertIs(log.redo(redone), redone)
        self.assertEqual(log.ops, [redone])

    def test_descriptions_name_the_paths(self) -> None:
        rename = Rename(Path("/x/a"), Path("/x/b"))
        put = Put((), (Path("/x/c"),), Path("/x"))
        delete = Delete((), (), Path("/x"))
        self.assertEqual(rename.describe(), "RENAME: /x/a -> /x/b")
        self.assertEqual(put.describe(), "PUT: ['/x/c']")
        self.assertEqual(delete.describe(), "DELETE: []")


if __name__ == "__main__":
    unittest.main()
