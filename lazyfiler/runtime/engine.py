"""Navigation and operation engine.

``FilerEngine`` is the single owner of the listing, cursor, selection,
operation log, memos, jump list and registers. Each public method handles one
user request: it returns a one-line status message or raises a ``FilerError``.
Whatever raised, the catalog and cursor describe a directory that was
successfully listed.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..catalog import Item, ItemRef, highlight_matches, next_match, rebuild
from ..errors import FilerError, IoError, ItemNotFound, OpenItem, RemoveItem
from ..formatting import format_duration, plural
from ..preview import PreviewKind, directory_listing, ensure_preview, make_tree, render_text
from ..vault import TrashVault
from ..vault.walk import ProgressCallback
from .config import FilerConfig
from .cursor import Cursor
from .history import Delete, Operation, OperationLog, Put, Rename
from .jumplist import JumpList
from .memo import Memo, MemoStack
from .registers import Registers
from .selection import Selection
from .session import Session

LOGGER = logging.getLogger(__name__)

Launcher = Callable[..., None]

_PREVIEW_PLACEHOLDERS = {
    PreviewKind.TOO_BIG: "(Too big for preview)",
    PreviewKind.IMAGE: "(Image file)",
    PreviewKind.BINARY: "(Binary file)",
    PreviewKind.NOT_READABLE: "(Not readable)",
}


def run_external(argv: Sequence[str], cwd: Path | None = None) -> None:
    subprocess.run(list(argv), cwd=cwd, check=False)


def has_write_permission(path: Path) -> bool:
    return os.access(path, os.W_OK)


@dataclass
class Preview:
    kind: PreviewKind | None
    lines: list[str] = field(default_factory=list)
    scroll: int = 0


class FilerEngine:
    """Explicit state object for one file manager session."""

    def __init__(
        self,
        start_dir: Path,
        vault: TrashVault,
        config: FilerConfig | None = None,
        session: Session | None = None,
        *,
        rows: int = 20,
        launcher: Launcher = run_external,
    ) -> None:
        self.vault = vault
        self.config = config or FilerConfig()
        self.session = session or Session()
        self.rows = max(1, rows)
        self.launcher = launcher
        self.progress: ProgressCallback | None = None
        self.batch_progress: Callable[[int, int], None] | None = None

        self.cursor = Cursor()
        self.selection = Selection()
        self.log = OperationLog()
        self.memos = MemoStack()
        self.registers = Registers()
        self.show_registers = False
        self.keyword: str | None = None

        self.current_dir = Path(start_dir).absolute()
        self.jumps = JumpList(self.current_dir)
        self.items: list[Item] = self._scan(self.current_dir)
        self.is_read_only = not has_write_permission(self.current_dir)

    # -- catalog ---------------------------------------------------------

    def _scan(self, directory: Path) -> list[Item]:
        return rebuild(directory, self.session.sort_by, self.session.show_hidden)

    def current_item(self) -> Item:
        if not 0 <= self.cursor.index < len(self.items):
            raise ItemNotFound()
        return self.items[self.cursor.index]

    def reload(self, focus_name: str | None = None) -> None:
        """Rebuild the catalog in place; the old one stays if listing fails."""
        items = self._scan(self.current_dir)
        self.items = items
        self.selection.anchor = None
        if self.keyword:
            highlight_matches(self.items, self.keyword)
        index = self.cursor.index
        if focus_name is not None:
            index = next((idx for idx, item in enumerate(items) if item.name == focus_name), index)
        self.cursor.focus(index, len(self.items), self.rows)
        self.is_read_only = not has_write_permission(self.current_dir)

    def _reload_after_failure(self) -> None:
        try:
            self.reload()
        except FilerError as exc:
            LOGGER.warning("Listing refresh failed: %s", exc)

    def resize(self, rows: int) -> None:
        self.rows = max(1, rows)
        self.cursor.clamp(len(self.items), self.rows)

    # -- cursor ----------------------------------------------------------

    def _after_move(self) -> str:
        self.selection.update(self.items, self.cursor.index)
        return ""

    def move_down(self) -> str:
        self.cursor.move_down(len(self.items), self.rows)
        return self._after_move()

    def move_up(self) -> str:
        self.cursor.move_up(self.rows)
        return self._after_move()

    def jump_top(self) -> str:
        self.cursor.jump_top()
        return self._after_move()

    def jump_bottom(self) -> str:
        self.cursor.jump_bottom(len(self.items), self.rows)
        return self._after_move()

    # -- directory changes -----------------------------------------------

    def _enter_directory(self, target: Path, items: list[Item], cursor: Cursor, *, record: bool = True) -> None:
        if record:
            self.jumps.add(target)
        LOGGER.debug("chdir %s -> %s", self.current_dir, target)
        self.current_dir = target
        self.items = items
        self.keyword = None
        self.selection.anchor = None
        self.cursor = cursor
        self.cursor.clamp(len(items), self.rows)
        self.is_read_only = not has_write_permission(target)

    def descend(self, target: Path) -> str:
        target = Path(target)
        items = self._scan(target)
        cursor = self.memos.descend(Memo.capture(self.current_dir, self.cursor), target)
        self._enter_directory(target, items, cursor)
        return ""

    def go_parent(self) -> str:
        parent = self.current_dir.parent
        if parent == self.current_dir:
            return ""
        items = self._scan(parent)
        cursor = self.memos.ascend(Memo.capture(self.current_dir, self.cursor), parent, items, self.rows)
        self._enter_directory(parent, items, cursor)
        return ""

    def jump_to(self, path: Path | str) -> str:
        target = Path(path).expanduser()
        if not target.is_absolute():
            target = self.current_dir / target
        target = Path(os.path.normpath(target))
        if not target.is_dir():
            raise IoError(f"Cannot find directory {target}")
        items = self._scan(target)
        self._enter_directory(target, items, self.memos.jump())
        return ""

    def jump_back(self) -> str:
        target = self.jumps.backward()
        if target is None:
            return "No directory backward."
        if not target.is_dir():
            self.jumps.remove_backward()
            return "Directory backward not found: Removed from jumplist."
        items = self._scan(target)
        self._enter_directory(target, items, self.memos.jump(), record=False)
        self.jumps.step_backward()
        return ""

    def jump_forward(self) -> str:
        target = self.jumps.forward()
        if target is None:
            return "No directory forward."
        if not target.is_dir():
            self.jumps.remove_forward()
            return "Directory forward not found: Removed from jumplist."
        items = self._scan(target)
        self._enter_directory(target, items, self.memos.jump(), record=False)
        self.jumps.step_forward()
        return ""

    def go_trash(self) -> str:
        self.vault.ensure()
        return self.jump_to(self.vault.trash_dir)

    def enter(self) -> str:
        """Descend into the directory under the cursor, or open the file."""
        item = self.current_item()
        if item.is_dir:
            return self.descend(item.path)
        if item.symlink_dir_path is not None:
            return self.descend(item.symlink_dir_path)
        return self.open_item(item)

    def open_item(self, item: Item) -> str:
        command = self.config.opener_for(item.ext)
        try:
            argv = shlex.split(command) + [str(item.path)]
        except ValueError as exc:
            raise OpenItem(f"{command!r}: {exc}") from exc
        LOGGER.debug("open %s", argv)
        try:
            self.launcher(argv)
        except OSError as exc:
            raise OpenItem(str(exc)) from exc
        self._reload_after_failure()
        return ""

    def run_shell(self, command_line: str) -> str:
        """Run ``command_line`` in the current directory through ``$SHELL -c``.

        Without ``$SHELL`` the line is split and executed directly.
        """
        shell = os.environ.get("SHELL")
        try:
            argv = [shell, "-c", command_line] if shell else shlex.split(command_line)
        except ValueError as exc:
            raise IoError("Cannot execute command", exc) from exc
        if not argv:
            return ""
        LOGGER.info("SHELL: %s", argv)
        try:
            self.launcher(argv, cwd=self.current_dir)
        except OSError as exc:
            raise IoError("Cannot execute command", exc) from exc
        self.reload()
        return ""

    # -- view toggles ----------------------------------------------------

    def _reload_keeping_item(self) -> None:
        name = self.items[self.cursor.index].name if self.items else None
        self.reload(focus_name=name)

    def toggle_hidden(self) -> str:
        self.session.show_hidden = not self.session.show_hidden
        try:
            self._reload_keeping_item()
        except FilerError:
            self.session.show_hidden = not self.session.show_hidden
            raise
        return "Show hidden items." if self.session.show_hidden else "Hide hidden items."

    def toggle_sort(self) -> str:
        self.session.sort_by = self.session.sort_by.toggled()
        try:
            self._reload_keeping_item()
        except FilerError:
            self.session.sort_by = self.session.sort_by.toggled()
            raise
        return f"Sort by {self.session.sort_by.value.lower()}."

    def toggle_preview(self) -> str:
        """Toggle the preview pane; while registers are shown, just hide them."""
        if self.show_registers:
            self.show_registers = False
            return ""
        self.session.preview = not self.session.preview
        return ""

    def show_register_pane(self) -> str:
        self.show_registers = True
        return ""

    def reload_from_top(self) -> str:
        """Rebuild the listing with the search cleared and the cursor at the top."""
        items = self._scan(self.current_dir)
        self.keyword = None
        self.items = items
        self.selection.anchor = None
        self.cursor = Cursor()
        self.is_read_only = not has_write_permission(self.current_dir)
        return ""

    def toggle_split(self) -> str:
        self.session.split = self.session.split.toggled()
        return ""

    # -- selection and registers -----------------------------------------

    @property
    def side_pane_visible(self) -> bool:
        return self.session.preview or self.show_registers

    def start_visual(self) -> str:
        self.selection.start(self.items, self.cursor.index)
        return "-- SELECT --" if self.selection.active else ""

    def cancel_visual(self) -> str:
        self.selection.clear(self.items)
        return ""

    def _targets(self) -> list[Item]:
        if self.selection.active:
            return self.selection.selected(self.items)
        return [self.current_item()]

    def yank(self, register: str | None = None) -> str:
        """Yank the current item (or the selection), optionally into ``register``."""
        targets = self._targets()
        count = self.registers.yank([item.ref() for item in targets], register)
        self.cancel_visual()
        return f"{plural(count, 'item')} yanked."

    # -- destructive operations ------------------------------------------

    def _report_batch(self, index: int, total: int) -> None:
        if self.batch_progress is not None:
            self.batch_progress(index, total)

    def delete(self, register: str | None = None) -> str:
        """Move the current item (or the visual selection) into the trash.

        The trash copies become the unnamed register (and ``register`` when
        given), so ``p`` puts them back.
        """
        self.vault.check_source(self.current_dir)
        targets = self._targets()
        start = time.monotonic()
        refs: list[ItemRef] = []
        trash_paths: list[Path | None] = []
        try:
            for index, item in enumerate(targets):
                self._report_batch(index, len(targets))
                trash_paths.append(self.vault.delete(item, progress=self.progress))
                refs.append(item.ref())
        except FilerError as exc:
            LOGGER.warning("DELETE aborted after %d of %d item(s): %s", len(refs), len(targets), exc)
            self._reload_after_failure()
            raise

        self.log.push(Delete(tuple(refs), tuple(trash_paths), self.current_dir))
        self.registers.record_delete(
            (replace(ref, path=trash) for ref, trash in zip(refs, trash_paths) if trash is not None),
            register,
        )
        self.reload()
        elapsed = format_duration(time.monotonic() - start)
        return f"{plural(len(refs), 'item')} deleted. [{elapsed}]"

    def put(self, register: str | None = None) -> str:
        """Copy a register (the unnamed one by default) into the current directory."""
        refs = self.registers.unnamed if register is None else self.registers.get(register)
        if refs is None:
            raise IoError("Register not found")
        if not refs:
            return "No item yanked."
        if self.is_read_only:
            raise IoError("Cannot put into this directory")
        refs = list(refs)
        start = time.monotonic()
        results: list[Path] = []
        try:
            for index, ref in enumerate(refs):
                self._report_batch(index, len(refs))
                results.append(
                    self.vault.put(ref.path, self.current_dir, name=ref.name, progress=self.progress)
                )
        except FilerError as exc:
            LOGGER.warning("PUT aborted after %d of %d item(s): %s", len(results), len(refs), exc)
            self._reload_after_failure()
            raise

        self.log.push(Put(tuple(refs), tuple(results), self.current_dir))
        self.reload(focus_name=results[-1].name)
        elapsed = format_duration(time.monotonic() - start)
        return f"{plural(len(results), 'item')} inserted. [{elapsed}]"

    def _new_name(self, name: str) -> Path:
        name = name.strip()
        if not name or name in {".", ".."} or os.sep in name:
            raise IoError(f"Invalid name: {name!r}")
        return self.current_dir / name

    def rename(self, new_name: str) -> str:
        item = self.current_item()
        target = self._new_name(new_name)
        if target.name == item.name:
            return ""
        if target.exists() or target.is_symlink():
            raise IoError("Item with the same name already exists")
        try:
            os.rename(item.path, target)
        except OSError as exc:
            raise IoError(f"Cannot rename {item.name}", exc) from exc
        self.log.push(Rename(item.path, target))
        self.reload(focus_name=target.name)
        return f"Renamed to {target.name}."

    def create(self, name: str, is_dir: bool = False) -> str:
        """Create an empty file (or directory) and put the cursor on it.

        Creating is not recorded in the operation log.
        """
        target = self._new_name(name)
        if target.exists() or target.is_symlink():
            raise IoError("Item with the same name already exists")
        try:
            if is_dir:
                target.mkdir()
            else:
                target.touch(exist_ok=False)
        except OSError as exc:
            raise IoError(f"Cannot create {target.name}", exc) from exc
        LOGGER.info("CREATE: %s", target)
        self.reload(focus_name=target.name)
        return ""

    @staticmethod
    def _remove_path(path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            raise RemoveItem(path) from exc

    @staticmethod
    def _rename_path(source: Path, target: Path) -> None:
        if target.exists() or target.is_symlink():
            raise IoError(f"{target} already exists")
        try:
            os.rename(source, target)
        except OSError as exc:
            raise IoError(f"Cannot rename {source}", exc) from exc

    def _apply_inverse(self, op: Operation) -> Operation:
        """Undo ``op`` on disk; return it with the paths the restore produced."""
        if isinstance(op, Rename):
            self._rename_path(op.new_path, op.original_path)
            return op
        if isinstance(op, Put):
            for path in op.resulting_paths:
                self._remove_path(path)
            return op
        restored: list[ItemRef] = []
        for ref, trash in zip(op.original_items, op.trash_paths):
            if trash is None:
                restored.append(ref)
                continue
            path = self.vault.restore(trash, op.source_dir, name=ref.name, progress=self.progress)
            restored.append(replace(ref, name=path.name, path=path))
        return replace(op, original_items=tuple(restored))

    def _apply_forward(self, op: Operation) -> Operation:
        """Redo ``op`` on disk; return it with the paths the redo produced."""
        if isinstance(op, Rename):
            self._rename_path(op.original_path, op.new_path)
            return op
        if isinstance(op, Put):
            results = [
                self.vault.put(ref.path, op.target_dir, name=path.name, progress=self.progress)
                for ref, path in zip(op.original_items, op.resulting_paths)
            ]
            return replace(op, resulting_paths=tuple(results))
        trash_paths = [
            self.vault.delete(ref, progress=self.progress) if trash is not None else None
            for ref, trash in zip(op.original_items, op.trash_paths)
        ]
        return replace(op, trash_paths=tuple(trash_paths))

    def _focus_after(self, op: Operation, *, undone: bool) -> str | None:
        if isinstance(op, Rename):
            return (op.original_path if undone else op.new_path).name
        if isinstance(op, Delete) and undone and op.original_items:
            return op.original_items[0].name
        if isinstance(op, Put) and not undone and op.resulting_paths:
            return op.resulting_paths[-1].name
        return None

    def undo(self) -> str:
        op = self.log.peek_undo()
        try:
            applied = self._apply_inverse(op)
        except FilerError:
            self._reload_after_failure()
            raise
        self.log.undo(applied)
        self.reload(focus_name=self._focus_after(applied, undone=True))
        return "Undone."

    def redo(self) -> str:
        op = self.log.peek_redo()
        try:
            applied = self._apply_forward(op)
        except FilerError:
            self._reload_after_failure()
            raise
        self.log.redo(applied)
        self.reload(focus_name=self._focus_after(applied, undone=False))
        return "Redone."

    def empty_trash(self) -> str:
        self.vault.empty()
        if self.vault.is_trash(self.current_dir):
            self.reload()
        return "Trash dir emptied."

    # -- search ----------------------------------------------------------

    def search(self, keyword: str) -> str:
        """Flag names containing ``keyword`` and move to the first match."""
        self.keyword = keyword or None
        count = highlight_matches(self.items, self.keyword)
        if not self.keyword:
            return ""
        if count == 0:
            return f"No match: {keyword}"
        found = next_match(self.items, self.cursor.index - 1, forward=True)
        if found is not None:
            self.cursor.focus(found, len(self.items), self.rows)
        return plural(count, "match", "matches")

    def _cycle_match(self, forward: bool) -> str:
        if not self.keyword:
            return ""
        found = next_match(self.items, self.cursor.index, forward=forward)
        if found is None:
            return f"No match: {self.keyword}"
        self.cursor.focus(found, len(self.items), self.rows)
        return self._after_move()

    def next_match(self) -> str:
        return self._cycle_match(True)

    def prev_match(self) -> str:
        return self._cycle_match(False)

    # -- preview ---------------------------------------------------------

    def scroll_preview(self, delta: int) -> str:
        item = self.current_item()
        item.preview_scroll = max(0, item.preview_scroll + delta)
        return ""

    def current_preview(self) -> Preview:
        """Classify the item under the cursor and produce its preview lines."""
        if not self.items:
            return Preview(kind=None)
        item = self.current_item()
        kind = ensure_preview(item)
        if kind is PreviewKind.DIRECTORY:
            target = item.symlink_dir_path or item.path
            try:
                lines = make_tree(directory_listing(target))
            except IoError:
                return Preview(PreviewKind.NOT_READABLE, [_PREVIEW_PLACEHOLDERS[PreviewKind.NOT_READABLE]])
        elif kind is PreviewKind.TEXT:
            lines = render_text(
                item.content or "",
                item.path,
                syntax_highlight=self.config.syntax_highlight,
                style=self.config.theme,
            )
        else:
            lines = [_PREVIEW_PLACEHOLDERS[kind]]
        item.preview_scroll = min(item.preview_scroll, max(0, len(lines) - 1))
        return Preview(kind, lines, item.preview_scroll)


__all__ = ["FilerEngine", "Preview", "has_write_permission", "run_external"]
