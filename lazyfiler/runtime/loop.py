"""Key dispatch and the main interactive loop.

The loop is wiring only: keys become engine requests, engine results become
status messages, and every ``FilerError`` is recovered here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import FilerError, TerminalTooSmall
from ..input import read_key
from .engine import FilerEngine
from .registers import is_register_name
from .terminal import MIN_COLS, MIN_ROWS, TerminalController

LOGGER = logging.getLogger(__name__)

PREVIEW_SCROLL_STEP = 1
IDLE_TIMEOUT_MS = 500

# Two-key sequences; the first key is held in ``UIState.pending``.
SEQUENCES = {"gg", "dd", "yy", "ZZ"}

# Prompts that edit an item name; Ctrl-r pastes register contents into them.
NAME_PROMPTS = {"rename", "create", "create_dir"}


@dataclass
class Prompt:
    kind: str
    prefix: str
    text: str = ""
    # set by Ctrl-r; the next key names the register whose item names are inserted
    paste_pending: bool = False


@dataclass
class UIState:
    """Input-mode state the engine does not need to know about."""

    prompt: Prompt | None = None
    pending: str = ""
    status: str = ""
    status_is_error: bool = False
    show_help: bool = False
    quit: bool = False
    dirty: bool = True

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.status = message
        self.status_is_error = error
        self.dirty = True


@dataclass
class KeyHandler:
    """Translate key tokens into engine requests."""

    engine: FilerEngine
    ui: UIState = field(default_factory=UIState)

    def __post_init__(self) -> None:
        engine = self.engine
        self._normal: dict[str, Callable[[], str]] = {
            "j": engine.move_down,
            "DOWN": engine.move_down,
            "k": engine.move_up,
            "UP": engine.move_up,
            "h": engine.go_parent,
            "LEFT": engine.go_parent,
            "l": engine.enter,
            "RIGHT": engine.enter,
            "ENTER_CR": engine.enter,
            "ENTER_LF": engine.enter,
            "G": engine.jump_bottom,
            "gg": engine.jump_top,
            "dd": engine.delete,
            "yy": engine.yank,
            "p": engine.put,
            "V": engine.start_visual,
            "u": engine.undo,
            "CTRL_R": engine.redo,
            "v": engine.toggle_preview,
            "s": engine.toggle_split,
            "t": engine.toggle_sort,
            "BACKSPACE": engine.toggle_hidden,
            "n": engine.next_match,
            "N": engine.prev_match,
            "J": lambda: engine.scroll_preview(PREVIEW_SCROLL_STEP),
            "K": lambda: engine.scroll_preview(-PREVIEW_SCROLL_STEP),
            "CTRL_O": engine.jump_back,
            "TAB": engine.jump_forward,
            "ESC": self._escape,
            "q": self._quit,
            "ZZ": self._quit,
            ":": lambda: self._open_prompt("command", ":"),
            "/": lambda: self._open_prompt("filter", "/"),
            "c": self._open_rename,
            "i": lambda: self._open_prompt("create", "New file: "),
            "I": lambda: self._open_prompt("create_dir", "New directory: "),
            '"': lambda: self._open_prompt("register", '"'),
        }
        self._visual: dict[str, Callable[[], str]] = {
            "j": engine.move_down,
            "DOWN": engine.move_down,
            "k": engine.move_up,
            "UP": engine.move_up,
            "G": engine.jump_bottom,
            "d": engine.delete,
            "y": engine.yank,
            "V": engine.cancel_visual,
            "ESC": engine.cancel_visual,
            '"': lambda: self._open_prompt("register", '"'),
        }

    # -- helpers ---------------------------------------------------------

    def _run(self, action: Callable[[], str]) -> None:
        try:
            message = action()
        except FilerError as exc:
            LOGGER.warning("%s", exc)
            self.ui.set_status(str(exc), error=True)
            return
        if message:
            self.ui.set_status(message)
        self.ui.dirty = True

    def _quit(self) -> str:
        self.ui.quit = True
        return ""

    def _escape(self) -> str:
        self.engine.search("")
        self.ui.status = ""
        return ""

    def _open_prompt(self, kind: str, prefix: str, text: str = "") -> str:
        self.ui.prompt = Prompt(kind=kind, prefix=prefix, text=text)
        return ""

    def _open_rename(self) -> str:
        item = self.engine.current_item()
        return self._open_prompt("rename", "New name: ", item.name)

    # -- dispatch --------------------------------------------------------

    def handle(self, key: str) -> None:
        if not key:
            return
        self.ui.dirty = True
        if self.ui.show_help:
            self.ui.show_help = False
            return
        if self.ui.prompt is not None:
            self._handle_prompt(key)
            return

        if self.engine.selection.active:
            action = self._visual.get(key)
            if action is not None:
                self._run(action)
            return

        combo = self.ui.pending + key
        self.ui.pending = ""
        if combo in SEQUENCES:
            self._run(self._normal[combo])
            return
        if any(sequence.startswith(combo) for sequence in SEQUENCES) and len(combo) == 1:
            self.ui.pending = combo
            return
        action = self._normal.get(key)
        if action is not None:
            self._run(action)

    def _handle_prompt(self, key: str) -> None:
        prompt = self.ui.prompt
        if prompt is None:
            return
        if prompt.kind == "register":
            self._handle_register_key(prompt, key)
            return
        if prompt.kind == "confirm_empty":
            self.ui.prompt = None
            if key in {"y", "Y"}:
                self._run(self.engine.empty_trash)
            else:
                self.ui.set_status("")
            return
        if prompt.paste_pending:
            prompt.paste_pending = False
            refs = self.engine.registers.get(key) if is_register_name(key) else None
            if refs:
                prompt.text += " ".join(ref.name for ref in refs)
            return
        if key == "ESC":
            self.ui.prompt = None
            if prompt.kind == "filter":
                self._run(lambda: self.engine.search(""))
            return
        if key in {"ENTER_CR", "ENTER_LF"}:
            self.ui.prompt = None
            self._submit(prompt)
            return
        if key == "CTRL_R" and prompt.kind in NAME_PROMPTS:
            prompt.paste_pending = True
            return
        if key == "BACKSPACE":
            if not prompt.text and prompt.kind not in NAME_PROMPTS:
                self.ui.prompt = None
                return
            prompt.text = prompt.text[:-1]
        elif len(key) == 1 and key.isprintable():
            prompt.text += key
        else:
            return
        if prompt.kind == "filter":
            self._run(lambda: self.engine.search(prompt.text))

    def _handle_register_key(self, prompt: Prompt, key: str) -> None:
        """Collect ``"<name><action>`` and run the action against that register."""
        if key == "ESC":
            self.ui.prompt = None
            return
        if key == "BACKSPACE":
            if not prompt.text:
                self.ui.prompt = None
            prompt.text = prompt.text[:-1]
            return
        if not (len(key) == 1 and key.isprintable()):
            return
        prompt.text += key
        visual = self.engine.selection.active
        name, action = prompt.text[0], prompt.text[1:]
        if not action or (not visual and action in {"y", "d"}):
            return
        self.ui.prompt = None
        if not is_register_name(name):
            self.ui.set_status("Input not supported.", error=True)
            return
        engine = self.engine
        actions: dict[str, Callable[[], str]] = (
            {"y": lambda: engine.yank(name), "d": lambda: engine.delete(name)}
            if visual
            else {
                "p": lambda: engine.put(name),
                "yy": lambda: engine.yank(name),
                "dd": lambda: engine.delete(name),
            }
        )
        handler = actions.get(action)
        if handler is not None:
            self._run(handler)

    def _submit(self, prompt: Prompt) -> None:
        if prompt.kind == "filter":
            self._run(lambda: self.engine.search(prompt.text))
        elif prompt.kind == "rename":
            self._run(lambda: self.engine.rename(prompt.text))
        elif prompt.kind in {"create", "create_dir"}:
            self._run(lambda: self.engine.create(prompt.text, is_dir=prompt.kind == "create_dir"))
        else:
            self.run_command(prompt.text)

    def run_command(self, text: str) -> None:
        """Execute one ``:`` command line; anything unrecognised goes to the shell."""
        text = text.strip()
        command, _, argument = text.partition(" ")
        argument = argument.strip()
        if command in {"q", "quit"}:
            self._quit()
        elif command == "cd":
            self._run(lambda: self.engine.jump_to(argument or Path.home()))
        elif command == "e":
            self._run(self.engine.reload_from_top)
        elif command == "empty":
            self._open_prompt("confirm_empty", "Empty the trash directory? (y/n) ")
        elif command == "trash":
            self._run(self.engine.go_trash)
        elif command == "reg":
            self._run(self.engine.show_register_pane)
        elif command in {"h", "help"}:
            self.ui.show_help = True
        elif command:
            self._run(lambda: self.engine.run_shell(text))


def check_terminal_size(cols: int, rows: int) -> None:
    if cols < MIN_COLS or rows < MIN_ROWS:
        raise TerminalTooSmall()


def run_main_loop(
    engine: FilerEngine,
    terminal: TerminalController,
    stdin_fd: int,
    handler: KeyHandler,
    draw: Callable[[int, int], None],
    list_rows: Callable[[int, int], int],
) -> None:
    """Run the interactive loop until a quit action occurs.

    Each iteration re-reads the terminal size, keeps the cursor inside the
    listing viewport, redraws when something changed, and dispatches one key.
    """
    ui = handler.ui
    last_size: tuple[int, int] | None = None
    while not ui.quit:
        cols, rows = terminal.terminal_size()
        if (cols, rows) != last_size:
            last_size = (cols, rows)
            if cols < MIN_COLS or rows < MIN_ROWS:
                terminal.clear_all()
                terminal.move_to(0, 0)
                terminal.write(str(TerminalTooSmall()))
                terminal.flush()
                ui.dirty = False
            else:
                ui.dirty = True
        if ui.dirty and cols >= MIN_COLS and rows >= MIN_ROWS:
            engine.resize(list_rows(cols, rows))
            draw(cols, rows)
            ui.dirty = False
        handler.handle(read_key(stdin_fd, timeout_ms=IDLE_TIMEOUT_MS))


__all__ = [
    "Prompt",
    "UIState",
    "KeyHandler",
    "check_terminal_size",
    "run_main_loop",
]
