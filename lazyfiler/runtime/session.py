"""Session record: view toggles restored on start and written on exit.

Unlike the configuration, the session is all-or-nothing: any missing key or
wrong type replaces the whole record with the default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..catalog import SortKey
from . import config

LOGGER = logging.getLogger(__name__)

SESSION_FILENAME = "session.json"


class Split(Enum):
    VERTICAL = "Vertical"
    HORIZONTAL = "Horizontal"

    def toggled(self) -> Split:
        return Split.HORIZONTAL if self is Split.VERTICAL else Split.VERTICAL


@dataclass
class Session:
    sort_by: SortKey = SortKey.NAME
    show_hidden: bool = True
    preview: bool = False
    split: Split = Split.VERTICAL

    def to_json(self) -> dict[str, object]:
        return {
            "sort_by": self.sort_by.value,
            "show_hidden": self.show_hidden,
            "preview": self.preview,
            "split": self.split.value,
        }

    @classmethod
    def from_json(cls, data: object) -> Session | None:
        """Parse a session object; ``None`` when any field is missing or malformed."""
        if not isinstance(data, dict):
            return None
        try:
            sort_by = SortKey(data["sort_by"])
            split = Split(data.get("split", Split.VERTICAL.value))
        except (KeyError, TypeError, ValueError):
            return None
        show_hidden = data.get("show_hidden")
        preview = data.get("preview", False)
        if not isinstance(show_hidden, bool) or not isinstance(preview, bool):
            return None
        return cls(sort_by=sort_by, show_hidden=show_hidden, preview=preview, split=split)


def session_path() -> Path:
    return config.config_dir() / SESSION_FILENAME


def read_session() -> Session:
    path = session_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Session()
    except (OSError, ValueError) as exc:
        LOGGER.warning("Session file %s unreadable, using defaults: %s", path, exc)
        return Session()
    session = Session.from_json(data)
    if session is None:
        LOGGER.warning("Session file %s malformed, using defaults", path)
        return Session()
    return session


def write_session(session: Session) -> None:
    """Persist ``session``; a write failure is logged and otherwise ignored."""
    path = session_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(session.to_json(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Cannot write session file %s: %s", path, exc)


__all__ = ["SESSION_FILENAME", "Split", "Session", "session_path", "read_session", "write_session"]
