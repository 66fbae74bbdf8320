"""Tests for config loading and session persistence.

Config fields fall back one by one; a malformed session falls back as a whole.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyfiler.catalog import SortKey
from lazyfiler.runtime import config, logs, session
from lazyfiler.ui_theme import Color, ItemColors


class ConfigTests(unittest.TestCase):
    def _read(self, data: object) -> config.FilerConfig:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps(data), encoding="utf-8")
            with mock.patch("lazyfiler.runtime.config.CONFIG_PATH", config_path):
                return config.read_config()

    def test_missing_file_uses_editor_then_vi(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyfiler.runtime.config.CONFIG_PATH", config_path):
                with mock.patch.dict(os.environ, {"EDITOR": "nano"}):
                    self.assertEqual(config.read_config().default_opener, "nano")
                with mock.patch.dict(os.environ, {}, clear=True):
                    self.assertEqual(config.read_config().default_opener, "vi")

    def test_exec_map_is_inverted_and_lowercased(self) -> None:
        loaded = self._read({"default": "nvim", "exec": {"feh -.": ["PNG", "jpg"], "zathura": ["pdf"]}})
        self.assertEqual(loaded.opener_for("png"), "feh -.")
        self.assertEqual(loaded.opener_for("pdf"), "zathura")
        self.assertEqual(loaded.opener_for("txt"), "nvim")
        self.assertEqual(loaded.opener_for(None), "nvim")

    def test_malformed_fields_fall_back_individually(self) -> None:
        loaded = self._read(
            {
                "default": "nvim",
                "exec": ["not", "a", "map"],
                "color": {"dir_fg": "NotAColor", "file_fg": {"AnsiValue": 42}, "symlink_fg": {"Rgb": [1, 2, 3]}},
                "syntax_highlight": "yes",
                "default_theme": "",
            }
        )
        self.assertEqual(loaded.default_opener, "nvim")
        self.assertEqual(loaded.exec_map, {})
        self.assertEqual(loaded.colors.dir_fg, ItemColors().dir_fg)
        self.assertEqual(loaded.colors.file_fg, Color(ansi=42))
        self.assertEqual(loaded.colors.symlink_fg, Color(rgb=(1, 2, 3)))
        self.assertFalse(loaded.syntax_highlight)
        self.assertEqual(loaded.theme, "monokai")

    def test_unparsable_file_returns_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{broken", encoding="utf-8")
            with mock.patch("lazyfiler.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


class SessionTests(unittest.TestCase):
    def test_round_trip_through_session_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "cfg" / "config.json"
            with mock.patch("lazyfiler.runtime.config.CONFIG_PATH", config_path):
                saved = session.Session(
                    sort_by=SortKey.TIME, show_hidden=False, preview=True, split=session.Split.HORIZONTAL
                )
                session.write_session(saved)
                self.assertTrue((config_path.parent / "session.json").exists())
                self.assertEqual(session.read_session(), saved)

    def test_malformed_session_resets_every_field(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            (Path(tmp) / "session.json").write_text(
                json.dumps({"sort_by": "Time", "show_hidden": "no", "preview": True}),
                encoding="utf-8",
            )
            with mock.patch("lazyfiler.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(session.read_session(), session.Session())

    def test_from_json_rejects_unknown_sort_key(self) -> None:
        self.assertIsNone(session.Session.from_json({"sort_by": "Size", "show_hidden": True}))
        self.assertIsNone(session.Session.from_json(["Name"]))

    def test_toggles_flip_between_two_values(self) -> None:
        self.assertIs(SortKey.NAME.toggled(), SortKey.TIME)
        self.assertIs(session.Split.HORIZONTAL.toggled(), session.Split.VERTICAL)


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger("lazyfiler")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_disabled_logging_installs_null_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(logs.configure_logging(False, Path(tmp)))
            self.assertEqual(list(Path(tmp).iterdir()), [])

    def test_enabled_logging_writes_a_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = logs.configure_logging(True, Path(tmp) / "log")
            self.assertIsNotNone(log_path)
            logging.getLogger("lazyfiler.test").info("hello")
            self.tearDown()
            self.assertIn("hello", log_path.read_text(encoding="utf-8"))

    def test_environment_variable_requests_logging(self) -> None:
        with mock.patch.dict(os.environ, {logs.DEBUG_ENV_VAR: "1"}):
            self.assertTrue(logs.logging_requested(False))
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertFalse(logs.logging_requested(False))


if __name__ == "__main__":
    unittest.main()
