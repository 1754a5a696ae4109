from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from seeder.config_mgr import (
    DEFAULT_SETTINGS,
    SETTINGS_FILE,
    load_settings,
    save_settings,
    snapshot_settings,
)
from seeder.context import SessionState
from seeder.page_parser import DEFAULT_UPDATERS


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, data) -> None:
        path = Path(self.base) / SETTINGS_FILE
        path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        settings = load_settings(self.base)
        self.assertEqual(settings, DEFAULT_SETTINGS)
        settings["servers"].append({"address": "x"})
        self.assertEqual(DEFAULT_SETTINGS["servers"], [])

    def test_partial_file_is_filled_from_defaults(self) -> None:
        self._write({"username": "SeedBot",
                     "servers": [{"address": "https://example.test/s/1"}]})
        settings = load_settings(self.base)
        self.assertEqual(settings["username"], "SeedBot")
        self.assertEqual(settings["process_name"], "bf4")
        self.assertEqual(settings["refresh_interval"], 60)

    def test_invalid_files_raise(self) -> None:
        (Path(self.base) / SETTINGS_FILE).write_text("{nope", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_settings(self.base)
        self._write(["not", "an", "object"])
        with self.assertRaises(ValueError):
            load_settings(self.base)
        self._write({"servers": [{"name": "no address"}]})
        with self.assertRaises(ValueError):
            load_settings(self.base)

    def test_bad_integer_fields_raise(self) -> None:
        for data in ({"refresh_interval": None}, {"refresh_interval": 0},
                     {"refresh_interval": -5}, {"current_server_index": None},
                     {"current_server_index": "1"}):
            self._write(data)
            with self.assertRaises(ValueError):
                load_settings(self.base)

    def test_session_snapshot_is_saved(self) -> None:
        self._write({"username": "SeedBot",
                     "servers": [{"address": "https://example.test/s/1", "name": "One"}]})
        session = SessionState(load_settings(self.base), DEFAULT_UPDATERS)
        session.seeding_enabled = False
        session.servers[0].max_players = 48
        path = save_settings(snapshot_settings(session), self.base)

        reloaded = load_settings(self.base)
        self.assertEqual(path, str(Path(self.base) / SETTINGS_FILE))
        self.assertFalse(reloaded["seeding_enabled"])
        self.assertEqual(reloaded["servers"][0]["max_players"], 48)
        self.assertEqual(reloaded["servers"][0]["name"], "One")


if __name__ == "__main__":
    unittest.main()
