from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from wiper import config
from wiper.errors import ConfigurationError
from wiper.input.key_registry import Command
from wiper.input.keys import KeyChord, Modifiers, char


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.json"
        patcher = mock.patch.dict(os.environ, {"WIPER_CONFIG": str(self.config_path)})
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _write(self, payload: object) -> None:
        self.config_path.write_text(json.dumps(payload), encoding="utf-8")

    def test_config_path_honors_environment_override(self) -> None:
        self.assertEqual(config.config_path(), self.config_path)

    def test_missing_or_malformed_file_falls_back_to_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_tick_ms(), config.DEFAULT_TICK_MS)

        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

        self._write(["a", "list"])
        self.assertEqual(config.load_config(), {})

    def test_known_keys_are_loaded(self) -> None:
        self._write({"theme": " ocean ", "tick_ms": 50, "filter": "^target$"})

        self.assertEqual(config.load_theme_name(), "ocean")
        self.assertEqual(config.load_tick_ms(), 50)
        self.assertEqual(config.load_default_filter(), "^target$")

    def test_invalid_values_are_ignored(self) -> None:
        self._write({"theme": 3, "tick_ms": True, "filter": ""})

        self.assertIsNone(config.load_theme_name())
        self.assertEqual(config.load_tick_ms(), config.DEFAULT_TICK_MS)
        self.assertIsNone(config.load_default_filter())
        self.assertEqual(config.load_tick_ms({"tick_ms": -5}), config.DEFAULT_TICK_MS)

    def test_key_overrides_accept_strings_and_lists(self) -> None:
        self._write({"keys": {"quit": "ctrl+x", "delete_selected": ["x", "shift+d"]}})

        overrides = config.load_key_overrides()

        self.assertEqual(overrides[Command.QUIT], (KeyChord("x", Modifiers.CTRL),))
        self.assertEqual(overrides[Command.DELETE_SELECTED], (char("x"), KeyChord("d", Modifiers.SHIFT)))

    def test_broken_keymap_is_a_configuration_error(self) -> None:
        for keys in ({"explode": ["x"]}, {"quit": ["hyper+x"]}, {"quit": []}, ["quit"]):
            with self.subTest(keys=keys):
                with self.assertRaises(ConfigurationError):
                    config.load_key_overrides({"keys": keys})


if __name__ == "__main__":
    unittest.main()
