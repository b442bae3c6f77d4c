"""Read-only JSON preferences.

Stores the UI theme, tick period, default filter, and key overrides.
Missing or malformed files fall back to defaults; nothing is written back.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigurationError
from .input.key_registry import Command
from .input.keys import KeyChord, parse_chord

APP_NAME = "wiper"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_TICK_MS = 200


def config_path() -> Path:
    """Return the preferences path, honoring ``WIPER_CONFIG``."""
    override = os.environ.get("WIPER_CONFIG")
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the preferences JSON object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_theme_name(config: dict[str, object] | None = None) -> str | None:
    """Load preferred UI theme name, returning ``None`` when unset/invalid."""
    value = (load_config() if config is None else config).get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_tick_ms(config: dict[str, object] | None = None) -> int:
    """Load tick period in milliseconds; booleans and non-positive values are ignored."""
    value = (load_config() if config is None else config).get("tick_ms")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_TICK_MS
    return value


def load_default_filter(config: dict[str, object] | None = None) -> str | None:
    value = (load_config() if config is None else config).get("filter")
    if not isinstance(value, str) or not value:
        return None
    return value


def load_key_overrides(config: dict[str, object] | None = None) -> dict[Command, tuple[KeyChord, ...]]:
    """Load per-command chord overrides from the ``keys`` table.

    Unknown commands or unparsable chords raise ``ConfigurationError`` so a
    broken keymap is reported before the UI starts.
    """
    value = (load_config() if config is None else config).get("keys")
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError("config 'keys' must be an object of command -> list of chords")

    overrides: dict[Command, tuple[KeyChord, ...]] = {}
    for raw_command, raw_chords in value.items():
        try:
            command = Command.from_config_key(str(raw_command))
        except ValueError as exc:
            raise ConfigurationError(f"config 'keys': {exc}") from exc
        if isinstance(raw_chords, str):
            raw_chords = [raw_chords]
        if not isinstance(raw_chords, list) or not raw_chords:
            raise ConfigurationError(f"config 'keys.{command.config_key}' must be a non-empty list")
        chords: list[KeyChord] = []
        for raw_chord in raw_chords:
            try:
                chords.append(parse_chord(str(raw_chord)))
            except ValueError as exc:
                raise ConfigurationError(f"config 'keys.{command.config_key}': {exc}") from exc
        overrides[command] = tuple(chords)
    return overrides


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TICK_MS",
    "config_path",
    "load_config",
    "load_default_filter",
    "load_key_overrides",
    "load_theme_name",
    "load_tick_ms",
]
