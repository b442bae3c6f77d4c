"""Input-layer public API: chord values, raw decoding, and the command registry."""

from .key_registry import (
    BROWSE_COMMANDS,
    READ_ONLY_COMMANDS,
    STARTUP_COMMANDS,
    Command,
    KeyBindingRegistry,
)
from .keys import KeyChord, KeyEvent, KeyKind, Modifiers, format_chord, parse_chord
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "BROWSE_COMMANDS",
    "READ_ONLY_COMMANDS",
    "STARTUP_COMMANDS",
    "Command",
    "KeyBindingRegistry",
    "KeyChord",
    "KeyEvent",
    "KeyKind",
    "Modifiers",
    "format_chord",
    "parse_chord",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
]
