"""Key chord value types.

A chord is a key code plus a modifier set. Codes are either a single
character (``"q"``, ``" "``) or one of the named keys below. Chords compare
structurally, so registries can use them as dictionary keys.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Modifiers(enum.Flag):
    NONE = 0
    CTRL = enum.auto()
    ALT = enum.auto()
    SHIFT = enum.auto()


class KeyKind(enum.Enum):
    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


NAMED_KEYS: frozenset[str] = frozenset(
    {
        "ENTER",
        "TAB",
        "BACKSPACE",
        "ESC",
        "LEFT",
        "RIGHT",
        "UP",
        "DOWN",
        "HOME",
        "END",
        "PAGE_UP",
        "PAGE_DOWN",
        "INSERT",
        "DELETE",
    }
)

_NAMED_DISPLAY = {
    "ENTER": "Enter",
    "TAB": "Tab",
    "BACKSPACE": "Backspace",
    "ESC": "Esc",
    "LEFT": "Left",
    "RIGHT": "Right",
    "UP": "Up",
    "DOWN": "Down",
    "HOME": "Home",
    "END": "End",
    "PAGE_UP": "PageUp",
    "PAGE_DOWN": "PageDown",
    "INSERT": "Ins",
    "DELETE": "Del",
}

_CODE_ALIASES = {
    "space": " ",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "esc": "ESC",
    "escape": "ESC",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "insert": "INSERT",
    "ins": "INSERT",
    "delete": "DELETE",
    "del": "DELETE",
}

_MODIFIER_NAMES = {
    "ctrl": Modifiers.CTRL,
    "control": Modifiers.CTRL,
    "alt": Modifiers.ALT,
    "meta": Modifiers.ALT,
    "shift": Modifiers.SHIFT,
}


@dataclass(frozen=True)
class KeyChord:
    """One physical key code plus modifiers."""

    code: str
    modifiers: Modifiers = Modifiers.NONE

    @property
    def is_printable(self) -> bool:
        """Whether this chord inserts its code as text in an editable field."""
        return (
            len(self.code) == 1
            and self.code.isprintable()
            and not (self.modifiers & (Modifiers.CTRL | Modifiers.ALT))
        )

    def __str__(self) -> str:
        return format_chord(self)


@dataclass(frozen=True)
class KeyEvent:
    chord: KeyChord
    kind: KeyKind = KeyKind.PRESS


def char(code: str) -> KeyChord:
    return KeyChord(code)


def ctrl(code: str) -> KeyChord:
    return KeyChord(code.lower(), Modifiers.CTRL)


def alt(code: str) -> KeyChord:
    return KeyChord(code, Modifiers.ALT)


def named(name: str) -> KeyChord:
    if name not in NAMED_KEYS:
        raise ValueError(f"unknown key name: {name!r}")
    return KeyChord(name)


def parse_chord(text: str) -> KeyChord:
    """Parse ``"ctrl+c"``, ``"q"``, ``"space"``, ``"esc"`` style chord text.

    Raises ``ValueError`` for unknown modifiers or key names.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty key chord")
    if raw == "+":
        return KeyChord("+")
    *modifier_parts, code_part = raw.split("+")
    if not code_part:
        raise ValueError(f"missing key in {text!r}")
    modifiers = Modifiers.NONE
    for part in modifier_parts:
        flag = _MODIFIER_NAMES.get(part.strip().lower())
        if flag is None:
            raise ValueError(f"unknown modifier {part!r} in {text!r}")
        modifiers |= flag

    if len(code_part) == 1:
        code = code_part.lower() if modifiers & Modifiers.CTRL else code_part
        return KeyChord(code, modifiers)
    alias = _CODE_ALIASES.get(code_part.strip().lower())
    if alias is None:
        raise ValueError(f"unknown key {code_part!r} in {text!r}")
    return KeyChord(alias, modifiers)


def format_chord(chord: KeyChord) -> str:
    """Format a chord for the help panel and conflict reports."""
    if chord.code == " ":
        code = "Space"
    elif chord.code in _NAMED_DISPLAY:
        code = _NAMED_DISPLAY[chord.code]
    else:
        code = chord.code
    prefix = "".join(
        label
        for flag, label in (
            (Modifiers.CTRL, "ctrl+"),
            (Modifiers.ALT, "alt+"),
            (Modifiers.SHIFT, "shift+"),
        )
        if chord.modifiers & flag
    )
    return prefix + code


__all__ = [
    "KeyChord",
    "KeyEvent",
    "KeyKind",
    "Modifiers",
    "NAMED_KEYS",
    "alt",
    "char",
    "ctrl",
    "format_chord",
    "named",
    "parse_chord",
]
