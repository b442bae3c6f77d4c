"""Help panel content built from the active key bindings.

Every bound chord gets its own row, each followed by its command label.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..input.key_registry import Command
from ..input.keys import KeyChord, format_chord
from ..ui_theme import UITheme

HELP_KEY_COLUMN_WIDTH = 11


def help_panel_lines(
    bindings: Sequence[tuple[Command, Sequence[KeyChord]]],
    theme: UITheme,
) -> list[str]:
    """Return styled help rows, one per bound chord, in registry order."""
    lines: list[str] = []
    for command, chords in bindings:
        for chord in chords:
            key_text = format_chord(chord).ljust(HELP_KEY_COLUMN_WIDTH)
            lines.append(f"{theme.help_key}{key_text}{theme.reset} {theme.help_label}{command.label}{theme.reset}")
    return lines


def chord_hint(chords: Sequence[KeyChord]) -> str:
    """Join chords for inline hints, e.g. ``Esc/Enter``."""
    return "/".join(format_chord(chord) for chord in chords)


__all__ = ["HELP_KEY_COLUMN_WIDTH", "chord_hint", "help_panel_lines"]
