"""Command enumeration and the chord -> command registry.

Each mode asks for the subset of commands it supports. Construction checks
that no chord is claimed by two commands; a conflict is a configuration
error and the UI never starts.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence

from ..errors import KeyBindingConflictError
from .keys import KeyChord, char, ctrl, format_chord, named


class Command(enum.Enum):
    """Logical user intents, independent of the chords that trigger them."""

    QUIT = "quit"
    TOGGLE_CURRENT = "toggle_current"
    DELETE_SELECTED = "delete_selected"
    UP = "up"
    DOWN = "down"
    EDIT_PATH = "edit_path"
    EDIT_FILTER = "edit_filter"
    UNFOCUS_FIELD = "unfocus_field"

    @property
    def label(self) -> str:
        return _COMMAND_LABELS[self]

    @property
    def config_key(self) -> str:
        return self.value

    @classmethod
    def from_config_key(cls, key: str) -> Command:
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown command {key!r}") from None


_COMMAND_LABELS = {
    Command.QUIT: "Quit",
    Command.TOGGLE_CURRENT: "Toggle current",
    Command.DELETE_SELECTED: "Delete selected",
    Command.UP: "Up",
    Command.DOWN: "Down",
    Command.EDIT_PATH: "Edit path",
    Command.EDIT_FILTER: "Edit filter",
    Command.UNFOCUS_FIELD: "Apply field",
}

DEFAULT_CHORDS: Mapping[Command, tuple[KeyChord, ...]] = {
    Command.QUIT: (ctrl("c"), char("q")),
    Command.TOGGLE_CURRENT: (char(" "),),
    Command.DELETE_SELECTED: (char("d"),),
    Command.UP: (named("UP"), char("k")),
    Command.DOWN: (named("DOWN"), char("j")),
    Command.EDIT_PATH: (char("p"),),
    Command.EDIT_FILTER: (char("f"),),
    Command.UNFOCUS_FIELD: (named("ESC"), named("ENTER")),
}

BROWSE_COMMANDS: tuple[Command, ...] = (
    Command.QUIT,
    Command.TOGGLE_CURRENT,
    Command.DELETE_SELECTED,
    Command.UP,
    Command.DOWN,
    Command.EDIT_PATH,
    Command.EDIT_FILTER,
    Command.UNFOCUS_FIELD,
)

READ_ONLY_COMMANDS: tuple[Command, ...] = (
    Command.QUIT,
    Command.UP,
    Command.DOWN,
    Command.EDIT_PATH,
    Command.EDIT_FILTER,
    Command.UNFOCUS_FIELD,
)

STARTUP_COMMANDS: tuple[Command, ...] = (Command.QUIT,)


def find_conflicts(bindings: Sequence[tuple[Command, Sequence[KeyChord]]]) -> list[str]:
    """Return one report line per chord claimed by two or more commands."""
    claims: dict[KeyChord, list[Command]] = {}
    for command, chords in bindings:
        for chord in chords:
            owners = claims.setdefault(chord, [])
            if command not in owners:
                owners.append(command)
    return [
        f"Conflict key {format_chord(chord)} with actions {', '.join(command.label for command in owners)}"
        for chord, owners in claims.items()
        if len(owners) > 1
    ]


class KeyBindingRegistry:
    """Immutable chord -> command table for one UI mode."""

    def __init__(
        self,
        commands: Iterable[Command],
        overrides: Mapping[Command, Sequence[KeyChord]] | None = None,
    ) -> None:
        """Bind ``commands`` to their chords, failing fast on conflicts.

        ``overrides`` replaces the default chord list per command; commands
        not listed keep ``DEFAULT_CHORDS``.
        """
        overrides = overrides or {}
        ordered: list[Command] = []
        for command in commands:
            if command not in ordered:
                ordered.append(command)
        bindings = [
            (command, tuple(overrides.get(command, DEFAULT_CHORDS[command])))
            for command in ordered
        ]
        conflicts = find_conflicts(bindings)
        if conflicts:
            raise KeyBindingConflictError(conflicts)
        self._bindings: tuple[tuple[Command, tuple[KeyChord, ...]], ...] = tuple(bindings)
        self._by_chord: dict[KeyChord, Command] = {
            chord: command for command, chords in bindings for chord in chords
        }

    @property
    def bindings(self) -> tuple[tuple[Command, tuple[KeyChord, ...]], ...]:
        """Ordered ``(command, chords)`` pairs, as requested at construction."""
        return self._bindings

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(command for command, _chords in self._bindings)

    def __contains__(self, command: object) -> bool:
        return command in self.commands

    def resolve(self, chord: KeyChord) -> Command | None:
        """Return the command bound to ``chord`` in this registry, if any."""
        return self._by_chord.get(chord)

    def chords_for(self, command: Command) -> tuple[KeyChord, ...]:
        for bound, chords in self._bindings:
            if bound is command:
                return chords
        return ()


__all__ = [
    "BROWSE_COMMANDS",
    "Command",
    "DEFAULT_CHORDS",
    "KeyBindingRegistry",
    "READ_ONLY_COMMANDS",
    "STARTUP_COMMANDS",
    "find_conflicts",
]
