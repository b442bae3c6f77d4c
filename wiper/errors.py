"""Exception hierarchy for wiper.

Only configuration and terminal errors ever reach the process boundary;
``cli.main`` turns them into a non-zero exit with a printed message.

Exception Hierarchy:
    WiperError (base)
    ├── ConfigurationError - rejected before the UI starts
    │   ├── KeyBindingConflictError
    │   └── InvalidFilterError
    └── TerminalError - ends the run loop, terminal is still restored
        ├── TerminalTooSmallError
        └── TerminalSetupError
"""

from __future__ import annotations


class WiperError(Exception):
    """Base exception for all wiper errors."""


class ConfigurationError(WiperError):
    """Invalid startup configuration (bindings, filter pattern, preferences)."""


class KeyBindingConflictError(ConfigurationError):
    """Two or more commands claim the same key chord.

    ``conflicts`` holds one human-readable line per conflicting chord.
    """

    def __init__(self, conflicts: list[str]) -> None:
        self.conflicts = list(conflicts)
        super().__init__("Conflicting key bindings:\n" + "\n".join(self.conflicts))


class InvalidFilterError(ConfigurationError):
    """Filter pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid filter pattern {pattern!r}: {reason}")


class TerminalError(WiperError):
    """Terminal environment cannot host the UI."""


class TerminalTooSmallError(TerminalError):
    def __init__(self, columns: int, lines: int, min_columns: int, min_lines: int) -> None:
        self.columns = columns
        self.lines = lines
        problems: list[str] = []
        if columns < min_columns:
            problems.append(f"width >= {min_columns} (got {columns})")
        if lines < min_lines:
            problems.append(f"height >= {min_lines} (got {lines})")
        super().__init__("Unable to continue, the terminal is too small. Require " + ", ".join(problems))


class TerminalSetupError(TerminalError):
    """Raw-mode setup or teardown failed."""


__all__ = [
    "WiperError",
    "ConfigurationError",
    "KeyBindingConflictError",
    "InvalidFilterError",
    "TerminalError",
    "TerminalTooSmallError",
    "TerminalSetupError",
]
