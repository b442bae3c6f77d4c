"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching. Failures of the
underlying tty calls surface as ``TerminalSetupError``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from ..errors import TerminalSetupError

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalSetupError(f"Unable to read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        except (termios.error, OSError) as exc:
            raise TerminalSetupError(f"Unable to enter raw mode: {exc}") from exc

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        try:
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            raise TerminalSetupError(f"Unable to restore terminal: {exc}") from exc

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController", "ENTER_TUI_SEQUENCE", "LEAVE_TUI_SEQUENCE"]
