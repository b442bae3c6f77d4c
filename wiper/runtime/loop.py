"""Main interactive loop: the single consumer of the event stream.

Each iteration checks the terminal size, keeps the cursor row scrolled into
view, redraws when the state is dirty, then blocks for the next event.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from os import terminal_size

from ..debug import get_logger
from ..errors import TerminalTooSmallError
from ..render import HELP_PANEL_WIDTH, MIN_BODY_WIDTH
from .events import EventSource
from .machine import AppReturn, Application
from .terminal import TerminalController

logger = get_logger("loop")

MIN_COLUMNS = MIN_BODY_WIDTH + HELP_PANEL_WIDTH + 1
MIN_LINES = 14


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected drawing operations used by ``run_main_loop``."""

    draw_frame: Callable[[int, int], None]
    list_rows: Callable[[int], int]


def check_size(columns: int, lines: int) -> None:
    """Raise ``TerminalTooSmallError`` below the minimum usable size."""
    if columns < MIN_COLUMNS or lines < MIN_LINES:
        raise TerminalTooSmallError(columns, lines, MIN_COLUMNS, MIN_LINES)


def scroll_into_view(start: int, cursor: int | None, rows: int, total: int) -> int:
    """Return a list offset that keeps ``cursor`` inside a ``rows`` window."""
    if cursor is None:
        return 0
    if cursor < start:
        start = cursor
    elif cursor >= start + rows:
        start = cursor - rows + 1
    return max(0, min(start, max(0, total - rows)))


def run_main_loop(
    app: Application,
    terminal: TerminalController,
    events: EventSource,
    callbacks: RuntimeLoopCallbacks,
    get_terminal_size: Callable[..., terminal_size] = shutil.get_terminal_size,
) -> None:
    """Run until a command or a closed input stream asks to exit.

    The terminal is restored and the producer threads joined on every exit
    path, including ``TerminalTooSmallError`` raised mid-session.
    """
    state = app.state
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode(), events:
        while True:
            term = get_terminal_size((80, 24))
            check_size(term.columns, term.lines)
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                state.dirty = True

            prev_start = state.list_start
            state.list_start = scroll_into_view(
                state.list_start,
                state.entries.cursor,
                callbacks.list_rows(term.lines),
                len(state.entries),
            )
            if state.list_start != prev_start:
                state.dirty = True

            if state.dirty:
                callbacks.draw_frame(term.columns, term.lines)
                state.dirty = False

            if app.handle_event(events.next()) is AppReturn.EXIT:
                logger.info("main loop exiting")
                return


__all__ = [
    "MIN_COLUMNS",
    "MIN_LINES",
    "RuntimeLoopCallbacks",
    "check_size",
    "run_main_loop",
    "scroll_into_view",
]
