"""Runtime composition layer for wiper.

Builds the key registry and the initial state, then either prints the scan
results (list mode) or wires the terminal, the event source, and the
renderer into the main loop.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from ..config import load_config, load_key_overrides, load_theme_name, load_tick_ms
from ..debug import configure_logging, get_logger
from ..input.key_registry import BROWSE_COMMANDS, READ_ONLY_COMMANDS, KeyBindingRegistry
from ..render import RenderContext, context_from_state, format_size, list_rows, render_frame
from ..scan import Entry
from ..ui_theme import resolve_theme
from .events import EventSource
from .loop import RuntimeLoopCallbacks, run_main_loop
from .machine import Application
from .terminal import TerminalController

logger = get_logger("app")


def build_registry(read_only: bool = False, config: dict[str, object] | None = None) -> KeyBindingRegistry:
    """Registry for the requested mode, with preferences-file overrides applied."""
    commands = READ_ONLY_COMMANDS if read_only else BROWSE_COMMANDS
    return KeyBindingRegistry(commands, load_key_overrides(config))


def format_listing(entries: list[Entry] | tuple[Entry, ...]) -> str:
    """Plain-text scan report, one entry per line, largest first."""
    lines = [
        f"path : {entry.path}, files count: {entry.file_count} size: {format_size(entry.size)}"
        for entry in entries
    ]
    total = sum(entry.size for entry in entries)
    lines.append(f"total: {len(entries)} entries, {format_size(total)}")
    return "\n".join(lines) + "\n"


def run_app(
    root_path: Path,
    filter_text: str,
    *,
    prune: bool = True,
    exact: bool = False,
    match_full_path: bool = False,
    read_only: bool = False,
    list_only: bool = False,
    theme_name: str | None = None,
    no_color: bool = False,
    tick_ms: int | None = None,
    log_file: str | Path | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Scan ``root_path`` and run the interactive UI, or print results when not on a tty.

    Configuration problems raise ``ConfigurationError`` and terminal problems
    raise ``TerminalError``; both are left for the CLI to report.
    """
    configure_logging(log_file)
    config = load_config()
    registry = build_registry(read_only, config)
    app = Application.create(
        root_path,
        filter_text,
        registry,
        prune=prune,
        exact=exact,
        match_full_path=match_full_path,
    )
    logger.info("initial scan of %s found %d entries", root_path, len(app.state.entries))

    out = stdout if stdout is not None else sys.stdout
    if list_only or not sys.stdin.isatty():
        out.write(format_listing(app.state.entries.items))
        out.flush()
        return

    theme = resolve_theme(theme_name or load_theme_name(config), no_color=no_color)
    tick_seconds = (tick_ms if tick_ms is not None else load_tick_ms(config)) / 1000.0
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    events = EventSource(stdin_fd, tick_seconds)

    def draw_frame(columns: int, lines: int) -> None:
        context: RenderContext = context_from_state(app.state, registry, columns, lines, theme)
        render_frame(context)

    run_main_loop(
        app,
        terminal,
        events,
        RuntimeLoopCallbacks(draw_frame=draw_frame, list_rows=list_rows),
    )
    logger.info("session ended at %s (%d scans)", app.state.root_path, app.state.scan_count)


__all__ = ["build_registry", "format_listing", "run_app"]
