"""Frame composition for the wiper terminal view.

``build_frame`` turns a ``RenderContext`` into exactly ``height`` styled rows
without touching application state; ``render_frame`` writes them to the
terminal in one call.

Layout (left column, then a help panel on the right)::

    Infos        4 rows
    Path field   3 rows
    Filter field 3 rows
    Entry list   remaining rows
    status line  1 row
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..ansi import clip_ansi_line, clip_left, display_width, fit_ansi_line
from ..input.key_registry import Command, KeyBindingRegistry
from ..input.keys import KeyChord
from ..runtime.state import AppState
from ..scan import Entry
from ..text_field import FocusableTextField
from ..ui_theme import UITheme
from .help import chord_hint, help_panel_lines

INFO_BOX_ROWS = 4
FIELD_BOX_ROWS = 3
STATUS_ROWS = 1
HELP_PANEL_WIDTH = 34
MIN_BODY_WIDTH = 40
CURSOR_MARKER = ">> "
SIZE_COLUMN_WIDTH = 10


@dataclass
class RenderContext:
    root_path: Path
    entries: tuple[Entry, ...]
    cursor: int | None
    selected: frozenset[int]
    list_start: int
    total_size: int
    total_files: int
    selected_size: int
    selected_percent: float
    path_field: FocusableTextField
    filter_field: FocusableTextField
    bindings: tuple[tuple[Command, tuple[KeyChord, ...]], ...]
    width: int
    height: int
    theme: UITheme
    status_message: str = ""
    status_is_error: bool = False


def context_from_state(
    state: AppState,
    registry: KeyBindingRegistry,
    width: int,
    height: int,
    theme: UITheme,
) -> RenderContext:
    """Snapshot ``state`` into a render context for one frame."""
    return RenderContext(
        root_path=state.root_path,
        entries=state.entries.items,
        cursor=state.entries.cursor,
        selected=state.entries.selected,
        list_start=state.list_start,
        total_size=state.total_size(),
        total_files=state.total_file_count(),
        selected_size=state.selected_size(),
        selected_percent=state.selected_percent(),
        path_field=state.path_field,
        filter_field=state.filter_field,
        bindings=registry.bindings,
        width=width,
        height=height,
        theme=theme,
        status_message=state.status_message,
        status_is_error=state.status_is_error,
    )


def format_size(size: int) -> str:
    """Format a byte count in decimal megabytes with two decimals."""
    return f"{size / 1_000_000:.2f}MB"


def list_rows(height: int) -> int:
    """Number of entry rows visible for a terminal ``height`` rows tall."""
    fixed = STATUS_ROWS + INFO_BOX_ROWS + 2 * FIELD_BOX_ROWS + 2
    return max(1, height - fixed)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _box(title: str, body: Sequence[str], width: int, height: int, style: str, theme: UITheme) -> list[str]:
    """Draw a rounded box ``width`` x ``height`` with ``title`` in the top edge."""
    inner = max(0, width - 2)
    title_text = clip_ansi_line(f" {title} ", max(0, inner - 1))
    fill = "─" * max(0, inner - 1 - display_width(title_text))
    rows = [f"{style}╭─{theme.title}{title_text}{theme.reset}{style}{fill}╮{theme.reset}"]
    for row in range(max(0, height - 2)):
        text = body[row] if row < len(body) else ""
        rows.append(f"{style}│{theme.reset}{fit_ansi_line(text, inner)}{style}│{theme.reset}")
    rows.append(f"{style}╰{'─' * inner}╯{theme.reset}")
    return rows[:height]


def _chords(bindings: Sequence[tuple[Command, Sequence[KeyChord]]], command: Command) -> tuple[KeyChord, ...]:
    for bound, chords in bindings:
        if bound is command:
            return tuple(chords)
    return ()


def _field_title(field: FocusableTextField, edit_command: Command, context: RenderContext) -> str:
    if field.focused:
        hint = chord_hint(_chords(context.bindings, Command.UNFOCUS_FIELD))
        return f"{field.title} [{hint} to apply]" if hint else field.title
    hint = chord_hint(_chords(context.bindings, edit_command))
    return f"{field.title} [{hint}]" if hint else field.title


def _field_body(field: FocusableTextField, inner: int, theme: UITheme) -> str:
    text, caret_col = field.visible_window(max(1, inner))
    if not field.focused:
        return text
    caret_char = text[caret_col] if caret_col < len(text) else " "
    after = text[caret_col + 1 :] if caret_col < len(text) else ""
    return f"{text[:caret_col]}{theme.reverse}{caret_char}{theme.reset}{after}"


def _display_path(path: Path, root: Path) -> str:
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    if str(relative) == ".":
        return str(path)
    return str(relative)


def _list_body(context: RenderContext, inner: int, rows: int) -> list[str]:
    theme = context.theme
    if not context.entries:
        return [f"{theme.list_empty}No entries matching the filter{theme.reset}"]
    path_cols = max(1, inner - len(CURSOR_MARKER) - SIZE_COLUMN_WIDTH - 2)
    lines: list[str] = []
    stop = min(len(context.entries), context.list_start + rows)
    for idx in range(context.list_start, stop):
        entry = context.entries[idx]
        is_cursor = idx == context.cursor
        marker = f"{theme.list_marker}{CURSOR_MARKER}{theme.reset}" if is_cursor else " " * len(CURSOR_MARKER)
        size_text = f"{theme.list_size}{format_size(entry.size).rjust(SIZE_COLUMN_WIDTH)}{theme.reset}"
        path_text = clip_left(_display_path(entry.path, context.root_path), path_cols)
        if idx in context.selected:
            path_text = f"{theme.list_selected}{path_text}{theme.reset}"
        if is_cursor:
            path_text = f"{theme.reverse}{path_text}{theme.reset}"
        lines.append(f"{marker}{size_text}  {path_text}")
    return lines


def build_frame(context: RenderContext) -> list[str]:
    """Compose every row of one frame, each clipped to the terminal width."""
    theme = context.theme
    usable_width = max(1, context.width - 1)
    help_width = min(HELP_PANEL_WIDTH, max(0, usable_width - MIN_BODY_WIDTH))
    body_width = usable_width - help_width
    content_height = max(1, context.height - STATUS_ROWS)
    list_height = max(3, content_height - INFO_BOX_ROWS - 2 * FIELD_BOX_ROWS)

    info_lines = [
        f"{theme.info_text}Total space: {format_size(context.total_size)} "
        f"({len(context.entries)} entries, {context.total_files} files){theme.reset}",
        f"{theme.info_text}Total selected space: {format_size(context.selected_size)} "
        f"({context.selected_percent:.2f}%){theme.reset}",
    ]
    left: list[str] = []
    left += _box("Infos", info_lines, body_width, INFO_BOX_ROWS, theme.border, theme)
    for field, command in (
        (context.path_field, Command.EDIT_PATH),
        (context.filter_field, Command.EDIT_FILTER),
    ):
        style = theme.field_focused if field.focused else theme.field_unfocused
        left += _box(
            _field_title(field, command, context),
            [_field_body(field, body_width - 2, theme)],
            body_width,
            FIELD_BOX_ROWS,
            style,
            theme,
        )
    list_title = f"Content from {clip_left(str(context.root_path), max(8, body_width - 20))}"
    left += _box(
        list_title,
        _list_body(context, body_width - 2, list_height - 2),
        body_width,
        list_height,
        theme.border,
        theme,
    )

    right = _box("Help", help_panel_lines(context.bindings, theme), help_width, content_height, theme.border, theme)

    rows: list[str] = []
    for row in range(content_height):
        left_text = left[row] if row < len(left) else ""
        right_text = right[row] if row < len(right) else ""
        rows.append(clip_ansi_line(fit_ansi_line(left_text, body_width) + right_text, usable_width))

    status_style = theme.status_error if context.status_is_error else ""
    status = build_status_line(
        context.status_message or f"wiper {context.root_path}",
        context.width,
        f"{len(context.selected)}/{len(context.entries)} selected",
    )
    rows.append(f"{theme.reverse}{status_style}{status}{theme.reset}")
    return rows[: context.height]


def render_frame(context: RenderContext) -> None:
    """Clear the screen and draw one composed frame."""
    out = "\033[H\033[J" + "\r\n".join(build_frame(context))
    os.write(sys.stdout.fileno(), out.encode("utf-8", errors="replace"))


__all__ = [
    "CURSOR_MARKER",
    "HELP_PANEL_WIDTH",
    "RenderContext",
    "build_frame",
    "build_status_line",
    "context_from_state",
    "format_size",
    "list_rows",
    "render_frame",
]
