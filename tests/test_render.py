"""Frame composition tests.

Frames are checked after stripping ANSI codes so assertions describe what
the user sees rather than palette details.
"""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from wiper.ansi import ANSI_ESCAPE_RE, display_width
from wiper.input.key_registry import BROWSE_COMMANDS, READ_ONLY_COMMANDS, Command, KeyBindingRegistry
from wiper.input.keys import KeyEvent, char
from wiper.render import (
    CURSOR_MARKER,
    build_frame,
    build_status_line,
    context_from_state,
    format_size,
    list_rows,
    render_frame,
)
from wiper.render.help import chord_hint, help_panel_lines
from wiper.runtime.events import InputEvent
from wiper.runtime.loop import MIN_COLUMNS, MIN_LINES
from wiper.runtime.machine import Application
from wiper.scan import DEFAULT_FILTER, Entry
from wiper.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _plain(lines: list[str]) -> list[str]:
    return [ANSI_ESCAPE_RE.sub("", line) for line in lines]


def _make_app(registry: KeyBindingRegistry | None = None) -> Application:
    entries = [
        Entry(Path("/r/web/node_modules"), 3_000_000, 12),
        Entry(Path("/r/api/node_modules"), 1_000_000, 4),
    ]
    return Application.create(
        Path("/r"),
        DEFAULT_FILTER,
        registry or KeyBindingRegistry(BROWSE_COMMANDS),
        scanner=lambda *_args, **_kwargs: list(entries),
        deleter=mock.Mock(return_value=[]),
    )


class RenderFrameTests(unittest.TestCase):
    def _frame(self, app: Application, width: int = 100, height: int = 24, theme=PLAIN_THEME) -> list[str]:
        context = context_from_state(app.state, app.registry, width, height, theme)
        return build_frame(context)

    def test_frame_has_exact_height_and_fits_width(self) -> None:
        for theme in (PLAIN_THEME, DEFAULT_THEME):
            with self.subTest(theme=theme.name):
                lines = self._frame(_make_app(), width=80, height=20, theme=theme)

                self.assertEqual(len(lines), 20)
                self.assertTrue(all(display_width(line) <= 79 for line in lines))

    def test_infos_report_totals_and_selection(self) -> None:
        app = _make_app()
        app.handle_event(InputEvent(KeyEvent(char("j"))))
        app.state.entries.toggle_at_cursor()

        text = "\n".join(_plain(self._frame(app)))

        self.assertIn("Total space: 4.00MB (2 entries, 16 files)", text)
        self.assertIn("Total selected space: 1.00MB (25.00%)", text)

    def test_entry_list_marks_cursor_and_shows_relative_paths(self) -> None:
        lines = _plain(self._frame(_make_app()))

        cursor_rows = [line for line in lines if CURSOR_MARKER + "    3.00MB  web/node_modules" in line]
        self.assertEqual(len(cursor_rows), 1)
        self.assertTrue(any("    1.00MB  api/node_modules" in line for line in lines))

    def test_empty_list_message(self) -> None:
        app = Application.create(
            Path("/r"),
            DEFAULT_FILTER,
            KeyBindingRegistry(BROWSE_COMMANDS),
            scanner=lambda *_args, **_kwargs: [],
        )

        text = "\n".join(_plain(self._frame(app)))

        self.assertIn("No entries matching the filter", text)
        self.assertIn("Total space: 0.00MB (0 entries, 0 files)", text)
        self.assertIn("(0.00%)", text)

    def test_fields_show_titles_and_hints(self) -> None:
        app = _make_app()
        text = "\n".join(_plain(self._frame(app)))
        self.assertIn("Path [p]", text)
        self.assertIn("Filter regex [f]", text)
        self.assertIn(DEFAULT_FILTER, text)

        app.handle_event(InputEvent(KeyEvent(char("f"))))
        text = "\n".join(_plain(self._frame(app)))
        self.assertIn("Filter regex (editing) [Esc/Enter to apply]", text)

    def test_help_panel_lists_every_bound_chord(self) -> None:
        registry = KeyBindingRegistry(BROWSE_COMMANDS)
        lines = _plain(help_panel_lines(registry.bindings, PLAIN_THEME))

        chord_count = sum(len(chords) for _command, chords in registry.bindings)
        self.assertEqual(len(lines), chord_count)
        self.assertTrue(lines[0].startswith("ctrl+c"))
        self.assertIn("Quit", lines[0])
        self.assertTrue(any(line.startswith("Space") and "Toggle current" in line for line in lines))
        for key, label in (("q", "Quit"), ("k", "Up"), ("j", "Down"), ("Enter", "Apply field")):
            row = next(line for line in lines if line.split()[0] == key)
            self.assertIn(label, row)

        text = "\n".join(_plain(self._frame(_make_app())))
        self.assertIn("Delete selected", text)

    def test_read_only_help_omits_deletion(self) -> None:
        app = _make_app(KeyBindingRegistry(READ_ONLY_COMMANDS))

        text = "\n".join(_plain(self._frame(app)))

        self.assertNotIn("Delete selected", text)
        self.assertNotIn("Toggle current", text)

    def test_status_message_is_shown_on_last_row(self) -> None:
        app = _make_app()
        app.set_status("Deleted 2 entries")

        lines = _plain(self._frame(app))

        self.assertTrue(lines[-1].startswith("Deleted 2 entries"))
        self.assertTrue(lines[-1].rstrip().endswith("0/2 selected"))

    def test_minimum_terminal_keeps_help_panel(self) -> None:
        lines = _plain(self._frame(_make_app(), width=MIN_COLUMNS, height=MIN_LINES))

        self.assertEqual(len(lines), MIN_LINES)
        self.assertTrue(all(display_width(line) <= MIN_COLUMNS - 1 for line in lines))
        self.assertIn(" Help ", lines[0])
        self.assertTrue(any("Delete selected" in line for line in lines))

    def test_render_frame_writes_one_clear_and_frame(self) -> None:
        app = _make_app()
        context = context_from_state(app.state, app.registry, 80, 20, PLAIN_THEME)

        with mock.patch("wiper.render.os.write") as write_mock:
            render_frame(context)

        payload = write_mock.call_args.args[1].decode("utf-8")
        self.assertTrue(payload.startswith("\033[H\033[J"))
        self.assertEqual(payload.count("\r\n"), 19)


class RenderHelperTests(unittest.TestCase):
    def test_format_size_uses_decimal_megabytes(self) -> None:
        self.assertEqual(format_size(0), "0.00MB")
        self.assertEqual(format_size(1_234_567), "1.23MB")

    def test_list_rows_matches_layout(self) -> None:
        self.assertEqual(list_rows(24), 11)
        self.assertEqual(list_rows(14), 1)

    def test_status_line_right_aligns_suffix(self) -> None:
        line = build_status_line("left", 20, "right")

        self.assertEqual(len(line), 19)
        self.assertTrue(line.startswith("left"))
        self.assertTrue(line.endswith("right"))

    def test_chord_hint_joins_chords(self) -> None:
        registry = KeyBindingRegistry(BROWSE_COMMANDS)

        self.assertEqual(chord_hint(registry.chords_for(Command.UNFOCUS_FIELD)), "Esc/Enter")


if __name__ == "__main__":
    unittest.main()
