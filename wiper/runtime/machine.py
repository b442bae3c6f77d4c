"""Focus-routing state machine over the application state.

Modes are Normal (no field focused), EditingPath, and EditingFilter. While a
field is focused it captures every key except the chord bound to
``UNFOCUS_FIELD``, so typing a path can never trigger a global command.
"""

from __future__ import annotations

import enum
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from ..debug import get_logger
from ..errors import InvalidFilterError
from ..input.key_registry import Command, KeyBindingRegistry
from ..input.keys import KeyEvent, KeyKind
from ..list_model import SelectableList
from ..scan import DeletionFailure, Entry, Predicate, build_predicate, delete_entries, scan
from ..text_field import FocusableTextField
from .events import Event, InputClosedEvent, InputEvent, TickEvent
from .state import AppState, FocusMode

logger = get_logger("machine")

STATUS_MESSAGE_SECONDS = 4.0

Scanner = Callable[..., list[Entry]]
Deleter = Callable[[Iterable[Entry]], list[DeletionFailure]]


class AppReturn(enum.Enum):
    CONTINUE = "continue"
    EXIT = "exit"


def build_state(root_path: Path, filter_text: str, *, exact: bool = False) -> AppState:
    """Create the initial state with both fields unfocused."""
    filter_label = "Filter name" if exact else "Filter regex"
    return AppState(
        root_path=root_path,
        filter_text=filter_text,
        entries=SelectableList(),
        path_field=FocusableTextField(
            str(root_path),
            focused_title="Path (editing)",
            unfocused_title="Path",
        ),
        filter_field=FocusableTextField(
            filter_text,
            focused_title=f"{filter_label} (editing)",
            unfocused_title=filter_label,
        ),
    )


class Application:
    """Routes one event at a time into state mutations.

    ``scanner`` and ``deleter`` default to the real filesystem operations and
    are injectable for tests.
    """

    def __init__(
        self,
        state: AppState,
        registry: KeyBindingRegistry,
        *,
        predicate: Predicate,
        prune: bool = True,
        exact: bool = False,
        match_full_path: bool = False,
        scanner: Scanner = scan,
        deleter: Deleter = delete_entries,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.registry = registry
        self.predicate = predicate
        self.prune = prune
        self.exact = exact
        self.match_full_path = match_full_path
        self._scanner = scanner
        self._deleter = deleter
        self._clock = clock
        self._command_handlers: dict[Command, Callable[[], AppReturn]] = {
            Command.QUIT: self._quit,
            Command.TOGGLE_CURRENT: self._toggle_current,
            Command.DELETE_SELECTED: self._delete_selected,
            Command.UP: self._move_up,
            Command.DOWN: self._move_down,
            Command.EDIT_PATH: self._edit_path,
            Command.EDIT_FILTER: self._edit_filter,
            Command.UNFOCUS_FIELD: self._ignore_unfocus,
        }
        missing = set(Command) - set(self._command_handlers)
        if missing:
            raise RuntimeError(f"commands without handlers: {sorted(command.value for command in missing)}")

    @classmethod
    def create(
        cls,
        root_path: Path,
        filter_text: str,
        registry: KeyBindingRegistry,
        *,
        prune: bool = True,
        exact: bool = False,
        match_full_path: bool = False,
        scanner: Scanner = scan,
        deleter: Deleter = delete_entries,
        clock: Callable[[], float] = time.monotonic,
    ) -> Application:
        """Compile the filter (``InvalidFilterError`` on bad regex) and run the initial scan."""
        predicate = build_predicate(filter_text, exact=exact, match_full_path=match_full_path)
        app = cls(
            build_state(root_path, filter_text, exact=exact),
            registry,
            predicate=predicate,
            prune=prune,
            exact=exact,
            match_full_path=match_full_path,
            scanner=scanner,
            deleter=deleter,
            clock=clock,
        )
        app.rescan()
        return app

    # Event routing

    def handle_event(self, event: Event) -> AppReturn:
        if isinstance(event, TickEvent):
            self.tick()
            return AppReturn.CONTINUE
        if isinstance(event, InputEvent):
            return self.handle_key(event.key)
        if isinstance(event, InputClosedEvent):
            logger.error("input closed: %s", event.reason)
            return AppReturn.EXIT
        raise TypeError(f"unsupported event: {event!r}")

    def handle_key(self, key: KeyEvent) -> AppReturn:
        if key.kind is not KeyKind.PRESS:
            logger.debug("ignoring %s key event for %s", key.kind.value, key.chord)
            return AppReturn.CONTINUE

        command = self.registry.resolve(key.chord)
        field = self.state.focused_field
        if field is not None:
            if command is Command.UNFOCUS_FIELD:
                self.commit_focused_field()
            elif field.feed(key.chord):
                self.state.dirty = True
            return AppReturn.CONTINUE

        if command is None:
            logger.debug("no action associated to %s", key.chord)
            return AppReturn.CONTINUE
        logger.debug("run action %s", command.value)
        return self._command_handlers[command]()

    def tick(self) -> None:
        self.state.tick_count += 1
        if self.state.status_message and self._clock() >= self.state.status_message_until:
            self.clear_status()

    # Command handlers

    def _quit(self) -> AppReturn:
        return AppReturn.EXIT

    def _toggle_current(self) -> AppReturn:
        self.state.entries.toggle_at_cursor()
        self.state.dirty = True
        return AppReturn.CONTINUE

    def _delete_selected(self) -> AppReturn:
        self.delete_selected()
        return AppReturn.CONTINUE

    def _move_up(self) -> AppReturn:
        self.state.entries.previous()
        self.state.dirty = True
        return AppReturn.CONTINUE

    def _move_down(self) -> AppReturn:
        self.state.entries.next()
        self.state.dirty = True
        return AppReturn.CONTINUE

    def _edit_path(self) -> AppReturn:
        self.focus(FocusMode.PATH)
        return AppReturn.CONTINUE

    def _edit_filter(self) -> AppReturn:
        self.focus(FocusMode.FILTER)
        return AppReturn.CONTINUE

    def _ignore_unfocus(self) -> AppReturn:
        # Only meaningful while a field is focused.
        return AppReturn.CONTINUE

    # Operations

    def focus(self, mode: FocusMode) -> None:
        """Switch focus so that at most one field is focused."""
        for candidate in (FocusMode.PATH, FocusMode.FILTER):
            field = self.state.field_for(candidate)
            if field is not None:
                field.set_focus(candidate is mode)
        self.state.focus = mode
        self.state.dirty = True

    def commit_focused_field(self) -> None:
        """Read the focused field back into state, unfocus it, and rescan."""
        mode = self.state.focus
        field = self.state.focused_field
        if field is None:
            return
        text = field.committed_text()
        self.focus(FocusMode.NONE)

        if mode is FocusMode.PATH:
            self.state.root_path = Path(text.strip() or ".").expanduser()
            field.set_text(str(self.state.root_path))
            logger.info("root path set to %s", self.state.root_path)
            self.rescan()
            if not self.state.root_path.exists():
                self.set_status(f"Path not found: {self.state.root_path}", error=True)
            return

        try:
            predicate = build_predicate(text, exact=self.exact, match_full_path=self.match_full_path)
        except InvalidFilterError as exc:
            logger.warning("keeping previous filter: %s", exc)
            field.set_text(self.state.filter_text)
            self.set_status(str(exc), error=True)
            return
        self.state.filter_text = text
        self.predicate = predicate
        logger.info("filter set to %r", text)
        self.rescan()

    def rescan(self) -> None:
        """Replace the entry list with a fresh scan; selection is cleared."""
        entries = self._scanner(self.state.root_path, self.predicate, prune=self.prune)
        self.state.entries.set_items(entries)
        self.state.list_start = 0
        self.state.scan_count += 1
        self.state.dirty = True

    def delete_selected(self) -> list[DeletionFailure]:
        """Delete selected entries best-effort, then always rescan."""
        targets = self.state.entries.selected_items()
        if not targets:
            self.rescan()
            self.set_status("Nothing selected")
            return []
        logger.info("deleting %d selected entries", len(targets))
        failures = self._deleter(targets)
        self.rescan()
        deleted = len(targets) - len(failures)
        if failures:
            first = failures[0]
            self.set_status(
                f"Deleted {deleted} of {len(targets)}; failed {first.entry.path}: {first.error.strerror or first.error}",
                error=True,
            )
        else:
            self.set_status(f"Deleted {deleted} entr{'y' if deleted == 1 else 'ies'}")
        return failures

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.state.status_message = message
        self.state.status_is_error = error
        self.state.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def clear_status(self) -> None:
        self.state.status_message = ""
        self.state.status_is_error = False
        self.state.status_message_until = 0.0
        self.state.dirty = True


__all__ = ["AppReturn", "Application", "STATUS_MESSAGE_SECONDS", "build_state"]
