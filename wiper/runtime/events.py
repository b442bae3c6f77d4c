"""Background producers feeding the render loop.

Two daemon threads share one queue: the input thread polls the tty with a
bounded timeout and posts decoded chords, the tick thread posts a tick every
period. Producers only ever send immutable event values; the consumer owns
all application state.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Queue

from ..debug import get_logger
from ..input.keys import KeyChord, KeyEvent
from ..input.reader import read_key as default_read_key

logger = get_logger("events")

DEFAULT_POLL_MS = 100


@dataclass(frozen=True)
class InputEvent:
    key: KeyEvent


@dataclass(frozen=True)
class TickEvent:
    count: int


@dataclass(frozen=True)
class InputClosedEvent:
    """Terminal input failed; no further key events will arrive."""

    reason: str


Event = InputEvent | TickEvent | InputClosedEvent


class EventSource:
    """Merge terminal input and periodic ticks into one blocking stream."""

    def __init__(
        self,
        stdin_fd: int,
        tick_seconds: float,
        *,
        poll_ms: int = DEFAULT_POLL_MS,
        read_key: Callable[..., KeyChord | None] = default_read_key,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.tick_seconds = tick_seconds
        self.poll_ms = poll_ms
        self._read_key = read_key
        self._queue: Queue[Event] = Queue()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def _input_worker(self) -> None:
        while not self._stop.is_set():
            try:
                chord = self._read_key(self.stdin_fd, timeout_ms=self.poll_ms)
            except (OSError, EOFError) as exc:
                logger.error("terminal input failed: %s", exc)
                self._queue.put(InputClosedEvent(reason=str(exc)))
                return
            if chord is None:
                continue
            self._queue.put(InputEvent(KeyEvent(chord)))

    def _tick_worker(self) -> None:
        count = 0
        while not self._stop.wait(self.tick_seconds):
            count += 1
            self._queue.put(TickEvent(count))

    def start(self) -> EventSource:
        if self._threads:
            return self
        self._stop.clear()
        for name, target in (
            ("wiper-input", self._input_worker),
            ("wiper-tick", self._tick_worker),
        ):
            worker = threading.Thread(target=target, name=name, daemon=True)
            worker.start()
            self._threads.append(worker)
        return self

    def next(self, timeout: float | None = None) -> Event:
        """Block until the next event arrives (``queue.Empty`` on timeout)."""
        return self._queue.get(timeout=timeout)

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def close(self, join_timeout: float = 1.0) -> None:
        """Signal stop and join producers; the poll timeout bounds the wait."""
        self._stop.set()
        for worker in self._threads:
            worker.join(timeout=join_timeout)
            if worker.is_alive():
                logger.warning("producer thread %s did not stop in %.1fs", worker.name, join_timeout)
        self._threads.clear()

    def __enter__(self) -> EventSource:
        return self.start()

    def __exit__(self, *_exc_info) -> None:
        self.close()


__all__ = [
    "DEFAULT_POLL_MS",
    "Event",
    "EventSource",
    "InputClosedEvent",
    "InputEvent",
    "TickEvent",
]
