"""Producer-thread tests for the merged input/tick event stream."""

from __future__ import annotations

import queue
import threading
import unittest

from wiper.input.keys import KeyEvent, char
from wiper.runtime.events import EventSource, InputClosedEvent, InputEvent, TickEvent


class _ScriptedReader:
    """Fake ``read_key`` that replays chords, then idles until stopped."""

    def __init__(self, chords, error: BaseException | None = None) -> None:
        self._chords = list(chords)
        self._error = error
        self.calls = 0
        self._idle = threading.Event()

    def __call__(self, _fd: int, timeout_ms: int | None = None):
        self.calls += 1
        if self._chords:
            return self._chords.pop(0)
        if self._error is not None:
            raise self._error
        self._idle.wait((timeout_ms or 0) / 1000.0)
        return None


class EventSourceTests(unittest.TestCase):
    def test_input_chords_are_delivered_in_order(self) -> None:
        reader = _ScriptedReader([char("j"), char("q")])
        with EventSource(0, tick_seconds=60.0, poll_ms=5, read_key=reader) as events:
            first = events.next(timeout=2.0)
            second = events.next(timeout=2.0)

        self.assertEqual(first, InputEvent(KeyEvent(char("j"))))
        self.assertEqual(second, InputEvent(KeyEvent(char("q"))))

    def test_ticks_are_counted(self) -> None:
        reader = _ScriptedReader([])
        with EventSource(0, tick_seconds=0.01, poll_ms=5, read_key=reader) as events:
            ticks = [events.next(timeout=2.0) for _ in range(3)]

        self.assertEqual(ticks, [TickEvent(1), TickEvent(2), TickEvent(3)])

    def test_input_error_posts_closed_event(self) -> None:
        reader = _ScriptedReader([], error=OSError(5, "Input/output error"))
        with self.assertLogs("wiper.events", level="ERROR"):
            with EventSource(0, tick_seconds=60.0, poll_ms=5, read_key=reader) as events:
                event = events.next(timeout=2.0)

        self.assertIsInstance(event, InputClosedEvent)
        self.assertIn("Input/output error", event.reason)

    def test_end_of_input_posts_closed_event(self) -> None:
        reader = _ScriptedReader([], error=EOFError("terminal input closed"))
        with self.assertLogs("wiper.events", level="ERROR"):
            with EventSource(0, tick_seconds=60.0, poll_ms=5, read_key=reader) as events:
                event = events.next(timeout=2.0)

        self.assertEqual(event, InputClosedEvent("terminal input closed"))

    def test_close_stops_and_joins_producers(self) -> None:
        events = EventSource(0, tick_seconds=0.01, poll_ms=5, read_key=_ScriptedReader([]))
        events.start()
        threads = list(events._threads)

        events.close()

        self.assertTrue(events.stopped)
        self.assertTrue(all(not worker.is_alive() for worker in threads))
        self.assertEqual(events._threads, [])

    def test_next_times_out_when_nothing_arrives(self) -> None:
        events = EventSource(0, tick_seconds=60.0, poll_ms=5, read_key=_ScriptedReader([]))

        with self.assertRaises(queue.Empty):
            events.next(timeout=0.01)


if __name__ == "__main__":
    unittest.main()
