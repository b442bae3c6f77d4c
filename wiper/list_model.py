"""Cursor + multi-selection model over a replaceable item sequence."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered items with a wraparound cursor and a set of selected indices.

    The cursor is ``None`` exactly when the list is empty. Selection is scoped
    to one population: ``set_items`` always clears it.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = ()
        self._cursor: int | None = None
        self._selected: set[int] = set()
        self.set_items(items)

    def set_items(self, items: Iterable[T]) -> None:
        self._items = tuple(items)
        self._cursor = 0 if self._items else None
        self._selected.clear()

    def next(self) -> None:
        if self._cursor is None:
            return
        self._cursor = 0 if self._cursor >= len(self._items) - 1 else self._cursor + 1

    def previous(self) -> None:
        if self._cursor is None:
            return
        self._cursor = len(self._items) - 1 if self._cursor <= 0 else self._cursor - 1

    def toggle_at_cursor(self) -> None:
        if self._cursor is None:
            return
        if self._cursor in self._selected:
            self._selected.remove(self._cursor)
        else:
            self._selected.add(self._cursor)

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def selected(self) -> frozenset[int]:
        return frozenset(self._selected)

    def current(self) -> T | None:
        if self._cursor is None:
            return None
        return self._items[self._cursor]

    def selected_items(self) -> list[T]:
        """Snapshot selected items in list order."""
        return [self._items[idx] for idx in sorted(self._selected)]

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["SelectableList"]
