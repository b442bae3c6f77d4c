"""Mutable application state owned by the single consumer thread."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from ..list_model import SelectableList
from ..scan import Entry
from ..text_field import FocusableTextField


class FocusMode(enum.Enum):
    """Which text field, if any, currently consumes keystrokes."""

    NONE = "none"
    PATH = "path"
    FILTER = "filter"


@dataclass
class AppState:
    root_path: Path
    filter_text: str
    entries: SelectableList[Entry]
    path_field: FocusableTextField
    filter_field: FocusableTextField
    focus: FocusMode = FocusMode.NONE
    dirty: bool = True
    list_start: int = 0
    status_message: str = ""
    status_is_error: bool = False
    status_message_until: float = 0.0
    tick_count: int = 0
    scan_count: int = 0

    def field_for(self, focus: FocusMode) -> FocusableTextField | None:
        if focus is FocusMode.PATH:
            return self.path_field
        if focus is FocusMode.FILTER:
            return self.filter_field
        return None

    @property
    def focused_field(self) -> FocusableTextField | None:
        return self.field_for(self.focus)

    def total_size(self) -> int:
        return sum(entry.size for entry in self.entries.items)

    def total_file_count(self) -> int:
        return sum(entry.file_count for entry in self.entries.items)

    def selected_size(self) -> int:
        return sum(entry.size for entry in self.entries.selected_items())

    def selected_percent(self) -> float:
        total = self.total_size()
        if total <= 0:
            return 0.0
        return self.selected_size() / total * 100.0


__all__ = ["AppState", "FocusMode"]
