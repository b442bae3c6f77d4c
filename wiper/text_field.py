"""Single-line editable text field that only accepts keys while focused.

The field knows nothing about its siblings; which field holds focus is
decided by the application state machine.
"""

from __future__ import annotations

from .input.keys import KeyChord, Modifiers


class FocusableTextField:
    """Line buffer with a caret, a focus flag, and focused/unfocused titles."""

    def __init__(self, text: str = "", focused_title: str = "Focused", unfocused_title: str = "Unfocused") -> None:
        self._text = text
        self._caret = len(text)
        self.focused = False
        self.focused_title = focused_title
        self.unfocused_title = unfocused_title

    @property
    def title(self) -> str:
        return self.focused_title if self.focused else self.unfocused_title

    @property
    def caret(self) -> int:
        return self._caret

    def set_focus(self, focused: bool) -> None:
        self.focused = bool(focused)

    def set_text(self, text: str) -> None:
        """Replace buffer content and move the caret to the end."""
        self._text = text
        self._caret = len(text)

    def committed_text(self) -> str:
        return self._text

    def feed(self, chord: KeyChord) -> bool:
        """Apply one key to the buffer; return ``True`` when it was consumed.

        Unfocused fields ignore every key.
        """
        if not self.focused:
            return False

        text = self._text
        caret = self._caret
        code = chord.code
        is_ctrl = bool(chord.modifiers & Modifiers.CTRL)

        if chord.is_printable:
            self._text = text[:caret] + code + text[caret:]
            self._caret = caret + len(code)
            return True
        if code == "BACKSPACE" or (is_ctrl and code == "h"):
            if caret > 0:
                self._text = text[: caret - 1] + text[caret:]
                self._caret = caret - 1
            return True
        if code == "DELETE" or (is_ctrl and code == "d"):
            if caret < len(text):
                self._text = text[:caret] + text[caret + 1 :]
            return True
        if code == "LEFT" or (is_ctrl and code == "b"):
            self._caret = max(0, caret - 1)
            return True
        if code == "RIGHT" or (is_ctrl and code == "f"):
            self._caret = min(len(text), caret + 1)
            return True
        if code == "HOME" or (is_ctrl and code == "a"):
            self._caret = 0
            return True
        if code == "END" or (is_ctrl and code == "e"):
            self._caret = len(text)
            return True
        if is_ctrl and code == "u":
            self._text = text[caret:]
            self._caret = 0
            return True
        if is_ctrl and code == "k":
            self._text = text[:caret]
            return True
        if is_ctrl and code == "w":
            start = caret
            while start > 0 and text[start - 1] == " ":
                start -= 1
            while start > 0 and text[start - 1] not in " /":
                start -= 1
            self._text = text[:start] + text[caret:]
            self._caret = start
            return True
        return False

    def visible_window(self, width: int) -> tuple[str, int]:
        """Return ``(visible_text, caret_column)`` for a viewport ``width`` wide.

        The window scrolls horizontally so the caret stays visible.
        """
        width = max(1, width)
        text = self._text
        caret = self._caret
        if len(text) < width:
            return text, caret
        start = max(0, caret - width + 1)
        return text[start : start + width], caret - start


__all__ = ["FocusableTextField"]
