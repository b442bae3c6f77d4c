"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyChord`` values.
Handles ESC-sequence timing, control-key combos, and CSI navigation keys.
"""

from __future__ import annotations

import os
import select

from .keys import KeyChord, Modifiers

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_SINGLE_BYTE_KEYS = {
    b"\t": KeyChord("TAB"),
    b"\x08": KeyChord("BACKSPACE"),
    b"\x7f": KeyChord("BACKSPACE"),
    b"\r": KeyChord("ENTER"),
    b"\n": KeyChord("ENTER"),
    b"\x00": KeyChord(" ", Modifiers.CTRL),
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "2": "INSERT",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

# xterm modifier parameter: 1 + (shift=1, alt=2, ctrl=4)
_XTERM_MODIFIERS = {
    2: Modifiers.SHIFT,
    3: Modifiers.ALT,
    4: Modifiers.SHIFT | Modifiers.ALT,
    5: Modifiers.CTRL,
    6: Modifiers.SHIFT | Modifiers.CTRL,
    7: Modifiers.ALT | Modifiers.CTRL,
    8: Modifiers.SHIFT | Modifiers.ALT | Modifiers.CTRL,
    9: Modifiers.ALT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _decode_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose lead byte was already read."""
    first = lead[0]
    if first >= 0xF0:
        needed = 3
    elif first >= 0xE0:
        needed = 2
    elif first >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = lead
    for _ in range(needed):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _decode_csi(fd: int) -> KeyChord:
    """Decode the remainder of ``ESC [`` into a chord (``ESC`` if unknown)."""
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyChord("ESC")
        if part.isalpha() or part == b"~":
            final = part
            break
        params += part
        if len(params) > 16:
            return KeyChord("ESC")

    fields = params.decode("ascii", errors="replace").split(";")
    modifiers = Modifiers.NONE
    if len(fields) >= 2:
        try:
            modifiers = _XTERM_MODIFIERS.get(int(fields[1]), Modifiers.NONE)
        except ValueError:
            modifiers = Modifiers.NONE

    if final == b"~":
        code = _CSI_TILDE_KEYS.get(fields[0])
        return KeyChord(code, modifiers) if code else KeyChord("ESC")
    if final == b"Z":
        return KeyChord("TAB", Modifiers.SHIFT)
    code = _CSI_FINAL_KEYS.get(final)
    return KeyChord(code, modifiers) if code else KeyChord("ESC")


def read_key(fd: int, timeout_ms: int | None = None) -> KeyChord | None:
    """Read one chord from ``fd``; ``None`` when the poll timeout elapses.

    Raises ``EOFError`` once the input stream is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("terminal input closed")

    special = _SINGLE_BYTE_KEYS.get(ch)
    if special is not None:
        return special
    if b"\x01" <= ch <= b"\x1a":
        # Ctrl+A .. Ctrl+Z arrive as 0x01 .. 0x1a.
        return KeyChord(chr(ch[0] + 0x60), Modifiers.CTRL)

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return KeyChord(_decode_utf8_tail(fd, ch))
        return KeyChord(ch.decode("utf-8", errors="replace"))

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyChord("ESC")
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        seq2 = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq2 is None:
            return KeyChord("ESC")
        code = _CSI_FINAL_KEYS.get(seq2)
        return KeyChord(code) if code else KeyChord("ESC")
    if seq.isalnum():
        return KeyChord(seq.decode("ascii"), Modifiers.ALT)
    _PENDING_BYTES.append(seq)
    return KeyChord("ESC")


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "read_key"]
