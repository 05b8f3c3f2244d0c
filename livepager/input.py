"""Terminal key decoding and the default key-to-intent classifier.

``read_key`` turns raw stdin bytes into normalized key tokens, handling
ESC-sequence timing and SGR mouse wheel reports. Classifiers map those tokens
to ``InputEvent`` intents using a read-only ``InputContext`` snapshot.
"""

from __future__ import annotations

import os
import select
import sys
from dataclasses import dataclass
from typing import Protocol

from .events import (
    Exit,
    InputEvent,
    NextMatch,
    PrevMatch,
    RestorePrompt,
    Search,
    UpdateLineNumber,
    UpdateUpperMark,
)
from .types import LineNumbers, SearchMode

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x0c": "CTRL_L",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_TILDE_KEYS = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Collect continuation bytes for a multi-byte UTF-8 character."""
    first = lead[0]
    if first >= 0xF0:
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = lead
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_mouse(fd: int) -> str:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    try:
        btn = int(b"".join(payload).decode("ascii").split(";")[0])
    except ValueError:
        return "ESC"
    if btn & 0b0100_0000:
        return "MOUSE_WHEEL_UP" if btn & 0b11 == 0 else "MOUSE_WHEEL_DOWN"
    return "MOUSE"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` means nothing arrived in time."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    if seq == b"H":
        return "HOME"
    if seq == b"F":
        return "END"
    if seq == b"<":
        return _read_mouse(fd)
    if seq in _TILDE_KEYS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _TILDE_KEYS[seq]
    return "ESC"


@dataclass(frozen=True)
class InputContext:
    """Read-only view of pager state handed to input classifiers."""

    upper_mark: int
    rows: int
    line_numbers: LineNumbers
    search_mode: SearchMode = SearchMode.UNKNOWN
    has_message: bool = False


class InputClassifier(Protocol):
    def classify(self, key: str, context: InputContext) -> InputEvent | None:
        """Map one key token to an intent, or ``None`` to ignore it."""


class DefaultInputClassifier:
    """less-like key bindings."""

    WHEEL_LINES = 5

    def classify(self, key: str, context: InputContext) -> InputEvent | None:
        mark = context.upper_mark
        page = max(1, context.rows - 1)
        half = max(1, page // 2)

        if key in {"q", "CTRL_C"}:
            return Exit()
        if key == "ENTER" and context.has_message:
            return RestorePrompt()
        if key in {"DOWN", "j", "ENTER"}:
            return UpdateUpperMark(mark + 1)
        if key in {"UP", "k"}:
            return UpdateUpperMark(max(0, mark - 1))
        if key in {"CTRL_D", "d"}:
            return UpdateUpperMark(mark + half)
        if key in {"CTRL_U", "u"}:
            return UpdateUpperMark(max(0, mark - half))
        if key in {"PAGE_DOWN", " "}:
            return UpdateUpperMark(mark + page)
        if key == "PAGE_UP":
            return UpdateUpperMark(max(0, mark - page))
        if key == "MOUSE_WHEEL_DOWN":
            return UpdateUpperMark(mark + self.WHEEL_LINES)
        if key == "MOUSE_WHEEL_UP":
            return UpdateUpperMark(max(0, mark - self.WHEEL_LINES))
        if key in {"g", "HOME"}:
            return UpdateUpperMark(0)
        if key in {"G", "END"}:
            # Clamped to the last full page on the next draw.
            return UpdateUpperMark(sys.maxsize)
        if key == "CTRL_L":
            return UpdateLineNumber(~context.line_numbers)
        if key == "/":
            return Search(SearchMode.FORWARD)
        if key == "?":
            return Search(SearchMode.REVERSE)
        reverse = context.search_mode is SearchMode.REVERSE
        if key == "n":
            return PrevMatch() if reverse else NextMatch()
        if key in {"p", "N"}:
            return NextMatch() if reverse else PrevMatch()
        return None


__all__ = [
    "DefaultInputClassifier",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputClassifier",
    "InputContext",
    "read_key",
]
