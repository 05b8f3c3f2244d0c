"""Terminal control for a pager session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse-wheel toggles.
Also exposes size queries and key reads on the session's input descriptor.
"""

from __future__ import annotations

import contextlib
import io
import os
import shutil
import termios
import tty
from typing import TextIO

from .errors import TerminalError
from .input import read_key

ENTER_SEQUENCE = "\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
LEAVE_SEQUENCE = "\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one pager session."""

    def __init__(self, stdin_fd: int, stdout_fd: int, out: TextIO | None = None) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.out = out if out is not None else io.TextIOWrapper(
            os.fdopen(os.dup(stdout_fd), "wb", buffering=0),
            encoding="utf-8",
            errors="replace",
            write_through=True,
        )
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"stdin is not a terminal: {exc}") from exc
        self._active = False

    @classmethod
    def open(cls) -> TerminalController:
        """Bind to the controlling terminal, even when stdin is a pipe."""
        try:
            tty_fd = os.open("/dev/tty", os.O_RDWR)
        except OSError as exc:
            raise TerminalError(f"cannot open controlling terminal: {exc}") from exc
        return cls(tty_fd, tty_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with wheel reporting enabled."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"cannot enable raw mode: {exc}") from exc
        self.out.write(ENTER_SEQUENCE)
        self._active = True
        self.out.flush()

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer.

        Safe to call after a partial ``enable_tui_mode``; the saved tty
        attributes are always restored.
        """
        try:
            if self._active:
                self._active = False
                self.out.write(LEAVE_SEQUENCE)
                self.out.flush()
        finally:
            try:
                termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
            except termios.error as exc:
                raise TerminalError(f"cannot restore terminal mode: {exc}") from exc

    def size(self) -> tuple[int, int]:
        """Return ``(cols, rows)`` for the session's terminal."""
        try:
            cols, rows = os.get_terminal_size(self.stdout_fd)
        except OSError:
            fallback = shutil.get_terminal_size((80, 24))
            cols, rows = fallback.columns, fallback.lines
        return max(1, cols), max(1, rows)

    def read_key(self, timeout_ms: int | None = None) -> str:
        return read_key(self.stdin_fd, timeout_ms=timeout_ms)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_SEQUENCE", "LEAVE_SEQUENCE", "TerminalController"]
