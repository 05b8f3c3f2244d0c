"""Small enums shared by the state model, events, and input classifiers."""

from __future__ import annotations

from enum import Enum


class LineNumbers(Enum):
    """Line-number display mode.

    ``ALWAYS_ON`` and ``ALWAYS_OFF`` are sticky: negating them (the runtime
    toggle) returns the same value.
    """

    DISABLED = "disabled"
    ENABLED = "enabled"
    ALWAYS_OFF = "always_off"
    ALWAYS_ON = "always_on"

    def __invert__(self) -> LineNumbers:
        if self is LineNumbers.ENABLED:
            return LineNumbers.DISABLED
        if self is LineNumbers.DISABLED:
            return LineNumbers.ENABLED
        return self

    def is_on(self) -> bool:
        return self in (LineNumbers.ENABLED, LineNumbers.ALWAYS_ON)


class ExitStrategy(Enum):
    """What happens when the user quits the pager."""

    # Terminate the whole process after cleanup.
    PROCESS_QUIT = "process_quit"
    # Return control to the host application.
    PAGER_QUIT = "pager_quit"


class SearchMode(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"
    UNKNOWN = "unknown"


__all__ = ["ExitStrategy", "LineNumbers", "SearchMode"]
