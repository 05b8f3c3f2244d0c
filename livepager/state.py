"""Mutable pager state shared between the host handle and the session loop.

Only the event dispatcher mutates a ``PagerState`` once a session exists.
Feature-gated fields live in optional sub-structs selected at construction.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from .errors import PagerStateError
from .input import DefaultInputClassifier, InputClassifier, InputContext
from .text import format_text
from .types import ExitStrategy, LineNumbers, SearchMode

DEFAULT_PROMPT = "livepager"


@dataclass(frozen=True)
class PagerFeatures:
    """Optional subsystems enabled for one pager."""

    search: bool = True
    static_output: bool = False


@dataclass
class SearchState:
    pattern: re.Pattern[str] | None = None
    mode: SearchMode = SearchMode.UNKNOWN
    match_index: list[int] = field(default_factory=list)
    cursor: int = 0


@dataclass
class StaticOptions:
    run_no_overflow: bool = False


@dataclass
class PagerState:
    raw_lines: str = ""
    formatted_lines: list[str] = field(default_factory=list)
    upper_mark: int = 0
    # Keep a 1x1 area until the terminal size is known.
    rows: int = 1
    cols: int = 1
    line_numbers: LineNumbers = LineNumbers.DISABLED
    prompt: str = DEFAULT_PROMPT
    message: str | None = None
    exit_strategy: ExitStrategy = ExitStrategy.PROCESS_QUIT
    input_classifier: InputClassifier = field(default_factory=DefaultInputClassifier)
    exit_callbacks: list[Callable[[], None]] = field(default_factory=list)
    running: bool = False
    search: SearchState | None = None
    static: StaticOptions | None = None

    @classmethod
    def with_features(cls, features: PagerFeatures) -> PagerState:
        """Build default state with the sub-structs ``features`` asks for."""
        return cls(
            search=SearchState() if features.search else None,
            static=StaticOptions() if features.static_output else None,
        )

    def num_lines(self) -> int:
        return len(self.formatted_lines)

    def prepare(self, cols: int, rows: int) -> None:
        """Record terminal size and wrap any text received before start.

        Raises ``PagerStateError`` when called on a running session.
        """
        if self.running:
            raise PagerStateError("prepare() called after the pager started running")
        self.cols = max(1, cols)
        self.rows = max(1, rows)
        self.running = True
        self.format_lines()

    def format_lines(self) -> None:
        """Rewrap raw text and refresh search hits against the new lines."""
        if not self.running:
            return
        self.formatted_lines = format_text(self.raw_lines, self.cols, self.line_numbers.is_on())
        if self.search is not None and self.search.pattern is not None:
            # Local import: search helpers depend on this module's types.
            from .search import find_matches

            self.search.match_index = find_matches(self.formatted_lines, self.search.pattern)
            if self.search.cursor >= len(self.search.match_index):
                self.search.cursor = max(0, len(self.search.match_index) - 1)

    def append_str(self, text: str) -> None:
        self.raw_lines += text
        self.format_lines()

    def bottom_bar_text(self) -> str:
        """Return what the prompt row shows: a pending message wins."""
        return self.message if self.message is not None else self.prompt

    def input_context(self) -> InputContext:
        """Snapshot the fields input classifiers may read from other threads."""
        return InputContext(
            upper_mark=self.upper_mark,
            rows=self.rows,
            line_numbers=self.line_numbers,
            search_mode=self.search.mode if self.search is not None else SearchMode.UNKNOWN,
            has_message=self.message is not None,
        )

    def run_exit_callbacks(self) -> None:
        callbacks = list(self.exit_callbacks)
        self.exit_callbacks.clear()
        for callback in callbacks:
            callback()


__all__ = [
    "DEFAULT_PROMPT",
    "PagerFeatures",
    "PagerState",
    "SearchState",
    "StaticOptions",
]
