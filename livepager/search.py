"""Regex search over formatted display lines.

Search moves through Idle -> AwaitingQuery -> Active. Match positions are
indices into ``formatted_lines``, so they are recomputed on every rewrap.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, TextIO

from .render import move_to
from .types import SearchMode

if TYPE_CHECKING:
    from .state import PagerState

logger = logging.getLogger(__name__)

INVALID_REGEX_MESSAGE = "Invalid regular expression. Press Enter"


def compile_query(query: str) -> re.Pattern[str] | None:
    """Compile ``query``; ``None`` signals an invalid expression."""
    try:
        return re.compile(query)
    except re.error as exc:
        logger.warning("invalid search expression %r: %s", query, exc)
        return None


def find_matches(lines: list[str], pattern: re.Pattern[str]) -> list[int]:
    """Return ascending indices of lines containing at least one match."""
    return [idx for idx, line in enumerate(lines) if pattern.search(line) is not None]


def fetch_input(
    out: TextIO,
    read_key: Callable[[], str],
    mode: SearchMode,
    rows: int,
) -> str:
    """Prompt for a query on the bottom row and return it.

    Enter accepts, Esc or Ctrl-C cancel (returning ``""``). The caller must
    hold the input lock so the reader thread does not consume these keys.
    """
    marker = "?" if mode is SearchMode.REVERSE else "/"
    query = ""

    def redraw() -> None:
        out.write(f"{move_to(rows)}\r\x1b[2K{marker}{query}")
        out.flush()

    redraw()
    while True:
        key = read_key()
        if key == "ENTER":
            return query
        if key in {"ESC", "CTRL_C"}:
            return ""
        if key == "BACKSPACE":
            query = query[:-1]
        elif len(key) == 1 and key.isprintable():
            query += key
        else:
            continue
        redraw()


def next_match(state: PagerState) -> None:
    """Scroll to the first match at or after the upper mark, from the cursor on."""
    search = state.search
    if search is None or not search.match_index:
        return
    start = min(search.cursor, len(search.match_index) - 1)
    for pos in range(start, len(search.match_index)):
        line = search.match_index[pos]
        if line >= state.upper_mark:
            search.cursor = pos
            state.upper_mark = line
            return
    search.cursor = len(search.match_index) - 1


def advance_match(state: PagerState) -> None:
    """Handle a next-match request.

    The cursor only advances while the view still has room to scroll.
    """
    search = state.search
    if search is None:
        return
    if (
        search.cursor < max(0, len(search.match_index) - 1)
        and state.upper_mark + state.rows < state.num_lines()
    ):
        search.cursor += 1
    next_match(state)


def retreat_match(state: PagerState) -> None:
    """Handle a previous-match request.

    Scrolls only when the target is above the current upper mark.
    """
    search = state.search
    if search is None or not search.match_index:
        return
    search.cursor = max(0, search.cursor - 1)
    target = search.match_index[search.cursor]
    if target < state.upper_mark:
        state.upper_mark = target


def apply_query(state: PagerState, query: str) -> None:
    """Install ``query`` as the active search, or report why it cannot be."""
    search = state.search
    if search is None or not query:
        return
    pattern = compile_query(query)
    if pattern is None:
        search.pattern = None
        search.match_index = []
        search.cursor = 0
        state.message = INVALID_REGEX_MESSAGE
        return
    search.pattern = pattern
    search.cursor = 0
    state.format_lines()
    next_match(state)


__all__ = [
    "INVALID_REGEX_MESSAGE",
    "advance_match",
    "apply_query",
    "compile_query",
    "fetch_input",
    "find_matches",
    "next_match",
    "retreat_match",
]
