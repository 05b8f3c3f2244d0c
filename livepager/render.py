"""Scroll clamping and drawing of the visible window.

``write_lines`` is the pure window writer: it clamps the upper mark and emits
``\\r``-prefixed rows. ``draw`` adds screen clearing and the prompt bar.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, TextIO

from .text import number_width
from .types import LineNumbers

if TYPE_CHECKING:
    from .state import PagerState

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
REVERSE_VIDEO = "\x1b[7m"
RESET = "\x1b[0m"


def clamp_upper_mark(upper_mark: int, rows: int, num_lines: int) -> int:
    """Clamp so the view is full when possible and never scrolls past the end."""
    if num_lines <= rows:
        return 0
    return min(max(0, upper_mark), num_lines - rows)


def move_to(row: int, col: int = 1) -> str:
    """Return escape sequence placing the cursor at 1-based ``row``/``col``."""
    return f"\x1b[{max(1, row)};{max(1, col)}H"


def highlight(line: str, pattern: re.Pattern[str]) -> str:
    """Wrap every non-empty match of ``pattern`` in reverse video."""
    return pattern.sub(lambda m: f"{REVERSE_VIDEO}{m.group(0)}{RESET}" if m.group(0) else "", line)


def write_lines(
    out: TextIO,
    lines: list[str],
    rows: int,
    upper_mark: int,
    line_numbers: LineNumbers = LineNumbers.DISABLED,
    pattern: re.Pattern[str] | None = None,
) -> int:
    """Write the visible window and return the clamped upper mark.

    Numbers are 1-based, absolute, and padded to the widest number in the
    whole document so columns stay aligned while scrolling.
    """
    num_lines = len(lines)
    upper_mark = clamp_upper_mark(upper_mark, rows, num_lines)
    lower_mark = min(num_lines, upper_mark + rows)
    width = number_width(num_lines)
    numbered = line_numbers.is_on()

    for idx in range(upper_mark, lower_mark):
        line = lines[idx]
        if pattern is not None:
            line = highlight(line, pattern)
        if numbered:
            out.write(f"\r{idx + 1:>{width}}. {line}\n")
        else:
            out.write(f"\r{line}\n")
    return upper_mark


def write_prompt(out: TextIO, text: str, rows: int, cols: int) -> None:
    """Draw the bottom bar on the last terminal row."""
    out.write(move_to(rows))
    out.write(f"\r{REVERSE_VIDEO}{text[: max(1, cols)]}{RESET}")


def draw(
    out: TextIO,
    lines: list[str],
    rows: int,
    upper_mark: int,
    line_numbers: LineNumbers = LineNumbers.DISABLED,
    *,
    prompt: str = "",
    cols: int = 80,
    pattern: re.Pattern[str] | None = None,
) -> int:
    """Redraw the whole screen: text rows, then the prompt bar on row ``rows``.

    A one-row terminal shows only the prompt bar. Returns the clamped upper
    mark. Write errors propagate to the caller.
    """
    out.write(CLEAR_SCREEN + CURSOR_HOME)
    if rows > 1:
        upper_mark = write_lines(out, lines, rows - 1, upper_mark, line_numbers, pattern=pattern)
    else:
        upper_mark = clamp_upper_mark(upper_mark, 1, len(lines))
    write_prompt(out, prompt, max(1, rows), cols)
    out.flush()
    return upper_mark


def draw_state(out: TextIO, state: PagerState) -> None:
    """Draw ``state`` and store the clamped upper mark back into it."""
    pattern = state.search.pattern if state.search is not None else None
    state.upper_mark = draw(
        out,
        state.formatted_lines,
        state.rows,
        state.upper_mark,
        state.line_numbers,
        prompt=state.bottom_bar_text(),
        cols=state.cols,
        pattern=pattern,
    )


__all__ = [
    "clamp_upper_mark",
    "draw",
    "draw_state",
    "highlight",
    "move_to",
    "write_lines",
    "write_prompt",
]
