"""Fixed-width wrapping of raw pager text into display lines.

Wrapping slices on code points (``str`` indexing), so multi-byte characters
are never split. The result is always rebuilt from scratch by callers.
"""

from __future__ import annotations

# "{n}. " adds the digits plus a dot and a space.
NUMBER_SUFFIX_WIDTH = 2


def wrap_line(line: str, cols: int) -> list[str]:
    """Split one logical line into ``cols``-wide display lines.

    Empty lines still produce a single empty display line.
    """
    width = max(1, cols)
    if len(line) <= width:
        return [line]
    return [line[start : start + width] for start in range(0, len(line), width)]


def split_lines(text: str) -> list[str]:
    """Split on ``"\\n"``, dropping the ``"\\r"`` of CRLF line endings."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def wrap_text(text: str, cols: int) -> list[str]:
    """Wrap every newline-delimited logical line of ``text`` at ``cols``."""
    out: list[str] = []
    for line in split_lines(text):
        out.extend(wrap_line(line, cols))
    return out


def number_width(num_lines: int) -> int:
    """Return digit count used to pad line numbers for a document."""
    return len(str(max(1, num_lines)))


def format_text(text: str, cols: int, numbered: bool = False) -> list[str]:
    """Wrap ``text`` for a ``cols``-wide screen.

    With ``numbered`` set, each row is narrowed by the line-number prefix. The
    prefix width depends on the wrapped line count, so wrapping repeats until
    the digit count settles.
    """
    if not numbered:
        return wrap_text(text, cols)
    digits = number_width(text.count("\n") + 1)
    while True:
        lines = wrap_text(text, max(1, cols - digits - NUMBER_SUFFIX_WIDTH))
        needed = number_width(len(lines))
        if needed <= digits:
            return lines
        digits = needed


__all__ = ["format_text", "number_width", "split_lines", "wrap_line", "wrap_text"]
