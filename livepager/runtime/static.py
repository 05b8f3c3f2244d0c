"""One-shot paging of fully known output.

Output that fits on one screen can skip the full-screen pager entirely when
``run_no_overflow`` is set; otherwise the text is paged interactively.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from ..dispatch import DispatchContext, handle_event
from ..errors import PagerStateError
from ..render import write_lines
from ..terminal import TerminalController
from ..text import format_text
from .loop import PagerSession

if TYPE_CHECKING:
    from ..pager import Pager

logger = logging.getLogger(__name__)


def _isatty(out: TextIO) -> bool:
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def page_all(
    pager: Pager,
    out: TextIO | None = None,
    terminal: TerminalController | None = None,
) -> None:
    """Show everything queued on ``pager`` and return when the user quits.

    Raises ``PagerStateError`` unless the pager was built with the
    ``static_output`` feature.
    """
    state = pager.state
    if state.static is None:
        raise PagerStateError("page_all() requires the static_output feature")
    out = out if out is not None else sys.stdout

    ctx = DispatchContext(out=out)
    for event in pager.channel.drain():
        handle_event(event, state, ctx)

    if terminal is None:
        if not _isatty(out):
            out.write(state.raw_lines)
            if state.raw_lines and not state.raw_lines.endswith("\n"):
                out.write("\n")
            out.flush()
            return
        terminal = TerminalController.open()

    if state.static.run_no_overflow:
        cols, rows = terminal.size()
        lines = format_text(state.raw_lines, cols, state.line_numbers.is_on())
        if len(lines) <= max(1, rows - 1):
            logger.debug("output fits in %s rows; skipping pager", rows)
            write_lines(out, lines, len(lines), 0, state.line_numbers)
            out.flush()
            return

    PagerSession(state, pager.channel, terminal).run()


__all__ = ["page_all"]
