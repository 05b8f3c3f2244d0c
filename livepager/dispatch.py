"""Event dispatcher: the single state-transition function of a session.

``handle_event`` applies one event to an exclusively held ``PagerState``. It
only blocks while prompting for a search query, and it holds the input lock
for that whole prompt so the reader thread leaves the keyboard alone.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from . import events as ev
from .errors import PagerStateError
from .search import advance_match, apply_query, fetch_input, retreat_match
from .state import PagerState
from .types import ExitStrategy

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


def _no_key() -> str:
    return "ESC"


@dataclass
class DispatchContext:
    """Session resources the dispatcher needs besides the state itself."""

    out: TextIO
    input_lock: threading.Lock = field(default_factory=threading.Lock)
    read_key: Callable[[], str] = _no_key
    cleanup: Callable[[], None] = _noop
    exited: bool = False


def _exit(state: PagerState, ctx: DispatchContext) -> None:
    ctx.exited = True
    try:
        state.run_exit_callbacks()
    finally:
        ctx.cleanup()
    if state.exit_strategy is ExitStrategy.PROCESS_QUIT:
        raise SystemExit(0)


def _search(state: PagerState, ctx: DispatchContext, mode) -> None:
    if state.search is None:
        return
    state.search.mode = mode
    # Pause the input reader while the prompt owns the keyboard.
    with ctx.input_lock:
        query = fetch_input(ctx.out, ctx.read_key, mode, state.rows)
    apply_query(state, query)


def _handle_input(event: ev.InputEvent, state: PagerState, ctx: DispatchContext) -> None:
    if isinstance(event, ev.Exit):
        _exit(state, ctx)
    elif isinstance(event, ev.UpdateUpperMark):
        state.upper_mark = max(0, event.value)
    elif isinstance(event, ev.RestorePrompt):
        state.message = None
    elif isinstance(event, ev.UpdateTermArea):
        state.cols = max(1, event.cols)
        state.rows = max(1, event.rows)
        state.format_lines()
    elif isinstance(event, ev.UpdateLineNumber):
        state.line_numbers = event.mode
        state.format_lines()
    elif isinstance(event, ev.Search):
        _search(state, ctx, event.mode)
    elif isinstance(event, ev.NextMatch):
        if state.search is not None and state.search.pattern is not None:
            advance_match(state)
    elif isinstance(event, ev.PrevMatch):
        if state.search is not None and state.search.pattern is not None:
            retreat_match(state)


def handle_event(event: ev.Event, state: PagerState, ctx: DispatchContext) -> None:
    """Apply ``event`` to ``state``.

    Unknown input intents are ignored; every other event has an effect.
    Raises ``SystemExit`` on quit under ``ExitStrategy.PROCESS_QUIT``.
    """
    logger.debug("dispatch %s", type(event).__name__)
    if isinstance(event, ev.SetData):
        state.raw_lines = event.text
        state.format_lines()
    elif isinstance(event, ev.AppendData):
        state.append_str(event.text)
    elif isinstance(event, ev.UserInput):
        _handle_input(event.event, state, ctx)
    elif isinstance(event, ev.SetPrompt):
        state.prompt = event.text
    elif isinstance(event, ev.SendMessage):
        state.message = event.text
    elif isinstance(event, ev.SetLineNumbers):
        state.line_numbers = event.mode
        state.format_lines()
    elif isinstance(event, ev.SetExitStrategy):
        state.exit_strategy = event.strategy
    elif isinstance(event, ev.SetRunNoOverflow):
        if state.static is None:
            raise PagerStateError("run_no_overflow requires the static_output feature")
        state.static.run_no_overflow = event.value
    elif isinstance(event, ev.SetInputClassifier):
        state.input_classifier = event.classifier
    elif isinstance(event, ev.AddExitCallback):
        state.exit_callbacks.append(event.callback)
    else:
        raise TypeError(f"not a pager event: {event!r}")


__all__ = ["DispatchContext", "handle_event"]
