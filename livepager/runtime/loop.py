"""Main pager loop: the single consumer of the event channel.

The session owns the ``PagerState`` behind ``state_lock``. An input-reader
thread and any host threads publish events; only this loop dispatches them
and draws. The loop suspends while waiting on the channel, and inside the
dispatcher while a search query is being typed.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from ..dispatch import DispatchContext, handle_event
from ..input import InputClassifier, InputContext
from ..render import draw_state
from ..state import PagerState
from ..terminal import TerminalController
from .channel import EventChannel
from .reader import READ_POLL_MS, InputReader

if TYPE_CHECKING:
    from ..pager import Pager

logger = logging.getLogger(__name__)


class PagerSession:
    """One interactive run of a pager over a controlling terminal."""

    def __init__(
        self,
        state: PagerState,
        channel: EventChannel,
        terminal: TerminalController,
        poll_ms: int = READ_POLL_MS,
    ) -> None:
        self.state = state
        self.channel = channel
        self.terminal = terminal
        self.state_lock = threading.Lock()
        self.input_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._published: tuple[InputClassifier, InputContext] = (
            state.input_classifier,
            state.input_context(),
        )
        self.reader = InputReader(
            terminal,
            channel,
            self.input_lock,
            self.snapshot,
            poll_ms=poll_ms,
        )
        self.ctx = DispatchContext(
            out=terminal.out,
            input_lock=self.input_lock,
            read_key=terminal.read_key,
            cleanup=self._cleanup,
        )

    @property
    def exited(self) -> bool:
        return self.ctx.exited

    def snapshot(self) -> tuple[InputClassifier, InputContext]:
        """Return the classifier and state view published after the last dispatch."""
        with self._snapshot_lock:
            return self._published

    def _publish(self) -> None:
        published = (self.state.input_classifier, self.state.input_context())
        with self._snapshot_lock:
            self._published = published

    def _cleanup(self) -> None:
        self.reader.stop()
        self.terminal.disable_tui_mode()

    def _dispatch_batch(self, batch) -> None:
        with self.state_lock:
            for event in batch:
                handle_event(event, self.state, self.ctx)
                if self.ctx.exited:
                    # Anything queued behind a quit is dropped.
                    return
            draw_state(self.terminal.out, self.state)
            self._publish()

    def run(self) -> None:
        """Run until a quit intent is dispatched.

        Terminal teardown always runs; a teardown failure surfaces as
        ``TerminalError`` after cleanup.
        """
        with self.terminal.raw_mode():
            try:
                cols, rows = self.terminal.size()
                with self.state_lock:
                    self.state.prepare(cols, rows)
                    draw_state(self.terminal.out, self.state)
                    self._publish()
                logger.debug("pager session started at %sx%s", cols, rows)
                self.reader.start((cols, rows))
                while not self.ctx.exited:
                    event = self.channel.recv()
                    if event is None:
                        continue
                    self._dispatch_batch([event, *self.channel.drain()])
            finally:
                self.reader.stop()
        logger.debug("pager session ended")


def run_pager(pager: Pager, terminal: TerminalController | None = None) -> None:
    """Run ``pager`` interactively on ``terminal`` (default: ``/dev/tty``)."""
    if terminal is None:
        terminal = TerminalController.open()
    PagerSession(pager.state, pager.channel, terminal).run()


__all__ = ["PagerSession", "run_pager"]
