"""Background thread turning terminal keys into pager input events."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..events import Exit, UpdateTermArea, UserInput
from ..input import InputClassifier, InputContext
from ..terminal import TerminalController
from .channel import EventChannel

logger = logging.getLogger(__name__)

READ_POLL_MS = 50


class InputReader:
    """Poll keys and terminal size, publishing intents into the channel.

    Each key read happens while holding ``input_lock``; the search prompt
    takes the same lock to borrow the keyboard from this thread.
    """

    def __init__(
        self,
        terminal: TerminalController,
        channel: EventChannel,
        input_lock: threading.Lock,
        snapshot: Callable[[], tuple[InputClassifier, InputContext]],
        poll_ms: int = READ_POLL_MS,
    ) -> None:
        self._terminal = terminal
        self._channel = channel
        self._input_lock = input_lock
        self._snapshot = snapshot
        self._poll_ms = poll_ms
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_size: tuple[int, int] | None = None

    def start(self, initial_size: tuple[int, int]) -> None:
        self._last_size = initial_size
        self._thread = threading.Thread(
            target=self._worker,
            name="livepager-input-reader",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _poll_resize(self) -> None:
        size = self._terminal.size()
        if size == self._last_size:
            return
        self._last_size = size
        cols, rows = size
        self._channel.send(UserInput(UpdateTermArea(cols, rows)))

    def _worker(self) -> None:
        logger.debug("input reader started")
        while not self._stop.is_set():
            try:
                with self._input_lock:
                    if self._stop.is_set():
                        break
                    key = self._terminal.read_key(timeout_ms=self._poll_ms)
                self._poll_resize()
            except OSError:
                logger.exception("terminal input failed; ending session")
                self._channel.send(UserInput(Exit()))
                break
            if not key:
                continue
            classifier, context = self._snapshot()
            try:
                event = classifier.classify(key, context)
            except Exception:
                logger.exception("input classifier failed on %r; ending session", key)
                self._channel.send(UserInput(Exit()))
                break
            if event is not None:
                self._channel.send(UserInput(event))
        logger.debug("input reader stopped")


__all__ = ["InputReader", "READ_POLL_MS"]
