"""Unbounded FIFO mailbox feeding the session loop."""

from __future__ import annotations

from queue import Empty, Queue

from ..events import Event


class EventChannel:
    """Multi-producer, single-consumer event queue.

    Events from one producer keep their order; events from different
    producers interleave in arrival order.
    """

    def __init__(self) -> None:
        self._queue: Queue[Event] = Queue()

    def send(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError(f"not a pager event: {event!r}")
        self._queue.put(event)

    def recv(self, timeout: float | None = None) -> Event | None:
        """Block for the next event; ``None`` when ``timeout`` elapses."""
        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None

    def drain(self) -> list[Event]:
        """Return every event that is immediately available."""
        out: list[Event] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                break
        return out

    def empty(self) -> bool:
        return self._queue.empty()


__all__ = ["EventChannel"]
