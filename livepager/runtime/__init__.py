"""Session runtime: event channel, input reader, main loop and adapters."""

from .adapters import run_async
from .channel import EventChannel
from .loop import PagerSession, run_pager
from .reader import InputReader
from .static import page_all

__all__ = [
    "EventChannel",
    "InputReader",
    "PagerSession",
    "page_all",
    "run_async",
    "run_pager",
]
