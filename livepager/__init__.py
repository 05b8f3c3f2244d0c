"""Public package surface for livepager.

Applications build a ``Pager``, feed it text from any thread, and run it
with ``Pager.run()``, ``run_async()`` or ``page_all()``.
"""

from __future__ import annotations

import logging

from .errors import PagerError, PagerStateError, TerminalError
from .input import DefaultInputClassifier, InputClassifier, InputContext
from .pager import Pager
from .runtime import page_all, run_async, run_pager
from .state import PagerFeatures
from .types import ExitStrategy, LineNumbers, SearchMode

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DefaultInputClassifier",
    "ExitStrategy",
    "InputClassifier",
    "InputContext",
    "LineNumbers",
    "Pager",
    "PagerError",
    "PagerFeatures",
    "PagerStateError",
    "SearchMode",
    "TerminalError",
    "main",
    "page_all",
    "run_async",
    "run_pager",
]
