"""Exception hierarchy for pager sessions.

Render-time write failures surface as plain ``OSError``; the classes here
cover terminal lifecycle failures and API misuse.
"""

from __future__ import annotations


class PagerError(Exception):
    """Base class for all livepager errors."""


class TerminalError(PagerError):
    """Terminal setup, teardown, or size query failed."""


class PagerStateError(PagerError, RuntimeError):
    """A precondition on pager state was violated by the caller."""


__all__ = ["PagerError", "PagerStateError", "TerminalError"]
