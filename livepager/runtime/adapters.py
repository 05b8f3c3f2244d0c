"""asyncio entry point for dynamic pagers.

The session loop is blocking, so it runs in the loop's default executor while
host coroutines keep publishing through the same ``Pager`` handle.
"""

from __future__ import annotations

import asyncio
import functools
from typing import TYPE_CHECKING

from ..terminal import TerminalController
from .loop import run_pager

if TYPE_CHECKING:
    from ..pager import Pager


async def run_async(pager: Pager, terminal: TerminalController | None = None) -> None:
    """Await an interactive session for ``pager``.

    ``SystemExit`` from a process-quit strategy propagates to the awaiting
    task.
    """
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, functools.partial(run_pager, pager, terminal))


__all__ = ["run_async"]
