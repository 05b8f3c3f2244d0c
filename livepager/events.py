"""Events: the only legal way to mutate a running pager's state.

Host-side data/config requests and user-side ``InputEvent`` intents share one
channel. Both sets are closed; classifier extensions use ``Ignored``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .types import ExitStrategy, LineNumbers, SearchMode

if TYPE_CHECKING:
    from .input import InputClassifier


class InputEvent:
    """Base for user/terminal-origin intents produced by an input classifier."""


@dataclass(frozen=True)
class Exit(InputEvent):
    pass


@dataclass(frozen=True)
class RestorePrompt(InputEvent):
    pass


@dataclass(frozen=True)
class UpdateUpperMark(InputEvent):
    value: int


@dataclass(frozen=True)
class UpdateTermArea(InputEvent):
    cols: int
    rows: int


@dataclass(frozen=True)
class UpdateLineNumber(InputEvent):
    mode: LineNumbers


@dataclass(frozen=True)
class Search(InputEvent):
    mode: SearchMode


@dataclass(frozen=True)
class NextMatch(InputEvent):
    pass


@dataclass(frozen=True)
class PrevMatch(InputEvent):
    pass


@dataclass(frozen=True)
class Ignored(InputEvent):
    """Opaque intent for classifier extensions; dispatching it is a no-op."""

    token: Any = None


class Event:
    """Base for everything accepted by the pager's event channel."""


@dataclass(frozen=True)
class SetData(Event):
    text: str


@dataclass(frozen=True)
class AppendData(Event):
    text: str


@dataclass(frozen=True)
class SetPrompt(Event):
    text: str


@dataclass(frozen=True)
class SendMessage(Event):
    text: str


@dataclass(frozen=True)
class SetLineNumbers(Event):
    mode: LineNumbers


@dataclass(frozen=True)
class SetExitStrategy(Event):
    strategy: ExitStrategy


@dataclass(frozen=True)
class SetRunNoOverflow(Event):
    value: bool


@dataclass(frozen=True)
class SetInputClassifier(Event):
    classifier: InputClassifier


@dataclass(frozen=True)
class AddExitCallback(Event):
    callback: Callable[[], None]


@dataclass(frozen=True)
class UserInput(Event):
    event: InputEvent


__all__ = [
    "AddExitCallback",
    "AppendData",
    "Event",
    "Exit",
    "Ignored",
    "InputEvent",
    "NextMatch",
    "PrevMatch",
    "RestorePrompt",
    "Search",
    "SendMessage",
    "SetData",
    "SetExitStrategy",
    "SetInputClassifier",
    "SetLineNumbers",
    "SetPrompt",
    "SetRunNoOverflow",
    "UpdateLineNumber",
    "UpdateTermArea",
    "UpdateUpperMark",
    "UserInput",
]
