"""Host-facing pager handle.

Every setter enqueues an event, so the same calls work before ``run()`` and
from other threads while a session is live.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from . import events as ev
from .config import PagerDefaults, load_pager_defaults
from .input import InputClassifier
from .runtime.channel import EventChannel
from .state import PagerFeatures, PagerState
from .terminal import TerminalController
from .types import ExitStrategy, LineNumbers


class Pager:
    """Handle used by applications to feed and run a pager.

    ``features`` picks the optional subsystems once, at construction.
    """

    def __init__(
        self,
        features: PagerFeatures | None = None,
        defaults: PagerDefaults | None = None,
    ) -> None:
        self.features = features if features is not None else PagerFeatures()
        self.channel = EventChannel()
        self.state = PagerState.with_features(self.features)
        if defaults is not None:
            self.state.line_numbers = defaults.line_numbers
            self.state.exit_strategy = defaults.exit_strategy
            if defaults.prompt is not None:
                self.state.prompt = defaults.prompt

    @classmethod
    def from_config(
        cls,
        features: PagerFeatures | None = None,
        config_path: Path | None = None,
    ) -> Pager:
        """Build a pager seeded from the persisted defaults file."""
        return cls(features=features, defaults=load_pager_defaults(config_path))

    def send(self, event: ev.Event) -> None:
        self.channel.send(event)

    def set_text(self, text: str) -> None:
        """Replace the displayed text."""
        self.send(ev.SetData(str(text)))

    def push_str(self, text: str) -> None:
        """Append ``text``; embedded newlines start new logical lines."""
        self.send(ev.AppendData(str(text)))

    def set_prompt(self, text: str) -> None:
        self.send(ev.SetPrompt(str(text)))

    def send_message(self, text: str) -> None:
        """Show ``text`` in place of the prompt until the user dismisses it."""
        self.send(ev.SendMessage(str(text)))

    def set_line_numbers(self, mode: LineNumbers) -> None:
        self.send(ev.SetLineNumbers(mode))

    def set_exit_strategy(self, strategy: ExitStrategy) -> None:
        self.send(ev.SetExitStrategy(strategy))

    def set_run_no_overflow(self, value: bool) -> None:
        self.send(ev.SetRunNoOverflow(bool(value)))

    def set_input_classifier(self, classifier: InputClassifier) -> None:
        self.send(ev.SetInputClassifier(classifier))

    def add_exit_callback(self, callback: Callable[[], None]) -> None:
        self.send(ev.AddExitCallback(callback))

    def run(self, terminal: TerminalController | None = None) -> None:
        """Page interactively until the user quits."""
        from .runtime.loop import run_pager

        run_pager(self, terminal)

    def page_all(self, terminal: TerminalController | None = None) -> None:
        """Page the queued output once; see ``runtime.static.page_all``."""
        from .runtime.static import page_all

        page_all(self, terminal=terminal)


__all__ = ["Pager"]
