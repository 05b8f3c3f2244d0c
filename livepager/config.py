"""Persistent JSON defaults for new pagers.

Stores the default line-number mode, prompt text, and exit strategy.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .types import ExitStrategy, LineNumbers

logger = logging.getLogger(__name__)

APP_NAME = "livepager"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class PagerDefaults:
    line_numbers: LineNumbers = LineNumbers.DISABLED
    prompt: str | None = None
    exit_strategy: ExitStrategy = ExitStrategy.PROCESS_QUIT


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and ignored so a read-only config directory
    never breaks paging.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", config_path, exc)


def _enum_value(enum_cls, value: object, default):
    """Map a stored string onto ``enum_cls``; anything else gives ``default``."""
    if not isinstance(value, str):
        return default
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return default


def load_pager_defaults(path: Path | None = None) -> PagerDefaults:
    """Read pager defaults, dropping any invalid entries."""
    data = load_config(path)
    prompt = data.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        prompt = None
    return PagerDefaults(
        line_numbers=_enum_value(LineNumbers, data.get("line_numbers"), LineNumbers.DISABLED),
        prompt=prompt,
        exit_strategy=_enum_value(ExitStrategy, data.get("exit_strategy"), ExitStrategy.PROCESS_QUIT),
    )


def save_pager_defaults(defaults: PagerDefaults, path: Path | None = None) -> None:
    """Persist ``defaults`` while keeping unrelated keys in the file."""
    config = load_config(path)
    config["line_numbers"] = defaults.line_numbers.value
    config["exit_strategy"] = defaults.exit_strategy.value
    if defaults.prompt is not None:
        config["prompt"] = defaults.prompt
    else:
        config.pop("prompt", None)
    save_config(config, path)


__all__ = [
    "CONFIG_PATH",
    "PagerDefaults",
    "load_config",
    "load_pager_defaults",
    "save_config",
    "save_pager_defaults",
]
