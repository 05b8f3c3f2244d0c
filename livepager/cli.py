"""Command-line front door for livepager.

Parses CLI options, loads text from a file or stdin, and pages it.
``--follow`` keeps appending to the live pager as the file grows.
"""

from __future__ import annotations

import argparse
import codecs
import logging
import sys
import threading
from pathlib import Path

from . import config
from .pager import Pager
from .state import DEFAULT_PROMPT, PagerFeatures
from .types import LineNumbers

logger = logging.getLogger(__name__)

FOLLOW_INTERVAL_SECONDS = 0.25
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


class FileFollower:
    """Poll a growing file and push new text into a pager."""

    def __init__(self, path: Path, pager: Pager, offset: int, interval: float = FOLLOW_INTERVAL_SECONDS) -> None:
        self.path = path
        self.pager = pager
        self.offset = offset
        self.interval = interval
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def poll(self) -> None:
        """Publish whatever was appended (or the whole file after truncation)."""
        try:
            size = self.path.stat().st_size
        except OSError:
            return
        if size < self.offset:
            logger.debug("%s truncated; reloading", self.path)
            data = self.path.read_bytes()
            self.offset = len(data)
            self._decoder.reset()
            self.pager.set_text(self._decoder.decode(data))
            return
        if size == self.offset:
            return
        with self.path.open("rb") as handle:
            handle.seek(self.offset)
            chunk = handle.read()
        self.offset += len(chunk)
        text = self._decoder.decode(chunk)
        if text:
            self.pager.push_str(text)

    def _worker(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll()

    def start(self) -> None:
        self._thread = threading.Thread(target=self._worker, name="livepager-follow", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()


def save_defaults(args: argparse.Namespace) -> Path:
    """Persist the line-number and prompt options; return the config path."""
    current = config.load_pager_defaults()
    defaults = config.PagerDefaults(
        line_numbers=LineNumbers.ENABLED if args.line_numbers else LineNumbers.DISABLED,
        prompt=args.prompt,
        exit_strategy=current.exit_strategy,
    )
    config.save_pager_defaults(defaults)
    logger.info("saved defaults to %s", config.CONFIG_PATH)
    return config.CONFIG_PATH


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livepager",
        description="Page a file or standard input in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to page. Defaults to stdin.")
    parser.add_argument("-n", "--line-numbers", action="store_true", help="Show line numbers.")
    parser.add_argument("--prompt", default=None, help="Text shown in the bottom bar.")
    parser.add_argument("-f", "--follow", action="store_true", help="Keep appending as the file grows.")
    parser.add_argument(
        "--static",
        action="store_true",
        help="Print directly when the text fits on one screen.",
    )
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store --line-numbers and --prompt as defaults for later runs, then exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and page the requested input."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_file)

    if args.save_defaults:
        print(f"Saved defaults to {save_defaults(args)}")
        return

    if args.follow and args.path is None:
        raise SystemExit("--follow needs a file path.")
    if args.follow and args.static:
        raise SystemExit("Cannot combine --follow with --static.")

    if args.path is not None:
        path = Path(args.path)
        if not path.is_file():
            raise SystemExit(f"File not found: {path}")
        data = path.read_bytes() if args.follow else None
        text = data.decode("utf-8", errors="replace") if data is not None else read_text(path)
    else:
        if sys.stdin.isatty():
            raise SystemExit("No input: pass a file path or pipe text on stdin.")
        path = None
        data = None
        text = sys.stdin.read()

    pager = Pager.from_config(features=PagerFeatures(search=True, static_output=args.static))
    pager.set_text(text)
    if args.prompt is not None:
        pager.set_prompt(args.prompt)
    elif pager.state.prompt == DEFAULT_PROMPT:
        pager.set_prompt(str(path) if path is not None else "stdin")
    if args.line_numbers:
        pager.set_line_numbers(LineNumbers.ENABLED)

    if args.static:
        pager.set_run_no_overflow(True)
        pager.page_all()
        return

    follower = None
    if args.follow and path is not None and data is not None:
        follower = FileFollower(path, pager, offset=len(data))
        follower.start()
    try:
        pager.run()
    finally:
        if follower is not None:
            follower.stop()


if __name__ == "__main__":
    main()
