"""Command-line entry point: builds the model and runs the interactive screen."""

from __future__ import annotations

import argparse
import queue
import sys
import threading
from collections.abc import Callable, Sequence
from typing import Any

import blessed

from tabgate.adapter import AdapterError, TerminalAdapter
from tabgate.demo import DemoAdapter
from tabgate.detect import detect_adapters
from tabgate.enricher import TabEnricher
from tabgate.model import KeyPress, Model, Quit, WindowSize
from tabgate.poller import Poller

_SEQUENCE_NAMES = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_HOME": "home",
    "KEY_END": "end",
    "KEY_TAB": "tab",
}

_CHARACTER_NAMES = {
    "\r": "enter",
    "\n": "enter",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\t": "tab",
    "\x01": "ctrl+a",
    "\x05": "ctrl+e",
    "\x15": "ctrl+u",
    "\x03": "ctrl+c",
}


def _key_name(keystroke: Any) -> str:
    """Name a blessed keystroke the way the model expects ("j", "up", "enter", ...)."""
    name = getattr(keystroke, "name", None)
    if getattr(keystroke, "is_sequence", False) and name:
        return _SEQUENCE_NAMES.get(name, name.removeprefix("KEY_").lower())
    text = str(keystroke)
    return _CHARACTER_NAMES.get(text, text)


class _EventLoop:
    """Feeds messages to the model and runs the commands it returns in the background."""

    def __init__(self, model: Model, events: queue.Queue | None = None) -> None:
        self.model = model
        self.events: queue.Queue = events if events is not None else queue.Queue()

    def send(self, msg: Any) -> None:
        self.start(self.model.update(msg))

    def start(self, command: Callable[[], Any] | None) -> None:
        if command is None:
            return
        threading.Thread(target=self._run_command, args=(command,), daemon=True).start()

    def _run_command(self, command: Callable[[], Any]) -> None:
        result = command()
        if result is not None:
            self.events.put(result)


def build_model(demo: bool) -> Model:
    """Create the model, with fake tabs when demo is true or the running terminals otherwise.

    Raises AdapterError when no supported terminal emulator is running.
    """
    adapters: list[TerminalAdapter]
    enricher: TabEnricher | None
    if demo:
        adapters = [DemoAdapter()]
        enricher = None
    else:
        adapters = detect_adapters()
        if not adapters:
            raise AdapterError("No supported terminal emulators detected.")
        enricher = TabEnricher()

    poller = Poller(adapters, enricher)
    initial = poller.collect()
    return Model(initial.tabs, poller, initial.errors, adapters)


def _draw(term: blessed.Terminal, text: str) -> None:
    body = "\n".join(line + term.clear_eol for line in text.split("\n"))
    term.stream.write(term.home + body + term.clear_eos)
    term.stream.flush()


def run(model: Model) -> None:
    """Run the interactive screen until the user quits."""
    term = blessed.Terminal()
    loop = _EventLoop(model)
    size: tuple[int, int] | None = None

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        loop.start(model.init())
        dirty = True
        while True:
            current = (term.width, term.height)
            if current != size:
                size = current
                loop.send(WindowSize(*current))
                dirty = True

            if dirty:
                _draw(term, model.view())
                dirty = False

            keystroke = term.inkey(timeout=0.1)
            if keystroke:
                loop.send(KeyPress(_key_name(keystroke)))
                dirty = True

            while True:
                try:
                    msg = loop.events.get_nowait()
                except queue.Empty:
                    break
                if isinstance(msg, Quit):
                    return
                loop.send(msg)
                dirty = True


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, build the model and run the screen; return the exit code."""
    parser = argparse.ArgumentParser(prog="tabgate", description="Browse terminal tabs by project.")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run with fake demo data (no real terminal required)",
    )
    args = parser.parse_args(argv)

    try:
        model = build_model(args.demo)
    except AdapterError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        run(model)
    except KeyboardInterrupt:
        return 0
    except Exception as exc:  # reported to the user like any fatal error
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())