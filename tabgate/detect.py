"""Finding which supported terminal emulators are running."""

from __future__ import annotations

from tabgate import applescript
from tabgate.adapter import TerminalAdapter
from tabgate.ghostty import GhosttyAdapter
from tabgate.terminal_app import TerminalAppAdapter


def is_app_running(app_name: str) -> bool:
    """Ask System Events whether a macOS application with this name is running."""
    script = (
        f'tell application "System Events" to return '
        f'(name of every process whose name is "{app_name}") contains "{app_name}"'
    )
    try:
        return applescript.run(script) == "true"
    except applescript.AppleScriptError:
        return False


def detect_adapters() -> list[TerminalAdapter]:
    """Return an adapter for every supported terminal emulator that is running."""
    adapters: list[TerminalAdapter] = []
    if is_app_running("Terminal"):
        adapters.append(TerminalAppAdapter())
    if is_app_running("ghostty"):
        adapters.append(GhosttyAdapter())
    return adapters