"""Running AppleScript snippets through osascript."""

from __future__ import annotations

import subprocess


class AppleScriptError(RuntimeError):
    """Raised when osascript cannot be started or exits with an error."""


def run(script: str) -> str:
    """Run an AppleScript snippet and return its output without trailing whitespace."""
    try:
        result = subprocess.run(["osascript", "-e", script], capture_output=True)
    except OSError as exc:
        raise AppleScriptError(f"osascript: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip()
        raise AppleScriptError(f"osascript: exit status {result.returncode}: {stderr}")
    return result.stdout.decode(errors="replace").rstrip(" \t\r\n")