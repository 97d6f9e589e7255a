"""Adapter for macOS Terminal.app, driven through AppleScript."""

from __future__ import annotations

import os
import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from tabgate import applescript
from tabgate.adapter import AdapterError, Tab, TerminalAdapter

_SHELL_NAMES = frozenset({"zsh", "bash", "fish", "sh", "dash", "ksh", "tcsh", "csh"})
_PID_PATTERN = re.compile(r"[+-]?\d+")

_LIST_TABS_SCRIPT = """
tell application "Terminal"
	set output to ""
	repeat with w in windows
		set wID to id of w
		set tabList to tabs of w
		repeat with i from 1 to count of tabList
			set t to item i of tabList
			set ttyName to tty of t
			set output to output & wID & "|" & i & "|" & ttyName & linefeed
		end repeat
	end repeat
	return output
end tell
"""


@dataclass(frozen=True)
class RawTab:
    """One line of the tab listing, before the working directory is looked up."""

    window_id: str
    tab_index: str
    tty: str


def parse_list_tabs_output(output: str) -> list[RawTab]:
    """Parse `windowID|tabIndex|tty` lines; malformed lines are skipped."""
    tabs = []
    for line in output.split("\n"):
        line = line.strip()
        if not line:
            continue
        parts = line.split("|", 2)
        if len(parts) != 3 or not parts[0] or not parts[2]:
            continue
        tabs.append(RawTab(window_id=parts[0], tab_index=parts[1], tty=parts[2]))
    return tabs


def parse_lsof_output(output: str) -> str:
    """Return the path of the last `n` line in `lsof -Fn` output."""
    directory = ""
    for line in output.split("\n"):
        line = line.strip()
        if line.startswith("n"):
            directory = line[1:]
    return directory


def shell_pid_for_tty(tty: str) -> str:
    """Return the PID of the first shell attached to tty, or an empty string."""
    device = tty.removeprefix("/dev/")
    try:
        result = subprocess.run(
            ["ps", "-t", device, "-o", "pid=,comm="],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.SubprocessError):
        return ""

    for line in result.stdout.split("\n"):
        fields = line.split()
        if len(fields) < 2:
            continue
        pid, command = fields[0], fields[1]
        if not _PID_PATTERN.fullmatch(pid):
            continue
        base = command.rpartition("/")[2].removeprefix("-")
        if base in _SHELL_NAMES:
            return pid
    return ""


def cwd_for_tty(tty: str) -> str:
    """Return the working directory of the shell on tty, or an empty string."""
    pid = shell_pid_for_tty(tty)
    if not pid:
        return ""
    try:
        result = subprocess.run(
            ["lsof", "-a", "-p", pid, "-d", "cwd", "-Fn"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.SubprocessError):
        return ""
    return parse_lsof_output(result.stdout)


def ttyname() -> str:
    """Return the TTY device of this process's stdin, or an empty string."""
    try:
        target = os.readlink("/dev/fd/0")
    except OSError:
        target = ""
    if target.startswith("/dev/tty"):
        return target

    try:
        result = subprocess.run(["tty"], capture_output=True, text=True, check=True)
    except (OSError, subprocess.SubprocessError):
        return ""
    name = result.stdout.strip()
    return name if name.startswith("/dev/") else ""


def _find_tab_script(tty: str) -> str:
    return f"""
tell application "Terminal"
	set targetWindow to missing value
	set targetTabIndex to -1
	repeat with w in windows
		set tabList to tabs of w
		repeat with i from 1 to count of tabList
			set t to item i of tabList
			if tty of t is "{tty}" then
				set targetWindow to w
				set targetTabIndex to i
				exit repeat
			end if
		end repeat
		if targetTabIndex is not -1 then exit repeat
	end repeat
"""


def _is_permission_error(exc: Exception) -> bool:
    message = str(exc)
    return "not allowed" in message or "1002" in message


class TerminalAppAdapter(TerminalAdapter):
    """Lists and controls Terminal.app tabs; tab ids are TTY paths."""

    name = "Terminal.app"

    def __init__(
        self,
        own_tty: str | None = None,
        runner: Callable[[str], str] = applescript.run,
    ) -> None:
        self._own_tty = ttyname() if own_tty is None else own_tty
        self._run = runner

    def list_tabs(self) -> list[Tab]:
        try:
            output = self._run(_LIST_TABS_SCRIPT)
        except applescript.AppleScriptError as exc:
            if _is_permission_error(exc):
                raise AdapterError(
                    "terminal_app: permission denied. Grant access in "
                    "System Settings > Privacy & Security > Automation"
                ) from exc
            raise AdapterError(f"terminal_app: list tabs: {exc}") from exc

        return [
            Tab(
                id=raw.tty,
                window_id=raw.window_id,
                directory=cwd_for_tty(raw.tty),
                is_self=bool(self._own_tty) and raw.tty == self._own_tty,
                terminal_type="terminal.app",
            )
            for raw in parse_list_tabs_output(output)
        ]

    def _run_action(self, script: str, description: str) -> None:
        try:
            self._run(script)
        except applescript.AppleScriptError as exc:
            raise AdapterError(f"terminal_app: {description}: {exc}") from exc

    def switch_to(self, tab_id: str) -> None:
        script = _find_tab_script(tab_id) + """
	if targetWindow is not missing value then
		set frontmost of targetWindow to true
		set selected tab of targetWindow to tab targetTabIndex of targetWindow
		activate
	end if
end tell
"""
        self._run_action(script, f"switch to {tab_id}")

    def close(self, tab_id: str) -> None:
        script = _find_tab_script(tab_id) + """
	if targetWindow is not missing value then
		close tab targetTabIndex of targetWindow
	end if
end tell
"""
        self._run_action(script, f"close {tab_id}")

    def create(self, directory: str) -> None:
        script = f"""tell application "Terminal"
	activate
	do script "cd {directory}"
end tell"""
        self._run_action(script, f"create tab in {directory}")

    def rename(self, tab_id: str, name: str) -> None:
        script = _find_tab_script(tab_id) + f"""
	if targetWindow is not missing value then
		set custom title of tab targetTabIndex of targetWindow to "{name}"
	end if
end tell
"""
        self._run_action(script, f"rename {tab_id}")