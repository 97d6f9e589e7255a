"""Adapter for the Ghostty terminal emulator, driven through AppleScript."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tabgate import applescript
from tabgate.adapter import AdapterError, Tab, TerminalAdapter

_LIST_SCRIPT = """
tell application "Ghostty"
	set output to ""
	repeat with w in windows
		set wID to id of w
		set tabList to tabs of w
		repeat with t in tabList
			set tID to id of t
			set tName to name of t
			set term to focused terminal of t
			set termID to id of term
			set termDir to working directory of term
			set output to output & wID & "|" & tID & "|" & termID & "|" & termDir & "|" & tName & linefeed
		end repeat
	end repeat
	return output
end tell
"""


@dataclass(frozen=True)
class GhosttyRawTab:
    """One line of the Ghostty tab listing."""

    window_id: str
    tab_id: str
    terminal_id: str
    working_dir: str
    name: str


def parse_ghostty_list_output(output: str) -> list[GhosttyRawTab]:
    """Parse `windowID|tabID|terminalID|workingDir|name` lines; malformed lines are skipped."""
    tabs = []
    for line in output.split("\n"):
        line = line.strip()
        if not line:
            continue
        parts = line.split("|", 4)
        if len(parts) != 5 or not parts[0] or not parts[1]:
            continue
        window_id, tab_id, terminal_id, working_dir, name = parts
        tabs.append(GhosttyRawTab(window_id, tab_id, terminal_id, working_dir, name))
    return tabs


def _find_tab_script(tab_id: str) -> str:
    return f"""
tell application "Ghostty"
	set targetWindow to missing value
	set targetTab to missing value
	repeat with w in windows
		repeat with t in tabs of w
			if id of t is "{tab_id}" then
				set targetWindow to w
				set targetTab to t
				exit repeat
			end if
		end repeat
		if targetTab is not missing value then exit repeat
	end repeat
"""


class GhosttyAdapter(TerminalAdapter):
    """Lists and controls Ghostty tabs; tab ids are Ghostty's own ids."""

    name = "Ghostty"

    def __init__(self, runner: Callable[[str], str] = applescript.run) -> None:
        self._run = runner

    def list_tabs(self) -> list[Tab]:
        try:
            output = self._run(_LIST_SCRIPT)
        except applescript.AppleScriptError as exc:
            message = str(exc)
            if "not allowed" in message or "1002" in message:
                raise AdapterError(
                    "ghostty: permission denied. Grant access in "
                    "System Settings > Privacy & Security > Automation"
                ) from exc
            raise AdapterError(f"ghostty: list tabs: {exc}") from exc

        return [
            Tab(
                id=raw.tab_id,
                window_id=raw.window_id,
                directory=raw.working_dir,
                terminal_type="ghostty",
            )
            for raw in parse_ghostty_list_output(output)
        ]

    def _run_action(self, script: str, description: str) -> None:
        try:
            self._run(script)
        except applescript.AppleScriptError as exc:
            raise AdapterError(f"ghostty: {description}: {exc}") from exc

    def switch_to(self, tab_id: str) -> None:
        script = _find_tab_script(tab_id) + """
	if targetTab is not missing value then
		select tab targetTab
		activate window targetWindow
	end if
end tell
"""
        self._run_action(script, f"switch to {tab_id}")

    def close(self, tab_id: str) -> None:
        script = _find_tab_script(tab_id) + """
	if targetTab is not missing value then
		close tab targetTab
	end if
end tell
"""
        self._run_action(script, f"close {tab_id}")

    def create(self, directory: str) -> None:
        if directory:
            script = f"""tell application "Ghostty"
	activate
	tell front window
		make new tab with properties {{command:"cd {directory} && exec $SHELL"}}
	end tell
end tell"""
        else:
            script = """tell application "Ghostty"
	activate
	tell front window
		make new tab
	end tell
end tell"""
        self._run_action(script, f"create tab in {directory}")

    def rename(self, tab_id: str, name: str) -> None:
        """Tab names are read-only in Ghostty's scripting dictionary, so this does nothing."""