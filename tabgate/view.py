"""Rendering the tab list as styled terminal text."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any

from wcwidth import wcswidth, wcwidth

from tabgate.grouping import total_tabs

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
_RESET = "\x1b[0m"


def visible_width(text: str) -> int:
    """Return the number of terminal cells text takes, ignoring ANSI escapes."""
    plain = _ANSI_PATTERN.sub("", text)
    width = wcswidth(plain)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in plain)


@dataclass(frozen=True)
class Style:
    """A text style: bold, 256-colour foreground/background, padding and width."""

    bold: bool = False
    foreground: int | None = None
    background: int | None = None
    padding: int = 0
    width: int = 0

    def with_width(self, width: int) -> Style:
        return Style(self.bold, self.foreground, self.background, self.padding, width)

    def render(self, text: str) -> str:
        inner = text
        if self.width:
            missing = self.width - 2 * self.padding - visible_width(inner)
            if missing > 0:
                inner += " " * missing
        padded = " " * self.padding + inner + " " * self.padding
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground is not None:
            codes.append(f"38;5;{self.foreground}")
        if self.background is not None:
            codes.append(f"48;5;{self.background}")
        if not codes:
            return padded
        return f"\x1b[{';'.join(codes)}m{padded}{_RESET}"


HEADER_STYLE = Style(bold=True, foreground=15, background=62, padding=1)
FOOTER_STYLE = Style(foreground=241, padding=1)
PROJECT_NAME_STYLE = Style(bold=True, foreground=12)
PROJECT_DIR_STYLE = Style(foreground=241)
SELECTED_STYLE = Style(bold=True, foreground=15)
NORMAL_STYLE = Style(foreground=252)
WORKTREE_STYLE = Style(foreground=214)
TABGATE_STYLE = Style(foreground=241)
COMMAND_STYLE = Style(foreground=243)
STATUS_STYLE = Style(foreground=11, padding=1)
CONFIRM_STYLE = Style(bold=True, foreground=9, padding=1)
WARNING_STYLE = Style(foreground=208)
PLACEHOLDER_STYLE = Style(foreground=240)

FOOTER_TEXT = "↑↓/jk navigate  enter switch  n new  r rename  d close  q quit"
CONFIRM_TEXT = "Close this tab? (y/n)"


def short_path(path: str) -> str:
    """Replace a leading home directory in path with ~."""
    home = os.path.expanduser("~")
    if home and home != "~" and path.startswith(home):
        return "~" + path[len(home):]
    return path


def _tab_line(tab: Any, selected: bool, width: int) -> str:
    cursor, style = ("❯ ", SELECTED_STYLE) if selected else ("  ", NORMAL_STYLE)

    label = tab.branch
    if not label and not tab.repo_root:
        label = short_path(tab.directory)
    if not label:
        label = "(unknown)"

    worktree = WORKTREE_STYLE.render("  [worktree]") if tab.is_worktree else ""
    own = TABGATE_STYLE.render("  [TabGate]") if tab.is_self else ""
    command = COMMAND_STYLE.render(tab.running_command) if tab.running_command else ""

    left = f"  {cursor}{style.render(label)}{worktree}{own}"
    pad = max(width - visible_width(left) - visible_width(command) - 2, 1)
    return left + " " * pad + command


def render_view(model: Any) -> str:
    """Render the whole screen for the given model."""
    parts: list[str] = []
    projects = model.projects
    count = total_tabs(projects)

    title = "TabGate"
    stats = f"{len(projects)} projects · {count} sessions"
    gap = max(model.width - visible_width(title) - visible_width(stats) - 2, 1)
    parts.append(HEADER_STYLE.with_width(model.width).render(title + " " * gap + stats))
    parts.append("\n")

    if count == 0:
        if model.adapter_errors:
            parts.append("\n  No terminal sessions found. Adapter errors:\n\n")
            for error in model.adapter_errors:
                parts.append(WARNING_STYLE.render(f"  {error}") + "\n")
            parts.append("\n  Check System Settings > Privacy & Security > Automation\n")
        else:
            parts.append("\n  No terminal sessions found.\n\n")
            parts.append("  Make sure Terminal.app is running with at least one tab open.\n")
        parts.append("  TabGate will auto-refresh when tabs are detected.\n")
    else:
        position = 0
        for project in projects:
            parts.append("\n")
            name = PROJECT_NAME_STYLE.render(project.name)
            if project.directory:
                directory = PROJECT_DIR_STYLE.render("  " + short_path(project.directory))
                parts.append(f"  {name}{directory}\n")
            else:
                parts.append(f"  {name}\n")
            for tab in project.tabs:
                parts.append(_tab_line(tab, position == model.cursor, model.width) + "\n")
                position += 1

    if count > 0 and model.adapter_errors:
        messages = "; ".join(str(error) for error in model.adapter_errors)
        parts.append("\n")
        parts.append(WARNING_STYLE.render("  ⚠ Some adapters failed: " + messages))
        parts.append("\n")

    if model.confirm_close:
        parts.append("\n" + CONFIRM_STYLE.render(CONFIRM_TEXT) + "\n")
    elif model.renaming:
        parts.append("\n  Rename: " + model.rename_input.view() + "\n")
    elif model.status_msg:
        parts.append("\n" + STATUS_STYLE.render(model.status_msg) + "\n")

    parts.append("\n")
    parts.append(FOOTER_STYLE.with_width(model.width).render(FOOTER_TEXT))
    return "".join(parts)