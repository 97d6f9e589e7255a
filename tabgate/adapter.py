"""Tab records and the interface every terminal adapter implements."""

from __future__ import annotations

import abc
from dataclasses import dataclass


@dataclass
class Tab:
    """A terminal session and the metadata known about it."""

    id: str = ""
    window_id: str = ""
    directory: str = ""
    repo_root: str = ""
    repo_name: str = ""
    branch: str = ""
    is_worktree: bool = False
    is_self: bool = False
    running_command: str = ""
    terminal_type: str = ""


class AdapterError(Exception):
    """Raised when a terminal adapter cannot carry out an action."""


class TerminalAdapter(abc.ABC):
    """Talks to one terminal emulator: lists, switches, closes, creates, renames tabs."""

    name: str = ""

    @abc.abstractmethod
    def list_tabs(self) -> list[Tab]:
        """Return the raw tabs: id, window id, directory and terminal type."""

    @abc.abstractmethod
    def switch_to(self, tab_id: str) -> None:
        """Bring the tab with the given id to the front."""

    @abc.abstractmethod
    def close(self, tab_id: str) -> None:
        """Close the tab with the given id."""

    @abc.abstractmethod
    def create(self, directory: str) -> None:
        """Open a new tab, starting in directory when it is not empty."""

    @abc.abstractmethod
    def rename(self, tab_id: str, name: str) -> None:
        """Give the tab with the given id a new title."""