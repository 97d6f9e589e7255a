"""An adapter serving made-up tabs, for demonstrations and tests."""

from __future__ import annotations

import threading
from dataclasses import replace

from tabgate.adapter import AdapterError, Tab, TerminalAdapter


def _initial_tabs() -> list[Tab]:
    return [
        Tab(
            id="demo-1",
            window_id="win-1",
            directory="~/Projects/tabgate",
            repo_root="~/Projects/tabgate",
            repo_name="tabgate",
            branch="main",
            running_command="tabgate --demo",
            terminal_type="demo",
            is_self=True,
        ),
        Tab(
            id="demo-2",
            window_id="win-1",
            directory="~/Projects/tabgate",
            repo_root="~/Projects/tabgate",
            repo_name="tabgate",
            branch="feat/demo-mode",
            is_worktree=True,
            terminal_type="demo",
        ),
        Tab(
            id="demo-3",
            window_id="win-2",
            directory="~/Projects/acme-api",
            repo_root="~/Projects/acme-api",
            repo_name="acme-api",
            branch="main",
            running_command="docker compose up",
            terminal_type="demo",
        ),
        Tab(
            id="demo-4",
            window_id="win-2",
            directory="~/Projects/acme-api",
            repo_root="~/Projects/acme-api",
            repo_name="acme-api",
            branch="dev",
            running_command="vim",
            terminal_type="demo",
        ),
        Tab(
            id="demo-5",
            window_id="win-2",
            directory="~/Projects/acme-api",
            repo_root="~/Projects/acme-api",
            repo_name="acme-api",
            branch="staging",
            terminal_type="demo",
        ),
        Tab(
            id="demo-6",
            window_id="win-3",
            directory="~/dotfiles",
            repo_root="~/dotfiles",
            repo_name="dotfiles",
            branch="main",
            terminal_type="demo",
        ),
        Tab(
            id="demo-7",
            window_id="win-4",
            directory="~/Downloads",
            terminal_type="demo",
        ),
        Tab(
            id="demo-8",
            window_id="win-4",
            directory="~/Documents",
            running_command="python3",
            terminal_type="demo",
        ),
    ]


class DemoAdapter(TerminalAdapter):
    """Keeps a list of fake tabs in memory and changes it on request."""

    name = "demo"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tabs = _initial_tabs()
        self._next = len(self._tabs) + 1

    def list_tabs(self) -> list[Tab]:
        with self._lock:
            return [replace(tab) for tab in self._tabs]

    def switch_to(self, tab_id: str) -> None:
        """Switching is a no-op for fake tabs."""

    def close(self, tab_id: str) -> None:
        with self._lock:
            for index, tab in enumerate(self._tabs):
                if tab.id == tab_id:
                    del self._tabs[index]
                    return
        raise AdapterError(f"tab {tab_id} not found")

    def create(self, directory: str) -> None:
        with self._lock:
            self._tabs.append(
                Tab(
                    id=f"demo-{self._next}",
                    window_id="win-new",
                    directory=directory,
                    terminal_type="demo",
                )
            )
            self._next += 1

    def rename(self, tab_id: str, name: str) -> None:
        with self._lock:
            for tab in self._tabs:
                if tab.id == tab_id:
                    tab.running_command = name
                    return
        raise AdapterError(f"tab {tab_id} not found")