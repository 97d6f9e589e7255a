"""The interactive state of the tab list and how it reacts to messages."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from tabgate.adapter import Tab, TerminalAdapter
from tabgate.grouping import flat_index, flat_pos, group_by_project, total_tabs
from tabgate.poller import Poller, TabsUpdated
from tabgate.view import CONFIRM_TEXT, PLACEHOLDER_STYLE, render_view

Command = Callable[[], Any]


@dataclass(frozen=True)
class KeyPress:
    """A key pressed by the user, named like "j", "enter", "esc" or "backspace"."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class WindowSize:
    """The terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class ActionDone:
    """An adapter action finished."""

    status_msg: str = ""
    error: Exception | None = None
    repoll: bool = False


@dataclass(frozen=True)
class Quit:
    """The program should exit."""


@dataclass(frozen=True)
class KeyBinding:
    """Keys that trigger one action, with their help text."""

    keys: tuple[str, ...]
    help_key: str = ""
    help_text: str = ""

    def matches(self, key: KeyPress | str) -> bool:
        name = key.key if isinstance(key, KeyPress) else key
        return name in self.keys


@dataclass(frozen=True)
class _KeyMap:
    up: KeyBinding = KeyBinding(("up", "k"), "↑/k", "up")
    down: KeyBinding = KeyBinding(("down", "j"), "↓/j", "down")
    enter: KeyBinding = KeyBinding(("enter",), "enter", "switch")
    new: KeyBinding = KeyBinding(("n",), "n", "new")
    rename: KeyBinding = KeyBinding(("r",), "r", "rename")
    delete: KeyBinding = KeyBinding(("d",), "d", "close")
    quit: KeyBinding = KeyBinding(("q",), "q", "quit")


KEYS = _KeyMap()


@dataclass
class TextInput:
    """A one-line text field with a cursor."""

    value: str = ""
    placeholder: str = ""
    char_limit: int = 0
    prompt: str = "> "
    position: int = 0
    focused: bool = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def update(self, key: KeyPress | str) -> None:
        """Edit the value according to key; ignored while not focused."""
        if not self.focused:
            return
        name = key.key if isinstance(key, KeyPress) else key
        self.position = max(0, min(self.position, len(self.value)))
        before, after = self.value[: self.position], self.value[self.position:]
        if name == "backspace":
            if before:
                self.value = before[:-1] + after
                self.position -= 1
        elif name == "delete":
            self.value = before + after[1:]
        elif name == "left":
            self.position = max(0, self.position - 1)
        elif name == "right":
            self.position = min(len(self.value), self.position + 1)
        elif name in ("home", "ctrl+a"):
            self.position = 0
        elif name in ("end", "ctrl+e"):
            self.position = len(self.value)
        elif name == "ctrl+u":
            self.value, self.position = after, 0
        else:
            text = " " if name == "space" else name
            if len(text) != 1 or not text.isprintable():
                return
            if self.char_limit and len(self.value) >= self.char_limit:
                return
            self.value = before + text + after
            self.position += 1

    def view(self) -> str:
        if not self.value and self.placeholder:
            if self.focused:
                return (self.prompt + _reverse(self.placeholder[0])
                        + PLACEHOLDER_STYLE.render(self.placeholder[1:]))
            return self.prompt + PLACEHOLDER_STYLE.render(self.placeholder)
        if not self.focused:
            return self.prompt + self.value
        position = max(0, min(self.position, len(self.value)))
        at = self.value[position:position + 1] or " "
        return self.prompt + self.value[:position] + _reverse(at) + self.value[position + 1:]


def _reverse(text: str) -> str:
    return f"\x1b[7m{text}\x1b[0m"


def _quit() -> Quit:
    return Quit()


class Model:
    """State of the tab list: projects, cursor, modes and status line."""

    def __init__(
        self,
        tabs: Iterable[Tab],
        poller: Poller | None = None,
        errors: Sequence[Exception] | None = None,
        adapters: Sequence[TerminalAdapter] = (),
    ) -> None:
        self.tabs = list(tabs)
        self.projects = group_by_project(self.tabs)
        self.adapters = list(adapters)
        self.poller = poller
        self.adapter_errors = list(errors or [])
        self.cursor = 0
        self.selected_tab_id = ""
        self.width = 80
        self.height = 24
        self.quitting = False
        self.confirm_close = False
        self.renaming = False
        self.rename_input = TextInput(placeholder="new name", char_limit=64)
        self.status_msg = ""

    def init(self) -> Command | None:
        """Return the first command to run: the first poll, if there is a poller."""
        return self.poller.poll() if self.poller is not None else None

    def update(self, msg: Any) -> Command | None:
        """Apply msg to the state and return the next command to run, if any."""
        if isinstance(msg, WindowSize):
            self.width, self.height = msg.width, msg.height
            return None
        if isinstance(msg, ActionDone):
            if msg.error is not None:
                self.status_msg = f"Error: {msg.error}"
            elif msg.status_msg:
                self.status_msg = msg.status_msg
            if msg.repoll and self.poller is not None:
                return self.poller.poll()
            return None
        if isinstance(msg, TabsUpdated):
            self._apply_tabs(msg)
            return self.poller.poll() if self.poller is not None else None
        if isinstance(msg, KeyPress):
            return self._handle_key(msg)
        return None

    def view(self) -> str:
        return "" if self.quitting else render_view(self)

    def _apply_tabs(self, msg: TabsUpdated) -> None:
        self.tabs = list(msg.tabs)
        self.adapter_errors = list(msg.errors)
        self.projects = group_by_project(self.tabs)
        if not self.selected_tab_id:
            return
        pos = flat_pos(self.projects, self.selected_tab_id)
        if pos >= 0:
            self.cursor = pos
            return
        total = total_tabs(self.projects)
        if total == 0:
            self.cursor = 0
            self.selected_tab_id = ""
            return
        if self.cursor >= total:
            self.cursor = total - 1
        self._update_selected_id()

    def _handle_key(self, key: KeyPress) -> Command | None:
        if self.confirm_close:
            if key.key == "y":
                self.confirm_close = False
                self.status_msg = ""
                tab = self._current_tab()
                return self._close_tab(tab.id) if tab is not None else None
            if key.key in ("n", "esc"):
                self.confirm_close = False
                self.status_msg = ""
            return None

        if self.renaming:
            if key.key == "enter":
                self.renaming = False
                name = self.rename_input.value
                self._reset_rename_input()
                if not name:
                    return None
                tab = self._current_tab()
                return self._rename_tab(tab.id, name) if tab is not None else None
            if key.key == "esc":
                self.renaming = False
                self._reset_rename_input()
                return None
            self.rename_input.update(key)
            return None

        total = total_tabs(self.projects)
        if total == 0:
            if KEYS.quit.matches(key):
                self.quitting = True
                return _quit
            if KEYS.new.matches(key):
                return self._create_tab("")
            return None

        if KEYS.up.matches(key):
            if self.cursor > 0:
                self.cursor -= 1
            self.status_msg = ""
            self._update_selected_id()
        elif KEYS.down.matches(key):
            if self.cursor < total - 1:
                self.cursor += 1
            self.status_msg = ""
            self._update_selected_id()
        elif KEYS.enter.matches(key):
            tab = self._current_tab()
            if tab is not None:
                return self._switch_to_tab(tab.id)
        elif KEYS.new.matches(key):
            project_index, _ = flat_index(self.projects, self.cursor)
            directory = self.projects[project_index].directory if project_index >= 0 else ""
            return self._create_tab(directory)
        elif KEYS.delete.matches(key):
            self.confirm_close = True
            self.status_msg = CONFIRM_TEXT
        elif KEYS.rename.matches(key):
            self.renaming = True
            self.rename_input.focus()
        elif KEYS.quit.matches(key):
            self.quitting = True
            return _quit
        return None

    def _reset_rename_input(self) -> None:
        self.rename_input.value = ""
        self.rename_input.position = 0
        self.rename_input.blur()

    def _current_tab(self) -> Tab | None:
        project_index, tab_index = flat_index(self.projects, self.cursor)
        if project_index < 0 or tab_index < 0:
            return None
        return self.projects[project_index].tabs[tab_index]

    def _update_selected_id(self) -> None:
        tab = self._current_tab()
        if tab is not None:
            self.selected_tab_id = tab.id

    def _action(
        self, run: Callable[[TerminalAdapter], None], status: str, repoll: bool = False
    ) -> Command | None:
        if not self.adapters:
            return None
        adapter = self.adapters[0]

        def command() -> ActionDone:
            try:
                run(adapter)
            except Exception as exc:  # shown to the user on the status line
                return ActionDone(status_msg=status, error=exc, repoll=repoll)
            return ActionDone(status_msg=status, repoll=repoll)

        return command

    def _switch_to_tab(self, tab_id: str) -> Command | None:
        return self._action(lambda a: a.switch_to(tab_id), "Switched")

    def _close_tab(self, tab_id: str) -> Command | None:
        return self._action(lambda a: a.close(tab_id), "Tab closed", repoll=True)

    def _create_tab(self, directory: str) -> Command | None:
        return self._action(lambda a: a.create(directory), "New tab created", repoll=True)

    def _rename_tab(self, tab_id: str, name: str) -> Command | None:
        return self._action(lambda a: a.rename(tab_id, name), "Tab renamed")