import queue
import subprocess
from unittest import mock

import pytest
from blessed.keyboard import Keystroke

from tabgate.adapter import AdapterError
from tabgate.app import _EventLoop, _key_name, build_model, main
from tabgate.grouping import total_tabs
from tabgate.model import ActionDone, KeyPress, Quit
from tabgate.poller import TabsUpdated

NO_TERMINAL = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"false", stderr=b"")


def test_build_model_demo_has_all_fake_tabs():
    model = build_model(True)
    assert len(model.tabs) == 8
    assert total_tabs(model.projects) == 8
    assert model.adapter_errors == []
    assert model.adapters[0].name == "demo"


def test_build_model_demo_groups_projects_with_other_last():
    model = build_model(True)
    names = [project.name for project in model.projects]
    assert names == ["acme-api", "dotfiles", "tabgate", "Other"]


def test_build_model_demo_has_no_enricher():
    model = build_model(True)
    assert model.poller.enricher is None
    assert model.poller.adapters == model.adapters


def test_build_model_without_terminals_raises():
    with mock.patch("subprocess.run", return_value=NO_TERMINAL):
        with pytest.raises(AdapterError, match="No supported terminal emulators detected."):
            build_model(False)


def test_main_without_terminals_exits_with_error(capsys):
    with mock.patch("subprocess.run", return_value=NO_TERMINAL):
        code = main([])
    assert code == 1
    assert "No supported terminal emulators detected." in capsys.readouterr().err


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2


@pytest.mark.parametrize(
    ("keystroke", "expected"),
    [
        (Keystroke("j"), "j"),
        (Keystroke("q"), "q"),
        (Keystroke("\r"), "enter"),
        (Keystroke("\x1b"), "esc"),
        (Keystroke("\x7f"), "backspace"),
        (Keystroke("\x1b[A", code=259, name="KEY_UP"), "up"),
        (Keystroke("\x1b[B", code=258, name="KEY_DOWN"), "down"),
        (Keystroke("\n", code=343, name="KEY_ENTER"), "enter"),
    ],
)
def test_key_name(keystroke, expected):
    assert _key_name(keystroke) == expected


def test_event_loop_moves_cursor_without_commands():
    model = build_model(True)
    loop = _EventLoop(model)
    loop.send(KeyPress("j"))
    assert model.cursor == 1
    assert loop.events.empty()


def test_event_loop_quit_produces_quit_message():
    model = build_model(True)
    loop = _EventLoop(model)
    loop.send(KeyPress("q"))
    assert model.quitting is True
    assert isinstance(loop.events.get(timeout=2), Quit)
    assert model.view() == ""


def test_event_loop_close_round_trip():
    model = build_model(True)
    model.poller.interval = 0
    loop = _EventLoop(model)
    closed_id = model.projects[0].tabs[0].id

    loop.send(KeyPress("d"))
    assert model.confirm_close is True
    loop.send(KeyPress("y"))

    done = loop.events.get(timeout=2)
    assert isinstance(done, ActionDone)
    assert done.status_msg == "Tab closed"
    assert done.error is None
    assert done.repoll is True

    loop.send(done)
    assert model.status_msg == "Tab closed"
    updated = loop.events.get(timeout=2)
    assert isinstance(updated, TabsUpdated)
    assert len(updated.tabs) == 7
    assert closed_id not in [tab.id for tab in updated.tabs]

    loop.send(updated)
    assert total_tabs(model.projects) == 7


def test_event_loop_uses_given_queue():
    model = build_model(True)
    events = queue.Queue()
    loop = _EventLoop(model, events)
    assert loop.events is events
    loop.send(KeyPress("q"))
    assert model.quitting is True
    assert isinstance(events.get(timeout=2), Quit)
    assert events.empty()
    assert model.view() == ""