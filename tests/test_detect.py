import subprocess
from unittest import mock

from tabgate.detect import detect_adapters, is_app_running
from tabgate.ghostty import GhosttyAdapter
from tabgate.terminal_app import TerminalAppAdapter


def _fake_system(running):
    """Answer osascript queries as if only the named apps were running."""

    def fake_run(args, **kwargs):
        if args[0] != "osascript":
            raise FileNotFoundError(args[0])
        script = args[2]
        answer = any(f'"{app}"' in script for app in running)
        return subprocess.CompletedProcess(
            args=args, returncode=0, stdout=b"true\n" if answer else b"false\n", stderr=b""
        )

    return fake_run


def test_is_app_running_true():
    with mock.patch("subprocess.run", side_effect=_fake_system({"Terminal"})) as run:
        assert is_app_running("Terminal") is True
    script = run.call_args.args[0][2]
    assert 'whose name is "Terminal") contains "Terminal"' in script


def test_is_app_running_false():
    with mock.patch("subprocess.run", side_effect=_fake_system(set())):
        assert is_app_running("Terminal") is False


def test_is_app_running_when_osascript_fails():
    failed = subprocess.CompletedProcess(args=[], returncode=1, stdout=b"", stderr=b"error")
    with mock.patch("subprocess.run", return_value=failed):
        assert is_app_running("ghostty") is False


def test_is_app_running_when_osascript_missing():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("osascript")):
        assert is_app_running("ghostty") is False


def test_detect_adapters_both_running():
    with mock.patch("os.readlink", side_effect=OSError), mock.patch(
        "subprocess.run", side_effect=_fake_system({"Terminal", "ghostty"})
    ):
        adapters = detect_adapters()
    assert [type(a) for a in adapters] == [TerminalAppAdapter, GhosttyAdapter]
    assert [a.name for a in adapters] == ["Terminal.app", "Ghostty"]


def test_detect_adapters_only_ghostty():
    with mock.patch("subprocess.run", side_effect=_fake_system({"ghostty"})):
        adapters = detect_adapters()
    assert [a.name for a in adapters] == ["Ghostty"]


def test_detect_adapters_none_running():
    with mock.patch("subprocess.run", side_effect=_fake_system(set())):
        assert detect_adapters() == []