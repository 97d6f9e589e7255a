from tabgate.adapter import Tab
from tabgate.demo import DemoAdapter
from tabgate.grouping import total_tabs
from tabgate.model import (
    KEYS,
    ActionDone,
    KeyPress,
    Model,
    Quit,
    TextInput,
    WindowSize,
)
from tabgate.poller import TabsUpdated


def sample_tabs():
    return [
        Tab(id="/dev/ttys001", repo_root="/Users/nic/project-a", repo_name="project-a",
            branch="main", running_command="nvim"),
        Tab(id="/dev/ttys002", repo_root="/Users/nic/project-a", repo_name="project-a",
            branch="feature", is_worktree=True, running_command="go test"),
        Tab(id="/dev/ttys003", repo_root="/Users/nic/project-b", repo_name="project-b",
            branch="main", running_command="zsh (idle)"),
        Tab(id="/dev/ttys004", directory="/Users/nic/Downloads", running_command="zsh (idle)"),
    ]


def test_cursor_navigation():
    m = Model(sample_tabs())
    total = total_tabs(m.projects)
    assert m.cursor == 0
    for _ in range(total):
        m.update(KeyPress("j"))
    assert m.cursor == total - 1
    for _ in range(total + 5):
        m.update(KeyPress("k"))
    assert m.cursor == 0


def test_arrow_keys_move_and_track_selection():
    m = Model(sample_tabs())
    m.update(KeyPress("down"))
    assert m.cursor == 1
    assert m.selected_tab_id == "/dev/ttys002"


def test_quit():
    m = Model(sample_tabs())
    cmd = m.update(KeyPress("q"))
    assert cmd is not None
    assert cmd() == Quit()
    assert m.quitting
    assert m.view() == ""


def test_view_renders():
    assert "project-a" in Model(sample_tabs()).view()


def test_confirm_close_toggle():
    m = Model(sample_tabs())
    m.update(KeyPress("d"))
    assert m.confirm_close
    assert m.status_msg == "Close this tab? (y/n)"
    m.update(KeyPress("n"))
    assert not m.confirm_close
    assert m.status_msg == ""


def test_rename_mode():
    m = Model(sample_tabs())
    m.update(KeyPress("r"))
    assert m.renaming
    m.update(KeyPress("esc"))
    assert not m.renaming


def test_window_size():
    m = Model(sample_tabs())
    assert m.update(WindowSize(120, 40)) is None
    assert (m.width, m.height) == (120, 40)


def test_action_done_sets_status():
    m = Model(sample_tabs())
    m.update(ActionDone(status_msg="Switched"))
    assert m.status_msg == "Switched"
    m.update(ActionDone(status_msg="Tab closed", error=RuntimeError("boom")))
    assert m.status_msg == "Error: boom"


def test_tabs_updated_keeps_selected_tab():
    m = Model(sample_tabs())
    m.update(KeyPress("j"))
    m.update(KeyPress("j"))
    assert m.selected_tab_id == "/dev/ttys003"
    reordered = [sample_tabs()[2], sample_tabs()[3]]
    assert m.update(TabsUpdated(tabs=reordered)) is None
    assert m.cursor == 0
    assert m.selected_tab_id == "/dev/ttys003"


def test_tabs_updated_clamps_when_selected_tab_gone():
    m = Model(sample_tabs())
    for _ in range(3):
        m.update(KeyPress("j"))
    m.update(TabsUpdated(tabs=sample_tabs()[:2], errors=[RuntimeError("x")]))
    assert m.cursor == 1
    assert m.selected_tab_id == "/dev/ttys002"
    assert len(m.adapter_errors) == 1


def test_tabs_updated_empty_resets_selection():
    m = Model(sample_tabs())
    m.update(KeyPress("j"))
    m.update(TabsUpdated(tabs=[]))
    assert m.cursor == 0
    assert m.selected_tab_id == ""


def test_enter_switches_with_first_adapter():
    demo = DemoAdapter()
    m = Model(demo.list_tabs(), adapters=[demo])
    cmd = m.update(KeyPress("enter"))
    assert cmd() == ActionDone(status_msg="Switched")


def test_enter_without_adapter_does_nothing():
    m = Model(sample_tabs())
    assert m.update(KeyPress("enter")) is None


def test_close_confirmed_closes_tab():
    demo = DemoAdapter()
    m = Model(demo.list_tabs(), adapters=[demo])
    first_id = m.projects[0].tabs[0].id
    m.update(KeyPress("d"))
    cmd = m.update(KeyPress("y"))
    result = cmd()
    assert result.status_msg == "Tab closed"
    assert result.repoll and result.error is None
    assert first_id not in [t.id for t in demo.list_tabs()]


def test_close_failure_reports_error():
    demo = DemoAdapter()
    m = Model([Tab(id="missing", repo_root="/r", repo_name="r")], adapters=[demo])
    m.update(KeyPress("d"))
    result = m.update(KeyPress("y"))()
    m.update(result)
    assert m.status_msg == "Error: tab missing not found"


def test_rename_enter_renames_tab():
    demo = DemoAdapter()
    m = Model(demo.list_tabs(), adapters=[demo])
    target = m.projects[0].tabs[0].id
    m.update(KeyPress("r"))
    for char in "hi":
        m.update(KeyPress(char))
    cmd = m.update(KeyPress("enter"))
    assert not m.renaming
    assert m.rename_input.value == ""
    assert cmd() == ActionDone(status_msg="Tab renamed")
    renamed = next(t for t in demo.list_tabs() if t.id == target)
    assert renamed.running_command == "hi"


def test_rename_with_empty_name_does_nothing():
    demo = DemoAdapter()
    m = Model(demo.list_tabs(), adapters=[demo])
    m.update(KeyPress("r"))
    assert m.update(KeyPress("enter")) is None
    assert not m.renaming


def test_new_tab_uses_project_directory():
    demo = DemoAdapter()
    m = Model(demo.list_tabs(), adapters=[demo])
    cmd = m.update(KeyPress("n"))
    assert cmd().status_msg == "New tab created"
    assert demo.list_tabs()[-1].directory == m.projects[0].directory


def test_empty_model_keys():
    demo = DemoAdapter()
    m = Model([], adapters=[demo])
    assert m.update(KeyPress("j")) is None
    cmd = m.update(KeyPress("n"))
    assert cmd().repoll is True
    assert demo.list_tabs()[-1].directory == ""
    assert m.update(KeyPress("q"))() == Quit()


def test_key_binding_matches():
    assert KEYS.up.matches(KeyPress("k"))
    assert KEYS.up.matches("up")
    assert not KEYS.up.matches("j")


def test_text_input_editing():
    field = TextInput(char_limit=3)
    field.update("a")
    assert field.value == ""
    field.focus()
    for key in ("a", "b", "c", "d"):
        field.update(KeyPress(key))
    assert field.value == "abc"
    field.update("left")
    field.update("backspace")
    assert field.value == "ac"
    field.update("end")
    field.update("space")
    assert field.value == "ac "
    field.update("enter")
    assert field.value == "ac "
    assert "ac" in field.view()


def test_text_input_placeholder_view():
    field = TextInput(placeholder="new name")
    assert "new name" in field.view()