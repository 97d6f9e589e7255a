# tabgate

tabgate is a full-screen terminal dashboard. It lists the open tabs of your
terminal emulators and groups them by the git repository each tab is working
in. From that list you can jump to a tab, open a new tab, rename a tab or
close it.

Projects are sorted by name. Tabs that are not inside a git repository are
collected under "Other", which is always listed last. Each tab shows:

- its git branch, or its directory when it is not inside a repository
  (the home directory is shortened to `~`);
- a `[worktree]` badge when the tab is in a linked git worktree;
- a `[TabGate]` badge on the Terminal.app tab that is running tabgate itself;
- the command running in the foreground, or `<shell> (idle)` when a shell is
  waiting for input.

The list refreshes itself every two seconds and keeps the cursor on the tab
that was selected.

## Supported terminals

tabgate runs on macOS and talks to terminal emulators through AppleScript
(`osascript`):

- Terminal.app
- Ghostty

Every supported emulator that is running when tabgate starts is listed.
Branch and worktree details come from `git`; foreground commands come from
`ps`; for Terminal.app, working directories come from `ps` and `lsof`.

When macOS refuses access, tabgate shows a permission error; grant access
under System Settings > Privacy & Security > Automation.

## Installation

```
pip install .
```

Python 3.10 or later is required.

## Usage

```
tabgate
```

When no supported terminal emulator is running, tabgate prints
"No supported terminal emulators detected." and exits with status 1.

To try the interface without a supported terminal, run it on made-up tabs:

```
tabgate --demo
```

### Keys

| Key       | Action                                                        |
|-----------|---------------------------------------------------------------|
| `↑` / `k` | move up                                                       |
| `↓` / `j` | move down                                                     |
| `enter`   | switch to the selected tab                                    |
| `n`       | open a new tab in the selected tab's project directory        |
| `r`       | rename the selected tab (`enter` saves, `esc` cancels)        |
| `d`       | close the selected tab (`y` confirms, `n` or `esc` cancels)   |
| `q`       | quit                                                          |

Switching, opening, renaming and closing are sent to the first detected
emulator (Terminal.app when it is running). In Terminal.app renaming sets the
tab's custom title; in Ghostty tab names cannot be changed, so renaming does
nothing there.

## Using it from Python

The pieces behind the screen can be used on their own:

```python
from tabgate.demo import DemoAdapter
from tabgate.grouping import group_by_project
from tabgate.poller import Poller

update = Poller([DemoAdapter()]).collect()
for project in group_by_project(update.tabs):
    print(project.name, len(project.tabs))
```

`Poller.collect()` returns a `TabsUpdated` holding the tabs of all adapters
and the errors of any adapter that failed. `TabEnricher` (in
`tabgate.enricher`) adds git and foreground-command details to tabs, and
`detect_adapters()` (in `tabgate.detect`) returns the adapters for the
emulators that are running.

## What it does not do

tabgate only works on macOS, and only with Terminal.app and Ghostty. It has
no configuration file and no options beyond `--demo`.

## Running the tests

```
pip install ".[test]"
pytest
```