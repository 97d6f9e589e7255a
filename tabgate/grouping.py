"""Grouping tabs into projects and mapping a flat cursor onto them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tabgate.adapter import Tab

_OTHER_KEY = "_other"
OTHER_NAME = "Other"


@dataclass
class Project:
    """Tabs that share a git repository; directory is empty for "Other"."""

    name: str
    directory: str = ""
    tabs: list[Tab] = field(default_factory=list)


def group_by_project(tabs: Iterable[Tab]) -> list[Project]:
    """Group tabs by repository root, sorted by name with "Other" last."""
    groups: dict[str, Project] = {}
    for tab in tabs:
        if tab.repo_root:
            key, name, directory = tab.repo_root, tab.repo_name, tab.repo_root
        else:
            key, name, directory = _OTHER_KEY, OTHER_NAME, ""
        project = groups.get(key)
        if project is None:
            project = groups[key] = Project(name=name, directory=directory)
        project.tabs.append(tab)

    ordered = sorted(groups.items(), key=lambda item: (item[0] == _OTHER_KEY, item[1].name))
    return [project for _, project in ordered]


def flat_index(projects: list[Project], pos: int) -> tuple[int, int]:
    """Map a flat cursor position to (project index, tab index), or (-1, -1)."""
    seen = 0
    for project_index, project in enumerate(projects):
        count = len(project.tabs)
        if 0 <= pos - seen < count:
            return project_index, pos - seen
        seen += count
    return -1, -1


def total_tabs(projects: list[Project]) -> int:
    """Return the number of tabs across all projects."""
    return sum(len(project.tabs) for project in projects)


def flat_pos(projects: list[Project], tab_id: str) -> int:
    """Return the flat cursor position of the tab with tab_id, or -1."""
    tabs = (tab for project in projects for tab in project.tabs)
    return next((pos for pos, tab in enumerate(tabs) if tab.id == tab_id), -1)