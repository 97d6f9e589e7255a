"""Filling in git and process details for raw tabs."""

from __future__ import annotations

from dataclasses import replace

from tabgate.adapter import Tab
from tabgate.git import GitResolver
from tabgate.process import resolve_for_tty


class TabEnricher:
    """Adds repository and running-command details to tabs."""

    def __init__(self, git_resolver: GitResolver | None = None) -> None:
        self._git = git_resolver if git_resolver is not None else GitResolver()

    def enrich(self, tabs: list[Tab]) -> list[Tab]:
        """Return enriched copies of tabs; a failing step leaves its fields as they were."""
        return [self._enrich_one(tab) for tab in tabs]

    def _enrich_one(self, tab: Tab) -> Tab:
        updates: dict[str, object] = {}
        if tab.directory:
            try:
                info = self._git.resolve(tab.directory)
            except (OSError, ValueError):
                pass
            else:
                updates.update(
                    repo_root=info.repo_root,
                    repo_name=info.repo_name,
                    branch=info.branch,
                    is_worktree=info.is_worktree,
                )
        if tab.id:
            try:
                updates["running_command"] = resolve_for_tty(tab.id)
            except OSError:
                pass
        return replace(tab, **updates)