"""Git metadata for directories, cached until the repository's HEAD changes."""

from __future__ import annotations

import os
import posixpath
import stat
import subprocess
import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class GitInfo:
    """What is known about the repository a directory belongs to."""

    repo_root: str
    repo_name: str
    branch: str = ""
    is_worktree: bool = False


def _git(directory: str, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", directory, *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def _base_name(path: str) -> str:
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/" if path else "."
    return posixpath.basename(trimmed)


def _head_mtime(directory: str) -> int:
    """Return the modification time of the repository's HEAD file.

    Handles both normal repositories (.git is a directory) and linked
    worktrees (.git is a file holding "gitdir: <path>").
    """
    git_path = os.path.join(directory, ".git")
    if stat.S_ISDIR(os.lstat(git_path).st_mode):
        head_path = os.path.join(git_path, "HEAD")
    else:
        with open(git_path, encoding="utf-8") as handle:
            content = handle.read().strip()
        git_dir = content.removeprefix("gitdir: ")
        if not os.path.isabs(git_dir):
            git_dir = os.path.join(directory, git_dir)
        head_path = os.path.join(git_dir, "HEAD")
    return os.stat(head_path).st_mtime_ns


class GitResolver:
    """Resolves git metadata for directories and caches the results."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[str, tuple[int, GitInfo]] = {}

    def resolve(self, directory: str) -> GitInfo:
        """Return the git metadata for directory.

        Raises OSError when the directory is not the top of a repository
        or git cannot describe it.
        """
        head_mtime = _head_mtime(directory)

        with self._lock:
            cached = self._cache.get(directory)
        if cached is not None and cached[0] == head_mtime:
            return cached[1]

        try:
            repo_root = _git(directory, "rev-parse", "--show-toplevel").strip()
        except (OSError, subprocess.SubprocessError) as exc:
            raise OSError(f"git rev-parse failed in {directory}: {exc}") from exc

        try:
            branch = _git(directory, "branch", "--show-current").strip()
        except (OSError, subprocess.SubprocessError):
            branch = ""  # detached HEAD or an old git

        is_worktree = False
        try:
            worktrees = parse_worktree_list(_git(directory, "worktree", "list"))
        except (OSError, subprocess.SubprocessError):
            worktrees = []
        if worktrees:
            # The first entry is always the main worktree.
            is_worktree = repo_root != worktrees[0]

        info = GitInfo(
            repo_root=repo_root,
            repo_name=_base_name(repo_root),
            branch=branch,
            is_worktree=is_worktree,
        )
        with self._lock:
            self._cache[directory] = (head_mtime, info)
        return info


def parse_worktree_list(output: str) -> list[str]:
    """Return the worktree paths listed in `git worktree list` output."""
    return [line.split()[0] for line in output.strip().splitlines() if line.strip()]