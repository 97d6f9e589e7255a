"""Finding the foreground process of a terminal."""

from __future__ import annotations

import subprocess

SHELLS = frozenset(
    {"bash", "zsh", "fish", "sh", "tcsh", "ksh", "-bash", "-zsh", "-fish", "-sh"}
)


def resolve_for_tty(tty: str) -> str:
    """Return the foreground process name on tty; raise OSError if ps fails."""
    try:
        result = subprocess.run(
            ["ps", "-t", tty, "-o", "tpgid=,pid=,comm="],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise OSError(f"ps command failed: {exc}") from exc
    return parse_ps_output(result.stdout)


def parse_ps_output(output: str) -> str:
    """Pick the foreground process from `ps -o tpgid=,pid=,comm=` output.

    A shell in the foreground is reported as "<shell> (idle)".
    """
    for line in output.strip().splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        tpgid, pid, *command = fields
        if pid != tpgid:
            continue
        base = " ".join(command).rpartition("/")[2]
        return f"{base} (idle)" if base in SHELLS else base
    return ""