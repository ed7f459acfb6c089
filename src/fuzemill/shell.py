"""Interactive shell spawning."""

from __future__ import annotations

import os
from pathlib import Path

import shellingham

from . import exec as exec_util
from . import log


def _looks_like_path(value: str) -> bool:
    return "/" in value


def _detect_shell() -> str | None:
    try:
        name, path = shellingham.detect_shell()
    except shellingham.ShellDetectionFailure:
        return None
    if _looks_like_path(path):
        return path
    return path or name or None


def resolve_shell() -> str:
    """Return the user's interactive shell, falling back to ``$SHELL``/``sh``."""
    detected = _detect_shell()
    if detected:
        return detected
    return os.environ.get("SHELL") or "sh"


def spawn_shell(path: Path) -> int:
    """Open an interactive shell in ``path`` and wait for it to exit.

    Returns:
        The shell's exit status (127 when the shell cannot be found).
    """
    shell_cmd = resolve_shell()
    log.info(f"Spawning subshell in {path}", style="green")
    result = exec_util.run_interactive([shell_cmd], cwd=path)
    if result is None:
        log.warning(exec_util.missing_command_detail([shell_cmd]))
        return 127
    if not result.ok:
        log.warning(f"shell exited with status {result.returncode}")
    return result.returncode
