"""Hidden ``fuzemill test-tmux`` diagnostic."""

from __future__ import annotations

from pathlib import Path

from .. import sessions


def check_tmux(args: object) -> None:
    """Open a throwaway tmux session in the current directory."""
    del args
    sessions.run_tmux_check(Path.cwd())
