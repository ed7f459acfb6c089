"""Read-only scan reported when fuzemill runs without a command."""

from __future__ import annotations

from pathlib import Path

from .. import git, log
from ..errors import FuzemillError
from ..io import say


def scan(args: object) -> Path | None:
    """Report the repository name at the located root; never fails."""
    del args
    cwd = Path.cwd()
    log.debug(f"Scanning from: {cwd}")
    root = git.find_repo_root(cwd)
    if root is None:
        say("Not in a git repository")
        return None
    say(root.name)
    log.debug(f"Git root found at: {root}")
    if log.is_enabled(log.LogLevel.DEBUG):
        try:
            location = git.locate_repo(cwd)
        except FuzemillError as exc:
            log.debug(f"Could not classify checkout: {exc}")
        else:
            if location is not None and location.is_linked_checkout:
                log.debug(f"Linked worktree of: {location.primary_root}")
    return root
