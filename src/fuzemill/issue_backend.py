"""Issue backend interface and per-run backend selection.

Exactly two backends exist: Beads (``bd``) is preferred, GitHub Issues
(``gh``) is the fallback. The choice is made once per invocation by probing
``bd --version``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from . import exec as exec_util
from . import log
from .errors import FuzemillError
from .models import BackendKind, Issue

BEADS_PROBE = ("bd", "--version")


class IssueBackend(Protocol):
    """Capabilities every issue backend provides."""

    kind: BackendKind
    display_name: str

    def exists(self, issue_id: str) -> Issue:
        """Return the issue, raising ``BackendError`` when it does not exist."""
        ...

    def create(self, args: Sequence[str]) -> Issue:
        """Create an issue from free-form arguments."""
        ...

    def update_status(self, issue_id: str, status: str) -> bool:
        """Record a status; failures are logged and reported as ``False``."""
        ...

    def close(self, issue_id: str) -> bool: ...

    def show_command(self, issue_id: str) -> str:
        """Shell command an agent runs to read the issue."""
        ...

    def commit_trailer(self, issue_id: str) -> str: ...


def beads_available(cwd: Path) -> bool:
    """Return whether ``bd`` answers a trivial capability query."""
    result = exec_util.try_run_command(list(BEADS_PROBE), cwd=cwd)
    return bool(result and result.ok)


def select_backend(cwd: Path) -> IssueBackend:
    """Select the authoritative backend for this invocation."""
    from .beads import BeadsBackend
    from .github_issues import GithubIssuesBackend

    if beads_available(cwd):
        backend: IssueBackend = BeadsBackend(cwd=cwd)
    else:
        log.debug("bd not available")
        backend = GithubIssuesBackend(cwd=cwd)
    log.debug(f"Using {backend.display_name} backend")
    return backend


def update_status_best_effort(backend: IssueBackend, issue_id: str, status: str) -> bool:
    """Update status without letting any failure escape."""
    log.debug(f"Setting status of {issue_id} to {status!r}")
    try:
        return backend.update_status(issue_id, status)
    except FuzemillError as exc:
        log.warning(f"failed to set status {status!r} on {issue_id}: {exc}")
        return False


def close_best_effort(backend: IssueBackend, issue_id: str) -> bool:
    """Close an issue, logging instead of failing."""
    log.debug(f"Closing issue {issue_id}")
    try:
        closed = backend.close(issue_id)
    except FuzemillError as exc:
        log.warning(f"failed to close issue {issue_id}: {exc}")
        return False
    if not closed:
        log.warning(f"failed to close issue {issue_id}; close it manually")
    return closed
