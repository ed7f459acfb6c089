"""Implementation for the ``fuzemill merge`` command."""

from __future__ import annotations

from .. import exec as exec_util
from .. import git, issue_backend, log, prs, worktrees
from ..errors import LifecycleError, LocationError
from .resolve import require_issue_id, resolve_location


def merge_issue(args: object) -> None:
    """Merge the issue's pull request, update the primary checkout, close it."""
    issue_id = require_issue_id(getattr(args, "issue_id", None))
    location = resolve_location()
    if location.is_linked_checkout:
        raise LocationError(
            "merge must be run from the primary checkout, not a worktree",
            recovery_hint=f"cd {location.primary_root} and run the merge again",
        )
    primary_root = location.primary_root
    backend = issue_backend.select_backend(primary_root)

    checkout = worktrees.side_checkout_for(primary_root, issue_id)
    if checkout.path.exists():
        log.debug("Releasing the branch held by the issue worktree")
        worktrees.remove_side_checkout(checkout, primary_root, required=False)

    prs.merge_pull_request(primary_root, checkout.branch)

    log.debug(f"Pulling latest changes into {primary_root}")
    result = git.git_pull(primary_root)
    if result is None:
        raise LifecycleError(exec_util.missing_command_detail(["git"]))
    if not result.ok:
        raise LifecycleError(
            f"git pull failed in {primary_root}",
            recovery_hint="resolve the pull manually, then close the issue",
        )

    issue_backend.close_best_effort(backend, issue_id)
    log.success(f"Merged {issue_id}")
