"""Implementation for the ``fuzemill unstart`` command."""

from __future__ import annotations

from .. import git, log, worktrees
from ..models import UnstartOutcome
from .resolve import require_issue_id, resolve_location


def unstart_issue(args: object) -> UnstartOutcome:
    """Remove an issue's worktree and branch.

    The caller's working directory is never changed here; when the removed
    worktree was the caller's own, ``return_to`` names the primary checkout
    so the CLI can reopen a shell there.
    """
    issue_id = require_issue_id(getattr(args, "issue_id", None))
    location = resolve_location()
    current_branch = git.git_current_branch(location.root)
    target = worktrees.resolve_unstart_target(location, issue_id, current_branch)

    worktrees.remove_side_checkout(
        target.checkout, location.primary_root, required=True
    )
    branch_deleted = worktrees.delete_branch(location.primary_root, target.checkout.branch)

    return_to = location.primary_root if target.is_own else None
    if return_to is not None:
        log.info(f"Returning to primary checkout {return_to}")
    return UnstartOutcome(
        removed=target.checkout.path,
        branch_deleted=branch_deleted,
        return_to=return_to,
    )
