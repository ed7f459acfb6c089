"""Side-checkout (git worktree) lifecycle for issues.

A side checkout lives next to the primary checkout as
``<primary-name>-<issue-id>`` on a branch named after the issue id.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from . import exec as exec_util
from . import git, log
from .errors import LifecycleError
from .models import RepoLocation, SideCheckout

ENVRC_FILENAME = ".envrc"


def side_checkout_for(primary_root: Path, issue_id: str) -> SideCheckout:
    """Derive the side checkout for an issue.

    Example:
        >>> side_checkout_for(Path("/w/acme"), "7")
        SideCheckout(path=PosixPath('/w/acme-7'), branch='7')
    """
    return SideCheckout(
        path=primary_root.parent / f"{primary_root.name}-{issue_id}",
        branch=issue_id,
    )


def _allow_direnv(path: Path) -> None:
    if not (path / ENVRC_FILENAME).exists():
        return
    log.debug(f"Detected {ENVRC_FILENAME}, running 'direnv allow'")
    exec_util.try_run_command(["direnv", "allow"], cwd=path)


def ensure_side_checkout(location: RepoLocation, issue_id: str) -> SideCheckout:
    """Create the side checkout for an issue, reusing it when present.

    Raises:
        LifecycleError: When ``git worktree add`` fails.
    """
    checkout = side_checkout_for(location.primary_root, issue_id)
    if checkout.path.exists():
        log.info(f"Worktree already exists: {checkout.path}")
        return checkout

    log.debug(f"Creating worktree at {checkout.path} on branch {checkout.branch}")
    result = git.git_worktree_add(location.primary_root, checkout.path, checkout.branch)
    if result is None:
        raise LifecycleError(exec_util.missing_command_detail(["git"]))
    if not result.ok:
        raise LifecycleError(
            f"git worktree add failed for {checkout.path}",
            recovery_hint=exec_util.command_failure_detail(result),
        )
    log.success(f"Created worktree {checkout.path} on branch {checkout.branch}")
    _allow_direnv(checkout.path)
    return checkout


def remove_side_checkout(
    checkout: SideCheckout, primary_root: Path, *, required: bool
) -> bool:
    """Remove a side checkout with git run from the primary checkout.

    Args:
        checkout: Checkout to remove.
        primary_root: Primary checkout; git runs there because a checkout
            cannot remove itself.
        required: Raise on failure when true; otherwise log a warning.

    Returns:
        ``True`` when the worktree was removed.
    """
    log.debug(f"Removing worktree {checkout.path}")
    result = git.git_worktree_remove(primary_root, checkout.path)
    if result is not None and result.ok:
        log.info(f"Removed worktree {checkout.path}")
        return True
    detail = (
        exec_util.missing_command_detail(["git"])
        if result is None
        else exec_util.command_failure_detail(result)
    )
    if required:
        raise LifecycleError(
            f"git worktree remove failed for {checkout.path}", recovery_hint=detail
        )
    log.warning(f"could not remove worktree {checkout.path}: {detail}")
    return False


def delete_branch(primary_root: Path, branch: str) -> bool:
    """Delete a branch; a failure is only a warning since it may be gone."""
    log.debug(f"Deleting branch {branch}")
    result = git.git_branch_delete(primary_root, branch)
    if result is None or not result.ok:
        log.warning(
            f"failed to delete branch {branch} (maybe it was already deleted?)"
        )
        return False
    log.info(f"Deleted branch {branch}")
    return True


@dataclass(frozen=True)
class UnstartTarget:
    """Side checkout chosen for removal and whether the caller is inside it."""

    checkout: SideCheckout
    is_own: bool


def resolve_unstart_target(
    location: RepoLocation, issue_id: str, current_branch: str | None
) -> UnstartTarget:
    """Pick the checkout ``unstart`` should remove.

    When the caller sits in a linked checkout on the issue's branch, that
    checkout is the target. Otherwise the target is re-derived from the
    primary checkout and must exist on disk; no further lookup is tried.

    Raises:
        LifecycleError: When the derived path does not exist.
    """
    if location.is_linked_checkout and current_branch == issue_id:
        log.debug("Detected we are inside the worktree to remove")
        return UnstartTarget(
            checkout=SideCheckout(path=location.root, branch=issue_id),
            is_own=True,
        )
    checkout = side_checkout_for(location.primary_root, issue_id)
    if not checkout.path.exists():
        raise LifecycleError(
            f"could not locate worktree at expected path: {checkout.path}"
        )
    return UnstartTarget(checkout=checkout, is_own=False)
