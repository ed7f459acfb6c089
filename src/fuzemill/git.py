"""Git helpers: repository location and worktree/branch commands."""

from pathlib import Path

from . import exec as exec_util
from .errors import LocationError
from .models import RepoLocation

GIT_MARKER = ".git"


def git_command(args: list[str]) -> list[str]:
    """Build a git command line."""
    return ["git", *args]


def _run_git(args: list[str], *, cwd: Path | None = None) -> exec_util.CommandResult | None:
    return exec_util.try_run_command(git_command(args), cwd=cwd)


def find_repo_root(start: Path) -> Path | None:
    """Walk ``start`` and its parents until a ``.git`` entry is found.

    Args:
        start: Directory to search from.

    Returns:
        The directory holding ``.git``, or ``None`` at the filesystem root.
    """
    current = start
    while True:
        if (current / GIT_MARKER).exists():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def git_common_dir(repo_root: Path) -> Path:
    """Return the absolute shared git directory for a checkout.

    Raises:
        LocationError: When git cannot answer; the primary checkout is
            unknown without it.
    """
    result = _run_git(
        ["rev-parse", "--path-format=absolute", "--git-common-dir"], cwd=repo_root
    )
    if result is None:
        raise LocationError(exec_util.missing_command_detail(["git"]))
    if not result.ok:
        raise LocationError(
            f"failed to resolve the primary checkout for {repo_root}",
            recovery_hint=exec_util.command_failure_detail(result),
        )
    resolved = result.stdout.strip()
    if not resolved:
        raise LocationError(f"git returned no common dir for {repo_root}")
    return Path(resolved)


def locate_repo(start: Path) -> RepoLocation | None:
    """Classify the checkout containing ``start``.

    A ``.git`` regular file marks a linked worktree; its primary checkout is
    the parent of the shared git directory.

    Returns:
        ``RepoLocation`` or ``None`` when not inside a repository.
    """
    root = find_repo_root(start)
    if root is None:
        return None
    if (root / GIT_MARKER).is_file():
        primary_root = git_common_dir(root).parent
        return RepoLocation(root=root, is_linked_checkout=True, primary_root=primary_root)
    return RepoLocation(root=root, is_linked_checkout=False, primary_root=root)


def require_repo(start: Path) -> RepoLocation:
    """Like ``locate_repo`` but fatal outside a repository."""
    location = locate_repo(start)
    if location is None:
        raise LocationError("not in a git repository")
    return location


def git_current_branch(repo_dir: Path) -> str | None:
    """Return the current branch name, or ``None`` when unavailable."""
    result = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir)
    if result is None or not result.ok:
        return None
    return result.stdout.strip() or None


def git_worktree_add(primary_root: Path, path: Path, branch: str) -> exec_util.CommandResult | None:
    return _run_git(["worktree", "add", "-b", branch, str(path)], cwd=primary_root)


def git_worktree_remove(primary_root: Path, path: Path) -> exec_util.CommandResult | None:
    return _run_git(["worktree", "remove", str(path)], cwd=primary_root)


def git_branch_delete(primary_root: Path, branch: str) -> exec_util.CommandResult | None:
    return _run_git(["branch", "-D", branch], cwd=primary_root)


def git_pull(repo_dir: Path) -> exec_util.CommandResult | None:
    """Pull in the foreground so git progress reaches the terminal."""
    return exec_util.run_interactive(git_command(["pull"]), cwd=repo_dir)
