"""Pull request helpers backed by the GitHub CLI."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from . import exec as exec_util
from . import log
from .errors import LifecycleError


class PullRequestModel(BaseModel):
    """Subset of ``gh pr list --json`` output."""

    model_config = ConfigDict(extra="allow")

    number: int
    url: str | None = None


def find_open_pr_number(repo_dir: Path, head_branch: str) -> int:
    """Return the open PR number whose head is ``head_branch``.

    The branch is looked up explicitly because ``gh pr merge 42`` would treat
    a numeric issue id as a PR number.

    Raises:
        LifecycleError: When gh fails or no open PR matches.
    """
    result = exec_util.try_run_command(
        [
            "gh",
            "pr",
            "list",
            "--head",
            head_branch,
            "--state",
            "open",
            "--json",
            "number,url",
            "--limit",
            "1",
        ],
        cwd=repo_dir,
    )
    if result is None:
        raise LifecycleError(exec_util.missing_command_detail(["gh"]))
    if not result.ok:
        raise LifecycleError(
            f"failed to look up the pull request for branch {head_branch}",
            recovery_hint=exec_util.command_failure_detail(result),
        )
    if result.stdout.strip() in {"", "[]"}:
        raise LifecycleError(f"no open pull request found for branch {head_branch}")
    try:
        pr = exec_util.parse_json_model(
            result, model_type=PullRequestModel, context="gh pr list"
        )
    except exec_util.CommandParseError as exc:
        raise LifecycleError(str(exc)) from exc
    return pr.number


def merge_pull_request(repo_dir: Path, head_branch: str) -> int:
    """Merge the open PR for ``head_branch`` and delete the branch.

    Returns:
        The merged PR number.

    Raises:
        LifecycleError: When the PR cannot be found or merged.
    """
    number = find_open_pr_number(repo_dir, head_branch)
    log.info(f"Merging pull request #{number} ({head_branch})")
    result = exec_util.run_interactive(
        ["gh", "pr", "merge", str(number), "--merge", "--delete-branch"],
        cwd=repo_dir,
    )
    if result is None:
        raise LifecycleError(exec_util.missing_command_detail(["gh"]))
    if not result.ok:
        raise LifecycleError(
            f"gh pr merge failed for pull request #{number}",
            recovery_hint=f"run 'gh pr merge {number} --merge --delete-branch' manually",
        )
    return number
