"""GitHub Issues backend driven through the ``gh`` CLI.

GitHub has no native status field, so statuses are encoded as
``status:<status>`` labels.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from . import exec as exec_util
from . import log
from .errors import BackendError, UsageError
from .models import BackendKind, Issue

STATUS_LABEL_PREFIX = "status:"
_ISSUE_NUMBER_RE = re.compile(r"[0-9]+")
# gh issue create flags that consume the following argument.
_VALUE_FLAGS = frozenset(
    {
        "-a",
        "--assignee",
        "-F",
        "--body-file",
        "-l",
        "--label",
        "-m",
        "--milestone",
        "-p",
        "--project",
        "-R",
        "--repo",
        "--recover",
        "-T",
        "--template",
    }
)


def status_label(status: str) -> str:
    """Return the label used to record a status.

    Example:
        >>> status_label("in_progress")
        'status:in_progress'
    """
    return f"{STATUS_LABEL_PREFIX}{status}"


def parse_issue_number(url: str) -> str:
    """Extract the issue number from a created-issue URL.

    Example:
        >>> parse_issue_number("https://github.com/acme/repo/issues/42")
        '42'

    Raises:
        BackendError: When the trailing path segment is not all digits.
    """
    segment = url.strip().rstrip("/").rsplit("/", 1)[-1]
    if not _ISSUE_NUMBER_RE.fullmatch(segment):
        raise BackendError(f"could not parse issue number from gh output: {url.strip()!r}")
    return segment


def split_create_args(args: Sequence[str]) -> tuple[str | None, str, list[str]]:
    """Split free-form create arguments into title, body and gh flags.

    The first non-flag argument is the title, the remaining non-flag
    arguments are joined into the body, and flags pass through verbatim.

    Example:
        >>> split_create_args(["Fix crash", "-l", "bug", "on", "startup"])
        ('Fix crash', 'on startup', ['-l', 'bug'])
    """
    title: str | None = None
    body_parts: list[str] = []
    flags: list[str] = []
    index = 0
    while index < len(args):
        arg = args[index]
        if arg.startswith("-") and arg != "-":
            flags.append(arg)
            if "=" not in arg and arg in _VALUE_FLAGS and index + 1 < len(args):
                flags.append(args[index + 1])
                index += 1
        elif title is None:
            title = arg
        else:
            body_parts.append(arg)
        index += 1
    return title, " ".join(body_parts), flags


@dataclass(frozen=True)
class GithubIssuesBackend:
    """Backend adapter for GitHub Issues."""

    cwd: Path

    kind: BackendKind = "github"
    display_name: str = "GitHub Issues"

    def _run(self, args: list[str]) -> exec_util.CommandResult | None:
        return exec_util.try_run_command(["gh", *args], cwd=self.cwd)

    def exists(self, issue_id: str) -> Issue:
        log.debug(f"Verifying issue {issue_id!r} exists in {self.display_name}")
        result = self._run(["issue", "view", issue_id, "--json", "number"])
        if result is None:
            raise BackendError(exec_util.missing_command_detail(["gh"]))
        if not result.ok:
            raise BackendError(f"issue '{issue_id}' not found on GitHub")
        return Issue(id=issue_id, backend_kind=self.kind)

    def create(self, args: Sequence[str]) -> Issue:
        title, body, flags = split_create_args(args)
        if not title:
            raise UsageError("issue creation needs a title")
        log.debug(f"Creating {self.display_name} issue {title!r}")
        result = self._run(["issue", "create", "--title", title, "--body", body, *flags])
        if result is None:
            raise BackendError(exec_util.missing_command_detail(["gh"]))
        if not result.ok:
            raise BackendError(exec_util.command_failure_detail(result))
        lines = [line for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            raise BackendError("gh issue create returned no issue URL")
        issue_id = parse_issue_number(lines[-1])
        log.info(f"Created {self.display_name} issue #{issue_id}")
        return Issue(id=issue_id, backend_kind=self.kind)

    def update_status(self, issue_id: str, status: str) -> bool:
        label = status_label(status)
        result = self._run(["issue", "edit", issue_id, "--add-label", label])
        if result is None:
            log.warning(exec_util.missing_command_detail(["gh"]))
            return False
        if not result.ok:
            log.warning(
                f"failed to add label {label!r} to issue {issue_id}: "
                f"{exec_util.command_failure_detail(result)}"
            )
            return False
        return True

    def close(self, issue_id: str) -> bool:
        result = self._run(["issue", "close", issue_id])
        if result is None or not result.ok:
            return False
        log.info(f"Closed {self.display_name} issue #{issue_id}")
        return True

    def show_command(self, issue_id: str) -> str:
        return f"gh issue view {issue_id}"

    def commit_trailer(self, issue_id: str) -> str:
        return f"Fixes #{issue_id}"
