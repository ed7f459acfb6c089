"""Shared argument and location resolution helpers for commands."""

from __future__ import annotations

import re
from pathlib import Path

from .. import git
from ..errors import UsageError
from ..models import RepoLocation

_INVALID_ISSUE_ID_RE = re.compile(r"[\s/\\]")


def require_issue_id(value: object) -> str:
    """Validate an issue id used for branch, directory and session names.

    Example:
        >>> require_issue_id(" bd-a1b2 ")
        'bd-a1b2'
    """
    issue_id = str(value or "").strip()
    if not issue_id:
        raise UsageError("issue id must not be empty")
    if _INVALID_ISSUE_ID_RE.search(issue_id) or issue_id.startswith("-"):
        raise UsageError(f"invalid issue id {issue_id!r}")
    return issue_id


def resolve_location(start: Path | None = None) -> RepoLocation:
    """Locate the repository for the current working directory."""
    return git.require_repo(start or Path.cwd())
