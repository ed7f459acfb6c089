"""Beads issue backend driven through the ``bd`` CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from . import exec as exec_util
from . import log
from .errors import BackendError, UsageError
from .models import BackendKind, Issue

_MISSING_STORE_MARKERS = (
    "no beads database",
    "database not found",
    "not initialized",
    "bd init",
)


class BeadsIssueModel(BaseModel):
    """Subset of ``bd ... --json`` issue output that fuzemill reads."""

    model_config = ConfigDict(extra="allow")

    id: str
    status: str | None = None


def _output_detail(result: exec_util.CommandResult) -> str:
    return (result.stderr or result.stdout or "").strip()


def is_missing_store_error(detail: str) -> bool:
    """Return whether ``bd`` output says the tracker is not initialized.

    Example:
        >>> is_missing_store_error("Error: no beads database found")
        True
        >>> is_missing_store_error("Error: issue bd-9 not found")
        False
    """
    lowered = detail.lower()
    return any(marker in lowered for marker in _MISSING_STORE_MARKERS)


@dataclass(frozen=True)
class BeadsBackend:
    """Backend adapter for Beads."""

    cwd: Path

    kind: BackendKind = "beads"
    display_name: str = "Beads"

    def _run(self, args: list[str]) -> exec_util.CommandResult | None:
        return exec_util.try_run_command(["bd", *args], cwd=self.cwd)

    def exists(self, issue_id: str) -> Issue:
        log.debug(f"Verifying issue {issue_id!r} exists in {self.display_name}")
        result = self._run(["show", issue_id])
        if result is None:
            raise BackendError(exec_util.missing_command_detail(["bd"]))
        if result.ok:
            return Issue(id=issue_id, backend_kind=self.kind)
        if is_missing_store_error(_output_detail(result)):
            raise BackendError(
                "beads is not initialized in this repository",
                recovery_hint="run 'bd init' in the primary checkout",
            )
        raise BackendError(f"issue '{issue_id}' not found in beads")

    def create(self, args: Sequence[str]) -> Issue:
        if not args:
            raise UsageError("issue creation needs arguments (e.g. a title)")
        log.debug(f"Creating {self.display_name} issue")
        result = self._run(["create", "--json", *args])
        if result is None:
            raise BackendError(exec_util.missing_command_detail(["bd"]))
        if not result.ok:
            detail = _output_detail(result)
            if is_missing_store_error(detail):
                raise BackendError(
                    "beads is not initialized in this repository",
                    recovery_hint="run 'bd init' in the primary checkout",
                )
            raise BackendError(exec_util.command_failure_detail(result))
        try:
            issue = exec_util.parse_json_model(
                result, model_type=BeadsIssueModel, context="bd create"
            )
        except exec_util.CommandParseError as exc:
            raise BackendError(str(exc)) from exc
        issue_id = issue.id.strip()
        if not issue_id:
            raise BackendError("bd create returned an empty issue id")
        log.info(f"Created {self.display_name} issue {issue_id}")
        return Issue(id=issue_id, backend_kind=self.kind, status=issue.status)

    def update_status(self, issue_id: str, status: str) -> bool:
        result = self._run(["update", issue_id, "--status", status])
        if result is None:
            log.warning(exec_util.missing_command_detail(["bd"]))
            return False
        if not result.ok:
            log.warning(
                f"failed to set status {status!r} on {issue_id}: "
                f"{exec_util.command_failure_detail(result)}"
            )
            return False
        return True

    def close(self, issue_id: str) -> bool:
        result = self._run(["close", issue_id])
        if result is None or not result.ok:
            return False
        log.info(f"Closed {self.display_name} issue {issue_id}")
        return True

    def show_command(self, issue_id: str) -> str:
        return f"bd show {issue_id}"

    def commit_trailer(self, issue_id: str) -> str:
        return f"Beads-Issue: {issue_id}"
