from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from fuzemill import exec as exec_util

Responder = Callable[[exec_util.CommandRequest], "exec_util.CommandResult | None"]


def ok(stdout: str = "", stderr: str = "") -> Callable[[exec_util.CommandRequest], exec_util.CommandResult]:
    return lambda request: exec_util.CommandResult(
        argv=request.argv, returncode=0, stdout=stdout, stderr=stderr
    )


def fail(
    returncode: int = 1, stdout: str = "", stderr: str = ""
) -> Callable[[exec_util.CommandRequest], exec_util.CommandResult]:
    return lambda request: exec_util.CommandResult(
        argv=request.argv, returncode=returncode, stdout=stdout, stderr=stderr
    )


def missing() -> Callable[[exec_util.CommandRequest], None]:
    return lambda request: None


@dataclass
class FakeRunner:
    """Command runner that records requests and answers by argv prefix.

    Later rules win over earlier ones; unmatched commands succeed silently.
    """

    rules: list[tuple[tuple[str, ...], Responder]] = field(default_factory=list)
    requests: list[exec_util.CommandRequest] = field(default_factory=list)

    def on(self, *prefix: str, respond: Responder) -> FakeRunner:
        self.rules.append((tuple(prefix), respond))
        return self

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        for prefix, respond in reversed(self.rules):
            if request.argv[: len(prefix)] == prefix:
                return respond(request)
        return exec_util.CommandResult(argv=request.argv, returncode=0, stdout="", stderr="")

    @property
    def calls(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]

    def calls_starting(self, *prefix: str) -> list[tuple[str, ...]]:
        return [argv for argv in self.calls if argv[: len(prefix)] == prefix]

    def request_for(self, *prefix: str) -> exec_util.CommandRequest:
        for request in self.requests:
            if request.argv[: len(prefix)] == prefix:
                return request
        raise AssertionError(f"no request starting with {prefix!r}")


def install_runner(monkeypatch: pytest.MonkeyPatch, runner: FakeRunner) -> FakeRunner:
    monkeypatch.setattr(exec_util, "_DEFAULT_COMMAND_RUNNER", runner)
    return runner


def make_primary(parent: Path, name: str = "acme") -> Path:
    root = parent / name
    (root / ".git").mkdir(parents=True)
    return root


def make_linked(primary: Path, issue_id: str) -> Path:
    path = primary.parent / f"{primary.name}-{issue_id}"
    path.mkdir()
    (path / ".git").write_text(
        f"gitdir: {primary}/.git/worktrees/{path.name}\n", encoding="utf-8"
    )
    return path


@dataclass
class FakeGit:
    """Simulates git worktrees and branches on disk for one primary checkout."""

    primary: Path
    branches: set[str] = field(default_factory=lambda: {"main"})
    current_branch: str = "main"

    def install(self, runner: FakeRunner) -> FakeRunner:
        runner.on(
            "git",
            "rev-parse",
            "--path-format=absolute",
            "--git-common-dir",
            respond=ok(f"{self.primary / '.git'}\n"),
        )
        runner.on("git", "rev-parse", "--abbrev-ref", "HEAD", respond=self._branch)
        runner.on("git", "worktree", "add", respond=self._worktree_add)
        runner.on("git", "worktree", "remove", respond=self._worktree_remove)
        runner.on("git", "branch", "-D", respond=self._branch_delete)
        return runner

    def _branch(self, request: exec_util.CommandRequest) -> exec_util.CommandResult:
        return ok(f"{self.current_branch}\n")(request)

    def _worktree_add(self, request: exec_util.CommandRequest) -> exec_util.CommandResult:
        branch, path = request.argv[4], Path(request.argv[5])
        if branch in self.branches:
            return fail(128, stderr=f"fatal: a branch named '{branch}' already exists")(request)
        self.branches.add(branch)
        assert make_linked(self.primary, branch) == path
        return ok()(request)

    def _worktree_remove(self, request: exec_util.CommandRequest) -> exec_util.CommandResult:
        path = Path(request.argv[3])
        if not (path / ".git").is_file():
            return fail(128, stderr=f"fatal: '{path}' is not a working tree")(request)
        shutil.rmtree(path)
        return ok()(request)

    def _branch_delete(self, request: exec_util.CommandRequest) -> exec_util.CommandResult:
        branch = request.argv[3]
        if branch not in self.branches:
            return fail(1, stderr=f"error: branch '{branch}' not found.")(request)
        self.branches.discard(branch)
        return ok(f"Deleted branch {branch}.\n")(request)
