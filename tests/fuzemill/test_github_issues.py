from pathlib import Path

import pytest

from fuzemill.errors import BackendError, UsageError
from fuzemill.models import Issue
from fuzemill.github_issues import GithubIssuesBackend, parse_issue_number, split_create_args
from tests.fuzemill.helpers import FakeRunner, fail, install_runner, ok


def test_parse_issue_number_from_url() -> None:
    assert parse_issue_number("https://host/owner/repo/issues/42") == "42"
    assert parse_issue_number("https://host/owner/repo/issues/42/\n") == "42"


@pytest.mark.parametrize(
    "url",
    ["https://host/owner/repo/issues/abc", "https://host/owner/repo/issues/4x2", ""],
)
def test_parse_issue_number_rejects_non_numeric_segment(url: str) -> None:
    with pytest.raises(BackendError, match="could not parse issue number"):
        parse_issue_number(url)


def test_split_create_args_separates_title_body_and_flags() -> None:
    title, body, flags = split_create_args(
        ["--label", "bug", "Crash on start", "when", "offline", "--assignee=@me", "--web"]
    )

    assert title == "Crash on start"
    assert body == "when offline"
    assert flags == ["--label", "bug", "--assignee=@me", "--web"]


def test_create_parses_issue_number(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    runner = install_runner(
        monkeypatch,
        FakeRunner().on(
            "gh",
            "issue",
            "create",
            respond=ok("Creating issue in owner/repo\n\nhttps://github.com/owner/repo/issues/42\n"),
        ),
    )

    issue = GithubIssuesBackend(cwd=tmp_path).create(["Fix crash", "-l", "bug", "details"])

    assert issue == Issue(id="42", backend_kind="github")
    assert runner.calls == [
        (
            "gh",
            "issue",
            "create",
            "--title",
            "Fix crash",
            "--body",
            "details",
            "-l",
            "bug",
        )
    ]


def test_create_rejects_non_numeric_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install_runner(
        monkeypatch,
        FakeRunner().on("gh", "issue", "create", respond=ok("https://github.com/o/r/pull/new\n")),
    )

    with pytest.raises(BackendError):
        GithubIssuesBackend(cwd=tmp_path).create(["Fix crash"])


def test_create_needs_a_title(tmp_path: Path) -> None:
    with pytest.raises(UsageError):
        GithubIssuesBackend(cwd=tmp_path).create(["--label", "bug"])


def test_exists_treats_any_failure_as_not_found(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    install_runner(
        monkeypatch,
        FakeRunner().on("gh", "issue", "view", respond=fail(stderr="HTTP 401: Bad credentials")),
    )

    with pytest.raises(BackendError, match="issue '42' not found on GitHub"):
        GithubIssuesBackend(cwd=tmp_path).exists("42")


def test_update_status_adds_status_label(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    runner = install_runner(monkeypatch, FakeRunner())

    assert GithubIssuesBackend(cwd=tmp_path).update_status("42", "in_progress") is True
    assert runner.calls == [("gh", "issue", "edit", "42", "--add-label", "status:in_progress")]


def test_update_status_label_failure_is_logged_not_raised(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    install_runner(
        monkeypatch,
        FakeRunner().on("gh", "issue", "edit", respond=fail(stderr="label not found")),
    )

    assert GithubIssuesBackend(cwd=tmp_path).update_status("42", "hooked") is False
    assert "status:hooked" in capsys.readouterr().err


def test_prompt_helpers(tmp_path: Path) -> None:
    backend = GithubIssuesBackend(cwd=tmp_path)

    assert backend.show_command("42") == "gh issue view 42"
    assert backend.commit_trailer("42") == "Fixes #42"


def test_exists_returns_issue(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install_runner(monkeypatch, FakeRunner().on("gh", "issue", "view", respond=ok('{"number": 42}')))

    assert GithubIssuesBackend(cwd=tmp_path).exists("42") == Issue(id="42", backend_kind="github")
