from pathlib import Path

import pytest

from fuzemill.beads import BeadsBackend
from fuzemill.errors import BackendError, UsageError
from fuzemill.models import Issue
from tests.fuzemill.helpers import FakeRunner, fail, install_runner, missing, ok


def test_exists_passes_for_known_issue(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    runner = install_runner(monkeypatch, FakeRunner().on("bd", "show", respond=ok("bd-1: x")))

    issue = BeadsBackend(cwd=tmp_path).exists("bd-1")

    assert issue == Issue(id="bd-1", backend_kind="beads")
    request = runner.request_for("bd", "show")
    assert request.argv == ("bd", "show", "bd-1")
    assert request.cwd == tmp_path


def test_exists_distinguishes_uninitialized_tracker(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    install_runner(
        monkeypatch,
        FakeRunner().on(
            "bd",
            "show",
            respond=fail(stderr="Error: no beads database found\nHint: run 'bd init'"),
        ),
    )

    with pytest.raises(BackendError, match="not initialized") as excinfo:
        BeadsBackend(cwd=tmp_path).exists("bd-1")

    assert excinfo.value.recovery_hint == "run 'bd init' in the primary checkout"


def test_exists_reports_missing_issue(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install_runner(
        monkeypatch,
        FakeRunner().on("bd", "show", respond=fail(stderr="Error: issue bd-9 not found")),
    )

    with pytest.raises(BackendError, match="issue 'bd-9' not found in beads"):
        BeadsBackend(cwd=tmp_path).exists("bd-9")


def test_exists_without_bd_installed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install_runner(monkeypatch, FakeRunner().on("bd", respond=missing()))

    with pytest.raises(BackendError, match="missing required command: bd"):
        BeadsBackend(cwd=tmp_path).exists("bd-1")


def test_create_passes_args_through_and_parses_id(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    runner = install_runner(
        monkeypatch,
        FakeRunner().on(
            "bd",
            "create",
            respond=ok('{"id": "bd-a1b2", "title": "Fix crash", "status": "open"}\n'),
        ),
    )

    issue = BeadsBackend(cwd=tmp_path).create(["Fix crash", "-p", "1"])

    assert issue == Issue(id="bd-a1b2", backend_kind="beads", status="open")
    assert runner.calls == [("bd", "create", "--json", "Fix crash", "-p", "1")]


@pytest.mark.parametrize("stdout", ["", "Created issue bd-1", '{"title": "x"}', '{"id": "  "}'])
def test_create_rejects_malformed_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, stdout: str
) -> None:
    install_runner(monkeypatch, FakeRunner().on("bd", "create", respond=ok(stdout)))

    with pytest.raises(BackendError):
        BeadsBackend(cwd=tmp_path).create(["Fix crash"])


def test_create_requires_arguments(tmp_path: Path) -> None:
    with pytest.raises(UsageError):
        BeadsBackend(cwd=tmp_path).create([])


def test_update_status_failure_returns_false(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    runner = install_runner(
        monkeypatch, FakeRunner().on("bd", "update", respond=fail(stderr="boom"))
    )

    assert BeadsBackend(cwd=tmp_path).update_status("bd-1", "hooked") is False
    assert runner.calls == [("bd", "update", "bd-1", "--status", "hooked")]
    assert "warning: failed to set status 'hooked' on bd-1" in capsys.readouterr().err


def test_close_reports_success(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install_runner(monkeypatch, FakeRunner())
    assert BeadsBackend(cwd=tmp_path).close("bd-1") is True

    install_runner(monkeypatch, FakeRunner().on("bd", "close", respond=fail()))
    assert BeadsBackend(cwd=tmp_path).close("bd-1") is False


def test_prompt_helpers(tmp_path: Path) -> None:
    backend = BeadsBackend(cwd=tmp_path)

    assert backend.show_command("bd-1") == "bd show bd-1"
    assert backend.commit_trailer("bd-1") == "Beads-Issue: bd-1"
