import pytest

from fuzemill import log
from fuzemill.io import die


def test_level_comes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FUZEMILL_LOG_LEVEL", "warn")
    log.reset()

    assert log.configured_level() == log.LogLevel.WARNING
    assert not log.is_enabled(log.LogLevel.INFO)


def test_unknown_level_falls_back_to_info() -> None:
    log.set_level("chatty")

    assert log.configured_level() == log.LogLevel.INFO


def test_debug_narration_only_when_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    log.debug("$ git pull")
    assert capsys.readouterr().out == ""

    log.set_level("debug")
    log.debug("$ git pull")
    assert capsys.readouterr().out == "$ git pull\n"


def test_warnings_go_to_stderr_with_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    log.set_level("error")
    log.warning("hidden")
    log.error("boom")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "error: boom\n"


def test_no_color_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    assert log._color_disabled() is False

    monkeypatch.setenv("NO_COLOR", "1")
    assert log._color_disabled() is True


def test_die_prints_error_and_hint(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        die("not in a git repository", hint="cd into a checkout")

    assert excinfo.value.code == 1
    assert capsys.readouterr().err == "error: not in a git repository\nhint: cd into a checkout\n"
