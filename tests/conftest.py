# ruff: noqa: E402

import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import fuzemill.log as fuzemill_log

DOCTEST_MODULES = {
    ROOT / "src" / "fuzemill" / "agents.py",
    ROOT / "src" / "fuzemill" / "beads.py",
    ROOT / "src" / "fuzemill" / "commands" / "resolve.py",
    ROOT / "src" / "fuzemill" / "config.py",
    ROOT / "src" / "fuzemill" / "exec.py",
    ROOT / "src" / "fuzemill" / "github_issues.py",
    ROOT / "src" / "fuzemill" / "log.py",
    ROOT / "src" / "fuzemill" / "models.py",
    ROOT / "src" / "fuzemill" / "prompting.py",
    ROOT / "src" / "fuzemill" / "sessions.py",
    ROOT / "src" / "fuzemill" / "worktrees.py",
}


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "FUZEMILL_LOG_LEVEL",
        "FUZEMILL_AGENT",
        "FUZEMILL_MODEL",
        "FUZEMILL_SESSION",
        "NO_COLOR",
        "FUZEMILL_NO_COLOR",
        "TMUX",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FUZEMILL_CONFIG", str(tmp_path / "fuzemill-config.json"))
    fuzemill_log.reset()
    yield
    fuzemill_log.reset()


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
