"""Typer entrypoint for the fuzemill CLI.

Each command collects its options into a namespace, delegates to the
matching ``fuzemill.commands`` module, and turns ``FuzemillError`` into a
single-line error and a non-zero exit.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Callable, TypeVar

import typer

from . import __version__, shell
from . import log as fuzemill_log
from .commands import done as done_cmd
from .commands import merge as merge_cmd
from .commands import scan as scan_cmd
from .commands import start as start_cmd
from .commands import tmux_check as tmux_check_cmd
from .commands import unstart as unstart_cmd
from .errors import FuzemillError
from .io import die
from .models import AGENT_NAME_VALUES

ResultT = TypeVar("ResultT")

app = typer.Typer(
    name="fuzemill",
    help="Bind a git worktree, an issue and an agent session into one workflow.",
    add_completion=False,
    no_args_is_help=False,
)


def _run(func: Callable[[SimpleNamespace], ResultT], args: SimpleNamespace) -> ResultT:
    try:
        return func(args)
    except FuzemillError as exc:
        die(str(exc), hint=exc.recovery_hint)


def _validate_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in fuzemill_log.LEVEL_NAMES:
        raise typer.BadParameter(
            "expected one of: " + ", ".join(fuzemill_log.LEVEL_NAMES)
        )
    return normalized


def _apply_verbose(verbose: bool) -> None:
    if verbose:
        fuzemill_log.set_level("debug")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fuzemill {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="narrate each step before running it"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        callback=_validate_log_level,
        help="log level (trace|debug|info|success|warning|error)",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="disable colorized output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="show the version and exit",
    ),
) -> None:
    """Run a command, or report the current repository when none is given."""
    del version
    if log_level is not None:
        fuzemill_log.set_level(log_level)
    _apply_verbose(verbose)
    if no_color:
        fuzemill_log.set_no_color(True)
    if ctx.invoked_subcommand is None:
        _run(scan_cmd.scan, SimpleNamespace())


@app.command(
    "start",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def start_command(
    create_args: list[str] | None = typer.Argument(
        None,
        help="arguments for creating a new issue (title first) when --id is not given",
        show_default=False,
    ),
    issue_id: str | None = typer.Option(None, "--id", help="existing issue id"),
    model: str | None = typer.Option(None, "--model", help="model passed to the agent"),
    agent: str | None = typer.Option(
        None,
        "--agent",
        help="agent to launch (" + "|".join(AGENT_NAME_VALUES) + ")",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", hidden=True),
) -> None:
    """Start working on an issue in its own worktree and agent session."""
    _apply_verbose(verbose)
    _run(
        start_cmd.start_issue,
        SimpleNamespace(
            issue_id=issue_id,
            create_args=list(create_args or []),
            model=model,
            agent=agent,
        ),
    )


@app.command("unstart")
def unstart_command(
    issue_id: str = typer.Argument(..., help="issue id"),
    verbose: bool = typer.Option(False, "--verbose", "-v", hidden=True),
) -> None:
    """Stop working on an issue (removes its worktree and branch)."""
    _apply_verbose(verbose)
    outcome = _run(unstart_cmd.unstart_issue, SimpleNamespace(issue_id=issue_id))
    if outcome.return_to is not None:
        shell.spawn_shell(outcome.return_to)


@app.command("merge")
def merge_command(
    issue_id: str = typer.Argument(..., help="issue id"),
    verbose: bool = typer.Option(False, "--verbose", "-v", hidden=True),
) -> None:
    """Merge the issue's pull request, pull, and close the issue."""
    _apply_verbose(verbose)
    _run(merge_cmd.merge_issue, SimpleNamespace(issue_id=issue_id))


@app.command("done")
def done_command(
    verbose: bool = typer.Option(False, "--verbose", "-v", hidden=True),
) -> None:
    """Signal that the agent is finished and end its tmux session."""
    _apply_verbose(verbose)
    _run(done_cmd.signal_done, SimpleNamespace())


@app.command("test-tmux", hidden=True)
def test_tmux_command(
    verbose: bool = typer.Option(False, "--verbose", "-v", hidden=True),
) -> None:
    """Open a throwaway tmux session to check the integration."""
    _apply_verbose(verbose)
    _run(tmux_check_cmd.check_tmux, SimpleNamespace())


def main() -> None:
    app(prog_name="fuzemill")


if __name__ == "__main__":
    main()
