"""Subprocess helpers for running external commands."""

import json
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from . import log

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request."""

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "env": request.env,
            "check": False,
        }
        if request.capture_output:
            run_kwargs["capture_output"] = True
            run_kwargs["text"] = request.text
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None

        stdout = completed.stdout if isinstance(completed.stdout, str) else ""
        stderr = completed.stderr if isinstance(completed.stderr, str) else ""
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


@dataclass(frozen=True)
class CommandParseError(RuntimeError):
    """Raised when command output parsing fails."""

    request: CommandRequest
    detail: str
    context: str | None = None

    def __str__(self) -> str:
        return self.detail


def format_command(argv: tuple[str, ...] | list[str]) -> str:
    """Render argv as a copy-pasteable shell command.

    Example:
        >>> format_command(("git", "commit", "-m", "two words"))
        "git commit -m 'two words'"
    """
    return shlex.join(list(argv))


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    where = f" (in {request.cwd})" if request.cwd else ""
    log.debug(f"$ {format_command(request.argv)}{where}")
    result = active_runner.run(request)
    if result is not None and log.is_enabled(log.LogLevel.TRACE):
        for line in (result.stdout + result.stderr).splitlines():
            log.trace(f"  | {line}")
        log.trace(f"  exit {result.returncode}")
    return result


def try_run_command(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult | None:
    """Run a command capturing output; ``None`` if the executable is missing.

    Args:
        cmd: Command and arguments to execute.
        cwd: Optional working directory.
        env: Optional environment.

    Returns:
        ``CommandResult`` on execution, otherwise ``None``.
    """
    return run_with_runner(CommandRequest(argv=tuple(cmd), cwd=cwd, env=env))


def run_interactive(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult | None:
    """Run a command attached to the current terminal and wait for it.

    Output is not captured, so ``stdout`` and ``stderr`` on the result are
    always empty.
    """
    return run_with_runner(
        CommandRequest(
            argv=tuple(cmd),
            cwd=cwd,
            env=env,
            capture_output=False,
            text=False,
        )
    )


def missing_command_detail(cmd: list[str] | tuple[str, ...]) -> str:
    if not cmd:
        return "missing required command"
    return f"missing required command: {cmd[0]}"


def command_failure_detail(result: CommandResult) -> str:
    """Summarize a failed command with its first line of output."""
    output = (result.stderr or result.stdout or "").strip()
    command_text = format_command(result.argv)
    if output:
        first_line = output.splitlines()[0].strip()
        return f"command failed: {command_text}: {first_line}"
    return f"command failed: {command_text} (exit {result.returncode})"


def _parse_json_payload(result: CommandResult, *, context: str | None = None) -> object:
    raw = (result.stdout or "").strip()
    context_suffix = f" ({context})" if context else ""
    if not raw:
        raise CommandParseError(
            request=CommandRequest(argv=result.argv),
            detail=f"failed to parse command output{context_suffix}: empty output",
            context=context,
        )
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CommandParseError(
            request=CommandRequest(argv=result.argv),
            detail=f"failed to parse command output{context_suffix}: {exc}",
            context=context,
        ) from exc


def parse_json_model(
    result: CommandResult, *, model_type: type[ModelT], context: str | None = None
) -> ModelT:
    """Parse command stdout JSON into a validated Pydantic model.

    A JSON list is accepted when it holds exactly one object, since some
    tools wrap single records in an array.
    """
    payload = _parse_json_payload(result, context=context)
    if isinstance(payload, list) and len(payload) == 1:
        payload = payload[0]
    try:
        return model_type.model_validate(payload)
    except ValidationError as exc:
        context_suffix = f" ({context})" if context else ""
        raise CommandParseError(
            request=CommandRequest(argv=result.argv),
            detail=f"failed to validate command output{context_suffix}: {exc}",
            context=context,
        ) from exc
