"""tmux-backed agent sessions.

fuzemill keeps no handle on a session beyond its name: it creates the
session detached, attaches in the foreground, and forgets it once the attach
returns.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from . import agents
from . import exec as exec_util
from . import log
from .errors import SessionError
from .issue_backend import IssueBackend
from .models import SESSION_NAME_PREFIX, AgentSession
from .prompting import build_issue_prompt

SESSION_ENV_VAR = "FUZEMILL_SESSION"
TMUX_ENV_VAR = "TMUX"
TEST_SESSION_NAME = f"{SESSION_NAME_PREFIX}test-tmux"
TEST_SESSION_COMMAND = (
    "echo 'fuzemill: tmux works. Run fuzemill done (or exit) to leave.'; "
    'exec "${SHELL:-sh}"'
)


def session_name(issue_id: str) -> str:
    """Return the tmux session name for an issue.

    tmux rewrites ``.`` and ``:`` in session names to ``_``, so the name is
    built in that form up front and every later lookup matches it.

    Example:
        >>> session_name("7")
        'fuzemill-7'
        >>> session_name("bd-a3f8.1")
        'fuzemill-bd-a3f8_1'
    """
    return SESSION_NAME_PREFIX + issue_id.replace(".", "_").replace(":", "_")


def _exact_target(name: str) -> str:
    return f"={name}"


def session_exists(name: str) -> bool:
    result = exec_util.try_run_command(
        ["tmux", "has-session", "-t", _exact_target(name)]
    )
    return bool(result and result.ok)


def new_session(name: str, path: Path, command: str) -> None:
    """Start a detached tmux session running ``command`` in ``path``.

    Raises:
        SessionError: When tmux is missing or refuses to create the session.
    """
    argv = [
        "tmux",
        "new-session",
        "-d",
        "-s",
        name,
        "-c",
        str(path),
        "-e",
        f"{SESSION_ENV_VAR}={name}",
        command,
    ]
    result = exec_util.try_run_command(argv, cwd=path)
    if result is None:
        raise SessionError(
            f"failed to start tmux session {name}",
            recovery_hint="is tmux installed?",
        )
    if not result.ok:
        raise SessionError(
            f"failed to start tmux session {name}: "
            f"{exec_util.command_failure_detail(result)}",
            recovery_hint="is tmux installed?",
        )


def attach_session(name: str) -> bool:
    """Attach to a session in the foreground until it ends or detaches.

    A failed attach is treated like a detach so callers can clean up.
    """
    log.debug(f"Attaching to tmux session {name}")
    result = exec_util.run_interactive(
        ["tmux", "attach-session", "-t", _exact_target(name)]
    )
    if result is None or not result.ok:
        log.debug(f"tmux session {name} ended or detached")
        return False
    return True


def build_session_command(
    issue_id: str,
    agent_name: str,
    model: str | None,
    backend: IssueBackend,
) -> str:
    """Return the agent shell command line for an issue session."""
    spec = agents.get_agent(agent_name)
    prompt = build_issue_prompt(
        issue_id,
        show_command=backend.show_command(issue_id),
        backend_trailer=backend.commit_trailer(issue_id),
        co_author_trailer=spec.co_author_trailer,
    )
    return spec.build_launch_command(prompt, model)


def launch_session(
    path: Path,
    issue_id: str,
    agent_name: str,
    model: str | None,
    backend: IssueBackend,
) -> AgentSession:
    """Run an agent for an issue in tmux and block until the session ends.

    An existing session with the same name is attached to instead of being
    recreated.
    """
    name = session_name(issue_id)
    session = AgentSession(name=name, agent=agent_name, model=model)
    if session_exists(name):
        log.info(f"Attaching to existing tmux session {name}")
    else:
        command = build_session_command(issue_id, agent_name, model, backend)
        display_name = agents.get_agent(agent_name).display_name
        log.info(f"Starting {display_name} in tmux session {name}")
        new_session(name, path, command)
    attach_session(name)
    return session


def signal_done(env: Mapping[str, str] | None = None) -> bool:
    """Kill the enclosing fuzemill tmux session.

    Returns:
        ``True`` when a session was killed; ``False`` outside tmux or when
        tmux refused.
    """
    env = os.environ if env is None else env
    if not env.get(TMUX_ENV_VAR):
        log.info("Not inside a tmux session; nothing to do.")
        return False
    argv = ["tmux", "kill-session"]
    name = env.get(SESSION_ENV_VAR, "").strip()
    if name:
        argv.extend(["-t", _exact_target(name)])
    log.debug(f"Ending tmux session {name or '(current)'}")
    result = exec_util.try_run_command(argv)
    if result is None or not result.ok:
        log.warning("failed to end the tmux session")
        return False
    return True


def run_tmux_check(cwd: Path) -> None:
    """Start and attach a throwaway session to check tmux integration."""
    if session_exists(TEST_SESSION_NAME):
        log.info(f"Reusing tmux session {TEST_SESSION_NAME}")
    else:
        new_session(TEST_SESSION_NAME, cwd, TEST_SESSION_COMMAND)
    attach_session(TEST_SESSION_NAME)
    log.success("tmux session test finished")
