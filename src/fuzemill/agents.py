"""Agent registry and launch-command helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import UsageError
from .prompting import shell_quote


@dataclass(frozen=True)
class AgentSpec:
    """Describe how to launch an interactive agent CLI with a prompt."""

    name: str
    display_name: str
    command: tuple[str, ...]
    co_author: str
    prompt_flag: str | None = None
    model_flag: str = "--model"

    def build_launch_command(self, prompt: str, model: str | None = None) -> str:
        """Return one shell command line that starts the agent.

        Example:
            >>> AGENTS["gemini"].build_launch_command("hi", "flash")
            "gemini --model 'flash' --prompt-interactive 'hi'"
        """
        parts = list(self.command)
        if model:
            parts.extend([self.model_flag, shell_quote(model)])
        if self.prompt_flag:
            parts.append(self.prompt_flag)
        parts.append(shell_quote(prompt))
        return " ".join(parts)

    @property
    def co_author_trailer(self) -> str:
        return f"Co-Authored-By: {self.co_author}"


AGENTS: dict[str, AgentSpec] = {
    "claude": AgentSpec(
        name="claude",
        display_name="Claude",
        command=("claude",),
        co_author="Claude <noreply@anthropic.com>",
    ),
    "gemini": AgentSpec(
        name="gemini",
        display_name="Gemini",
        command=("gemini",),
        co_author="Gemini <gemini-code-assist@google.com>",
        prompt_flag="--prompt-interactive",
    ),
}


def normalize_agent_name(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip().lower()


def supported_agent_names() -> tuple[str, ...]:
    return tuple(AGENTS.keys())


def get_agent(name: str) -> AgentSpec:
    """Return the agent spec for a name.

    Raises:
        UsageError: For unknown agents.
    """
    spec = AGENTS.get(normalize_agent_name(name))
    if spec is None:
        raise UsageError(
            f"unsupported agent {name!r}; expected one of: "
            + ", ".join(supported_agent_names())
        )
    return spec
