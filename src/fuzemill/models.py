"""Data models for fuzemill runtime state and configuration.

Runtime records (``RepoLocation``, ``SideCheckout`` and friends) are frozen
dataclasses derived fresh on every invocation. Configuration is validated
with Pydantic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

BackendKind = Literal["beads", "github"]

AGENT_NAME_VALUES = ("claude", "gemini")
AgentName = Literal["claude", "gemini"]

SESSION_NAME_PREFIX = "fuzemill-"


@dataclass(frozen=True)
class RepoLocation:
    """Where the current invocation runs relative to the git checkouts.

    Attributes:
        root: Root of the checkout containing the start directory.
        is_linked_checkout: True when ``root`` is a linked worktree.
        primary_root: Checkout that owns the shared ``.git`` directory.
    """

    root: Path
    is_linked_checkout: bool
    primary_root: Path


@dataclass(frozen=True)
class Issue:
    """Issue identity plus the backend that owns it.

    ``status`` is only known when the backend reported it; it is never
    cached between invocations.
    """

    id: str
    backend_kind: BackendKind
    status: str | None = None


@dataclass(frozen=True)
class SideCheckout:
    """Per-issue linked worktree and its branch."""

    path: Path
    branch: str


@dataclass(frozen=True)
class AgentSession:
    """Named tmux session running an agent for one issue."""

    name: str
    agent: AgentName
    model: str | None = None


@dataclass(frozen=True)
class UnstartOutcome:
    """Result of tearing down a side checkout.

    ``return_to`` is set when the removed checkout was the caller's own, so
    the caller knows where to reopen a shell.
    """

    removed: Path
    branch_deleted: bool
    return_to: Path | None = None


class AgentConfig(BaseModel):
    """Agent launch defaults.

    Example:
        >>> AgentConfig(default="Gemini").default
        'gemini'
    """

    model_config = ConfigDict(extra="allow")

    default: AgentName = "claude"
    model: str | None = None

    @field_validator("default", mode="before")
    @classmethod
    def normalize_default(cls, value: object) -> object:
        if value is None:
            return "claude"
        if isinstance(value, str):
            return value.strip().lower() or "claude"
        return value

    @field_validator("model", mode="before")
    @classmethod
    def normalize_model(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value


class StatusConfig(BaseModel):
    """Issue status values written around the agent session."""

    model_config = ConfigDict(extra="allow")

    hooked: str = "hooked"
    in_progress: str = "in_progress"


class FuzemillConfig(BaseModel):
    """User configuration loaded from ``config.json``.

    Example:
        >>> FuzemillConfig.model_validate({"agent": {"model": "opus"}}).agent.model
        'opus'
    """

    model_config = ConfigDict(extra="allow")

    agent: AgentConfig = Field(default_factory=AgentConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
