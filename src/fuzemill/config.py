"""Configuration helpers for fuzemill.

Reads the optional user ``config.json``, validates it with Pydantic, and
layers environment and CLI overrides on top.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from . import paths
from .errors import UsageError
from .models import AGENT_NAME_VALUES, FuzemillConfig

AGENT_ENV_VAR = "FUZEMILL_AGENT"
MODEL_ENV_VAR = "FUZEMILL_MODEL"


def load_config(path: Path | None = None) -> FuzemillConfig:
    """Load the user config, returning defaults when the file is missing.

    Args:
        path: Config file to read (defaults to ``paths.config_path()``).

    Returns:
        Validated ``FuzemillConfig``.

    Raises:
        UsageError: When the file is not valid JSON or fails validation.
    """
    target = path or paths.config_path()
    if not target.exists():
        return FuzemillConfig()
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise UsageError(f"failed to read config {target}: {exc}") from exc
    try:
        return FuzemillConfig.model_validate(payload or {})
    except ValidationError as exc:
        raise UsageError(
            f"invalid config {target}",
            recovery_hint=str(exc).splitlines()[0] if str(exc) else None,
        ) from exc


def normalize_agent(value: object, source: str) -> str:
    """Normalize an agent name, rejecting unsupported agents.

    Example:
        >>> normalize_agent(" Claude ", "--agent")
        'claude'
    """
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in AGENT_NAME_VALUES:
            return normalized
    raise UsageError(f"{source} must be one of: " + ", ".join(AGENT_NAME_VALUES))


def resolve_agent(
    config: FuzemillConfig,
    override: str | None,
    *,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the agent: CLI flag, then environment, then config."""
    if override:
        return normalize_agent(override, "--agent")
    env = os.environ if env is None else env
    from_env = env.get(AGENT_ENV_VAR, "").strip()
    if from_env:
        return normalize_agent(from_env, AGENT_ENV_VAR)
    return config.agent.default


def resolve_model(
    config: FuzemillConfig,
    override: str | None,
    *,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Pick the model: CLI flag, then environment, then config."""
    if override and override.strip():
        return override.strip()
    env = os.environ if env is None else env
    from_env = env.get(MODEL_ENV_VAR, "").strip()
    if from_env:
        return from_env
    return config.agent.model
