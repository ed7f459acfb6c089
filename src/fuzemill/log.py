"""Leveled terminal output for fuzemill.

Narration (``debug``/``trace``) and progress go to stdout; ``warning`` and
``error`` go to stderr with a ``warning:``/``error:`` prefix. The level is
taken from ``--log-level``/``--verbose`` when given, else from
``FUZEMILL_LOG_LEVEL``; color is off under ``--no-color``, ``NO_COLOR`` or
``FUZEMILL_NO_COLOR``.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LEVEL_ENV_VAR = "FUZEMILL_LOG_LEVEL"
NO_COLOR_ENV_VARS = ("NO_COLOR", "FUZEMILL_NO_COLOR")


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)
_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_PREFIXES = {LogLevel.WARNING: "warning: ", LogLevel.ERROR: "error: "}


@dataclass
class _Settings:
    level: LogLevel | None = None
    no_color: bool | None = None


_settings = _Settings()


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to ``LogLevel``; unknown or empty names mean INFO.

    Example:
        >>> parse_level(" Warn ")
        <LogLevel.WARNING: 40>
        >>> parse_level("chatty")
        <LogLevel.INFO: 30>
    """
    name = (value or "").strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    if name in LEVEL_NAMES:
        return LogLevel[name.upper()]
    return LogLevel.INFO


def configured_level() -> LogLevel:
    if _settings.level is None:
        _settings.level = parse_level(os.environ.get(LEVEL_ENV_VAR))
    return _settings.level


def set_level(value: str | None) -> None:
    _settings.level = parse_level(value)


def set_no_color(value: bool) -> None:
    """Force color off; ``False`` defers to the environment again."""
    _settings.no_color = True if value else None


def reset() -> None:
    global _settings
    _settings = _Settings()


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def _color_disabled() -> bool:
    if _settings.no_color is not None:
        return _settings.no_color
    return any(os.environ.get(name) for name in NO_COLOR_ENV_VARS)


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    if not is_enabled(level):
        return
    stream = sys.stderr if level >= LogLevel.WARNING else sys.stdout
    console = Console(
        file=stream,
        soft_wrap=True,
        highlight=False,
        no_color=_color_disabled(),
    )
    text = _PREFIXES.get(level, "") + message
    console.print(Text(text, style=style or _STYLES.get(level, "")))


def trace(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.TRACE, message, style=style)


def debug(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.DEBUG, message, style=style)


def info(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.INFO, message, style=style)


def success(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.SUCCESS, message, style=style)


def warning(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.WARNING, message, style=style)


def error(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.ERROR, message, style=style)
