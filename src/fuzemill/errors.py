"""Failure contracts for fuzemill operations.

Operations return typed outcomes on success and raise ``FuzemillError`` on
expected failures. The CLI boundary catches ``FuzemillError`` and exits with a
single-line message; best-effort steps never raise.
"""

from __future__ import annotations

from typing import Literal

FailureCode = Literal[
    "location",
    "backend",
    "lifecycle",
    "session",
    "usage",
]


class FuzemillError(Exception):
    """Expected failure of a fuzemill operation.

    Use ``raise LifecycleError(...) from exc`` to chain a causing exception.
    """

    def __init__(
        self,
        code: FailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class LocationError(FuzemillError):
    """Not inside a repository, or the primary checkout cannot be resolved."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("location", message, recovery_hint=recovery_hint)


class BackendError(FuzemillError):
    """Issue tracker failure: uninitialized, missing issue, bad output."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("backend", message, recovery_hint=recovery_hint)


class LifecycleError(FuzemillError):
    """Worktree or branch operation failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("lifecycle", message, recovery_hint=recovery_hint)


class SessionError(FuzemillError):
    """Terminal multiplexer session could not be created."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("session", message, recovery_hint=recovery_hint)


class UsageError(FuzemillError):
    """Invalid command arguments or configuration."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("usage", message, recovery_hint=recovery_hint)
