"""Implementation for the ``fuzemill done`` command."""

from __future__ import annotations

from .. import sessions


def signal_done(args: object) -> bool:
    """End the enclosing agent session, detaching any attached client."""
    del args
    return sessions.signal_done()
