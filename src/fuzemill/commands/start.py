"""Implementation for the ``fuzemill start`` command.

Resolves or creates the issue, provisions its side checkout, runs the agent
session, then records progress and releases the checkout.
"""

from __future__ import annotations

from .. import config, issue_backend, log, sessions, worktrees
from ..errors import UsageError
from ..models import SideCheckout
from .resolve import require_issue_id, resolve_location


def start_issue(args: object) -> SideCheckout:
    """Start work on an issue in its own worktree and agent session."""
    raw_issue_id = getattr(args, "issue_id", None)
    create_args = list(getattr(args, "create_args", None) or [])
    if raw_issue_id and create_args:
        raise UsageError("pass either --id or issue creation arguments, not both")
    if not raw_issue_id and not create_args:
        raise UsageError(
            "start needs --id ISSUE_ID or arguments to create a new issue"
        )

    settings = config.load_config()
    agent = config.resolve_agent(settings, getattr(args, "agent", None))
    model = config.resolve_model(settings, getattr(args, "model", None))

    location = resolve_location()
    backend = issue_backend.select_backend(location.primary_root)
    if raw_issue_id:
        issue = backend.exists(require_issue_id(raw_issue_id))
    else:
        issue = backend.create(create_args)
    issue_id = require_issue_id(issue.id)

    checkout = worktrees.ensure_side_checkout(location, issue_id)
    issue_backend.update_status_best_effort(backend, issue_id, settings.status.hooked)

    sessions.launch_session(checkout.path, issue_id, agent, model, backend)

    issue_backend.update_status_best_effort(
        backend, issue_id, settings.status.in_progress
    )
    worktrees.remove_side_checkout(checkout, location.primary_root, required=False)
    log.success(f"Session for {issue_id} finished")
    return checkout
