"""Prompt template rendering and shell quoting helpers."""

from __future__ import annotations

from typing import Mapping

ISSUE_PROMPT_TEMPLATE = """\
You are working on issue {{ issue_id }} in a dedicated git worktree on branch {{ issue_id }}.
Run `{{ show_command }}` to read the issue details before you start.
Implement the change described in the issue and keep the scope to that issue.
Commit your work; every commit message must end with these trailers:
{{ backend_trailer }}
{{ co_author_trailer }}
Push the branch with `git push -u origin {{ issue_id }}` and open a pull request with `gh pr create --fill`.
When you are completely finished, run `fuzemill done` to end this session."""


def render_template(template: str, variables: Mapping[str, str]) -> str:
    """Render a template using a simple {{ key }} substitution."""
    rendered = template
    for key, value in variables.items():
        rendered = rendered.replace(f"{{{{ {key} }}}}", value)
    return rendered


def shell_quote(text: str) -> str:
    """Single-quote text for one shell command line.

    Example:
        >>> shell_quote("it's done")
        "'it'\\\\''s done'"
    """
    return "'" + text.replace("'", "'\\''") + "'"


def build_issue_prompt(
    issue_id: str,
    *,
    show_command: str,
    backend_trailer: str,
    co_author_trailer: str,
) -> str:
    """Build the opening instructions handed to the agent."""
    return render_template(
        ISSUE_PROMPT_TEMPLATE,
        {
            "issue_id": issue_id,
            "show_command": show_command,
            "backend_trailer": backend_trailer,
            "co_author_trailer": co_author_trailer,
        },
    )
