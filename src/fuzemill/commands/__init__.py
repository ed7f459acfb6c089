"""Command implementations exposed by the fuzemill CLI."""

from .done import signal_done
from .merge import merge_issue
from .start import start_issue
from .tmux_check import check_tmux
from .unstart import unstart_issue

__all__ = [
    "check_tmux",
    "merge_issue",
    "signal_done",
    "start_issue",
    "unstart_issue",
]
