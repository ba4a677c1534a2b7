"""Terminal UI components for termcards.

- session_view: Question and result frames rendered from snapshots
- summary_panel: End-of-session statistics panel
"""

from termcards.cli.ui.session_view import SessionView, render_snapshot
from termcards.cli.ui.summary_panel import build_summary_panel, show_session_summary

__all__ = [
    "SessionView",
    "render_snapshot",
    "build_summary_panel",
    "show_session_summary",
]
