"""Shared console and error panels for the CLI.

All command output goes through get_console(). ErrorRenderer turns an
exception reaching a command into a panel saying what went wrong, why,
and what to try next.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from termcards.core.exceptions import get_error_info, get_root_cause

_console: Optional[Console] = None

# Set by --verbose
_verbose_mode = False


def get_console() -> Console:
    """Console shared by every command, created on first use."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def set_verbose_mode(enabled: bool) -> None:
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    """True when --verbose was given."""
    return _verbose_mode


def tip(message: str) -> None:
    """Print a dim hint line, e.g. "  Tip: Run 'termcards list'"."""
    get_console().print(Text(f"  Tip: {message}", style="dim"))


class ErrorRenderer:
    """Renders exceptions as red panels with cause and fix hints.

    Example:
        try:
            base_dir = require_quiz_dir()
        except TermcardsError as e:
            ErrorRenderer.render(e)

    The panel title carries the error code ("Error: TC-QUIZ-001"). The
    body holds the message, the root cause when it says something new,
    why it happened and how to fix it. In verbose mode the traceback is
    printed below the panel.
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Print the panel for ``exc``.

        Args:
            exc: Exception to show
            context: Optional leading line, e.g. "While loading quizzes"
            show_traceback: Force the traceback on or off (None follows --verbose)
        """
        info = get_error_info(exc)
        console = get_console()
        console.print(
            Panel(
                ErrorRenderer.build_body(exc, info, context),
                title=Text(f"Error: {info['error_code']}", style="bold red"),
                border_style="red",
                padding=(1, 2),
            )
        )

        if show_traceback is None:
            show_traceback = is_verbose_mode()
        if show_traceback:
            lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
            console.print(Text("".join(lines), style="dim"))

    @staticmethod
    def build_body(exc: BaseException, info: Dict[str, Any], context: str = "") -> Text:
        body = Text()
        if context:
            body.append(f"{context}\n\n", style="dim")

        message = str(exc)
        body.append(message, style="bold red")

        cause = get_root_cause(exc)
        if cause is not exc and str(cause) not in ("", message):
            body.append("\n\nCaused by: ", style="bold yellow")
            body.append(f"{type(cause).__name__}: {cause}", style="yellow")

        body.append("\n\nWhy it happened\n", style="bold cyan")
        body.append(f"  {info['why_it_happened']}", style="cyan")

        body.append("\n\nHow to fix\n", style="bold green")
        body.append("\n".join(f"  - {fix}" for fix in info["how_to_fix"]), style="green")
        return body
