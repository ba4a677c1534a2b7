"""Error handling for CLI commands.

Commands catch TermcardsError at the edge and
hand them to CLIErrorHandler, which renders a panel and exits.
"""

from __future__ import annotations

import typer

from termcards.cli.console import ErrorRenderer, get_console
from termcards.core.logging import get_logger

logger = get_logger(__name__)


class CLIErrorHandler:
    """Centralized error display and exit codes.

    Example:
        try:
            quizzes = load_all_quizzes(base_dir)
        except TermcardsError as e:
            CLIErrorHandler.exit_on_error(e)
    """

    @staticmethod
    def handle_error(error: BaseException, context: str = "") -> None:
        """Log the error and render it as a panel."""
        logger.error("Command failed", error_type=type(error).__name__, error=error)
        ErrorRenderer.render(error, context=context)

    @staticmethod
    def exit_on_error(
        error: BaseException,
        context: str = "",
        exit_code: int = 1,
    ) -> None:
        """Render the error and exit the CLI.

        Raises:
            typer.Exit: Always
        """
        CLIErrorHandler.handle_error(error, context)
        raise typer.Exit(exit_code)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle Ctrl+C gracefully."""
        get_console().print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)

