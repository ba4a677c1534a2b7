"""List command - show the quizzes available in this project."""

from __future__ import annotations

from typing import Optional, Sequence

import typer
from rich.table import Table
from rich.text import Text

from termcards.cli.console import get_console, tip
from termcards.cli.error_handlers import CLIErrorHandler
from termcards.cli.initializers import CLIInitializer
from termcards.core.config import Config
from termcards.core.exceptions import TermcardsError
from termcards.models.quiz import LoadedQuiz
from termcards.models.theme import Theme


def build_quiz_table(quizzes: Sequence[LoadedQuiz], theme: Theme) -> Table:
    """Table of quizzes with a 1-based number for interactive selection."""
    table = Table(title="Available Quizzes", title_justify="left")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style=theme.colors.primary)
    table.add_column("Title", style="bold")
    table.add_column("Cards", justify="right")
    table.add_column("Tags", style=theme.colors.muted)

    for number, loaded in enumerate(quizzes, start=1):
        table.add_row(
            str(number),
            Text(loaded.id),
            Text(loaded.title),
            str(loaded.card_count),
            Text(", ".join(loaded.quiz.metadata.tags)),
        )
    return table


def command(ctx: typer.Context) -> None:
    """List available quizzes.

    Searches for a .termcards directory in the current directory and its
    parents and lists every valid quiz under .termcards/quizzes/.

    Examples:
        termcards list
    """
    config: Optional[Config] = (ctx.obj or {}).get("config")
    try:
        project = CLIInitializer.load_project(config=config)
    except TermcardsError as e:
        CLIErrorHandler.exit_on_error(e)
        return

    console = get_console()
    console.print(build_quiz_table(project.quizzes, project.theme))
    tip("Start studying with: termcards learn <quiz-id>")
