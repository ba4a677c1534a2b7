"""termcards CLI - main application entry point.

Registers the commands and sets up logging for every invocation.

    termcards                 # pick a quiz and study it
    termcards list            # show available quizzes
    termcards learn spanish   # study one quiz
"""

from __future__ import annotations

from typing import Optional

import typer

from termcards.cli import learn, quizzes
from termcards.cli.console import set_verbose_mode
from termcards.cli.error_handlers import CLIErrorHandler
from termcards.core.config import Config, load_config
from termcards.core.exceptions import ConfigError, TermcardsError
from termcards.core.logging import configure_logging
from termcards.quiz.loader import find_quiz_dir

app = typer.Typer(
    name="termcards",
    help="Study flashcard quizzes in your terminal",
    add_completion=False,
)


def _setup_logging(verbose: bool) -> Config:
    """Load configuration and configure logging for this invocation.

    File logging goes to .termcards/logs/termcards.log when a .termcards
    directory exists; --verbose switches everything to DEBUG.
    """
    base_dir = find_quiz_dir()
    try:
        config = load_config(base_dir)
    except ConfigError as e:
        CLIErrorHandler.exit_on_error(e)
        raise

    configure_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.log_file,
        console=True,
    )
    return config


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from termcards import __version__

        typer.echo(f"termcards {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Debug logging and full tracebacks"
    ),
) -> None:
    """termcards - flashcard study sessions in the terminal.

    Quizzes are read from .termcards/quizzes/ in the current directory
    or the nearest parent that has one.
    """
    set_verbose_mode(verbose)
    config = _setup_logging(verbose)
    ctx.obj = {"config": config}

    # No command: choose a quiz and study it
    if ctx.invoked_subcommand is None:
        _study_interactively(config)


def _study_interactively(config: Optional[Config]) -> None:
    try:
        learn.run_learn(config=config, pick_interactively=True)
    except TermcardsError as e:
        CLIErrorHandler.exit_on_error(e)
    except EOFError:
        raise typer.Exit()
    except KeyboardInterrupt:
        CLIErrorHandler.handle_keyboard_interrupt()


app.command("list")(quizzes.command)
app.command("learn")(learn.command)


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
