"""Shared initialization for CLI commands.

Every command that studies or lists quizzes needs the same things: the
.termcards directory, its configuration, the loaded quizzes and the
theme. CLIInitializer gathers them and raises TermcardsError subclasses
for the command to render.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from termcards.core.config import Config, load_config
from termcards.core.exceptions import NoQuizzesFoundError
from termcards.models.quiz import LoadedQuiz
from termcards.models.theme import Theme
from termcards.quiz.loader import load_all_quizzes, require_quiz_dir
from termcards.themes import load_theme


@dataclass
class ProjectContext:
    """Everything a command needs about the current quiz project."""

    base_dir: Path
    config: Config
    quizzes: List[LoadedQuiz]
    theme: Theme


class CLIInitializer:
    """Reusable initialization for CLI commands.

    Example:
        project = CLIInitializer.load_project()
        for quiz in project.quizzes:
            print(quiz.id)
    """

    @staticmethod
    def load_project(
        start: Optional[Path] = None,
        config: Optional[Config] = None,
    ) -> ProjectContext:
        """Locate the .termcards directory and load its contents.

        Args:
            start: Directory to search from (default: current directory)
            config: Already-loaded configuration, reused if given

        Raises:
            QuizDirectoryNotFoundError: No .termcards directory found
            NoQuizzesFoundError: No valid quiz files
            ConfigError: config.yaml is invalid
        """
        base_dir = require_quiz_dir(start)
        if config is None:
            config = load_config(base_dir)

        quizzes = load_all_quizzes(base_dir)
        if not quizzes:
            raise NoQuizzesFoundError(f"No valid quizzes in {base_dir / 'quizzes'}")

        return ProjectContext(
            base_dir=base_dir,
            config=config,
            quizzes=quizzes,
            theme=load_theme(base_dir),
        )
