"""Learn command - run an interactive study session.

Input is line based: each line the user enters is translated into the
key presses the session understands.

- Multiple choice: a number ("1"-"8") or letter ("a"-"h") answers at
  once; "up"/"down" move the highlight and an empty line confirms it.
- Type answer: the typed line is the answer.
- Result screen: any line continues.
- ":q" (or Ctrl+D) stops early; the summary still shows.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional, Sequence

import typer
from rich.console import Console
from rich.prompt import Prompt

from termcards.cli.console import get_console, tip
from termcards.cli.error_handlers import CLIErrorHandler
from termcards.cli.initializers import CLIInitializer, ProjectContext
from termcards.cli.quizzes import build_quiz_table
from termcards.cli.ui.session_view import SessionView
from termcards.cli.ui.summary_panel import show_session_summary
from termcards.core.config import Config
from termcards.core.exceptions import TermcardsError
from termcards.core.logging import get_logger
from termcards.models.quiz import LoadedQuiz
from termcards.quiz.loader import require_cards, select_quiz
from termcards.study.generator import QuestionGenerator, QuestionMode, TypeAnswerQuestion
from termcards.study.keys import actions_for_key
from termcards.study.matcher import MatchConfig
from termcards.study.session import Phase, SessionEngine, SessionSnapshot

logger = get_logger(__name__)

QUIT_COMMANDS = (":q", ":quit")
ALL_QUIZZES_TITLE = "All quizzes"

LineReader = Callable[[], str]


def keys_for_line(snapshot: SessionSnapshot, line: str) -> List[str]:
    """Translate one line of input into key names for the current state."""
    if snapshot.phase == Phase.SHOWING_RESULT:
        return ["enter"]

    if isinstance(snapshot.question, TypeAnswerQuestion):
        if not line.strip():
            return []
        keys = ["space" if ch == " " else ch for ch in line]
        return [*keys, "enter"]

    word = line.strip().lower()
    if word in ("", "enter"):
        return ["enter"]
    return [word]


def run_session(
    engine: SessionEngine,
    view: SessionView,
    read_line: LineReader,
) -> bool:
    """Drive the engine until completion or the user quits.

    Returns:
        True if every question was answered
    """
    while True:
        snapshot = engine.snapshot()
        if snapshot.is_complete:
            return True

        view.show(snapshot)
        try:
            line = read_line()
        except EOFError:
            return False

        if line.strip().lower() in QUIT_COMMANDS:
            logger.info("Session stopped early", answered=snapshot.answered)
            return False

        for key in keys_for_line(snapshot, line):
            for action in actions_for_key(engine.snapshot(), key):
                engine.dispatch(action)


def _prompt_reader(console: Console) -> LineReader:
    def read_line() -> str:
        return Prompt.ask("[dim]>[/dim]", console=console, default="", show_default=False)

    return read_line


def choose_quiz(quizzes: Sequence[LoadedQuiz], project: ProjectContext, console: Console) -> LoadedQuiz:
    """Show the quiz table and ask which one to study."""
    console.print(build_quiz_table(quizzes, project.theme))
    choices = [str(n) for n in range(1, len(quizzes) + 1)]
    answer = Prompt.ask("Choose a quiz", console=console, choices=choices, default="1")
    return quizzes[int(answer) - 1]


def run_learn(
    quiz: Optional[str] = None,
    mode: Optional[QuestionMode] = None,
    one_way: bool = False,
    tags: Optional[List[str]] = None,
    limit: int = 0,
    seed: Optional[int] = None,
    config: Optional[Config] = None,
    pick_interactively: bool = False,
) -> None:
    """Load quizzes, build a session and run it.

    Raises:
        TermcardsError: Missing directory, no quizzes, unknown quiz, no cards
    """
    console = get_console()
    project = CLIInitializer.load_project(config=config)
    settings = project.config.session

    if quiz:
        selected = [select_quiz(project.quizzes, quiz)]
    elif pick_interactively:
        selected = [choose_quiz(project.quizzes, project, console)]
    else:
        selected = list(project.quizzes)

    cards = require_cards(selected, tags=tags, limit=limit)
    single = selected[0].quiz if len(selected) == 1 else None
    title = single.metadata.title if single else ALL_QUIZZES_TITLE

    bidirectional = settings.bidirectional
    num_options = settings.num_options
    if single is not None and single.question_config is not None:
        bidirectional = single.question_config.bidirectional
        num_options = single.question_config.multiple_choice_options
    if one_way:
        bidirectional = False

    generator = QuestionGenerator(random.Random(seed))
    questions = generator.generate(
        cards,
        mode=mode or QuestionMode(settings.mode),
        bidirectional=bidirectional,
        num_options=num_options,
    )

    match = project.config.match
    engine = SessionEngine(
        questions,
        match_config=MatchConfig(
            ignore_case=match.ignore_case,
            ignore_accents=match.ignore_accents,
            allow_typo_distance=match.allow_typo_distance,
        ),
        use_card_overrides=settings.use_card_overrides,
        quiz_match_config=single.default_match_config if single else None,
    )
    logger.info(
        "Starting session",
        quizzes=len(selected),
        cards=len(cards),
        questions=len(questions),
        seed=seed,
    )

    view = SessionView(console, project.theme, title)
    completed = run_session(engine, view, _prompt_reader(console))

    summary = engine.summary()
    if completed or summary.total > 0:
        show_session_summary(summary, project.theme, title, console)
    if not completed:
        tip(f"Stopped after {summary.total} of {len(questions)} questions")


def command(
    ctx: typer.Context,
    quiz: Optional[str] = typer.Argument(
        None, help="Quiz id (exact, prefix or substring); all quizzes if omitted"
    ),
    mode: Optional[QuestionMode] = typer.Option(
        None, "--mode", "-m", help="multiple-choice, type-answer or mixed"
    ),
    one_way: bool = typer.Option(
        False, "--one-way", help="Only ask front-to-back questions"
    ),
    tag: Optional[List[str]] = typer.Option(
        None, "--tag", "-t", help="Only cards with this tag (repeatable)"
    ),
    limit: int = typer.Option(
        0, "--limit", "-n", min=0, help="Maximum number of cards (0 = all)"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Random seed for a reproducible session"
    ),
) -> None:
    """Study a quiz interactively.

    Examples:
        # Study one quiz, mixed question modes
        termcards learn spanish

        # Typed answers only, front-to-back, greetings cards
        termcards learn spanish --mode type-answer --one-way --tag greetings

        # Study everything, same order every time
        termcards learn --seed 42
    """
    config: Optional[Config] = (ctx.obj or {}).get("config")
    try:
        run_learn(
            quiz=quiz,
            mode=mode,
            one_way=one_way,
            tags=tag,
            limit=limit,
            seed=seed,
            config=config,
        )
    except TermcardsError as e:
        CLIErrorHandler.exit_on_error(e)
    except KeyboardInterrupt:
        CLIErrorHandler.handle_keyboard_interrupt()
