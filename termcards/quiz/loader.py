"""
Quiz discovery and loading.

Quizzes live under a ``.termcards`` directory found by walking up from
the current directory:

    .termcards/
    ├── config.yaml
    ├── theme.json
    └── quizzes/
        ├── spanish/basics.json
        └── capitals.yaml

Every ``.json``, ``.yaml`` and ``.yml`` file below ``quizzes/`` is parsed
and validated against the Quiz model. load_all_quizzes() skips files that
fail with a logged warning; load_quiz_file() raises instead.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from termcards.core.exceptions import (
    NoCardsError,
    QuizDirectoryNotFoundError,
    QuizNotFoundError,
    QuizValidationError,
)
from termcards.core.logging import get_logger
from termcards.models.card import Card
from termcards.models.quiz import LoadedQuiz, Quiz

logger = get_logger(__name__)

QUIZ_DIR_NAME = ".termcards"
QUIZZES_SUBDIR = "quizzes"
QUIZ_SUFFIXES = (".json", ".yaml", ".yml")


def find_quiz_dir(start: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest .termcards directory.

    Args:
        start: Directory to start from (default: current directory)

    Returns:
        Path to the .termcards directory, or None if no ancestor has one
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / QUIZ_DIR_NAME
        if candidate.is_dir():
            return candidate

    return None


def require_quiz_dir(start: Optional[Path] = None) -> Path:
    """Like find_quiz_dir(), but raise when there is none.

    Raises:
        QuizDirectoryNotFoundError: If no .termcards directory exists
    """
    base_dir = find_quiz_dir(start)
    if base_dir is None:
        raise QuizDirectoryNotFoundError(
            f"No {QUIZ_DIR_NAME} directory found in {(start or Path.cwd())} or its parents"
        )
    return base_dir


def _quiz_files(quizzes_dir: Path) -> List[Path]:
    if not quizzes_dir.is_dir():
        return []
    return sorted(
        p for p in quizzes_dir.rglob("*") if p.is_file() and p.suffix.lower() in QUIZ_SUFFIXES
    )


def _parse(path: Path) -> Any:
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(content)
    return yaml.safe_load(content)


def load_quiz_file(path: Path) -> LoadedQuiz:
    """Parse and validate one quiz file.

    Args:
        path: A .json, .yaml or .yml quiz file

    Returns:
        LoadedQuiz with its resolved id (the quiz id, else the file stem)

    Raises:
        QuizValidationError: If the file cannot be read, parsed or validated
    """
    try:
        data = _parse(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise QuizValidationError(f"{path.name}: invalid syntax: {e}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise QuizValidationError(f"{path.name}: cannot read file: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise QuizValidationError(
            f"{path.name}: top level must be an object", path=str(path)
        )

    try:
        quiz = Quiz.model_validate(data)
    except ValidationError as e:
        raise QuizValidationError(f"{path.name}: {e}", path=str(path)) from e

    return LoadedQuiz(id=quiz.id or path.stem, path=path, quiz=quiz)


def load_all_quizzes(base_dir: Path) -> List[LoadedQuiz]:
    """Load every valid quiz under ``base_dir/quizzes``.

    Args:
        base_dir: The .termcards directory

    Returns:
        Quizzes in sorted file-path order; invalid files are skipped
    """
    quizzes: List[LoadedQuiz] = []
    skipped = 0

    for path in _quiz_files(base_dir / QUIZZES_SUBDIR):
        try:
            quizzes.append(load_quiz_file(path))
        except QuizValidationError as e:
            skipped += 1
            logger.warning("Skipping invalid quiz file", path=path, error=e)

    logger.info("Loaded quizzes", loaded=len(quizzes), skipped=skipped)
    return quizzes


def find_quiz_by_id(quizzes: Sequence[LoadedQuiz], search: str) -> Optional[LoadedQuiz]:
    """Look up a quiz by id.

    Tries an exact id match, then a case-insensitive prefix, then a
    case-insensitive substring. The first quiz in order wins each stage.
    """
    for quiz in quizzes:
        if quiz.id == search:
            return quiz

    needle = search.lower()
    for quiz in quizzes:
        if quiz.id.lower().startswith(needle):
            return quiz
    for quiz in quizzes:
        if needle in quiz.id.lower():
            return quiz

    return None


def select_quiz(quizzes: Sequence[LoadedQuiz], search: str) -> LoadedQuiz:
    """find_quiz_by_id(), raising QuizNotFoundError when nothing matches."""
    found = find_quiz_by_id(quizzes, search)
    if found is None:
        available = [q.id for q in quizzes]
        raise QuizNotFoundError(
            f"No quiz matches '{search}'", search=search, available=available
        )
    return found


def collect_cards(
    quizzes: Iterable[LoadedQuiz],
    tags: Optional[Sequence[str]] = None,
    limit: int = 0,
) -> List[Card]:
    """Concatenate cards from several quizzes.

    Args:
        quizzes: Quizzes to draw from, in order
        tags: Keep only cards carrying any of these tags (case-insensitive)
        limit: Maximum number of cards; 0 keeps all

    Returns:
        Cards in quiz order
    """
    cards: List[Card] = []
    for loaded in quizzes:
        cards.extend(loaded.quiz.cards)

    if tags:
        cards = [card for card in cards if card.has_any_tag(list(tags))]
    if limit > 0:
        cards = cards[:limit]

    return cards


def require_cards(
    quizzes: Iterable[LoadedQuiz],
    tags: Optional[Sequence[str]] = None,
    limit: int = 0,
) -> List[Card]:
    """collect_cards(), raising NoCardsError when the result is empty."""
    cards = collect_cards(quizzes, tags=tags, limit=limit)
    if not cards:
        wanted = f" tagged {', '.join(tags)}" if tags else ""
        raise NoCardsError(f"No cards{wanted} in the selected quizzes")
    return cards
