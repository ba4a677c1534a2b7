"""Quiz file discovery, loading and lookup."""

from termcards.quiz.loader import (
    QUIZ_DIR_NAME,
    collect_cards,
    find_quiz_by_id,
    find_quiz_dir,
    load_all_quizzes,
    load_quiz_file,
    require_cards,
    require_quiz_dir,
    select_quiz,
)

__all__ = [
    "QUIZ_DIR_NAME",
    "collect_cards",
    "find_quiz_by_id",
    "find_quiz_dir",
    "load_all_quizzes",
    "load_quiz_file",
    "require_cards",
    "require_quiz_dir",
    "select_quiz",
]
