"""Study session engine.

Provides the core of a study session:
- matcher: Typo-tolerant grading of typed answers
- generator: Question generation from cards (seedable)
- session: Session state machine and statistics
- keys: Key-to-action mapping for terminal input
"""

from __future__ import annotations

from termcards.study.matcher import (
    MatchConfig,
    MatchResult,
    levenshtein_distance,
    match_answer,
    normalize_text,
)

from termcards.study.generator import (
    Direction,
    MultipleChoiceQuestion,
    Option,
    QuestionGenerator,
    QuestionMode,
    TypeAnswerQuestion,
    generate_questions,
)

from termcards.study.session import (
    Acknowledge,
    AnswerRecord,
    Backspace,
    ChooseOption,
    ConfirmOption,
    Phase,
    SelectOption,
    SessionEngine,
    SessionSnapshot,
    SessionSummary,
    SubmitTyped,
    TypeCharacter,
)

from termcards.study.keys import actions_for_key

__all__ = [
    # Matcher
    "MatchConfig",
    "MatchResult",
    "levenshtein_distance",
    "match_answer",
    "normalize_text",
    # Generator
    "Direction",
    "MultipleChoiceQuestion",
    "Option",
    "QuestionGenerator",
    "QuestionMode",
    "TypeAnswerQuestion",
    "generate_questions",
    # Session
    "Acknowledge",
    "AnswerRecord",
    "Backspace",
    "ChooseOption",
    "ConfirmOption",
    "Phase",
    "SelectOption",
    "SessionEngine",
    "SessionSnapshot",
    "SessionSummary",
    "SubmitTyped",
    "TypeCharacter",
    # Keys
    "actions_for_key",
]
