"""Study session state machine.

The engine owns the question queue and everything that changes while
the user answers:

    AwaitingAnswer(i) --answer--> ShowingResult(i) --acknowledge--> AwaitingAnswer(i+1)
                                                                    or Complete

All mutation goes through dispatch(). Which actions are legal in which
state is listed in _GUARDS; anything not listed is a no-op and dispatch()
returns False. Views read the engine through snapshot() only.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type, Union

from termcards.core.logging import get_logger
from termcards.models.common import FuzzyMatchConfig
from termcards.study.generator import (
    AnyQuestion,
    MultipleChoiceQuestion,
    QuestionMode,
    TypeAnswerQuestion,
)
from termcards.study.matcher import (
    DEFAULT_MATCH_CONFIG,
    MatchConfig,
    MatchResult,
    match_answer,
)

logger = get_logger(__name__)

Clock = Callable[[], float]


class Phase(str, Enum):
    """Session phase."""

    AWAITING_ANSWER = "awaiting-answer"
    SHOWING_RESULT = "showing-result"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectOption:
    """Highlight a multiple-choice option (0-based)."""

    index: int


@dataclass(frozen=True)
class ConfirmOption:
    """Submit the highlighted option."""


@dataclass(frozen=True)
class ChooseOption:
    """Highlight and submit an option in one step."""

    index: int


@dataclass(frozen=True)
class TypeCharacter:
    """Append text to the typed answer."""

    char: str


@dataclass(frozen=True)
class Backspace:
    """Remove the last typed character."""


@dataclass(frozen=True)
class SubmitTyped:
    """Grade the typed answer."""


@dataclass(frozen=True)
class Acknowledge:
    """Leave the result screen and move on."""


Action = Union[
    SelectOption,
    ConfirmOption,
    ChooseOption,
    TypeCharacter,
    Backspace,
    SubmitTyped,
    Acknowledge,
]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnswerRecord:
    """Outcome of one answered question.

    Attributes:
        question: The question answered
        answer: Chosen option text or typed text
        is_correct: Whether it was graded correct
        match: Matcher result for typed answers, None for multiple-choice
        response_ms: Time from question shown to answer submitted
    """

    question: AnyQuestion
    answer: str
    is_correct: bool
    match: Optional[MatchResult]
    response_ms: int


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the engine after a transition."""

    phase: Phase
    index: int
    total: int
    question: Optional[AnyQuestion]
    selected_option: Optional[int]
    typed_answer: str
    correct: int
    incorrect: int
    last_correct: Optional[bool]
    last_match: Optional[MatchResult]
    correct_answer: Optional[str]
    current_streak: int
    best_streak: int

    @property
    def answered(self) -> int:
        return self.correct + self.incorrect

    @property
    def is_complete(self) -> bool:
        return self.phase == Phase.COMPLETE


@dataclass(frozen=True)
class SessionSummary:
    """End-of-session statistics."""

    total: int
    correct: int
    incorrect: int
    percentage: int
    duration_ms: int = 0
    avg_response_ms: int = 0
    best_streak: int = 0

    @classmethod
    def from_counts(
        cls,
        correct: int,
        incorrect: int,
        duration_ms: int = 0,
        avg_response_ms: int = 0,
        best_streak: int = 0,
    ) -> "SessionSummary":
        total = correct + incorrect
        # Round half up
        percentage = (200 * correct + total) // (2 * total) if total > 0 else 0
        return cls(
            total=total,
            correct=correct,
            incorrect=incorrect,
            percentage=percentage,
            duration_ms=duration_ms,
            avg_response_ms=avg_response_ms,
            best_streak=best_streak,
        )


def match_config_from(fuzzy: FuzzyMatchConfig) -> MatchConfig:
    """Translate a quiz-file match config into matcher settings."""
    return MatchConfig(
        ignore_case=fuzzy.ignore_case,
        ignore_accents=fuzzy.ignore_accents,
        allow_typo_distance=fuzzy.allow_typo_distance,
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@dataclass
class _Scratch:
    """Per-question input state, reset on every advance."""

    selected: Optional[int] = None
    typed: str = ""


def _question_kind(question: Optional[AnyQuestion]) -> Optional[QuestionMode]:
    if isinstance(question, MultipleChoiceQuestion):
        return QuestionMode.MULTIPLE_CHOICE
    if isinstance(question, TypeAnswerQuestion):
        return QuestionMode.TYPE_ANSWER
    return None


_MC = QuestionMode.MULTIPLE_CHOICE
_TYPED = QuestionMode.TYPE_ANSWER
_AWAITING = Phase.AWAITING_ANSWER
_RESULT = Phase.SHOWING_RESULT

# (phase, question kind, action type) -> handler name
_GUARDS: Dict[Tuple[Phase, QuestionMode, Type[object]], str] = {
    (_AWAITING, _MC, SelectOption): "_select_option",
    (_AWAITING, _MC, ConfirmOption): "_confirm_option",
    (_AWAITING, _MC, ChooseOption): "_choose_option",
    (_AWAITING, _TYPED, TypeCharacter): "_type_character",
    (_AWAITING, _TYPED, Backspace): "_backspace",
    (_AWAITING, _TYPED, SubmitTyped): "_submit_typed",
    (_RESULT, _MC, Acknowledge): "_acknowledge",
    (_RESULT, _TYPED, Acknowledge): "_acknowledge",
}


class SessionEngine:
    """Sequences questions, grades answers and keeps running statistics.

    Example:
        engine = SessionEngine(questions)
        engine.dispatch(ChooseOption(0))
        engine.dispatch(Acknowledge())
        print(engine.summary().percentage)

    Args:
        questions: Questions in presentation order
        match_config: Tolerance for typed answers
        clock: Monotonic clock in seconds, injectable for tests
        use_card_overrides: Grade typed answers with the card's own
            matchConfig (else quiz_match_config) when one is present
        quiz_match_config: Quiz-level matchConfig used with overrides
    """

    def __init__(
        self,
        questions: Sequence[AnyQuestion],
        match_config: MatchConfig = DEFAULT_MATCH_CONFIG,
        clock: Clock = time.monotonic,
        use_card_overrides: bool = False,
        quiz_match_config: Optional[FuzzyMatchConfig] = None,
    ) -> None:
        self._questions: Tuple[AnyQuestion, ...] = tuple(questions)
        self._match_config = match_config
        self._clock = clock
        self._use_card_overrides = use_card_overrides
        self._quiz_match_config = quiz_match_config

        self._index = 0
        self._phase = _AWAITING if self._questions else Phase.COMPLETE
        self._scratch = _Scratch()
        self._correct = 0
        self._incorrect = 0
        self._current_streak = 0
        self._best_streak = 0
        self._last: Optional[AnswerRecord] = None
        self._records: List[AnswerRecord] = []

        self._started_at = clock()
        self._question_started_at = self._started_at
        self._finished_at: Optional[float] = None if self._questions else self._started_at

        logger.debug("Session started", questions=len(self._questions))

    # -- public API ---------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def records(self) -> Tuple[AnswerRecord, ...]:
        return tuple(self._records)

    @property
    def current_question(self) -> Optional[AnyQuestion]:
        if self._phase == Phase.COMPLETE:
            return None
        return self._questions[self._index]

    def dispatch(self, action: Action) -> bool:
        """Apply an action.

        Returns:
            True if the session state changed, False for a no-op
        """
        kind = _question_kind(self.current_question)
        if kind is None:
            return False

        handler_name = _GUARDS.get((self._phase, kind, type(action)))
        if handler_name is None:
            return False

        handler: Callable[[Action], bool] = getattr(self, handler_name)
        return handler(action)

    def snapshot(self) -> SessionSnapshot:
        """Current state for rendering."""
        question = self.current_question
        last = self._last if self._phase == _RESULT else None
        return SessionSnapshot(
            phase=self._phase,
            index=self._index,
            total=len(self._questions),
            question=question,
            selected_option=self._scratch.selected,
            typed_answer=self._scratch.typed,
            correct=self._correct,
            incorrect=self._incorrect,
            last_correct=last.is_correct if last else None,
            last_match=last.match if last else None,
            correct_answer=question.correct_text if last and question else None,
            current_streak=self._current_streak,
            best_streak=self._best_streak,
        )

    def summary(self) -> SessionSummary:
        """Statistics so far; final once the session is complete."""
        end = self._finished_at if self._finished_at is not None else self._clock()
        avg = 0
        if self._records:
            avg = round(sum(r.response_ms for r in self._records) / len(self._records))
        return SessionSummary.from_counts(
            correct=self._correct,
            incorrect=self._incorrect,
            duration_ms=_to_ms(end - self._started_at),
            avg_response_ms=avg,
            best_streak=self._best_streak,
        )

    # -- handlers -----------------------------------------------------------

    def _mc_question(self) -> MultipleChoiceQuestion:
        question = self._questions[self._index]
        if not isinstance(question, MultipleChoiceQuestion):
            raise ValueError(
                f"question {self._index} is not multiple-choice: {type(question).__name__}"
            )
        return question

    def _select_option(self, action: SelectOption) -> bool:
        options = self._mc_question().options
        if not 0 <= action.index < len(options):
            return False
        if self._scratch.selected == action.index:
            return False
        self._scratch.selected = action.index
        return True

    def _confirm_option(self, action: ConfirmOption) -> bool:
        selected = self._scratch.selected
        if selected is None:
            return False
        option = self._mc_question().options[selected]
        self._record(option.text, option.is_correct, None)
        return True

    def _choose_option(self, action: ChooseOption) -> bool:
        options = self._mc_question().options
        if not 0 <= action.index < len(options):
            return False
        self._scratch.selected = action.index
        return self._confirm_option(ConfirmOption())

    def _type_character(self, action: TypeCharacter) -> bool:
        if not action.char:
            return False
        self._scratch.typed += action.char
        return True

    def _backspace(self, action: Backspace) -> bool:
        if not self._scratch.typed:
            return False
        self._scratch.typed = self._scratch.typed[:-1]
        return True

    def _submit_typed(self, action: SubmitTyped) -> bool:
        typed = self._scratch.typed
        if not typed.strip():
            return False
        question = self._questions[self._index]
        config, answers = self._grading_for(question)
        result = match_answer(typed, answers, config)
        self._record(typed, result.is_correct, result)
        return True

    def _acknowledge(self, action: Acknowledge) -> bool:
        self._scratch = _Scratch()
        self._index += 1
        now = self._clock()
        if self._index >= len(self._questions):
            self._phase = Phase.COMPLETE
            self._finished_at = now
            logger.debug(
                "Session complete", correct=self._correct, incorrect=self._incorrect
            )
        else:
            self._phase = _AWAITING
            self._question_started_at = now
        return True

    # -- helpers ------------------------------------------------------------

    def _grading_for(self, question: AnyQuestion) -> Tuple[MatchConfig, Sequence[str]]:
        """Match settings and accepted answers for a typed question."""
        answers: Sequence[str] = question.correct_answers
        if not self._use_card_overrides:
            return self._match_config, answers

        fuzzy = question.card.match_config or self._quiz_match_config
        if fuzzy is None:
            return self._match_config, answers
        if not fuzzy.accept_alternatives:
            answers = answers[:1]
        return match_config_from(fuzzy), answers

    def _record(self, answer: str, is_correct: bool, match: Optional[MatchResult]) -> None:
        question = self._questions[self._index]
        record = AnswerRecord(
            question=question,
            answer=answer,
            is_correct=is_correct,
            match=match,
            response_ms=_to_ms(self._clock() - self._question_started_at),
        )
        self._records.append(record)
        self._last = record

        if is_correct:
            self._correct += 1
            self._current_streak += 1
            self._best_streak = max(self._best_streak, self._current_streak)
        else:
            self._incorrect += 1
            self._current_streak = 0

        self._phase = _RESULT
        logger.debug(
            "Answer recorded",
            index=self._index,
            card_id=question.card.id,
            correct=is_correct,
        )


def _to_ms(seconds: float) -> int:
    return max(0, int(round(seconds * 1000)))
