"""Question generation from flashcards.

Turns a card set into a shuffled list of questions for one session.

Each card yields a front-to-back question ("What is "hola"?" -> hello)
and, when bidirectional, a back-to-front one ("What is "hello"?" -> hola).
Multiple-choice questions borrow their wrong options from the answer
sides of other cards in the same set.

All randomness flows through one ``random.Random`` so a seeded
generator reproduces the same session:

    >>> gen = QuestionGenerator(random.Random(7))
    >>> questions = gen.generate(cards, QuestionMode.MIXED)
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from termcards.core.logging import get_logger
from termcards.models.card import Card

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_NUM_OPTIONS = 4
OPTION_ID_LENGTH = 8
_ID_ALPHABET = string.digits + string.ascii_lowercase


class Direction(str, Enum):
    """Which side of the card is shown."""

    FRONT_TO_BACK = "front-to-back"
    BACK_TO_FRONT = "back-to-front"


class QuestionMode(str, Enum):
    """How questions are answered in a session."""

    MULTIPLE_CHOICE = "multiple-choice"
    TYPE_ANSWER = "type-answer"
    MIXED = "mixed"


@dataclass(frozen=True)
class Option:
    """One multiple-choice option."""

    id: str
    text: str
    is_correct: bool


@dataclass(frozen=True)
class Question:
    """Fields shared by every question kind.

    Attributes:
        card: Source card
        prompt: Text shown to the user
        direction: Which card side is being asked for
        correct_answers: Primary answer first, then accepted alternatives
    """

    card: Card
    prompt: str
    direction: Direction
    correct_answers: Tuple[str, ...]

    @property
    def correct_text(self) -> str:
        """Primary answer, used for display after a wrong answer."""
        return self.correct_answers[0]


@dataclass(frozen=True)
class MultipleChoiceQuestion(Question):
    """Question answered by picking one of ``options`` (exactly one correct)."""

    options: Tuple[Option, ...] = ()

    @property
    def correct_index(self) -> int:
        for i, option in enumerate(self.options):
            if option.is_correct:
                return i
        raise ValueError("multiple-choice question has no correct option")


@dataclass(frozen=True)
class TypeAnswerQuestion(Question):
    """Question answered by typing free text."""


AnyQuestion = Union[MultipleChoiceQuestion, TypeAnswerQuestion]


def shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a Fisher-Yates shuffled copy of items."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def generate_id(rng: random.Random, length: int = OPTION_ID_LENGTH) -> str:
    """Random base-36 identifier."""
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(length))


def _answer_side(card: Card, direction: Direction) -> str:
    if direction == Direction.FRONT_TO_BACK:
        return card.back.text
    return card.front.text


def _prompt_side(card: Card, direction: Direction) -> str:
    if direction == Direction.FRONT_TO_BACK:
        return card.front.text
    return card.back.text


class QuestionGenerator:
    """Builds question lists from cards using an injected random source.

    Attributes:
        rng: Source of all randomness (shuffles, mode picks, option ids)
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def generate(
        self,
        cards: Sequence[Card],
        mode: QuestionMode = QuestionMode.MIXED,
        bidirectional: bool = True,
        num_options: int = DEFAULT_NUM_OPTIONS,
    ) -> List[AnyQuestion]:
        """Generate a shuffled question list.

        Args:
            cards: Cards to study
            mode: Question mode; MIXED picks per question with probability 1/2
            bidirectional: Also ask back-to-front
            num_options: Upper bound on multiple-choice options (2-8)

        Returns:
            Questions in final session order; empty for no cards

        Raises:
            ValueError: If num_options is outside 2-8
        """
        if not 2 <= num_options <= 8:
            raise ValueError(f"num_options must be between 2 and 8, got {num_options}")

        mode = QuestionMode(mode)
        pool = shuffle(cards, self.rng)
        directions = [Direction.FRONT_TO_BACK]
        if bidirectional:
            directions.append(Direction.BACK_TO_FRONT)

        questions: List[AnyQuestion] = []
        for card in pool:
            for direction in directions:
                questions.append(
                    self._build_question(card, pool, direction, mode, num_options)
                )

        logger.debug(
            "Generated questions",
            cards=len(pool),
            questions=len(questions),
            mode=mode.value,
        )
        return shuffle(questions, self.rng)

    def _pick_mode(self, mode: QuestionMode) -> QuestionMode:
        if mode == QuestionMode.MIXED:
            if self.rng.random() < 0.5:
                return QuestionMode.MULTIPLE_CHOICE
            return QuestionMode.TYPE_ANSWER
        return mode

    def _build_question(
        self,
        card: Card,
        pool: Sequence[Card],
        direction: Direction,
        mode: QuestionMode,
        num_options: int,
    ) -> AnyQuestion:
        prompt = f'What is "{_prompt_side(card, direction)}"?'
        correct_text = _answer_side(card, direction)
        answers: Tuple[str, ...] = (correct_text,)
        if direction == Direction.FRONT_TO_BACK:
            answers += tuple(card.back.alternatives)

        if self._pick_mode(mode) == QuestionMode.MULTIPLE_CHOICE:
            options = self._build_options(card, pool, direction, num_options)
            if options:
                return MultipleChoiceQuestion(
                    card=card,
                    prompt=prompt,
                    direction=direction,
                    correct_answers=answers,
                    options=options,
                )
            logger.debug("No distractors available, asking as typed", card_id=card.id)

        return TypeAnswerQuestion(
            card=card,
            prompt=prompt,
            direction=direction,
            correct_answers=answers,
        )

    def _build_options(
        self,
        card: Card,
        pool: Sequence[Card],
        direction: Direction,
        num_options: int,
    ) -> Tuple[Option, ...]:
        """Correct option plus distractors, shuffled; empty if no distractor exists."""
        correct_text = _answer_side(card, direction)
        others = [
            c
            for c in pool
            if c is not card and _answer_side(c, direction) != correct_text
        ]
        if not others:
            return ()

        # Option texts stay distinct
        seen = {correct_text}
        distractors: List[str] = []
        for other in shuffle(others, self.rng):
            text = _answer_side(other, direction)
            if text in seen:
                continue
            seen.add(text)
            distractors.append(text)
            if len(distractors) == num_options - 1:
                break

        options = [Option(id=generate_id(self.rng), text=correct_text, is_correct=True)]
        options.extend(
            Option(id=generate_id(self.rng), text=text, is_correct=False)
            for text in distractors
        )
        return tuple(shuffle(options, self.rng))


def generate_questions(
    cards: Sequence[Card],
    mode: QuestionMode = QuestionMode.MIXED,
    bidirectional: bool = True,
    rng: Optional[random.Random] = None,
    num_options: int = DEFAULT_NUM_OPTIONS,
) -> List[AnyQuestion]:
    """Generate questions for one session.

    Convenience wrapper around QuestionGenerator; see its generate().
    """
    return QuestionGenerator(rng).generate(
        cards, mode=mode, bidirectional=bidirectional, num_options=num_options
    )
