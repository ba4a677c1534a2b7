"""Key-to-action mapping.

Translates key names into session actions for the current snapshot.
Keys are plain names: "1", "b", "up", "down", "enter", "return",
"backspace", "space", or any single printable character.
"""

from __future__ import annotations

from typing import List

from termcards.study.generator import MultipleChoiceQuestion, TypeAnswerQuestion
from termcards.study.session import (
    Acknowledge,
    Action,
    Backspace,
    ChooseOption,
    ConfirmOption,
    Phase,
    SelectOption,
    SessionSnapshot,
    SubmitTyped,
    TypeCharacter,
)

# Quizzes may ask for up to 8 options
NUMBER_KEYS = ("1", "2", "3", "4", "5", "6", "7", "8")
LETTER_KEYS = ("a", "b", "c", "d", "e", "f", "g", "h")
SUBMIT_KEYS = ("enter", "return")


def actions_for_key(snapshot: SessionSnapshot, key: str) -> List[Action]:
    """Actions produced by pressing ``key`` in the given state.

    Returns an empty list for keys that mean nothing in this state.
    """
    if snapshot.phase == Phase.SHOWING_RESULT:
        return [Acknowledge()]
    if snapshot.phase != Phase.AWAITING_ANSWER:
        return []

    question = snapshot.question
    if isinstance(question, MultipleChoiceQuestion):
        return _multiple_choice_actions(snapshot, len(question.options), key)
    if isinstance(question, TypeAnswerQuestion):
        return _typed_actions(key)
    return []


def _multiple_choice_actions(
    snapshot: SessionSnapshot, option_count: int, key: str
) -> List[Action]:
    lowered = key.lower()
    if lowered in NUMBER_KEYS:
        return [ChooseOption(NUMBER_KEYS.index(lowered))]
    if lowered in LETTER_KEYS:
        return [ChooseOption(LETTER_KEYS.index(lowered))]
    if lowered in SUBMIT_KEYS:
        return [ConfirmOption()]

    if option_count == 0:
        return []
    selected = snapshot.selected_option
    if lowered == "up":
        index = option_count - 1 if selected is None else (selected - 1) % option_count
        return [SelectOption(index)]
    if lowered == "down":
        index = 0 if selected is None else (selected + 1) % option_count
        return [SelectOption(index)]
    return []


def _typed_actions(key: str) -> List[Action]:
    lowered = key.lower()
    if lowered == "backspace":
        return [Backspace()]
    if lowered in SUBMIT_KEYS:
        return [SubmitTyped()]
    if lowered == "space":
        return [TypeCharacter(" ")]
    if len(key) == 1:
        return [TypeCharacter(key)]
    return []
