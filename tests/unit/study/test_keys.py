"""Tests for key-to-action mapping."""

from typing import Callable

import pytest

from termcards.models.card import Card
from termcards.study.generator import (
    Direction,
    MultipleChoiceQuestion,
    Option,
    TypeAnswerQuestion,
)
from termcards.study.keys import actions_for_key
from termcards.study.session import (
    Acknowledge,
    Backspace,
    ChooseOption,
    ConfirmOption,
    SelectOption,
    SessionEngine,
    SubmitTyped,
    TypeCharacter,
)


@pytest.fixture
def mc_engine(make_card: Callable[..., Card]) -> SessionEngine:
    question = MultipleChoiceQuestion(
        card=make_card("gato", "cat"),
        prompt='What is "gato"?',
        direction=Direction.FRONT_TO_BACK,
        correct_answers=("cat",),
        options=tuple(
            Option(id=f"id{i}", text=text, is_correct=text == "cat")
            for i, text in enumerate(["dog", "cat", "coffee", "hello"])
        ),
    )
    return SessionEngine([question])


@pytest.fixture
def typed_engine(make_card: Callable[..., Card]) -> SessionEngine:
    question = TypeAnswerQuestion(
        card=make_card("gato", "cat"),
        prompt='What is "gato"?',
        direction=Direction.FRONT_TO_BACK,
        correct_answers=("cat",),
    )
    return SessionEngine([question])


class TestMultipleChoiceKeys:
    """Number, letter, arrow and submit keys."""

    @pytest.mark.parametrize("key,index", [("1", 0), ("4", 3), ("a", 0), ("c", 2), ("B", 1)])
    def test_direct_choice(self, mc_engine: SessionEngine, key: str, index: int) -> None:
        assert actions_for_key(mc_engine.snapshot(), key) == [ChooseOption(index)]

    def test_enter_confirms(self, mc_engine: SessionEngine) -> None:
        assert actions_for_key(mc_engine.snapshot(), "enter") == [ConfirmOption()]
        assert actions_for_key(mc_engine.snapshot(), "return") == [ConfirmOption()]

    def test_down_from_nothing_selects_first(self, mc_engine: SessionEngine) -> None:
        assert actions_for_key(mc_engine.snapshot(), "down") == [SelectOption(0)]

    def test_up_from_nothing_selects_last(self, mc_engine: SessionEngine) -> None:
        assert actions_for_key(mc_engine.snapshot(), "up") == [SelectOption(3)]

    def test_arrows_wrap(self, mc_engine: SessionEngine) -> None:
        mc_engine.dispatch(SelectOption(3))
        assert actions_for_key(mc_engine.snapshot(), "down") == [SelectOption(0)]

        mc_engine.dispatch(SelectOption(0))
        assert actions_for_key(mc_engine.snapshot(), "up") == [SelectOption(3)]

    def test_unknown_key(self, mc_engine: SessionEngine) -> None:
        assert actions_for_key(mc_engine.snapshot(), "z") == []
        assert actions_for_key(mc_engine.snapshot(), "9") == []

    def test_out_of_range_number_is_engine_noop(self, mc_engine: SessionEngine) -> None:
        actions = actions_for_key(mc_engine.snapshot(), "6")

        assert actions == [ChooseOption(5)]
        assert mc_engine.dispatch(actions[0]) is False


class TestTypedKeys:
    """Character, space, backspace and submit keys."""

    def test_character(self, typed_engine: SessionEngine) -> None:
        assert actions_for_key(typed_engine.snapshot(), "x") == [TypeCharacter("x")]

    def test_digits_are_typed(self, typed_engine: SessionEngine) -> None:
        assert actions_for_key(typed_engine.snapshot(), "1") == [TypeCharacter("1")]

    def test_space(self, typed_engine: SessionEngine) -> None:
        assert actions_for_key(typed_engine.snapshot(), "space") == [TypeCharacter(" ")]

    def test_backspace_and_submit(self, typed_engine: SessionEngine) -> None:
        snapshot = typed_engine.snapshot()

        assert actions_for_key(snapshot, "backspace") == [Backspace()]
        assert actions_for_key(snapshot, "enter") == [SubmitTyped()]

    def test_named_keys_not_typed(self, typed_engine: SessionEngine) -> None:
        assert actions_for_key(typed_engine.snapshot(), "up") == []


class TestResultKeys:
    """Any key continues from the result screen."""

    @pytest.mark.parametrize("key", ["enter", "space", "x", "1"])
    def test_any_key_acknowledges(self, mc_engine: SessionEngine, key: str) -> None:
        mc_engine.dispatch(ChooseOption(1))

        assert actions_for_key(mc_engine.snapshot(), key) == [Acknowledge()]

    def test_complete_session_has_no_actions(self, mc_engine: SessionEngine) -> None:
        mc_engine.dispatch(ChooseOption(1))
        mc_engine.dispatch(Acknowledge())

        assert actions_for_key(mc_engine.snapshot(), "enter") == []
