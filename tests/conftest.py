"""
Shared pytest fixtures for termcards tests.

Fixture Organization
--------------------
- **make_card**: Card factory with sensible defaults
- **spanish_cards**: Small vocabulary set with alternatives and tags
- **fake_clock**: Manually advanced monotonic clock for the session engine
- **project_dir**: Temporary project with a populated .termcards directory
- **write_quiz**: Helper for writing quiz files into a project
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from termcards.cli import console as cli_console
from termcards.core.logging import configure_logging
from termcards.models.card import Card


# ============================================================================
# Card Fixtures
# ============================================================================


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for Card objects.

    Example:
        def test_something(make_card):
            card = make_card("hola", "hello", alternatives=["hi"])
    """

    def _make(
        front: str,
        back: str,
        card_id: Optional[str] = None,
        alternatives: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
        match_config: Optional[Dict[str, Any]] = None,
    ) -> Card:
        data: Dict[str, Any] = {
            "id": card_id or front,
            "front": {"text": front},
            "back": {"text": back, "alternatives": alternatives or []},
            "tags": tags or [],
        }
        if match_config is not None:
            data["matchConfig"] = match_config
        return Card.model_validate(data)

    return _make


@pytest.fixture
def spanish_cards(make_card: Callable[..., Card]) -> List[Card]:
    """Five Spanish vocabulary cards."""
    return [
        make_card("hola", "hello", alternatives=["hi"], tags=["greetings"]),
        make_card("adiós", "goodbye", alternatives=["bye"], tags=["greetings"]),
        make_card("gato", "cat", tags=["animals"]),
        make_card("perro", "dog", tags=["animals"]),
        make_card("café", "coffee", tags=["food"]),
    ]


# ============================================================================
# Clock Fixture
# ============================================================================


class FakeClock:
    """Monotonic clock advanced by hand, in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Project Fixtures
# ============================================================================


def _quiz_payload(
    title: str,
    cards: List[Dict[str, Any]],
    **extra: Any,
) -> Dict[str, Any]:
    """Minimal valid quiz document."""
    payload: Dict[str, Any] = {"metadata": {"title": title}, "cards": cards}
    payload.update(extra)
    return payload


def _card_payload(front: str, back: str, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": front,
        "front": {"text": front},
        "back": {"text": back},
    }
    payload.update(extra)
    return payload


@pytest.fixture
def write_quiz() -> Callable[..., Path]:
    """Write a quiz dict to <base_dir>/quizzes/<name> as JSON."""

    def _write(base_dir: Path, name: str, payload: Dict[str, Any]) -> Path:
        path = base_dir / "quizzes" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project_dir(tmp_path: Path, write_quiz: Callable[..., Path]) -> Path:
    """Project with a .termcards directory holding two quizzes.

    Creates:
        - .termcards/quizzes/spanish.json (id "spanish-basics", 1 card)
        - .termcards/quizzes/geo/capitals.json (no id, 2 cards)
    """
    base_dir = tmp_path / ".termcards"
    write_quiz(
        base_dir,
        "spanish.json",
        _quiz_payload(
            "Spanish Basics",
            [_card_payload("hola", "hello", tags=["greetings"])],
            id="spanish-basics",
        ),
    )
    write_quiz(
        base_dir,
        "geo/capitals.json",
        _quiz_payload(
            "Capitals",
            [_card_payload("France", "Paris"), _card_payload("Spain", "Madrid")],
        ),
    )
    return tmp_path


@pytest.fixture(autouse=True)
def reset_cli_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep CLI globals and environment overrides from leaking between tests."""
    monkeypatch.setattr(cli_console, "_console", None)
    monkeypatch.setattr(cli_console, "_verbose_mode", False)
    for name in ("TERMCARDS_MODE", "TERMCARDS_TYPO_DISTANCE", "TERMCARDS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    # CLI runs point loggers at per-test log files
    configure_logging()
