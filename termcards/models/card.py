"""
Card schema.

A card is the immutable unit of study: a front (the prompt side) and a
back (the answer side, with optional alternative answers).

    {
      "id": "hola",
      "front": {"text": "hola", "hint": "greeting"},
      "back": {"text": "hello", "alternatives": ["hi"]},
      "tags": ["greetings"]
    }
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from termcards.models.common import FuzzyMatchConfig


class CardFront(BaseModel):
    """The prompt side of a card."""

    model_config = {"frozen": True}

    text: str = Field(..., min_length=1)
    hint: Optional[str] = None
    image: Optional[str] = None
    audio: Optional[str] = None


class CardBack(BaseModel):
    """The answer side of a card."""

    model_config = {"frozen": True}

    text: str = Field(..., min_length=1)
    alternatives: List[str] = Field(default_factory=list)
    explanation: Optional[str] = None
    example: Optional[str] = None
    image: Optional[str] = None
    audio: Optional[str] = None


class Card(BaseModel):
    """A flashcard within a quiz.

    Attributes:
        id: Unique within its quiz
        front: Prompt side
        back: Answer side
        match_config: Per-card override of answer matching
        tags: Labels used by the --tag filter
        metadata: Free-form extra data, ignored by the study engine
    """

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(..., min_length=1, max_length=64)
    front: CardFront
    back: CardBack
    match_config: Optional[FuzzyMatchConfig] = Field(default=None, alias="matchConfig")
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def has_any_tag(self, tags: List[str]) -> bool:
        """Check whether the card carries at least one of the given tags."""
        wanted = {t.lower() for t in tags}
        return any(t.lower() in wanted for t in self.tags)
