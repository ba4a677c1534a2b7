"""
Quiz schema.

A quiz file holds metadata and a non-empty list of cards. The id is
optional in the file; the loader falls back to the file stem.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from termcards.models.card import Card
from termcards.models.common import FuzzyMatchConfig


class QuizMetadata(BaseModel):
    """Descriptive information about a quiz."""

    model_config = {"frozen": True, "populate_by_name": True}

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    author: Optional[str] = None
    language: Optional[str] = Field(default=None, min_length=2, max_length=2)
    target_language: Optional[str] = Field(
        default=None, min_length=2, max_length=2, alias="targetLanguage"
    )
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    version: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)
    estimated_minutes: Optional[float] = Field(
        default=None, gt=0, alias="estimatedMinutes"
    )


class QuestionGenerationConfig(BaseModel):
    """Per-quiz defaults for question generation."""

    model_config = {"frozen": True, "populate_by_name": True}

    bidirectional: bool = True
    multiple_choice_options: int = Field(
        default=4, ge=2, le=8, alias="multipleChoiceOptions"
    )


class Quiz(BaseModel):
    """A complete quiz as stored on disk."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    metadata: QuizMetadata
    default_match_config: Optional[FuzzyMatchConfig] = Field(
        default=None, alias="defaultMatchConfig"
    )
    question_config: Optional[QuestionGenerationConfig] = Field(
        default=None, alias="questionConfig"
    )
    cards: List[Card] = Field(..., min_length=1)


@dataclass(frozen=True)
class LoadedQuiz:
    """A validated quiz together with where it came from.

    Attributes:
        id: Resolved id (the quiz's own id, else the file stem)
        path: File the quiz was read from
        quiz: Validated quiz content
    """

    id: str
    path: Path
    quiz: Quiz

    @property
    def title(self) -> str:
        return self.quiz.metadata.title

    @property
    def card_count(self) -> int:
        return len(self.quiz.cards)
