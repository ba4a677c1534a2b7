"""
Pydantic models for quiz files and themes.

Cards and quizzes are validated once at load time and never mutated.
"""

from termcards.models.card import Card, CardBack, CardFront
from termcards.models.common import FuzzyMatchConfig
from termcards.models.quiz import LoadedQuiz, QuestionGenerationConfig, Quiz, QuizMetadata
from termcards.models.theme import PartialThemeColors, Theme, ThemeColors, ThemeConfig

__all__ = [
    "Card",
    "CardBack",
    "CardFront",
    "FuzzyMatchConfig",
    "LoadedQuiz",
    "QuestionGenerationConfig",
    "Quiz",
    "QuizMetadata",
    "PartialThemeColors",
    "Theme",
    "ThemeColors",
    "ThemeConfig",
]
