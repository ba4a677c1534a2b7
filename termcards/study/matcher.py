"""Typo-tolerant answer matching for typed responses.

Normalizes a typed answer and each accepted answer the same way, then
looks for a literal match first and falls back to Levenshtein distance.

    >>> result = match_answer("CAFE", ["café"])
    >>> result.is_correct, result.is_exact, result.distance
    (True, True, 0)

An exact match on any accepted answer wins, even when an earlier
answer in the list is closer by edit distance on the raw text.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Sequence

MAX_TYPO_DISTANCE = 3

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class MatchConfig:
    """How strictly typed answers are compared.

    Attributes:
        ignore_case: Compare case-insensitively
        ignore_accents: Strip combining diacritics ("café" == "cafe")
        allow_typo_distance: Edit-distance budget for a correct answer (0-3)
    """

    ignore_case: bool = True
    ignore_accents: bool = True
    allow_typo_distance: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.allow_typo_distance <= MAX_TYPO_DISTANCE:
            raise ValueError(
                f"allow_typo_distance must be between 0 and {MAX_TYPO_DISTANCE}, "
                f"got {self.allow_typo_distance}"
            )


# Tolerance applied to typed answers during a study session
DEFAULT_MATCH_CONFIG = MatchConfig()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing one typed answer against accepted answers.

    Attributes:
        is_correct: Within the typo budget of some accepted answer
        is_exact: Normalized literal match
        distance: Edit distance to the closest accepted answer (0 iff exact)
        matched_answer: Accepted answer that was matched, when correct
    """

    is_correct: bool
    is_exact: bool
    distance: int
    matched_answer: Optional[str] = None


def normalize_text(text: str, config: MatchConfig = DEFAULT_MATCH_CONFIG) -> str:
    """Normalize text for comparison.

    Trims, collapses whitespace runs to one space, then lowercases
    and strips accents as configured.
    """
    normalized = _WHITESPACE_RUN.sub(" ", text.strip())

    if config.ignore_case:
        normalized = normalized.lower()

    if config.ignore_accents:
        decomposed = unicodedata.normalize("NFD", normalized)
        normalized = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    return normalized


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character inserts, deletes and substitutions from a to b.

    Uses the full (len(b)+1) x (len(a)+1) dynamic-programming matrix.
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,  # insertion
                    matrix[i - 1][j] + 1,  # deletion
                )

    return matrix[len(b)][len(a)]


def match_answer(
    user_input: str,
    accepted_answers: Sequence[str],
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> MatchResult:
    """Check a typed answer against the accepted answers.

    Args:
        user_input: What the user typed
        accepted_answers: Primary answer followed by alternatives (non-empty)
        config: Normalization and typo tolerance

    Returns:
        MatchResult for the exact match, or for the closest answer

    Raises:
        ValueError: If accepted_answers is empty
    """
    if not accepted_answers:
        raise ValueError("accepted_answers must contain at least one answer")

    normalized_input = normalize_text(user_input, config)
    fuzzy: List[MatchResult] = []

    for answer in accepted_answers:
        normalized_answer = normalize_text(answer, config)

        if normalized_input == normalized_answer:
            return MatchResult(
                is_correct=True,
                is_exact=True,
                distance=0,
                matched_answer=answer,
            )

        distance = levenshtein_distance(normalized_input, normalized_answer)
        within = distance <= config.allow_typo_distance
        fuzzy.append(
            MatchResult(
                is_correct=within,
                is_exact=False,
                distance=distance,
                matched_answer=answer if within else None,
            )
        )

    # min() keeps the earliest answer among equal distances
    return min(fuzzy, key=lambda result: result.distance)
