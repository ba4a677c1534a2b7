"""
Shared schema pieces for quiz files.

Quiz files use camelCase keys (``allowTypoDistance``); the models expose
snake_case attributes and accept either spelling on input.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

MAX_TYPO_DISTANCE = 3


class FuzzyMatchConfig(BaseModel):
    """Text comparison settings as written in a quiz file.

    Only consulted during a session when card overrides are enabled;
    otherwise the session's own match settings apply.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    ignore_case: bool = Field(default=True, alias="ignoreCase")
    ignore_accents: bool = Field(default=False, alias="ignoreAccents")
    trim_whitespace: bool = Field(default=True, alias="trimWhitespace")
    normalize_whitespace: bool = Field(default=True, alias="normalizeWhitespace")
    allow_typo_distance: int = Field(
        default=0, ge=0, le=MAX_TYPO_DISTANCE, alias="allowTypoDistance"
    )
    accept_alternatives: bool = Field(default=True, alias="acceptAlternatives")
