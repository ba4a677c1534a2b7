"""Theme schema: a named palette of hex colors used by the terminal view."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class ThemeColors(BaseModel):
    """Palette roles.

    Attributes:
        primary: Selections and highlights
        secondary: Secondary accents (prompts, labels)
        success: Correct answers, high scores
        error: Wrong answers, low scores
        warning: Medium scores
        muted: Dim helper text
        text: Regular text
    """

    model_config = {"frozen": True}

    primary: str = Field(..., pattern=HEX_COLOR)
    secondary: str = Field(..., pattern=HEX_COLOR)
    success: str = Field(..., pattern=HEX_COLOR)
    error: str = Field(..., pattern=HEX_COLOR)
    warning: str = Field(..., pattern=HEX_COLOR)
    muted: str = Field(..., pattern=HEX_COLOR)
    text: str = Field(..., pattern=HEX_COLOR)


class PartialThemeColors(BaseModel):
    """Color overrides from a user theme file; unset roles keep the preset."""

    model_config = {"frozen": True}

    primary: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    secondary: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    success: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    error: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    warning: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    muted: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    text: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class Theme(BaseModel):
    """A named color palette."""

    model_config = {"frozen": True}

    name: str
    description: Optional[str] = None
    colors: ThemeColors


class ThemeConfig(BaseModel):
    """Contents of .termcards/theme.json or theme.yaml."""

    model_config = {"frozen": True, "populate_by_name": True}

    theme: str = "default"
    custom_colors: Optional[PartialThemeColors] = Field(
        default=None, alias="customColors"
    )
