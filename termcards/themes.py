"""
Color themes.

Ten preset palettes ship with termcards. A project may pick one and
override individual colors in ``.termcards/theme.json`` (or theme.yaml):

    {"theme": "nord", "customColors": {"primary": "#ff00ff"}}

Themes are plain values handed to the view; nothing here keeps a
current theme.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import yaml
from pydantic import ValidationError

from termcards.core.logging import get_logger
from termcards.models.theme import Theme, ThemeColors, ThemeConfig

logger = get_logger(__name__)

DEFAULT_THEME = "default"
THEME_FILES = ("theme.json", "theme.yaml", "theme.yml")


def _theme(name: str, description: str, **colors: str) -> Theme:
    return Theme(name=name, description=description, colors=ThemeColors(**colors))


PRESETS: Dict[str, Theme] = {
    "default": _theme(
        "Default",
        "Clean blue theme",
        primary="#38bdf8",
        secondary="#a78bfa",
        success="#22c55e",
        error="#ef4444",
        warning="#eab308",
        muted="#737373",
        text="#ffffff",
    ),
    "ocean": _theme(
        "Ocean",
        "Deep sea blues and teals",
        primary="#06b6d4",
        secondary="#0ea5e9",
        success="#14b8a6",
        error="#f43f5e",
        warning="#fbbf24",
        muted="#64748b",
        text="#f0f9ff",
    ),
    "forest": _theme(
        "Forest",
        "Natural greens and earth tones",
        primary="#22c55e",
        secondary="#84cc16",
        success="#10b981",
        error="#dc2626",
        warning="#ca8a04",
        muted="#6b7280",
        text="#ecfdf5",
    ),
    "sunset": _theme(
        "Sunset",
        "Warm oranges and pinks",
        primary="#f97316",
        secondary="#ec4899",
        success="#84cc16",
        error="#dc2626",
        warning="#fbbf24",
        muted="#78716c",
        text="#fff7ed",
    ),
    "purple": _theme(
        "Purple Rain",
        "Rich purples and violets",
        primary="#a855f7",
        secondary="#ec4899",
        success="#22d3ee",
        error="#f43f5e",
        warning="#fbbf24",
        muted="#71717a",
        text="#faf5ff",
    ),
    "monochrome": _theme(
        "Monochrome",
        "Classic black and white",
        primary="#ffffff",
        secondary="#d4d4d4",
        success="#a3a3a3",
        error="#737373",
        warning="#a3a3a3",
        muted="#525252",
        text="#fafafa",
    ),
    "dracula": _theme(
        "Dracula",
        "Popular dark theme colors",
        primary="#bd93f9",
        secondary="#ff79c6",
        success="#50fa7b",
        error="#ff5555",
        warning="#f1fa8c",
        muted="#6272a4",
        text="#f8f8f2",
    ),
    "nord": _theme(
        "Nord",
        "Arctic, north-bluish color palette",
        primary="#88c0d0",
        secondary="#81a1c1",
        success="#a3be8c",
        error="#bf616a",
        warning="#ebcb8b",
        muted="#4c566a",
        text="#eceff4",
    ),
    "solarized": _theme(
        "Solarized",
        "Ethan Schoonover's precision colors",
        primary="#268bd2",
        secondary="#2aa198",
        success="#859900",
        error="#dc322f",
        warning="#b58900",
        muted="#586e75",
        text="#fdf6e3",
    ),
    "rose": _theme(
        "Rose Garden",
        "Soft pinks and roses",
        primary="#fb7185",
        secondary="#f472b6",
        success="#4ade80",
        error="#f87171",
        warning="#fbbf24",
        muted="#a1a1aa",
        text="#fff1f2",
    ),
}


def get_theme(name: str) -> Theme:
    """Preset by name; unknown names fall back to the default theme."""
    return PRESETS.get(name, PRESETS[DEFAULT_THEME])


def get_theme_names() -> List[str]:
    return list(PRESETS)


def apply_theme_config(config: ThemeConfig) -> Theme:
    """Resolve a theme config into a full theme, merging custom colors."""
    base = get_theme(config.theme)
    if config.custom_colors is None:
        return base

    overrides = config.custom_colors.model_dump(exclude_none=True)
    if not overrides:
        return base
    colors = base.colors.model_copy(update=overrides)
    return base.model_copy(update={"colors": colors})


def load_theme(base_dir: Path) -> Theme:
    """Load the project theme from the .termcards directory.

    Args:
        base_dir: The .termcards directory

    Returns:
        Configured theme; the default theme when no file exists or the
        file is invalid (logged as a warning)
    """
    for file_name in THEME_FILES:
        path = base_dir / file_name
        if not path.is_file():
            continue

        try:
            content = path.read_text(encoding="utf-8")
            data = json.loads(content) if path.suffix == ".json" else yaml.safe_load(content)
            config = ThemeConfig.model_validate(data or {})
        except (OSError, json.JSONDecodeError, yaml.YAMLError, ValidationError) as e:
            logger.warning("Invalid theme file, using default theme", path=path, error=e)
            return get_theme(DEFAULT_THEME)

        logger.debug("Loaded theme", path=path, theme=config.theme)
        return apply_theme_config(config)

    return get_theme(DEFAULT_THEME)
