"""Tests for theme presets and project theme files."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from termcards.models.theme import PartialThemeColors, ThemeConfig
from termcards.themes import (
    PRESETS,
    apply_theme_config,
    get_theme,
    get_theme_names,
    load_theme,
)


class TestPresets:
    """Built-in palettes."""

    def test_ten_presets(self) -> None:
        assert len(get_theme_names()) == 10
        assert get_theme_names()[0] == "default"

    def test_lookup(self) -> None:
        assert get_theme("nord").colors.primary == "#88c0d0"

    def test_unknown_falls_back(self) -> None:
        assert get_theme("neon") is PRESETS["default"]


class TestApplyThemeConfig:
    """Merging custom colors."""

    def test_custom_colors_override(self) -> None:
        config = ThemeConfig(
            theme="dracula",
            custom_colors=PartialThemeColors(primary="#112233"),
        )

        theme = apply_theme_config(config)

        assert theme.colors.primary == "#112233"
        assert theme.colors.secondary == PRESETS["dracula"].colors.secondary
        assert PRESETS["dracula"].colors.primary == "#bd93f9"

    def test_no_custom_colors(self) -> None:
        assert apply_theme_config(ThemeConfig(theme="ocean")) is PRESETS["ocean"]

    def test_bad_hex_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PartialThemeColors(primary="blue")


class TestLoadTheme:
    """Reading theme.json / theme.yaml."""

    def test_no_file(self, tmp_path: Path) -> None:
        assert load_theme(tmp_path) is PRESETS["default"]

    def test_json(self, tmp_path: Path) -> None:
        (tmp_path / "theme.json").write_text(
            json.dumps({"theme": "forest", "customColors": {"error": "#abcdef"}})
        )

        theme = load_theme(tmp_path)

        assert theme.name == "Forest"
        assert theme.colors.error == "#abcdef"

    def test_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "theme.yaml").write_text("theme: solarized\n")

        assert load_theme(tmp_path).name == "Solarized"

    def test_invalid_file_uses_default(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "theme.json").write_text('{"customColors": {"primary": "red"}}')

        with caplog.at_level(logging.WARNING, logger="termcards.themes"):
            theme = load_theme(tmp_path)

        assert theme is PRESETS["default"]
        assert "Invalid theme file" in caplog.text
