"""
Configuration for termcards.

Settings live in an optional ``.termcards/config.yaml``:

    match:
      ignore_case: true
      ignore_accents: true
      allow_typo_distance: 1
    session:
      mode: mixed
      bidirectional: true
      use_card_overrides: false
    logging:
      level: ${TERMCARDS_LOG_LEVEL:WARNING}

String values may reference environment variables with ``${VAR}`` or
``${VAR:default}``. The TERMCARDS_MODE, TERMCARDS_TYPO_DISTANCE and
TERMCARDS_LOG_LEVEL variables override the file. A missing file means
defaults everywhere; an invalid value raises ConfigError.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from termcards.core.exceptions import ConfigError
from termcards.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "config.yaml"

VALID_MODES = ("multiple-choice", "type-answer", "mixed")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_TYPO_DISTANCE = 3

# ${NAME} or ${NAME:default}
_ENV_REF = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


@dataclass
class MatchSettings:
    """Typo tolerance used when grading typed answers."""

    ignore_case: bool = True
    ignore_accents: bool = True
    allow_typo_distance: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.allow_typo_distance <= MAX_TYPO_DISTANCE:
            raise ConfigError(
                f"allow_typo_distance must be between 0 and {MAX_TYPO_DISTANCE}, "
                f"got {self.allow_typo_distance}",
                field="match.allow_typo_distance",
                value=self.allow_typo_distance,
            )


@dataclass
class SessionSettings:
    """Defaults for the learn command."""

    mode: str = "mixed"
    bidirectional: bool = True
    use_card_overrides: bool = False
    num_options: int = 4

    def __post_init__(self) -> None:
        if self.mode not in VALID_MODES:
            raise ConfigError(
                f"Unknown study mode '{self.mode}' "
                f"(expected one of: {', '.join(VALID_MODES)})",
                field="session.mode",
                value=self.mode,
            )
        if not 2 <= self.num_options <= 8:
            raise ConfigError(
                f"num_options must be between 2 and 8, got {self.num_options}",
                field="session.num_options",
                value=self.num_options,
            )


@dataclass
class LoggingSettings:
    """Log level and optional file logging."""

    level: str = "WARNING"
    file_logging: bool = True

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if self.level not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level '{self.level}'",
                field="logging.level",
                value=self.level,
            )


@dataclass
class Config:
    """Aggregated termcards configuration."""

    match: MatchSettings = field(default_factory=MatchSettings)
    session: SessionSettings = field(default_factory=SessionSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    base_dir: Optional[Path] = None

    @property
    def log_file(self) -> Optional[Path]:
        """Log file path under the base directory, if file logging applies."""
        if self.base_dir is None or not self.logging.file_logging:
            return None
        return self.base_dir / "logs" / "termcards.log"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "Config":
        """Build a Config from a parsed YAML mapping."""
        return cls(
            match=MatchSettings(**_section(data, "match")),
            session=SessionSettings(**_section(data, "session")),
            logging=LoggingSettings(**_section(data, "logging")),
            base_dir=base_dir,
        )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return one config section, rejecting unknown shapes."""
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{name}' must be a mapping", field=name, value=value)
    return value


def _env_value(match: "re.Match[str]") -> str:
    name, default = match.group(1), match.group(2)
    return os.environ.get(name, default or "")


def expand_env_vars(value: Any) -> Any:
    """Expand ${VAR} and ${VAR:default} in strings, recursing into dicts and lists.

    Unset variables without a default expand to an empty string.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(_env_value, value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply TERMCARDS_* environment overrides on top of the file data."""
    mode = os.environ.get("TERMCARDS_MODE")
    if mode:
        data.setdefault("session", {})["mode"] = mode

    distance = os.environ.get("TERMCARDS_TYPO_DISTANCE")
    if distance:
        try:
            data.setdefault("match", {})["allow_typo_distance"] = int(distance)
        except ValueError as e:
            raise ConfigError(
                f"TERMCARDS_TYPO_DISTANCE must be an integer, got '{distance}'",
                field="match.allow_typo_distance",
                value=distance,
            ) from e

    level = os.environ.get("TERMCARDS_LOG_LEVEL")
    if level:
        data.setdefault("logging", {})["level"] = level

    return data


def _coerce_numbers(data: Dict[str, Any]) -> Dict[str, Any]:
    """Turn digit-only strings (left by env expansion) back into ints."""
    for section in data.values():
        if not isinstance(section, dict):
            continue
        for key, value in section.items():
            if isinstance(value, str) and value.isdigit():
                section[key] = int(value)
    return data


def load_config(base_dir: Optional[Path] = None) -> Config:
    """Load configuration from ``<base_dir>/config.yaml``.

    Args:
        base_dir: The .termcards directory, or None for pure defaults

    Returns:
        Config object

    Raises:
        ConfigError: If the file is unreadable YAML or holds invalid values
    """
    data: Dict[str, Any] = {}

    if base_dir is not None:
        config_path = base_dir / CONFIG_FILE_NAME
        if config_path.exists():
            try:
                loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {config_path.name}: {e}") from e
            if loaded is not None and not isinstance(loaded, dict):
                raise ConfigError(f"{config_path.name} must contain a mapping")
            data = expand_env_vars(loaded or {})
            logger.debug("Loaded configuration", path=config_path)

    data = _coerce_numbers(_apply_env_overrides(data))

    try:
        return Config.from_dict(data, base_dir=base_dir)
    except TypeError as e:
        # Unknown keys in a section
        raise ConfigError(f"Unknown configuration key: {e}") from e
