"""
Structured logging for termcards.

Modules log through get_logger(__name__). Keyword arguments become
``key=value`` fields after the message:

    logger = get_logger(__name__)
    logger.info("Loaded quizzes", loaded=3, skipped=1)
    # -> "Loaded quizzes | loaded=3 | skipped=1"

Fields bound with bind() ride along on every later record of that
logger, e.g. a session id for the length of a study session.

The CLI calls configure_logging() once per run, after config.yaml is
read. Loggers created at import time are rebuilt in place, so they pick
up the configured level and log file as well. Console records go through
rich's RichHandler so they do not tear the session panels apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LogSettings:
    """Level and outputs shared by all termcards loggers."""

    level: str = "WARNING"
    log_file: Optional[Path] = None
    console: bool = True

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper(), logging.WARNING)


_settings = LogSettings()
_registry: Dict[str, "StructuredLogger"] = {}
# Built once per configure_logging() and attached to every registered logger
_handlers: List[logging.Handler] = []


def _build_handlers(settings: LogSettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    level = settings.level_number

    if settings.console:
        handlers.append(RichHandler(show_path=False, markup=False, rich_tracebacks=True))

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def _current_handlers() -> List[logging.Handler]:
    global _handlers
    if not _handlers:
        _handlers = _build_handlers(_settings)
    return _handlers


class StructuredLogger:
    """A stdlib logger whose messages carry key=value fields.

    Attributes:
        logger: The wrapped ``logging.Logger``
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)
        self._bound: Dict[str, Any] = {}
        self.apply(_settings, _current_handlers())

    def apply(self, settings: LogSettings, handlers: List[logging.Handler]) -> None:
        """Set the level from ``settings`` and attach the shared ``handlers``.

        Handlers already on the logger are detached but not closed; they
        belong to the previous configuration, which closes them.
        """
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)

        self.logger.setLevel(settings.level_number)
        for handler in handlers:
            self.logger.addHandler(handler)

    def bind(self, **fields: Any) -> "StructuredLogger":
        self._bound.update(fields)
        return self

    def unbind(self, *keys: str) -> None:
        for key in keys:
            self._bound.pop(key, None)

    def _format_message(self, message: str, **fields: Any) -> str:
        merged = {**self._bound, **fields}
        if not merged:
            return message
        return " | ".join([message, *(f"{key}={value}" for key, value in merged.items())])

    def _log(self, level: int, message: str, fields: Dict[str, Any]) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_message(message, **fields))

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, fields)


def get_logger(name: str) -> StructuredLogger:
    """Return the shared StructuredLogger for ``name`` (usually __name__)."""
    logger = _registry.get(name)
    if logger is None:
        logger = _registry[name] = StructuredLogger(name)
    return logger


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """Set level and outputs for every termcards logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Also write plain records to this file
        console: Emit records to the terminal through rich
    """
    global _settings, _handlers
    for handler in _handlers:
        handler.close()

    _settings = LogSettings(level=level, log_file=log_file, console=console)
    _handlers = _build_handlers(_settings)
    for logger in _registry.values():
        logger.apply(_settings, _handlers)
