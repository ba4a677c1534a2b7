"""
Exceptions raised by termcards outside a study session.

Invalid input during a session is never an error: the session engine
simply ignores it. These exceptions cover the shell around it (finding
and loading quiz files, looking quizzes up, reading config.yaml).

Every TermcardsError carries three pieces of help for the error panel:

- error_code: Stable identifier, e.g. "TC-QUIZ-003"
- why_it_happened: One sentence on the cause
- how_to_fix: Things to try, in order

Hierarchy
---------
    TermcardsError
    ├── QuizError
    │   ├── QuizDirectoryNotFoundError   TC-QUIZ-001
    │   ├── NoQuizzesFoundError          TC-QUIZ-002
    │   ├── QuizNotFoundError            TC-QUIZ-003
    │   ├── QuizValidationError          TC-QUIZ-004
    │   └── NoCardsError                 TC-QUIZ-005
    └── ConfigError                      TC-CFG-001
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Type


def get_root_cause(exc: BaseException) -> BaseException:
    """Walk __cause__ / __context__ links back to the first exception.

    Returns ``exc`` itself when it has no chain. Cycles are cut.
    """
    seen = {id(exc)}
    current = exc
    while True:
        parent = current.__cause__ or current.__context__
        if parent is None or id(parent) in seen:
            return current
        seen.add(id(parent))
        current = parent


class TermcardsError(Exception):
    """
    Base class for termcards errors.

    Subclasses set the help text as class attributes; any of it can be
    replaced per instance:

        raise QuizNotFoundError(
            "No quiz matches 'german'",
            how_to_fix=["Add .termcards/quizzes/german.json"],
        )
    """

    error_code: str = "TC-ERR-000"
    why_it_happened: str = "termcards hit an error it has no specific help for"
    how_to_fix: List[str] = ["Run again with --verbose for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        for name, value in (
            ("error_code", error_code),
            ("why_it_happened", why_it_happened),
            ("how_to_fix", how_to_fix),
        ):
            if value is not None:
                setattr(self, name, value)

    @property
    def user_message(self) -> str:
        return str(self)

    def get_root_cause(self) -> BaseException:
        return get_root_cause(self)


# ============================================================================
# Quiz Exceptions
# ============================================================================


class QuizError(TermcardsError):
    """Base exception for quiz discovery and loading errors."""

    error_code = "TC-QUIZ-000"
    why_it_happened = "The quiz files could not be used"
    how_to_fix = ["Check the files under .termcards/quizzes/"]


class QuizDirectoryNotFoundError(QuizError):
    """Raised when no .termcards directory exists in cwd or any parent."""

    error_code = "TC-QUIZ-001"
    why_it_happened = (
        "termcards looks for a .termcards directory in the current "
        "directory and each of its parents, and none was found"
    )
    how_to_fix = [
        "Create one: mkdir -p .termcards/quizzes",
        "Add a quiz file such as .termcards/quizzes/spanish.json",
        "Run termcards from inside the project that holds your quizzes",
    ]


class NoQuizzesFoundError(QuizError):
    """Raised when the quizzes directory holds no valid quiz file."""

    error_code = "TC-QUIZ-002"
    why_it_happened = (
        "No .json or .yaml file under .termcards/quizzes/ passed validation"
    )
    how_to_fix = [
        "Add a quiz file with a metadata.title and at least one card",
        "Run with --verbose to see why individual files were skipped",
    ]


class QuizNotFoundError(QuizError):
    """Raised when a quiz id matches none of the loaded quizzes."""

    error_code = "TC-QUIZ-003"
    why_it_happened = "No quiz id equals, starts with, or contains the search text"
    how_to_fix = [
        "List available quizzes: termcards list",
        "Use a longer or shorter part of the quiz id",
    ]

    def __init__(
        self,
        message: str,
        search: str = "",
        available: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.search = search
        self.available = available or []


class QuizValidationError(QuizError):
    """Raised when a quiz file cannot be parsed or fails schema validation."""

    error_code = "TC-QUIZ-004"
    why_it_happened = "The quiz file is not valid JSON/YAML or misses required fields"
    how_to_fix = [
        "Check the file for syntax errors",
        "Every quiz needs metadata.title and a non-empty cards list",
        "Every card needs id, front.text and back.text",
    ]

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.path = path


class NoCardsError(QuizError):
    """Raised when the selected quizzes and filters leave nothing to study."""

    error_code = "TC-QUIZ-005"
    why_it_happened = "The selected quizzes contain no cards matching the filters"
    how_to_fix = [
        "Drop or change the --tag filter",
        "Choose a different quiz",
    ]


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(TermcardsError):
    """Raised when config.yaml or an environment override is invalid."""

    error_code = "TC-CFG-001"
    why_it_happened = "A configuration value in .termcards/config.yaml is invalid"
    how_to_fix = [
        "Check config.yaml for YAML syntax errors",
        "Verify the value type and range (allow_typo_distance is 0-3)",
        "Unset TERMCARDS_* environment variables to rule them out",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


# ============================================================================
# Help for built-in exceptions
# ============================================================================


# Checked in order, so subclasses come before their bases
_BUILTIN_HELP: Tuple[Tuple[Type[BaseException], Dict[str, Any]], ...] = (
    (
        FileNotFoundError,
        {
            "error_code": "TC-FILE-001",
            "why_it_happened": "A file termcards needed does not exist",
            "how_to_fix": ["Check the path in the message above"],
        },
    ),
    (
        PermissionError,
        {
            "error_code": "TC-FILE-002",
            "why_it_happened": "termcards may not read or write this path",
            "how_to_fix": ["Check ownership and permissions of the .termcards directory"],
        },
    ),
    (
        UnicodeDecodeError,
        {
            "error_code": "TC-FILE-003",
            "why_it_happened": "A quiz or config file is not valid UTF-8",
            "how_to_fix": ["Re-save the file with UTF-8 encoding"],
        },
    ),
    (
        OSError,
        {
            "error_code": "TC-SYS-001",
            "why_it_happened": "The operating system refused a file operation",
            "how_to_fix": ["Check free disk space and permissions"],
        },
    ),
)

_UNKNOWN_HELP: Dict[str, Any] = {
    "error_code": "TC-ERR-999",
    "why_it_happened": "An unexpected error occurred",
    "how_to_fix": [
        "Run again with --verbose for a full traceback",
        "Report the traceback if the problem persists",
    ],
}


def get_error_info(exc: BaseException) -> Dict[str, Any]:
    """Help text for any exception, keyed like TermcardsError's attributes."""
    if isinstance(exc, TermcardsError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    for exc_type, info in _BUILTIN_HELP:
        if isinstance(exc, exc_type):
            return info
    return _UNKNOWN_HELP
