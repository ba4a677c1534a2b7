"""Tests for the exception hierarchy and error info lookup."""

import pytest

from termcards.core.exceptions import (
    ConfigError,
    NoCardsError,
    NoQuizzesFoundError,
    QuizDirectoryNotFoundError,
    QuizError,
    QuizNotFoundError,
    QuizValidationError,
    TermcardsError,
    get_error_info,
    get_root_cause,
)


class TestHierarchy:
    """Every error is a TermcardsError with its own code."""

    @pytest.mark.parametrize(
        "exc_type,code",
        [
            (QuizDirectoryNotFoundError, "TC-QUIZ-001"),
            (NoQuizzesFoundError, "TC-QUIZ-002"),
            (QuizNotFoundError, "TC-QUIZ-003"),
            (QuizValidationError, "TC-QUIZ-004"),
            (NoCardsError, "TC-QUIZ-005"),
        ],
    )
    def test_quiz_errors(self, exc_type: type, code: str) -> None:
        exc = exc_type("boom")

        assert isinstance(exc, QuizError)
        assert isinstance(exc, TermcardsError)
        assert exc.error_code == code
        assert exc.how_to_fix

    def test_config_error_fields(self) -> None:
        exc = ConfigError("bad", field="match.allow_typo_distance", value=9)

        assert exc.error_code == "TC-CFG-001"
        assert exc.field == "match.allow_typo_distance"
        assert exc.value == 9

    def test_overrides(self) -> None:
        exc = TermcardsError(
            "custom",
            error_code="TC-X-1",
            why_it_happened="because",
            how_to_fix=["do this"],
        )

        assert exc.user_message == "custom"
        assert exc.error_code == "TC-X-1"
        assert exc.why_it_happened == "because"
        assert exc.how_to_fix == ["do this"]

    def test_override_does_not_leak_to_class(self) -> None:
        default = list(TermcardsError.how_to_fix)

        TermcardsError("x", how_to_fix=["one-off"])

        assert TermcardsError.how_to_fix == default


class TestRootCause:
    """Following __cause__ and __context__ chains."""

    def test_no_chain(self) -> None:
        exc = ValueError("root")

        assert get_root_cause(exc) is exc

    def test_explicit_cause(self) -> None:
        root = OSError("disk")
        try:
            try:
                raise root
            except OSError as e:
                raise QuizValidationError("wrapped") from e
        except QuizValidationError as wrapped:
            assert get_root_cause(wrapped) is root
            assert wrapped.get_root_cause() is root


class TestErrorInfo:
    """get_error_info for our and standard exceptions."""

    def test_termcards_error(self) -> None:
        info = get_error_info(NoCardsError("none"))

        assert info["error_code"] == "TC-QUIZ-005"

    def test_standard_exact_type(self) -> None:
        assert get_error_info(FileNotFoundError("x"))["error_code"] == "TC-FILE-001"

    def test_standard_subclass(self) -> None:
        assert get_error_info(IsADirectoryError("x"))["error_code"] == "TC-SYS-001"

    def test_decode_error(self) -> None:
        exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        assert get_error_info(exc)["error_code"] == "TC-FILE-003"

    def test_unknown(self) -> None:
        assert get_error_info(RuntimeError("x"))["error_code"] == "TC-ERR-999"
