"""Tests for quiz discovery and loading.

Test Strategy
-------------
- Directory discovery walks up from the start directory
- JSON and YAML parsing, id fallback to the file stem
- Invalid files: raised by load_quiz_file, skipped by load_all_quizzes
- Id lookup precedence: exact, prefix, substring
- Card collection with tag filter and limit
"""

import json
import logging
from pathlib import Path
from typing import Callable

import pytest

from termcards.core.exceptions import (
    NoCardsError,
    QuizDirectoryNotFoundError,
    QuizNotFoundError,
    QuizValidationError,
)
from termcards.quiz.loader import (
    collect_cards,
    find_quiz_by_id,
    find_quiz_dir,
    load_all_quizzes,
    load_quiz_file,
    require_cards,
    require_quiz_dir,
    select_quiz,
)


class TestFindQuizDir:
    """Locating .termcards."""

    def test_in_start_directory(self, project_dir: Path) -> None:
        assert find_quiz_dir(project_dir) == (project_dir / ".termcards").resolve()

    def test_in_parent_directory(self, project_dir: Path) -> None:
        nested = project_dir / "a" / "b"
        nested.mkdir(parents=True)

        assert find_quiz_dir(nested) == (project_dir / ".termcards").resolve()

    def test_missing(self, tmp_path: Path) -> None:
        assert find_quiz_dir(tmp_path) is None

    def test_require_raises(self, tmp_path: Path) -> None:
        with pytest.raises(QuizDirectoryNotFoundError) as exc_info:
            require_quiz_dir(tmp_path)

        assert exc_info.value.error_code == "TC-QUIZ-001"

    def test_defaults_to_cwd(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(project_dir)

        assert find_quiz_dir() == (project_dir / ".termcards").resolve()


class TestLoadQuizFile:
    """Parsing and validating single files."""

    def test_json_with_id(self, project_dir: Path) -> None:
        loaded = load_quiz_file(project_dir / ".termcards" / "quizzes" / "spanish.json")

        assert loaded.id == "spanish-basics"
        assert loaded.title == "Spanish Basics"
        assert loaded.card_count == 1

    def test_id_falls_back_to_stem(self, project_dir: Path) -> None:
        path = project_dir / ".termcards" / "quizzes" / "geo" / "capitals.json"

        assert load_quiz_file(path).id == "capitals"

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "colors.yaml"
        path.write_text(
            "metadata:\n"
            "  title: Colors\n"
            "  targetLanguage: es\n"
            "defaultMatchConfig:\n"
            "  allowTypoDistance: 2\n"
            "cards:\n"
            "  - id: rojo\n"
            "    front: {text: rojo}\n"
            "    back: {text: red, alternatives: [crimson]}\n",
            encoding="utf-8",
        )

        loaded = load_quiz_file(path)

        assert loaded.id == "colors"
        assert loaded.quiz.metadata.target_language == "es"
        assert loaded.quiz.default_match_config.allow_typo_distance == 2
        assert loaded.quiz.cards[0].back.alternatives == ["crimson"]

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(QuizValidationError) as exc_info:
            load_quiz_file(path)

        assert exc_info.value.path == str(path)
        assert "invalid syntax" in str(exc_info.value)

    def test_empty_cards_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"metadata": {"title": "Empty"}, "cards": []}))

        with pytest.raises(QuizValidationError):
            load_quiz_file(path)

    def test_missing_title_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "untitled.json"
        path.write_text(
            json.dumps(
                {
                    "metadata": {},
                    "cards": [{"id": "a", "front": {"text": "a"}, "back": {"text": "b"}}],
                }
            )
        )

        with pytest.raises(QuizValidationError):
            load_quiz_file(path)

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(QuizValidationError, match="top level"):
            load_quiz_file(path)


class TestLoadAllQuizzes:
    """Loading a whole quizzes directory."""

    def test_loads_in_path_order(self, project_dir: Path) -> None:
        quizzes = load_all_quizzes(project_dir / ".termcards")

        assert [q.id for q in quizzes] == ["capitals", "spanish-basics"]

    def test_skips_invalid_files(
        self,
        project_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        base_dir = project_dir / ".termcards"
        (base_dir / "quizzes" / "broken.json").write_text("{", encoding="utf-8")
        (base_dir / "quizzes" / "notes.txt").write_text("ignored", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="termcards.quiz.loader"):
            quizzes = load_all_quizzes(base_dir)

        assert [q.id for q in quizzes] == ["capitals", "spanish-basics"]
        assert "Skipping invalid quiz file" in caplog.text

    def test_missing_quizzes_dir(self, tmp_path: Path) -> None:
        assert load_all_quizzes(tmp_path) == []


class TestFindQuizById:
    """Exact, prefix and substring lookup."""

    @pytest.fixture
    def quizzes(self, tmp_path: Path, write_quiz: Callable[..., Path]):
        for quiz_id in ("spanish", "spanish-verbs", "basic-french"):
            write_quiz(
                tmp_path,
                f"{quiz_id}.json",
                {
                    "id": quiz_id,
                    "metadata": {"title": quiz_id},
                    "cards": [{"id": "x", "front": {"text": "x"}, "back": {"text": "y"}}],
                },
            )
        return load_all_quizzes(tmp_path)

    def test_exact_beats_prefix(self, quizzes) -> None:
        assert find_quiz_by_id(quizzes, "spanish").id == "spanish"

    def test_prefix_case_insensitive(self, quizzes) -> None:
        assert find_quiz_by_id(quizzes, "SPANISH-V").id == "spanish-verbs"

    def test_substring(self, quizzes) -> None:
        assert find_quiz_by_id(quizzes, "french").id == "basic-french"

    def test_no_match(self, quizzes) -> None:
        assert find_quiz_by_id(quizzes, "german") is None

    def test_select_quiz_raises_with_available(self, quizzes) -> None:
        with pytest.raises(QuizNotFoundError) as exc_info:
            select_quiz(quizzes, "german")

        assert exc_info.value.search == "german"
        assert "spanish" in exc_info.value.available


class TestCollectCards:
    """Card collection, tag filter and limit."""

    @pytest.fixture
    def quizzes(self, tmp_path: Path, write_quiz: Callable[..., Path]):
        write_quiz(
            tmp_path,
            "one.json",
            {
                "metadata": {"title": "One"},
                "cards": [
                    {"id": "a", "front": {"text": "a"}, "back": {"text": "1"}, "tags": ["Vowel"]},
                    {"id": "b", "front": {"text": "b"}, "back": {"text": "2"}},
                ],
            },
        )
        write_quiz(
            tmp_path,
            "two.json",
            {
                "metadata": {"title": "Two"},
                "cards": [
                    {"id": "e", "front": {"text": "e"}, "back": {"text": "5"}, "tags": ["vowel"]},
                ],
            },
        )
        return load_all_quizzes(tmp_path)

    def test_concatenates_in_order(self, quizzes) -> None:
        assert [c.id for c in collect_cards(quizzes)] == ["a", "b", "e"]

    def test_tag_filter_case_insensitive(self, quizzes) -> None:
        assert [c.id for c in collect_cards(quizzes, tags=["VOWEL"])] == ["a", "e"]

    def test_limit(self, quizzes) -> None:
        assert [c.id for c in collect_cards(quizzes, limit=2)] == ["a", "b"]

    def test_zero_limit_keeps_all(self, quizzes) -> None:
        assert len(collect_cards(quizzes, limit=0)) == 3

    def test_require_cards_raises_when_empty(self, quizzes) -> None:
        with pytest.raises(NoCardsError) as exc_info:
            require_cards(quizzes, tags=["consonant"])

        assert "consonant" in str(exc_info.value)
        assert exc_info.value.error_code == "TC-QUIZ-005"
