"""入力フォーム検証 テスト."""

from __future__ import annotations

import pytest

from learnflow.core.constants import ChallengeDifficulty
from learnflow.forms import ChallengeForm, CourseForm, GuideForm, UsernameForm, validate_form


class TestGuideForm:
    """GuideForm テスト."""

    def test_required_fields(self) -> None:
        """タイトルとトピックは必須."""
        form, errors = validate_form(GuideForm, {"title": "", "topic_ids": []})

        assert form is None
        assert errors == {
            "title": "Title is required",
            "topic_ids": "At least one topic is required",
        }

    def test_valid(self) -> None:
        """正しい入力."""
        form, errors = validate_form(GuideForm, {"title": "Intro", "topic_ids": ["t1"]})

        assert errors == {}
        assert form is not None and form.topic_ids == ["t1"]


class TestCourseForm:
    """CourseForm テスト."""

    def test_negative_score(self) -> None:
        """合格スコアは0以上."""
        _, errors = validate_form(CourseForm, {"title": "Backend", "completion_score": -1})

        assert errors == {"completion_score": "Completion score must be positive"}


class TestChallengeForm:
    """ChallengeForm テスト."""

    @pytest.mark.parametrize(
        ("data", "field", "message"),
        [
            ({"title": "Fizz"}, "title", "Challenge title must be at least 5 characters."),
            ({"title": "x" * 33}, "title", "Challenge title must be at most 32 characters."),
            (
                {"title": "FizzBuzz", "experience_points": -1},
                "experience_points",
                "Experience points must be at least 0.",
            ),
            (
                {"title": "FizzBuzz", "experience_points": 41},
                "experience_points",
                "Experience points must be at most 40.",
            ),
            (
                {"title": "FizzBuzz", "max_attempts_before_guides": 1},
                "max_attempts_before_guides",
                "Max attempts before guides must be at least 2.",
            ),
            (
                {"title": "FizzBuzz", "max_attempts_before_guides": 6},
                "max_attempts_before_guides",
                "Max attempts before guides must be at most 5.",
            ),
        ],
    )
    def test_range_messages(self, data: dict, field: str, message: str) -> None:
        """範囲外の入力はフィールドごとのメッセージ."""
        _, errors = validate_form(ChallengeForm, data)

        assert errors == {field: message}

    def test_tag_ids(self) -> None:
        """カンマ区切りのタグ."""
        form, _ = validate_form(
            ChallengeForm,
            {"title": "FizzBuzz", "tags": "t1, t2,,", "difficulty": "HARD"},
        )

        assert form is not None
        assert form.tag_ids == ["t1", "t2"]
        assert form.difficulty == ChallengeDifficulty.HARD
        assert form.max_attempts_before_guides == 3


class TestUsernameForm:
    """UsernameForm テスト."""

    @pytest.mark.parametrize(
        ("username", "message"),
        [
            ("   ", "Username cannot be empty"),
            ("a" * 31, "Username cannot exceed 30 characters"),
            (
                "alice smith",
                "Username must contain only alphanumeric characters "
                "(letters and numbers), no spaces, maximum 30 characters",
            ),
        ],
    )
    def test_invalid(self, username: str, message: str) -> None:
        """ユーザー名の規則."""
        _, errors = validate_form(UsernameForm, {"username": username})

        assert errors == {"username": message}

    def test_stripped(self) -> None:
        """前後の空白は除去."""
        form, errors = validate_form(UsernameForm, {"username": "  alice42 "})

        assert errors == {}
        assert form is not None and form.username == "alice42"
