"""入力フォームの検証.

フォームはpydanticモデルで表現し、各フィールドの検証エラーは
画面にそのまま表示できるメッセージで返す。送信はエラーがない場合だけ行う。

使用例:
    >>> form, errors = validate_form(GuideForm, {"title": "", "topic_ids": []})
    >>> errors
    {'title': 'Title is required', 'topic_ids': 'At least one topic is required'}
"""

from __future__ import annotations

import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from learnflow.core.constants import (
    CHALLENGE_DIFFICULTY_MAX_XP,
    ChallengeDifficulty,
    CourseDifficulty,
)


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=BaseModel)

FORM_ERROR = "form_error"

MAX_CHALLENGE_EXPERIENCE_POINTS = max(CHALLENGE_DIFFICULTY_MAX_XP.values())
CHALLENGE_TITLE_MIN_LENGTH = 5
CHALLENGE_TITLE_MAX_LENGTH = 32
MIN_ATTEMPTS_BEFORE_GUIDES = 2
MAX_ATTEMPTS_BEFORE_GUIDES = 5
USERNAME_MAX_LENGTH = 30

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")


def _reject(message: str) -> PydanticCustomError:
    return PydanticCustomError(FORM_ERROR, message)


class FormModel(BaseModel):
    """フォームモデル基底."""

    model_config = ConfigDict(extra="ignore", validate_default=True)


class GuideForm(FormModel):
    """ガイド作成フォーム."""

    title: str = ""
    description: str = ""
    cover: str | None = None
    topic_ids: list[str] = []

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value:
            raise _reject("Title is required")
        return value

    @field_validator("topic_ids")
    @classmethod
    def _topics_required(cls, value: list[str]) -> list[str]:
        if not value:
            raise _reject("At least one topic is required")
        return value


class CourseForm(FormModel):
    """コース作成フォーム."""

    title: str = ""
    description: str = ""
    difficulty: CourseDifficulty = CourseDifficulty.BEGINNER
    completion_score: int = 0
    cover: str | None = None

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value:
            raise _reject("Title is required")
        return value

    @field_validator("completion_score")
    @classmethod
    def _score_positive(cls, value: int) -> int:
        if value < 0:
            raise _reject("Completion score must be positive")
        return value


class ChallengeForm(FormModel):
    """チャレンジ作成フォーム."""

    title: str = ""
    tags: str | None = None
    difficulty: ChallengeDifficulty = ChallengeDifficulty.EASY
    experience_points: int = 0
    max_attempts_before_guides: int = 3

    @field_validator("title")
    @classmethod
    def _title_length(cls, value: str) -> str:
        if len(value) < CHALLENGE_TITLE_MIN_LENGTH:
            raise _reject(
                f"Challenge title must be at least {CHALLENGE_TITLE_MIN_LENGTH} characters."
            )
        if len(value) > CHALLENGE_TITLE_MAX_LENGTH:
            raise _reject(
                f"Challenge title must be at most {CHALLENGE_TITLE_MAX_LENGTH} characters."
            )
        return value

    @field_validator("experience_points")
    @classmethod
    def _xp_range(cls, value: int) -> int:
        if value < 0:
            raise _reject("Experience points must be at least 0.")
        if value > MAX_CHALLENGE_EXPERIENCE_POINTS:
            raise _reject(
                f"Experience points must be at most {MAX_CHALLENGE_EXPERIENCE_POINTS}."
            )
        return value

    @field_validator("max_attempts_before_guides")
    @classmethod
    def _attempts_range(cls, value: int) -> int:
        if value < MIN_ATTEMPTS_BEFORE_GUIDES:
            raise _reject(
                f"Max attempts before guides must be at least {MIN_ATTEMPTS_BEFORE_GUIDES}."
            )
        if value > MAX_ATTEMPTS_BEFORE_GUIDES:
            raise _reject(
                f"Max attempts before guides must be at most {MAX_ATTEMPTS_BEFORE_GUIDES}."
            )
        return value

    @property
    def tag_ids(self) -> list[str]:
        """カンマ区切りのタグ入力をIDのリストに変換."""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


class UsernameForm(FormModel):
    """サインアップのユーザー名フォーム（前後の空白は除去）."""

    username: str = ""

    @field_validator("username")
    @classmethod
    def _username_rules(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise _reject("Username cannot be empty")
        if len(value) > USERNAME_MAX_LENGTH:
            raise _reject(f"Username cannot exceed {USERNAME_MAX_LENGTH} characters")
        if not _USERNAME_PATTERN.match(value):
            raise _reject(
                "Username must contain only alphanumeric characters "
                "(letters and numbers), no spaces, maximum 30 characters"
            )
        return value


def validate_form(form: type[F], data: dict[str, Any]) -> tuple[F | None, dict[str, str]]:
    """フォーム入力を検証.

    Args:
        form: フォームモデルクラス
        data: 入力値

    Returns:
        (検証済みフォーム, フィールド名→エラーメッセージ)。
        エラーがある場合フォームはNone。フィールドごとに最初のエラーだけを返す。
    """
    try:
        return form.model_validate(data), {}
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field, error["msg"])
        logger.debug("フォーム検証エラー (%s): %s", form.__name__, errors)
        return None, errors
