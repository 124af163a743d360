"""チャレンジ・コードバージョン・テスト・ソリューションのモデル.

ワイヤー検証:
- ID は UUID
- チャレンジ名は1〜100文字、獲得XPは0〜10000
- maxAttemptsBeforeGuides は0〜100で、未設定なら3
- 初期コードは10000文字まで
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from learnflow.core.constants import (
    CHALLENGE_MAX_ATTEMPTS_LIMIT,
    CHALLENGE_MAX_EXPERIENCE_POINTS,
    CHALLENGE_NAME_MAX_LENGTH,
    DEFAULT_MAX_ATTEMPTS_BEFORE_GUIDES,
    INITIAL_CODE_MAX_LENGTH,
    ChallengeDifficulty,
    ChallengeStatus,
)
from learnflow.services.base import RequestModel, WireModel


# =============================================================================
# チャレンジ
# =============================================================================


class ChallengeTagResponse(WireModel):
    id: UUID
    name: str = Field(min_length=1, max_length=100)
    color: str = Field(min_length=1, max_length=100)
    icon_url: str = Field(min_length=1)

    @field_validator("icon_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("iconUrl must be an absolute URL")
        return value


class ChallengeStarResponse(WireModel):
    user_id: UUID
    starred_at: str = Field(min_length=1, max_length=100)


class ChallengeResponse(WireModel):
    id: UUID
    teacher_id: UUID
    name: str = Field(min_length=1, max_length=CHALLENGE_NAME_MAX_LENGTH)
    description: str
    experience_points: int = Field(ge=0, le=CHALLENGE_MAX_EXPERIENCE_POINTS)
    difficulty: ChallengeDifficulty | None = None
    status: ChallengeStatus
    tags: list[ChallengeTagResponse] = Field(default_factory=list)
    stars: list[ChallengeStarResponse] = Field(default_factory=list)
    guides: list[str] = Field(default_factory=list)
    max_attempts_before_guides: int | None = Field(
        default=None, ge=0, le=CHALLENGE_MAX_ATTEMPTS_LIMIT
    )

    @field_validator("difficulty", mode="before")
    @classmethod
    def _blank_difficulty(cls, value: Any) -> Any:
        return value or None


class CreateChallengeRequest(RequestModel):
    name: str = Field(min_length=1, max_length=CHALLENGE_NAME_MAX_LENGTH)
    description: str
    experience_points: int = Field(ge=0, le=CHALLENGE_MAX_EXPERIENCE_POINTS)
    difficulty: ChallengeDifficulty | None = None
    tag_ids: list[str] = Field(default_factory=list)
    max_attempts_before_guides: int | None = Field(
        default=None, ge=0, le=CHALLENGE_MAX_ATTEMPTS_LIMIT
    )


class UpdateChallengeRequest(RequestModel):
    """PATCH /challenges/{id} のボディ（指定項目のみ更新）."""

    name: str | None = Field(default=None, min_length=1, max_length=CHALLENGE_NAME_MAX_LENGTH)
    description: str | None = None
    experience_points: int | None = Field(
        default=None, ge=0, le=CHALLENGE_MAX_EXPERIENCE_POINTS
    )
    difficulty: ChallengeDifficulty | None = None
    status: ChallengeStatus | None = None
    tags: list[str] | None = None
    max_attempts_before_guides: int | None = Field(
        default=None, ge=0, le=CHALLENGE_MAX_ATTEMPTS_LIMIT
    )


@dataclass
class ChallengeTag:
    id: str
    name: str
    color: str
    icon_url: str


@dataclass
class ChallengeStar:
    user_id: str
    starred_at: str


@dataclass
class Challenge:
    """チャレンジ.

    description はMarkdown。guides は関連ガイドID。
    """

    id: str
    teacher_id: str
    name: str
    description: str
    experience_points: int
    status: ChallengeStatus
    difficulty: ChallengeDifficulty | None = None
    tags: list[ChallengeTag] = field(default_factory=list)
    stars: list[ChallengeStar] = field(default_factory=list)
    guides: list[str] = field(default_factory=list)
    max_attempts_before_guides: int = DEFAULT_MAX_ATTEMPTS_BEFORE_GUIDES


# =============================================================================
# コードバージョン
# =============================================================================


class CodeVersionResponse(WireModel):
    id: UUID
    challenge_id: UUID
    language: str = Field(min_length=1, max_length=100)
    initial_code: str = Field(default="", max_length=INITIAL_CODE_MAX_LENGTH)
    function_name: str | None = Field(default=None, max_length=100)


class CodeVersionBatchResponse(WireModel):
    challenge_id: str
    code_versions: list[CodeVersionResponse] = Field(default_factory=list)


class CreateCodeVersionRequest(RequestModel):
    challenge_id: str
    language: str = Field(min_length=1)
    default_code: str = Field(default="", max_length=INITIAL_CODE_MAX_LENGTH)
    function_name: str | None = None


class UpdateCodeVersionRequest(RequestModel):
    code: str = Field(max_length=INITIAL_CODE_MAX_LENGTH)
    function_name: str | None = None


class CodeVersionBatchRequest(RequestModel):
    challenge_ids: list[str]


@dataclass
class CodeVersion:
    id: str
    challenge_id: str
    language: str
    initial_code: str = ""
    function_name: str | None = None


# =============================================================================
# バージョンテスト
# =============================================================================


class VersionTestResponse(WireModel):
    id: str
    code_version_id: str
    input: str = ""
    expected_output: str = ""
    custom_validation_code: str | None = None
    failure_message: str | None = None
    is_secret: bool = False


class VersionTestRequest(RequestModel):
    """テスト作成・更新ボディ."""

    code_version_id: str | None = None
    input: str = ""
    expected_output: str = ""
    custom_validation_code: str | None = None
    failure_message: str | None = None
    is_secret: bool = False


@dataclass
class VersionTest:
    id: str
    code_version_id: str
    input: str = ""
    expected_output: str = ""
    custom_validation_code: str | None = None
    failure_message: str | None = None
    is_secret: bool = False


# =============================================================================
# ソリューション
# =============================================================================


class SolutionResponse(WireModel):
    id: str
    challenge_id: str
    code_version_id: str
    student_id: str
    attempts: int = 0
    code: str = ""
    last_attempt_at: str | None = None
    status: str | None = None
    points_earned: int = 0
    max_points: int = 0
    success_percentage: float = 0.0


class SubmissionResponse(WireModel):
    """PUT /solutions/{id}/submissions のレスポンス."""

    model_config = ConfigDict(extra="allow")

    message: str = ""
    status: str | None = None
    passed_tests: int | None = None
    total_tests: int | None = None
    points_earned: int | None = None


class UpdateSolutionRequest(RequestModel):
    code: str


@dataclass
class Solution:
    id: str
    challenge_id: str
    code_version_id: str
    student_id: str
    attempts: int = 0
    code: str = ""
    last_attempt_at: str | None = None
    status: str | None = None
    points_earned: int = 0
    max_points: int = 0
    success_percentage: float = 0.0


@dataclass
class SubmissionResult:
    """ソリューション提出結果."""

    message: str = ""
    status: str | None = None
    passed_tests: int | None = None
    total_tests: int | None = None
    points_earned: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)
