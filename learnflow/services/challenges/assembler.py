"""チャレンジドメインのアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.core.constants import DEFAULT_MAX_ATTEMPTS_BEFORE_GUIDES
from learnflow.services.base import validate_wire, validate_wire_list
from learnflow.services.challenges.models import (
    Challenge,
    ChallengeResponse,
    ChallengeStar,
    ChallengeTag,
    CodeVersion,
    CodeVersionBatchResponse,
    CodeVersionResponse,
    Solution,
    SolutionResponse,
    SubmissionResponse,
    SubmissionResult,
    VersionTest,
    VersionTestResponse,
)


def _challenge(response: ChallengeResponse) -> Challenge:
    max_attempts = response.max_attempts_before_guides
    if max_attempts is None:
        max_attempts = DEFAULT_MAX_ATTEMPTS_BEFORE_GUIDES
    return Challenge(
        id=str(response.id),
        teacher_id=str(response.teacher_id),
        name=response.name,
        description=response.description,
        experience_points=response.experience_points,
        status=response.status,
        difficulty=response.difficulty,
        tags=[
            ChallengeTag(id=str(t.id), name=t.name, color=t.color, icon_url=t.icon_url)
            for t in response.tags
        ],
        stars=[
            ChallengeStar(user_id=str(s.user_id), starred_at=s.starred_at) for s in response.stars
        ],
        guides=list(response.guides),
        max_attempts_before_guides=max_attempts,
    )


def to_challenge(payload: Any) -> Challenge:
    """ペイロードをChallengeに変換.

    maxAttemptsBeforeGuides が欠落または null の場合は3を補う。
    """
    return _challenge(validate_wire(ChallengeResponse, payload, "challenge"))


def to_challenges(payload: Any) -> list[Challenge]:
    return [_challenge(r) for r in validate_wire_list(ChallengeResponse, payload, "challenge")]


def _code_version(response: CodeVersionResponse) -> CodeVersion:
    return CodeVersion(
        id=str(response.id),
        challenge_id=str(response.challenge_id),
        language=response.language,
        initial_code=response.initial_code,
        function_name=response.function_name,
    )


def to_code_version(payload: Any) -> CodeVersion:
    return _code_version(validate_wire(CodeVersionResponse, payload, "code version"))


def to_code_versions(payload: Any) -> list[CodeVersion]:
    return [
        _code_version(r)
        for r in validate_wire_list(CodeVersionResponse, payload, "code version")
    ]


def to_code_version_batch(payload: Any) -> dict[str, list[CodeVersion]]:
    """一括取得結果をチャレンジID別の辞書に変換."""
    batch = validate_wire_list(CodeVersionBatchResponse, payload, "code version batch")
    return {
        item.challenge_id: [_code_version(cv) for cv in item.code_versions]
        for item in batch
    }


def _version_test(response: VersionTestResponse) -> VersionTest:
    return VersionTest(
        id=response.id,
        code_version_id=response.code_version_id,
        input=response.input,
        expected_output=response.expected_output,
        custom_validation_code=response.custom_validation_code,
        failure_message=response.failure_message,
        is_secret=response.is_secret,
    )


def to_version_test(payload: Any) -> VersionTest:
    return _version_test(validate_wire(VersionTestResponse, payload, "version test"))


def to_version_tests(payload: Any) -> list[VersionTest]:
    return [
        _version_test(r)
        for r in validate_wire_list(VersionTestResponse, payload, "version test")
    ]


def to_solution(payload: Any) -> Solution:
    response = validate_wire(SolutionResponse, payload, "solution")
    return Solution(
        id=response.id,
        challenge_id=response.challenge_id,
        code_version_id=response.code_version_id,
        student_id=response.student_id,
        attempts=response.attempts,
        code=response.code,
        last_attempt_at=response.last_attempt_at,
        status=response.status,
        points_earned=response.points_earned,
        max_points=response.max_points,
        success_percentage=response.success_percentage,
    )


def to_submission_result(payload: Any) -> SubmissionResult:
    """提出結果を変換. 文字列のみのレスポンスはメッセージとして扱う."""
    if isinstance(payload, str):
        return SubmissionResult(message=payload)
    response = validate_wire(SubmissionResponse, payload or {}, "submission")
    return SubmissionResult(
        message=response.message,
        status=response.status,
        passed_tests=response.passed_tests,
        total_tests=response.total_tests,
        points_earned=response.points_earned,
        raw=dict(payload or {}),
    )
