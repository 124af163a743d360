"""チャレンジドメイン 単体テスト."""

from __future__ import annotations

from typing import Any

import pytest

from learnflow.core.constants import ChallengeDifficulty, ChallengeStatus
from learnflow.core.exceptions import (
    AssemblerValidationError,
    ChallengeError,
    SolutionError,
)
from learnflow.services import LearnFlowServices
from learnflow.services.challenges.assembler import (
    to_challenge,
    to_code_version_batch,
    to_submission_result,
)
from learnflow.services.challenges.models import (
    CreateChallengeRequest,
    UpdateChallengeRequest,
    VersionTestRequest,
)


CHALLENGE_ID = "5b0f4a4e-9c1d-4f0e-8a55-0c1f5e6a7b01"
TEACHER_ID = "0a3e2c9d-1b7f-4d44-9e0b-6f2a8c1d3e02"
VERSION_ID = "9d8c7b6a-5f4e-4d3c-8b2a-1f0e9d8c7b03"
TAG_ID = "1c2d3e4f-5a6b-4c7d-8e9f-0a1b2c3d4e04"


def _challenge(**overrides: Any) -> dict[str, Any]:
    return {
        "id": CHALLENGE_ID,
        "teacherId": TEACHER_ID,
        "name": "FizzBuzz",
        "description": "# FizzBuzz",
        "experiencePoints": 10,
        "difficulty": "MEDIUM",
        "status": "PUBLISHED",
        "tags": [
            {
                "id": TAG_ID,
                "name": "loops",
                "color": "#ff0000",
                "iconUrl": "https://cdn.example.com/loop.svg",
            }
        ],
        "guides": ["g1"],
        **overrides,
    }


def _code_version(**overrides: Any) -> dict[str, Any]:
    return {
        "id": VERSION_ID,
        "challengeId": CHALLENGE_ID,
        "language": "PYTHON",
        "initialCode": "def fizzbuzz(n):\n    pass\n",
        "functionName": "fizzbuzz",
        **overrides,
    }


class TestChallengeAssembler:
    """チャレンジアセンブラー テスト."""

    def test_default_max_attempts(self) -> None:
        """maxAttemptsBeforeGuides の欠落・nullは3."""
        for value, expected in ((None, 3), (5, 5)):
            challenge = to_challenge(_challenge(maxAttemptsBeforeGuides=value))
            assert challenge.max_attempts_before_guides == expected
        assert to_challenge(_challenge()).max_attempts_before_guides == 3

    def test_blank_difficulty(self) -> None:
        """空文字の難易度は未設定."""
        assert to_challenge(_challenge(difficulty="")).difficulty is None

    def test_ids_are_strings(self) -> None:
        """UUIDは文字列のIDに変換."""
        challenge = to_challenge(_challenge())

        assert challenge.id == CHALLENGE_ID
        assert challenge.tags[0].id == TAG_ID
        assert challenge.difficulty == ChallengeDifficulty.MEDIUM

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": "not-a-uuid"},
            {"experiencePoints": 10001},
            {"name": ""},
            {"maxAttemptsBeforeGuides": 101},
        ],
    )
    def test_invalid_payload(self, overrides: dict[str, Any]) -> None:
        """範囲外や形式不正は AssemblerValidationError."""
        with pytest.raises(AssemblerValidationError):
            to_challenge(_challenge(**overrides))

    def test_tag_icon_must_be_url(self) -> None:
        """タグのアイコンは絶対URL."""
        tag = {"id": TAG_ID, "name": "x", "color": "red", "iconUrl": "loop.svg"}

        with pytest.raises(AssemblerValidationError):
            to_challenge(_challenge(tags=[tag]))

    def test_code_version_batch(self) -> None:
        """一括取得結果はチャレンジID別の辞書."""
        batch = to_code_version_batch(
            [{"challengeId": CHALLENGE_ID, "codeVersions": [_code_version()]}]
        )

        assert list(batch) == [CHALLENGE_ID]
        assert batch[CHALLENGE_ID][0].function_name == "fizzbuzz"

    def test_submission_result_message(self) -> None:
        """文字列のみの提出結果はメッセージ."""
        assert to_submission_result("Queued").message == "Queued"

        result = to_submission_result({"message": "ok", "passedTests": 3, "totalTests": 4})
        assert result.passed_tests == 3
        assert result.raw["totalTests"] == 4


class TestChallengeController:
    """ChallengeController テスト."""

    @pytest.mark.asyncio
    async def test_create_challenge(self, services: LearnFlowServices, backend) -> None:
        """チャレンジ作成."""
        backend.on("challenges", "POST", "/challenges", _challenge(status="DRAFT"), 201)

        challenge = await services.challenges.create_challenge(
            CreateChallengeRequest(
                name="FizzBuzz",
                description="# FizzBuzz",
                experience_points=10,
                difficulty=ChallengeDifficulty.MEDIUM,
                tag_ids=[TAG_ID],
            )
        )

        assert challenge.status == ChallengeStatus.DRAFT
        body = backend.body(backend.calls("POST", "/challenges")[0])
        assert body["experiencePoints"] == 10
        assert body["tagIds"] == [TAG_ID]
        assert "maxAttemptsBeforeGuides" not in body

    @pytest.mark.asyncio
    async def test_update_challenge_sends_only_given_fields(
        self, services: LearnFlowServices, backend
    ) -> None:
        """更新は指定した項目だけを PATCH で送る."""
        backend.on("challenges", "PATCH", f"/challenges/{CHALLENGE_ID}", _challenge())

        await services.challenges.update_challenge(
            CHALLENGE_ID, UpdateChallengeRequest(status=ChallengeStatus.PUBLISHED)
        )

        assert backend.body(backend.calls("PATCH", CHALLENGE_ID)[0]) == {"status": "PUBLISHED"}

    @pytest.mark.asyncio
    async def test_teacher_challenges(self, services: LearnFlowServices, backend) -> None:
        """教師のチャレンジ一覧."""
        backend.on("challenges", "GET", f"/challenges/teachers/{TEACHER_ID}", [_challenge()])

        challenges = await services.challenges.get_challenges_by_teacher_id(TEACHER_ID)

        assert [c.teacher_id for c in challenges] == [TEACHER_ID]

    @pytest.mark.asyncio
    async def test_guides(self, services: LearnFlowServices, backend) -> None:
        """関連ガイドの追加・削除."""
        path = f"/challenges/{CHALLENGE_ID}/guides/g1"
        backend.on("challenges", "POST", path, status=204)
        backend.on("challenges", "DELETE", path, status=204)

        await services.challenges.add_guide_to_challenge(CHALLENGE_ID, "g1")
        await services.challenges.remove_guide_from_challenge(CHALLENGE_ID, "g1")

        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_not_found(self, services: LearnFlowServices, backend) -> None:
        """2xx以外は ChallengeError."""
        with pytest.raises(ChallengeError) as exc_info:
            await services.challenges.get_challenge_by_id(CHALLENGE_ID)

        assert exc_info.value.status_code == 404


class TestCodeVersionController:
    """CodeVersionController テスト."""

    @pytest.mark.asyncio
    async def test_create_code_version(self, services: LearnFlowServices, backend) -> None:
        """コードバージョン作成."""
        backend.on(
            "challenges", "POST", f"/challenges/{CHALLENGE_ID}/code-versions", _code_version(), 201
        )

        version = await services.code_versions.create_code_version(
            CHALLENGE_ID, "PYTHON", "def fizzbuzz(n):\n    pass\n", "fizzbuzz"
        )

        assert version.id == VERSION_ID
        body = backend.body(backend.requests[0])
        assert body["challengeId"] == CHALLENGE_ID
        assert body["defaultCode"].startswith("def fizzbuzz")

    @pytest.mark.asyncio
    async def test_batch_empty(self, services: LearnFlowServices, backend) -> None:
        """IDが空なら呼び出さない."""
        assert await services.code_versions.get_code_versions_batch([]) == {}
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_batch(self, services: LearnFlowServices, backend) -> None:
        """一括取得."""
        backend.on(
            "challenges",
            "POST",
            "/challenges/code-versions/batch",
            [{"challengeId": CHALLENGE_ID, "codeVersions": [_code_version()]}],
        )

        batch = await services.code_versions.get_code_versions_batch([CHALLENGE_ID])

        assert batch[CHALLENGE_ID][0].language == "PYTHON"
        assert backend.body(backend.requests[0]) == {"challengeIds": [CHALLENGE_ID]}


class TestVersionTestController:
    """VersionTestController テスト."""

    @pytest.mark.asyncio
    async def test_create_fills_version_id(self, services: LearnFlowServices, backend) -> None:
        """コードバージョンIDを補って作成."""
        path = f"/challenges/{CHALLENGE_ID}/code-versions/{VERSION_ID}/tests"
        backend.on(
            "challenges",
            "POST",
            path,
            {"id": "test-1", "codeVersionId": VERSION_ID, "input": "3", "expectedOutput": "Fizz"},
            201,
        )

        test = await services.version_tests.create_version_test(
            CHALLENGE_ID, VERSION_ID, VersionTestRequest(input="3", expected_output="Fizz")
        )

        assert test.expected_output == "Fizz"
        assert backend.body(backend.requests[0])["codeVersionId"] == VERSION_ID


class TestSolutionController:
    """SolutionController テスト."""

    @staticmethod
    def _solution(**overrides: Any) -> dict[str, Any]:
        return {
            "id": "sol-1",
            "challengeId": CHALLENGE_ID,
            "codeVersionId": VERSION_ID,
            "studentId": "user-1",
            "code": "print(1)",
            **overrides,
        }

    @pytest.mark.asyncio
    async def test_update_and_submit(self, services: LearnFlowServices, backend) -> None:
        """コード保存と提出."""
        backend.on("challenges", "PUT", "/solutions/sol-1", self._solution(code="print(2)"))
        backend.on(
            "challenges",
            "PUT",
            "/solutions/sol-1/submissions",
            {"message": "3/4 tests passed", "passedTests": 3, "totalTests": 4},
        )

        solution = await services.solutions.update_solution("sol-1", "print(2)")
        result = await services.solutions.submit_solution("sol-1")

        assert solution.code == "print(2)"
        assert backend.body(backend.calls("PUT", "/solutions/sol-1")[0]) == {"code": "print(2)"}
        assert result.passed_tests == 3

    @pytest.mark.asyncio
    async def test_submit_failure(self, services: LearnFlowServices, backend) -> None:
        """提出失敗は SolutionError."""
        backend.on(
            "challenges",
            "PUT",
            "/solutions/sol-1/submissions",
            {"message": "Compilation failed"},
            422,
        )

        with pytest.raises(SolutionError) as exc_info:
            await services.solutions.submit_solution("sol-1")

        assert exc_info.value.message == "Compilation failed"
