"""Challengesサービスのコントローラー.

チャレンジ本体、コードバージョン、バージョンテスト、ソリューションを
それぞれ別のコントローラーで扱う。いずれも2xx以外で型付き例外を送出する。
"""

from __future__ import annotations

import logging

from learnflow.core.exceptions import (
    ChallengeError,
    CodeVersionError,
    SolutionError,
    VersionTestError,
)
from learnflow.services.base import BaseController
from learnflow.services.challenges.actions import (
    ChallengeActions,
    CodeVersionActions,
    SolutionActions,
    VersionTestActions,
)
from learnflow.services.challenges.assembler import (
    to_challenge,
    to_challenges,
    to_code_version,
    to_code_version_batch,
    to_code_versions,
    to_solution,
    to_submission_result,
    to_version_test,
    to_version_tests,
)
from learnflow.services.challenges.models import (
    Challenge,
    CodeVersion,
    CodeVersionBatchRequest,
    CreateChallengeRequest,
    CreateCodeVersionRequest,
    Solution,
    SubmissionResult,
    UpdateChallengeRequest,
    UpdateCodeVersionRequest,
    UpdateSolutionRequest,
    VersionTest,
    VersionTestRequest,
)


logger = logging.getLogger(__name__)


class ChallengeController(BaseController):
    """チャレンジ操作.

    Raises:
        ChallengeError: サービスが2xx以外を返した場合
    """

    error_class = ChallengeError

    def __init__(self, actions: ChallengeActions) -> None:
        """初期化.

        Args:
            actions: チャレンジアクション
        """
        self._actions = actions

    async def get_public_challenges(self) -> list[Challenge]:
        result = await self._actions.get_public_challenges()
        return to_challenges(self._unwrap(result, "get_public_challenges"))

    async def get_challenge_by_id(self, challenge_id: str) -> Challenge:
        result = await self._actions.get_challenge_by_id(challenge_id)
        return to_challenge(self._unwrap(result, "get_challenge_by_id"))

    async def get_challenges_by_teacher_id(self, teacher_id: str) -> list[Challenge]:
        result = await self._actions.get_challenges_by_teacher_id(teacher_id)
        return to_challenges(self._unwrap(result, "get_challenges_by_teacher_id"))

    async def create_challenge(self, request: CreateChallengeRequest) -> Challenge:
        result = await self._actions.create_challenge(request)
        challenge = to_challenge(self._unwrap(result, "create_challenge"))
        logger.info("チャレンジ作成: %s", challenge.id)
        return challenge

    async def update_challenge(
        self, challenge_id: str, request: UpdateChallengeRequest
    ) -> Challenge:
        """指定項目のみ更新(PATCH)."""
        result = await self._actions.update_challenge(challenge_id, request)
        return to_challenge(self._unwrap(result, "update_challenge"))

    async def delete_challenge(self, challenge_id: str) -> None:
        result = await self._actions.delete_challenge(challenge_id)
        self._unwrap(result, "delete_challenge")

    async def add_guide_to_challenge(self, challenge_id: str, guide_id: str) -> None:
        result = await self._actions.add_guide(challenge_id, guide_id)
        self._unwrap(result, "add_guide_to_challenge")

    async def remove_guide_from_challenge(self, challenge_id: str, guide_id: str) -> None:
        result = await self._actions.remove_guide(challenge_id, guide_id)
        self._unwrap(result, "remove_guide_from_challenge")


class CodeVersionController(BaseController):
    """コードバージョン操作."""

    error_class = CodeVersionError

    def __init__(self, actions: CodeVersionActions) -> None:
        self._actions = actions

    async def get_code_versions(self, challenge_id: str) -> list[CodeVersion]:
        result = await self._actions.get_all(challenge_id)
        return to_code_versions(self._unwrap(result, "get_code_versions"))

    async def get_code_version(self, challenge_id: str, version_id: str) -> CodeVersion:
        result = await self._actions.get(challenge_id, version_id)
        return to_code_version(self._unwrap(result, "get_code_version"))

    async def get_code_versions_batch(
        self, challenge_ids: list[str]
    ) -> dict[str, list[CodeVersion]]:
        """複数チャレンジのコードバージョンを一括取得.

        Args:
            challenge_ids: チャレンジID

        Returns:
            チャレンジID → コードバージョンリスト
        """
        if not challenge_ids:
            return {}
        result = await self._actions.batch(CodeVersionBatchRequest(challenge_ids=challenge_ids))
        return to_code_version_batch(self._unwrap(result, "get_code_versions_batch"))

    async def create_code_version(
        self,
        challenge_id: str,
        language: str,
        default_code: str = "",
        function_name: str | None = None,
    ) -> CodeVersion:
        request = CreateCodeVersionRequest(
            challenge_id=challenge_id,
            language=language,
            default_code=default_code,
            function_name=function_name,
        )
        result = await self._actions.create(request)
        return to_code_version(self._unwrap(result, "create_code_version"))

    async def update_code_version(
        self,
        challenge_id: str,
        version_id: str,
        code: str,
        function_name: str | None = None,
    ) -> CodeVersion:
        result = await self._actions.update(
            challenge_id,
            version_id,
            UpdateCodeVersionRequest(code=code, function_name=function_name),
        )
        return to_code_version(self._unwrap(result, "update_code_version"))

    async def delete_code_version(self, challenge_id: str, version_id: str) -> None:
        result = await self._actions.delete(challenge_id, version_id)
        self._unwrap(result, "delete_code_version")


class VersionTestController(BaseController):
    """バージョンテスト操作."""

    error_class = VersionTestError

    def __init__(self, actions: VersionTestActions) -> None:
        self._actions = actions

    async def get_version_tests(self, challenge_id: str, version_id: str) -> list[VersionTest]:
        result = await self._actions.get_all(challenge_id, version_id)
        return to_version_tests(self._unwrap(result, "get_version_tests"))

    async def get_version_test(
        self, challenge_id: str, version_id: str, test_id: str
    ) -> VersionTest:
        result = await self._actions.get(challenge_id, version_id, test_id)
        return to_version_test(self._unwrap(result, "get_version_test"))

    async def create_version_test(
        self, challenge_id: str, version_id: str, request: VersionTestRequest
    ) -> VersionTest:
        if request.code_version_id is None:
            request = request.model_copy(update={"code_version_id": version_id})
        result = await self._actions.create(challenge_id, version_id, request)
        return to_version_test(self._unwrap(result, "create_version_test"))

    async def update_version_test(
        self,
        challenge_id: str,
        version_id: str,
        test_id: str,
        request: VersionTestRequest,
    ) -> VersionTest:
        result = await self._actions.update(challenge_id, version_id, test_id, request)
        return to_version_test(self._unwrap(result, "update_version_test"))

    async def delete_version_test(
        self, challenge_id: str, version_id: str, test_id: str
    ) -> None:
        result = await self._actions.delete(challenge_id, version_id, test_id)
        self._unwrap(result, "delete_version_test")


class SolutionController(BaseController):
    """ソリューション操作.

    学生は (チャレンジ, コードバージョン) ごとに1つのソリューションを持つ。
    """

    error_class = SolutionError

    def __init__(self, actions: SolutionActions) -> None:
        self._actions = actions

    async def create_solution(self, challenge_id: str, version_id: str) -> Solution:
        result = await self._actions.create(challenge_id, version_id)
        return to_solution(self._unwrap(result, "create_solution"))

    async def get_solution(self, solution_id: str) -> Solution:
        result = await self._actions.get(solution_id)
        return to_solution(self._unwrap(result, "get_solution"))

    async def get_solution_for_version(self, challenge_id: str, version_id: str) -> Solution:
        result = await self._actions.get_for_version(challenge_id, version_id)
        return to_solution(self._unwrap(result, "get_solution_for_version"))

    async def update_solution(self, solution_id: str, code: str) -> Solution:
        result = await self._actions.update(solution_id, UpdateSolutionRequest(code=code))
        return to_solution(self._unwrap(result, "update_solution"))

    async def submit_solution(self, solution_id: str) -> SubmissionResult:
        """ソリューションを提出してテストを実行.

        Returns:
            提出結果（合格テスト数など）
        """
        result = await self._actions.submit(solution_id)
        submission = to_submission_result(self._unwrap(result, "submit_solution"))
        logger.info("ソリューション提出: %s (%s)", solution_id, submission.status)
        return submission
