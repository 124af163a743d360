"""Challengesサービスのアクション.

/challenges 配下のチャレンジ、コードバージョン、バージョンテスト、
ソリューションへのHTTP呼び出し。
"""

from __future__ import annotations

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.challenges.models import (
    CodeVersionBatchRequest,
    CreateChallengeRequest,
    CreateCodeVersionRequest,
    UpdateChallengeRequest,
    UpdateCodeVersionRequest,
    UpdateSolutionRequest,
    VersionTestRequest,
)


class ChallengeActions(BaseActions):
    """/challenges へのHTTP呼び出し."""

    async def get_public_challenges(self) -> RequestResult:
        return await self._client.get("/challenges")

    async def get_challenge_by_id(self, challenge_id: str) -> RequestResult:
        return await self._client.get(f"/challenges/{challenge_id}")

    async def get_challenges_by_teacher_id(self, teacher_id: str) -> RequestResult:
        return await self._client.get(f"/challenges/teachers/{teacher_id}")

    async def create_challenge(self, request: CreateChallengeRequest) -> RequestResult:
        return await self._client.post("/challenges", request.to_payload())

    async def update_challenge(
        self, challenge_id: str, request: UpdateChallengeRequest
    ) -> RequestResult:
        return await self._client.patch(f"/challenges/{challenge_id}", request.to_payload())

    async def delete_challenge(self, challenge_id: str) -> RequestResult:
        return await self._client.delete(f"/challenges/{challenge_id}")

    async def add_guide(self, challenge_id: str, guide_id: str) -> RequestResult:
        return await self._client.post(f"/challenges/{challenge_id}/guides/{guide_id}")

    async def remove_guide(self, challenge_id: str, guide_id: str) -> RequestResult:
        return await self._client.delete(f"/challenges/{challenge_id}/guides/{guide_id}")


class CodeVersionActions(BaseActions):
    """/challenges/{id}/code-versions へのHTTP呼び出し."""

    @staticmethod
    def _base(challenge_id: str) -> str:
        return f"/challenges/{challenge_id}/code-versions"

    async def get_all(self, challenge_id: str) -> RequestResult:
        return await self._client.get(self._base(challenge_id))

    async def get(self, challenge_id: str, version_id: str) -> RequestResult:
        return await self._client.get(f"{self._base(challenge_id)}/{version_id}")

    async def create(self, request: CreateCodeVersionRequest) -> RequestResult:
        return await self._client.post(self._base(request.challenge_id), request.to_payload())

    async def update(
        self, challenge_id: str, version_id: str, request: UpdateCodeVersionRequest
    ) -> RequestResult:
        return await self._client.put(
            f"{self._base(challenge_id)}/{version_id}", request.to_payload()
        )

    async def delete(self, challenge_id: str, version_id: str) -> RequestResult:
        return await self._client.delete(f"{self._base(challenge_id)}/{version_id}")

    async def batch(self, request: CodeVersionBatchRequest) -> RequestResult:
        return await self._client.post("/challenges/code-versions/batch", request.to_payload())


class VersionTestActions(BaseActions):
    """コードバージョンのテストケースへのHTTP呼び出し."""

    @staticmethod
    def _base(challenge_id: str, version_id: str) -> str:
        return f"/challenges/{challenge_id}/code-versions/{version_id}/tests"

    async def get_all(self, challenge_id: str, version_id: str) -> RequestResult:
        return await self._client.get(self._base(challenge_id, version_id))

    async def get(self, challenge_id: str, version_id: str, test_id: str) -> RequestResult:
        return await self._client.get(f"{self._base(challenge_id, version_id)}/{test_id}")

    async def create(
        self, challenge_id: str, version_id: str, request: VersionTestRequest
    ) -> RequestResult:
        return await self._client.post(
            self._base(challenge_id, version_id), request.to_payload()
        )

    async def update(
        self,
        challenge_id: str,
        version_id: str,
        test_id: str,
        request: VersionTestRequest,
    ) -> RequestResult:
        return await self._client.put(
            f"{self._base(challenge_id, version_id)}/{test_id}", request.to_payload()
        )

    async def delete(self, challenge_id: str, version_id: str, test_id: str) -> RequestResult:
        return await self._client.delete(f"{self._base(challenge_id, version_id)}/{test_id}")


class SolutionActions(BaseActions):
    """ソリューションへのHTTP呼び出し."""

    async def create(self, challenge_id: str, version_id: str) -> RequestResult:
        return await self._client.post(
            f"/challenges/{challenge_id}/code-versions/{version_id}/solutions"
        )

    async def get_for_version(self, challenge_id: str, version_id: str) -> RequestResult:
        return await self._client.get(
            f"/challenges/{challenge_id}/code-versions/{version_id}/solutions"
        )

    async def get(self, solution_id: str) -> RequestResult:
        return await self._client.get(f"/solutions/{solution_id}")

    async def update(self, solution_id: str, request: UpdateSolutionRequest) -> RequestResult:
        return await self._client.put(f"/solutions/{solution_id}", request.to_payload())

    async def submit(self, solution_id: str) -> RequestResult:
        return await self._client.put(f"/solutions/{solution_id}/submissions")
