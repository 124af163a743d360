"""IAMサービスのアクション（/authentication）."""

from __future__ import annotations

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.iam.models import CredentialsRequest


class AuthActions(BaseActions):
    """/authentication へのHTTP呼び出し."""

    async def sign_in(self, request: CredentialsRequest) -> RequestResult:
        return await self._client.post("/authentication/sign-in", request.to_payload())

    async def sign_up(self, request: CredentialsRequest) -> RequestResult:
        return await self._client.post("/authentication/sign-up", request.to_payload())

    async def validate_token(self) -> RequestResult:
        return await self._client.get("/authentication/validate")

    async def refresh_token(self, refresh_token: str) -> RequestResult:
        return await self._client.post(
            "/authentication/refresh", {"refreshToken": refresh_token}
        )
