"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import jwt
import pytest

from learnflow.config.settings import LearnFlowSettings
from learnflow.http.client import ServiceRegistry
from learnflow.services import LearnFlowServices


Handler = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any, status_code: int = 200) -> dict[str, Any]:
    """Learningサービスのエンベロープで包む."""
    return {"data": data, "statusCode": status_code, "success": 200 <= status_code < 300}


def make_token(user_id: str = "user-1", roles: list[str] | None = None) -> str:
    """テスト用のJWTを作成."""
    claims: dict[str, Any] = {"userId": user_id, "roles": roles or ["ROLE_TEACHER"]}
    return jwt.encode(claims, "learnflow-test-secret-0123456789abcdef", algorithm="HS256")


class FakeBackend:
    """httpx.MockTransport で使うマイクロサービスのスタブ.

    ルートは (サービス, メソッド, パス) で登録し、受け取ったリクエストを記録する。
    未登録のルートは404を返す。
    """

    def __init__(self, settings: LearnFlowSettings) -> None:
        self._bases = {
            "iam": httpx.URL(settings.iam_base_url),
            "learning": httpx.URL(settings.learning_base_url),
            "challenges": httpx.URL(settings.challenges_base_url),
            "community": httpx.URL(settings.community_base_url),
            "profiles": httpx.URL(settings.profile_base_url),
        }
        self._routes: dict[tuple[str, str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def _key(self, service: str, method: str, path: str) -> tuple[str, str, str]:
        base = self._bases[service]
        return (method.upper(), base.host, base.path.rstrip("/") + path)

    def on(
        self,
        service: str,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        handler: Handler | None = None,
    ) -> None:
        """ルートを登録.

        Args:
            service: iam / learning / challenges / community / profiles
            method: HTTPメソッド
            path: ベースURLからのパス
            json_body: レスポンスボディ
            status: ステータス
            handler: リクエストを受け取りレスポンスを返す関数（指定時は優先）
        """

        def respond(_request: httpx.Request) -> httpx.Response:
            if json_body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=json_body)

        self._routes[self._key(service, method, path)] = handler or respond

    def on_learning(self, method: str, path: str, data: Any = None, status: int = 200) -> None:
        """Learningサービスのルートを登録（成功はエンベロープで包む）."""
        if 200 <= status < 300:
            self.on("learning", method, path, envelope(data, status), status)
        else:
            self.on("learning", method, path, {"message": data or "error"}, status)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.host, request.url.path)
        handler = self._routes.get(key)
        if handler is None:
            return httpx.Response(404, json={"message": f"No route: {request.url.path}"})
        return handler(request)

    def calls(self, method: str, path_suffix: str) -> list[httpx.Request]:
        """メソッドとパス末尾が一致したリクエスト."""
        return [
            r
            for r in self.requests
            if r.method == method.upper() and r.url.path.endswith(path_suffix)
        ]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def settings() -> LearnFlowSettings:
    """テスト用設定（各サービスを別ホストに向ける）."""
    return LearnFlowSettings(
        _env_file=None,
        iam_base_url="http://iam.test/api/v1",
        api_gateway_base_url="http://gateway.test/api/v1",
        learning_base_url="http://learning.test/api/v1",
        challenges_base_url="http://challenges.test/api/v1",
        community_base_url="http://community.test/api/v1",
        profile_base_url="http://profiles.test/api/v1",
        route_through_gateway=False,
        cache_ttl_seconds=60.0,
    )


@pytest.fixture
def backend(settings: LearnFlowSettings) -> FakeBackend:
    return FakeBackend(settings)


@pytest.fixture
async def registry(
    settings: LearnFlowSettings, backend: FakeBackend
) -> AsyncIterator[ServiceRegistry]:
    registry = ServiceRegistry(settings, transport=httpx.MockTransport(backend.handle))
    yield registry
    await registry.aclose()


@pytest.fixture
def services(registry: ServiceRegistry) -> LearnFlowServices:
    return LearnFlowServices(registry)


@pytest.fixture
def signed_in(registry: ServiceRegistry) -> str:
    """user-1 でサインイン済みにする.

    Returns:
        アクセストークン
    """
    token = make_token()
    registry.tokens.save(token, "refresh-1")
    return token


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token
