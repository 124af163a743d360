# -*- coding: utf-8 -*-
"""マイクロサービス HTTP クライアント.

各サービス（IAM / Learning / Challenges / Community / Profile）への呼び出しを
httpx.AsyncClient で行い、結果を RequestSuccess / RequestFailure に変換する。

設計原則:
- 例外を投げない: 通信失敗は503、不正なエンベロープは502、
  HTTPエラーはそのステータスの RequestFailure
- 認証ヘッダー: リクエスト毎にセッションストアからトークンを付与
- エンベロープ: Learningサービスの {data, statusCode, success} を展開

使用例:
    >>> registry = ServiceRegistry()
    >>> result = await registry.challenges.get("/challenges")
    >>> if is_success(result):
    ...     print(result.data)
    >>> await registry.aclose()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from learnflow.config import get_settings
from learnflow.core.exceptions import ConfigurationError
from learnflow.http.results import (
    LearningEnvelope,
    RequestFailure,
    RequestResult,
    RequestSuccess,
)
from learnflow.http.session import SessionTokenStore


if TYPE_CHECKING:
    from learnflow.config.settings import LearnFlowSettings


logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE = 503
BAD_GATEWAY = 502


def _extract_error_message(response: httpx.Response) -> str:
    """エラーレスポンスからメッセージを取り出す."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "data"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, str) and body:
        return body

    return response.text or response.reason_phrase or "Unknown error"


class ServiceClient:
    """単一サービス向けクライアント.

    httpx.AsyncClient を遅延生成し、全呼び出しで同じ接続プールを使う。
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        tokens: SessionTokenStore,
        *,
        timeout: float = 10.0,
        unwrap_envelope: bool = False,
        send_refresh_token: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初期化.

        Args:
            name: サービス名（ログ用）
            base_url: ベースURL
            tokens: セッショントークンストア
            timeout: タイムアウト（秒）
            unwrap_envelope: Learningエンベロープを展開するか
            send_refresh_token: リフレッシュトークンヘッダーを送るか
            transport: テスト用トランスポート
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        self._tokens = tokens
        self._timeout = timeout
        self._unwrap_envelope = unwrap_envelope
        self._send_refresh_token = send_refresh_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestResult:
        """リクエストを送信.

        Args:
            method: HTTPメソッド
            path: ベースURLからの相対パス
            json: リクエストボディ
            params: クエリパラメータ

        Returns:
            RequestSuccess または RequestFailure
        """
        headers = self._tokens.get().auth_headers(self._send_refresh_token)
        try:
            response = await self._get_client().request(
                method,
                path,
                json=json,
                params=params,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s:%s 通信失敗: %s", method, self.name, path, e)
            return RequestFailure(str(e) or "Service unavailable", SERVICE_UNAVAILABLE)

        if response.is_error:
            message = _extract_error_message(response)
            logger.warning(
                "%s %s:%s 失敗 (%s): %s",
                method,
                self.name,
                path,
                response.status_code,
                message,
            )
            return RequestFailure(message, response.status_code)

        data = self._parse_body(response)
        if self._unwrap_envelope and isinstance(data, dict) and "statusCode" in data:
            try:
                envelope = LearningEnvelope.model_validate(data)
            except ValidationError as e:
                logger.warning("%s %s:%s 不正なエンベロープ: %s", method, self.name, path, e)
                return RequestFailure("Invalid response envelope", BAD_GATEWAY)
            if not envelope.success or not 200 <= envelope.status_code < 300:
                message = data.get("message") or str(envelope.data or "Unknown error")
                return RequestFailure(message, envelope.status_code)
            data = envelope.data

        return RequestSuccess(data=data, status=response.status_code)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, params: dict[str, Any] | None = None) -> RequestResult:
        """GETリクエスト."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> RequestResult:
        """POSTリクエスト."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> RequestResult:
        """PUTリクエスト."""
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> RequestResult:
        """PATCHリクエスト."""
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> RequestResult:
        """DELETEリクエスト."""
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        """接続をクローズ."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class ServiceRegistry:
    """サービスクライアントのレジストリ.

    設定から各サービスのクライアントを生成し、トークンストアを共有する。
    route_through_gateway が有効な場合、IAM以外のサービスは
    APIゲートウェイ経由で呼び出す。
    """

    def __init__(
        self,
        settings: LearnFlowSettings | None = None,
        tokens: SessionTokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初期化.

        Args:
            settings: 設定（省略時は get_settings()）
            tokens: セッショントークンストア
            transport: テスト用トランスポート（全クライアント共通）
        """
        self.settings = settings or get_settings()
        self.tokens = tokens or SessionTokenStore()
        self._transport = transport

        def _url(own: str) -> str:
            if self.settings.route_through_gateway:
                return self.settings.api_gateway_base_url
            return own

        self.iam = self._make("iam", self.settings.iam_base_url, send_refresh_token=False)
        self.learning = self._make(
            "learning", _url(self.settings.learning_base_url), unwrap_envelope=True
        )
        self.challenges = self._make("challenges", _url(self.settings.challenges_base_url))
        self.community = self._make("community", _url(self.settings.community_base_url))
        self.profiles = self._make("profiles", _url(self.settings.profile_base_url))

    def _make(self, name: str, base_url: str, **kwargs: Any) -> ServiceClient:
        if not base_url:
            raise ConfigurationError(f"{name} のベースURLが未設定です")
        return ServiceClient(
            name,
            base_url,
            self.tokens,
            timeout=self.settings.http_timeout,
            transport=self._transport,
            **kwargs,
        )

    async def aclose(self) -> None:
        """全クライアントをクローズ."""
        for client in (self.iam, self.learning, self.challenges, self.community, self.profiles):
            await client.aclose()

    async def __aenter__(self) -> ServiceRegistry:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
