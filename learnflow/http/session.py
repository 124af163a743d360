# -*- coding: utf-8 -*-
"""セッショントークン管理.

ブラウザのCookieに相当する、認証トークンとリフレッシュトークンの保管場所。
トークン未設定時は NO_TOKEN_FOUND センチネルを返し、この場合は
認証ヘッダーを付与しない。
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

import jwt

from learnflow.core.constants import (
    AUTH_REFRESH_TOKEN_KEY,
    AUTH_TOKEN_KEY,
    NO_TOKEN_FOUND,
)


logger = logging.getLogger(__name__)

NO_REFRESH_TOKEN_FOUND = "NO_REFRESH_TOKEN_FOUND"


@dataclass(frozen=True)
class AuthTokens:
    """認証トークンのペア."""

    token: str = NO_TOKEN_FOUND
    refresh_token: str = NO_REFRESH_TOKEN_FOUND

    @property
    def has_token(self) -> bool:
        """有効なトークンが設定されているか."""
        return bool(self.token) and self.token != NO_TOKEN_FOUND

    def auth_headers(self, include_refresh: bool = True) -> dict[str, str]:
        """リクエストヘッダーを生成.

        Args:
            include_refresh: リフレッシュトークンヘッダーを含めるか

        Returns:
            ヘッダー辞書（トークン未設定時は空）
        """
        if not self.has_token:
            return {}
        headers = {"Authorization": f"Bearer {self.token}"}
        if include_refresh and self.refresh_token != NO_REFRESH_TOKEN_FOUND:
            headers[AUTH_REFRESH_TOKEN_KEY] = self.refresh_token
        return headers


class SessionTokenStore:
    """セッショントークンストア.

    Cookie名（token / refresh_token）をキーにした値を保持する。

    使用例:
        >>> store = SessionTokenStore()
        >>> store.save("access", "refresh")
        >>> store.get().has_token
        True
    """

    def __init__(self) -> None:
        """初期化."""
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def save(self, token: str, refresh_token: str | None = None) -> None:
        """トークンを保存.

        Args:
            token: アクセストークン
            refresh_token: リフレッシュトークン（省略時は既存値を維持）
        """
        with self._lock:
            self._values[AUTH_TOKEN_KEY] = token
            if refresh_token:
                self._values[AUTH_REFRESH_TOKEN_KEY] = refresh_token

    def get(self) -> AuthTokens:
        """現在のトークンを取得."""
        with self._lock:
            return AuthTokens(
                token=self._values.get(AUTH_TOKEN_KEY) or NO_TOKEN_FOUND,
                refresh_token=(
                    self._values.get(AUTH_REFRESH_TOKEN_KEY) or NO_REFRESH_TOKEN_FOUND
                ),
            )

    def clear(self) -> None:
        """トークンを削除（サインアウト）."""
        with self._lock:
            self._values.clear()

    def decode_claims(self) -> dict[str, Any]:
        """アクセストークンのクレームを読み取る.

        署名はIAMサービス側で検証されるため、ここでは検証しない。

        Returns:
            JWTクレーム

        Raises:
            LookupError: トークン未設定
            jwt.DecodeError: トークン形式が不正
        """
        tokens = self.get()
        if not tokens.has_token:
            raise LookupError("No authentication token found")
        return jwt.decode(tokens.token, options={"verify_signature": False})
