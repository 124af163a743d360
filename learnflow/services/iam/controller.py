"""認証コントローラー.

サインイン時にトークンをセッションストアへ保存し、以降の全サービス呼び出しで
Bearerトークンとして使う。ユーザーIDとロールはトークンのクレームから読む。

使用例:
    >>> auth = AuthController(AuthActions(registry.iam), registry.tokens)
    >>> user = await auth.sign_in("alice@example.com", "secret")
    >>> auth.get_user_id()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import jwt

from learnflow.core.constants import UserRole
from learnflow.core.exceptions import AccessDeniedError, AuthenticationError
from learnflow.http.results import is_success
from learnflow.services.base import BaseController, validate_wire
from learnflow.services.iam.actions import AuthActions
from learnflow.services.iam.models import (
    AuthenticatedUser,
    CredentialsRequest,
    RefreshTokenResponse,
    SignInResponse,
    SignUpResponse,
)


if TYPE_CHECKING:
    from learnflow.http.session import SessionTokenStore


logger = logging.getLogger(__name__)


class AuthController(BaseController):
    """サインイン・サインアップ・トークン管理.

    Raises:
        AuthenticationError: IAMサービスが2xx以外を返した場合
    """

    error_class = AuthenticationError

    def __init__(self, actions: AuthActions, tokens: SessionTokenStore) -> None:
        """初期化.

        Args:
            actions: 認証アクション
            tokens: セッショントークンストア
        """
        self._actions = actions
        self._tokens = tokens

    async def sign_in(self, email: str, password: str) -> AuthenticatedUser:
        """サインインしてトークンを保存.

        Returns:
            サインインしたユーザー
        """
        request = CredentialsRequest(email=email, password=password)
        result = await self._actions.sign_in(request)
        response = validate_wire(SignInResponse, self._unwrap(result, "sign_in"), "sign-in")
        self._tokens.save(response.token, response.refresh_token)
        logger.info("サインイン: %s", response.email)
        return AuthenticatedUser(
            id=response.id,
            email=response.email,
            token=response.token,
            refresh_token=response.refresh_token,
        )

    async def sign_up(self, email: str, password: str) -> AuthenticatedUser:
        """アカウントを作成し、そのままサインイン."""
        request = CredentialsRequest(email=email, password=password)
        result = await self._actions.sign_up(request)
        created = validate_wire(SignUpResponse, self._unwrap(result, "sign_up"), "sign-up")
        logger.info("アカウント作成: %s", created.email)
        return await self.sign_in(email, password)

    async def validate_token(self) -> bool:
        """保存済みトークンが有効か（IAMサービスに問い合わせ）."""
        if not self._tokens.get().has_token:
            return False
        result = await self._actions.validate_token()
        return is_success(result)

    async def refresh_token(self) -> bool:
        """トークンを更新.

        失敗した場合はサインアウトする。

        Returns:
            更新できた場合True
        """
        tokens = self._tokens.get()
        result = await self._actions.refresh_token(tokens.refresh_token)
        if not is_success(result):
            logger.warning("トークン更新失敗 (status=%s)、サインアウトします", result.status)
            self.sign_out()
            return False
        response = validate_wire(RefreshTokenResponse, result.data, "refresh token")
        self._tokens.save(response.access_token, response.refresh_token)
        return True

    def sign_out(self) -> None:
        """保存済みトークンを削除."""
        self._tokens.clear()

    def get_user_id(self) -> str:
        """トークンからユーザーIDを取得.

        Raises:
            AuthenticationError: トークンがない、または userId クレームがない
        """
        try:
            claims = self._tokens.decode_claims()
        except (LookupError, jwt.PyJWTError) as e:
            raise AuthenticationError(f"Could not read token: {e}", 401) from e
        user_id = claims.get("userId")
        if not user_id:
            raise AuthenticationError("No userId found in token", 401)
        return str(user_id)

    def current_user_id(self) -> str | None:
        """サインイン中ならユーザーID、そうでなければNone."""
        try:
            return self.get_user_id()
        except AuthenticationError as e:
            logger.debug("ユーザーID取得不可: %s", e)
            return None

    def get_user_roles(self) -> list[str]:
        """トークンからロールを取得（トークンがなければ空）."""
        try:
            claims = self._tokens.decode_claims()
        except (LookupError, jwt.PyJWTError):
            return []
        roles = claims.get("roles") or []
        if isinstance(roles, str):
            roles = [roles]
        return [str(role) for role in roles]


def require_role(roles: Iterable[str], allowed: Iterable[UserRole | str]) -> None:
    """ロールを確認.

    Args:
        roles: ユーザーのロール
        allowed: 許可するロール

    Raises:
        AccessDeniedError: 許可ロールを1つも持たない
    """
    actual = list(roles)
    required = [r.value if isinstance(r, UserRole) else r for r in allowed]
    if not set(actual) & set(required):
        raise AccessDeniedError(required, actual)
