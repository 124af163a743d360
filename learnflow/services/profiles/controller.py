"""プロフィール・ランキングのコントローラー."""

from __future__ import annotations

import logging
from collections.abc import Callable

from learnflow.core.constants import LEADERBOARD_DEFAULT_LIMIT, CompetitiveRank
from learnflow.core.exceptions import LeaderboardError, ProfileError
from learnflow.http.results import is_success
from learnflow.services.base import BaseController
from learnflow.services.profiles.actions import LeaderboardActions, ProfileActions
from learnflow.services.profiles.assembler import (
    to_competitive_profile,
    to_leaderboard,
    to_leaderboard_entry,
    to_profile,
    to_profiles,
    to_user_search_results,
    to_users_by_rank,
)
from learnflow.services.profiles.models import (
    CompetitiveProfile,
    LeaderboardEntry,
    Profile,
    UpdateProfileRequest,
    UserSearchResult,
    UsersByRank,
)


logger = logging.getLogger(__name__)

UserIdProvider = Callable[[], str | None]


class ProfileController(BaseController):
    """プロフィールの取得・更新・検索.

    Raises:
        ProfileError: サービスが2xx以外を返した場合
    """

    error_class = ProfileError

    def __init__(self, actions: ProfileActions, user_id_provider: UserIdProvider) -> None:
        """初期化.

        Args:
            actions: プロフィールアクション
            user_id_provider: 現在ユーザーIDを返す関数（未サインインはNone）
        """
        self._actions = actions
        self._user_id_provider = user_id_provider

    async def get_profile_by_user_id(self, user_id: str) -> Profile:
        result = await self._actions.get_profile_by_user_id(user_id)
        return to_profile(self._unwrap(result, "get_profile_by_user_id"))

    async def get_profile_by_id(self, profile_id: str) -> Profile:
        result = await self._actions.get_profile_by_id(profile_id)
        return to_profile(self._unwrap(result, "get_profile_by_id"))

    async def get_current_user_profile(self) -> Profile:
        """サインイン中のユーザーのプロフィール.

        Raises:
            ProfileError: 未サインイン（401）またはサービスの失敗
        """
        user_id = self._user_id_provider()
        if not user_id:
            raise ProfileError("User is not signed in", 401)
        return await self.get_profile_by_user_id(user_id)

    async def update_profile(self, profile_id: str, request: UpdateProfileRequest) -> Profile:
        result = await self._actions.update_profile(profile_id, request)
        return to_profile(self._unwrap(result, "update_profile"))

    async def get_all_profiles(self) -> list[Profile]:
        result = await self._actions.get_all_profiles()
        return to_profiles(self._unwrap(result, "get_all_profiles"))

    async def search_profiles(self, query: str) -> list[Profile]:
        """ユーザー名・氏名でプロフィールを検索（空白のみのクエリは空）."""
        if not query.strip():
            return []
        result = await self._actions.search_profiles(query.strip())
        return to_profiles(self._unwrap(result, "search_profiles"))

    async def search_users_by_username(self, username: str) -> list[UserSearchResult]:
        """ユーザー名の入力補完.

        補完候補のため、サービスの失敗は例外にせず空リストを返す。
        """
        if not username.strip():
            return []
        result = await self._actions.search_users_by_username(username.strip())
        if not is_success(result):
            logger.warning("ユーザー名検索に失敗 (status=%s): %s", result.status, result.data)
            return []
        return to_user_search_results(result.data)


class LeaderboardController(BaseController):
    """ランキングと競技プロフィール.

    Raises:
        LeaderboardError: サービスが2xx以外を返した場合
    """

    error_class = LeaderboardError

    def __init__(self, actions: LeaderboardActions) -> None:
        """初期化.

        Args:
            actions: ランキングアクション
        """
        self._actions = actions

    async def get_leaderboard(
        self, limit: int = LEADERBOARD_DEFAULT_LIMIT, offset: int = 0
    ) -> list[LeaderboardEntry]:
        """ランキングを順位順に取得.

        Args:
            limit: 件数（1以上）
            offset: 開始位置（0以上）

        Raises:
            ValueError: limit / offset が範囲外
        """
        if limit < 1 or offset < 0:
            raise ValueError(f"invalid page: limit={limit}, offset={offset}")
        result = await self._actions.get_leaderboard(limit, offset)
        return to_leaderboard(self._unwrap(result, "get_leaderboard"))

    async def get_user_position(self, user_id: str) -> LeaderboardEntry:
        result = await self._actions.get_user_position(user_id)
        return to_leaderboard_entry(self._unwrap(result, "get_user_position"))

    async def get_top500(self) -> list[LeaderboardEntry]:
        result = await self._actions.get_top500()
        return to_leaderboard(self._unwrap(result, "get_top500"))

    async def recalculate_leaderboard(self) -> None:
        result = await self._actions.recalculate_leaderboard()
        self._unwrap(result, "recalculate_leaderboard")

    async def get_competitive_profile(self, user_id: str) -> CompetitiveProfile:
        result = await self._actions.get_competitive_profile(user_id)
        return to_competitive_profile(self._unwrap(result, "get_competitive_profile"))

    async def sync_competitive_profile(self, user_id: str) -> CompetitiveProfile:
        """獲得スコアから競技プロフィールを再計算."""
        result = await self._actions.sync_competitive_profile(user_id)
        return to_competitive_profile(self._unwrap(result, "sync_competitive_profile"))

    async def get_users_by_rank(
        self, rank: CompetitiveRank | str, offset: int = 0
    ) -> UsersByRank:
        """ランク別のユーザー一覧.

        Args:
            rank: 競技ランク（大文字小文字は問わない）
            offset: 開始位置

        Raises:
            ValueError: 未知のランク
        """
        rank_value = CompetitiveRank(rank.upper()).value
        result = await self._actions.get_users_by_rank(rank_value, offset)
        return to_users_by_rank(self._unwrap(result, "get_users_by_rank"))
