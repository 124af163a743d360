"""Communityサービスのコントローラー.

リアクションと購読はTTLキャッシュを持ち、作成・削除時に該当エントリを無効化する。
現在ユーザーのIDは呼び出し時に ``user_id_provider`` から取得する。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from learnflow.core.constants import ReactionType
from learnflow.core.exceptions import CommunityError
from learnflow.http.results import RequestResult
from learnflow.services.base import BaseController, Paginated
from learnflow.services.community.actions import (
    CommunityActions,
    PostActions,
    ReactionActions,
    SubscriptionActions,
)
from learnflow.services.community.assembler import (
    to_communities,
    to_community,
    to_post,
    to_post_page,
    to_posts,
    to_reaction,
    to_reaction_count,
    to_reactions,
    to_subscription,
    to_subscription_page,
    to_subscriptions,
)
from learnflow.services.community.cache import MISSING, ReactionCache, SubscriptionCache
from learnflow.services.community.models import (
    Community,
    CommunityRequest,
    CreatePostRequest,
    CreateReactionRequest,
    CreateSubscriptionRequest,
    Post,
    Reaction,
    ReactionCount,
    Subscription,
)


logger = logging.getLogger(__name__)

UserIdProvider = Callable[[], str | None]

NOT_FOUND = 404


class CommunityController(BaseController):
    """コミュニティ操作.

    Raises:
        CommunityError: サービスが2xx以外を返した場合
    """

    error_class = CommunityError

    def __init__(self, actions: CommunityActions) -> None:
        self._actions = actions

    async def create_community(self, request: CommunityRequest) -> Community:
        result = await self._actions.create_community(request)
        return to_community(self._unwrap(result, "create_community"))

    async def get_communities(self) -> list[Community]:
        result = await self._actions.get_communities()
        return to_communities(self._unwrap(result, "get_communities"))

    async def get_community_by_id(self, community_id: str) -> Community:
        result = await self._actions.get_community_by_id(community_id)
        return to_community(self._unwrap(result, "get_community_by_id"))

    async def update_community(self, community_id: str, request: CommunityRequest) -> Community:
        result = await self._actions.update_community(community_id, request)
        return to_community(self._unwrap(result, "update_community"))

    async def delete_community(self, community_id: str) -> None:
        result = await self._actions.delete_community(community_id)
        self._unwrap(result, "delete_community")

    async def get_communities_by_creator(self, user_id: str) -> list[Community]:
        result = await self._actions.get_communities_by_creator(user_id)
        return to_communities(self._unwrap(result, "get_communities_by_creator"))


class PostController(BaseController):
    """投稿操作."""

    error_class = CommunityError

    def __init__(self, actions: PostActions) -> None:
        self._actions = actions

    async def get_all_posts(self) -> list[Post]:
        result = await self._actions.get_all_posts()
        return to_posts(self._unwrap(result, "get_all_posts"))

    async def get_posts_by_community(
        self, community_id: str, page: int = 0, size: int = 20
    ) -> Paginated[Post]:
        result = await self._actions.get_posts_by_community(community_id, page, size)
        return to_post_page(self._unwrap(result, "get_posts_by_community"))

    async def get_posts_by_user(self, user_id: str) -> list[Post]:
        result = await self._actions.get_posts_by_user(user_id)
        return to_posts(self._unwrap(result, "get_posts_by_user"))

    async def get_feed_posts(self, user_id: str, limit: int = 20, offset: int = 0) -> list[Post]:
        """フォロー中コミュニティのフィード.

        サービスは配列、または ``{"content": [...]}`` を返す。
        """
        result = await self._actions.get_feed_posts(user_id, limit, offset)
        data = self._unwrap(result, "get_feed_posts")
        if isinstance(data, dict):
            return to_post_page(data).items
        return to_posts(data)

    async def create_post(self, request: CreatePostRequest) -> Post:
        result = await self._actions.create_post(request)
        post = to_post(self._unwrap(result, "create_post"))
        logger.info("投稿作成: %s (community=%s)", post.id, post.community_id)
        return post

    async def delete_post(self, post_id: str) -> None:
        result = await self._actions.delete_post(post_id)
        self._unwrap(result, "delete_post")


class ReactionController(BaseController):
    """リアクション操作.

    件数とユーザーのリアクションをキャッシュする。
    """

    error_class = CommunityError

    def __init__(
        self,
        actions: ReactionActions,
        cache: ReactionCache,
        user_id_provider: UserIdProvider,
    ) -> None:
        """初期化.

        Args:
            actions: リアクションアクション
            cache: リアクションキャッシュ
            user_id_provider: 現在ユーザーIDを返す関数（未サインインはNone）
        """
        self._actions = actions
        self._cache = cache
        self._user_id_provider = user_id_provider

    def _require_user_id(self, operation: str) -> str:
        user_id = self._user_id_provider()
        if not user_id:
            logger.warning("%s: ユーザーIDを取得できません", operation)
            raise CommunityError("User is not signed in", 401)
        return user_id

    async def create_reaction(self, post_id: str, reaction_type: ReactionType | str) -> Reaction:
        """リアクションを作成（既存のリアクションは置き換えられる）.

        Args:
            post_id: 投稿ID
            reaction_type: 種別（大文字小文字は問わない）

        Returns:
            作成されたリアクション
        """
        user_id = self._require_user_id("create_reaction")
        if not isinstance(reaction_type, ReactionType):
            reaction_type = ReactionType(reaction_type.lower())
        request = CreateReactionRequest(reaction_type=reaction_type)
        result = await self._actions.create_reaction(user_id, post_id, request)
        data = self._unwrap(result, "create_reaction")
        reaction = self._to_reaction(data, user_id, post_id, request.reaction_type)
        self._cache.invalidate_post(post_id)
        self._cache.set_user_reaction(user_id, post_id, reaction)
        return reaction

    @staticmethod
    def _to_reaction(
        data: Any, user_id: str, post_id: str, reaction_type: ReactionType
    ) -> Reaction:
        if isinstance(data, dict) and data:
            defaults = {"postId": post_id, "userId": user_id, "reactionType": reaction_type.value}
            return to_reaction({**defaults, **data})
        return Reaction(post_id=post_id, user_id=user_id, reaction_type=reaction_type)

    async def delete_reaction(self, post_id: str) -> bool:
        """現在ユーザーのリアクションを削除.

        Returns:
            削除した場合True、リアクションがなかった場合False
        """
        user_id = self._require_user_id("delete_reaction")
        result = await self._actions.delete_reaction(user_id, post_id)
        if result.status == NOT_FOUND:
            logger.info("リアクションなし: post=%s user=%s", post_id, user_id)
            return False
        self._unwrap(result, "delete_reaction")
        self._cache.invalidate_post(post_id)
        self._cache.set_user_reaction(user_id, post_id, None)
        return True

    async def get_reactions_by_post(self, post_id: str) -> list[Reaction]:
        result = await self._actions.get_reactions_by_post(post_id)
        return to_reactions(self._unwrap(result, "get_reactions_by_post"))

    async def get_reaction_counts(self, post_id: str) -> ReactionCount:
        cached = self._cache.get_counts(post_id)
        if cached is not None:
            return cached
        result = await self._actions.get_reaction_counts(post_id)
        counts = to_reaction_count(self._unwrap(result, "get_reaction_counts"), post_id)
        self._cache.set_counts(post_id, counts)
        return counts

    async def get_user_reaction(self, post_id: str) -> Reaction | None:
        """現在ユーザーのリアクション（未リアクションならNone）."""
        user_id = self._require_user_id("get_user_reaction")
        cached = self._cache.get_user_reaction(user_id, post_id)
        if cached is not MISSING:
            return cached

        result: RequestResult = await self._actions.get_user_reaction(user_id, post_id)
        if result.status == NOT_FOUND:
            self._cache.set_user_reaction(user_id, post_id, None)
            return None
        reaction = to_reaction(self._unwrap(result, "get_user_reaction"))
        self._cache.set_user_reaction(user_id, post_id, reaction)
        return reaction


class SubscriptionController(BaseController):
    """購読（フォロー）操作."""

    error_class = CommunityError

    def __init__(
        self,
        actions: SubscriptionActions,
        cache: SubscriptionCache,
        user_id_provider: UserIdProvider,
    ) -> None:
        self._actions = actions
        self._cache = cache
        self._user_id_provider = user_id_provider

    async def create_subscription(self, community_id: str) -> Subscription:
        """コミュニティをフォロー.

        Returns:
            作成された購読（削除時はこのIDを使う）
        """
        result = await self._actions.create_subscription(
            CreateSubscriptionRequest(community_id=community_id)
        )
        subscription = to_subscription(self._unwrap(result, "create_subscription"))
        self._cache.invalidate_community(community_id)
        self._cache.set_user_subscription(subscription.user_id, community_id, subscription)
        return subscription

    async def delete_subscription(
        self, subscription_id: str, community_id: str | None = None
    ) -> None:
        """フォロー解除.

        Args:
            subscription_id: 購読ID
            community_id: 指定時はそのコミュニティのキャッシュを無効化
        """
        result = await self._actions.delete_subscription(subscription_id)
        self._unwrap(result, "delete_subscription")
        if community_id:
            self._cache.invalidate_community(community_id)
            user_id = self._user_id_provider()
            if user_id:
                self._cache.set_user_subscription(user_id, community_id, None)

    async def get_subscriptions_by_user(
        self, user_id: str, page: int = 0, size: int = 20
    ) -> Paginated[Subscription]:
        result = await self._actions.get_subscriptions_by_user(user_id, page, size)
        return to_subscription_page(self._unwrap(result, "get_subscriptions_by_user"))

    async def get_subscriptions_by_community(self, community_id: str) -> list[Subscription]:
        result = await self._actions.get_subscriptions_by_community(community_id)
        return to_subscriptions(self._unwrap(result, "get_subscriptions_by_community"))

    async def get_user_subscription_for_community(
        self, community_id: str, user_id: str | None = None
    ) -> Subscription | None:
        """ユーザーがコミュニティをフォローしていれば、その購読を返す."""
        user_id = user_id or self._user_id_provider()
        if not user_id:
            return None
        cached = self._cache.get_user_subscription(user_id, community_id)
        if cached is not MISSING:
            return cached

        subscriptions = await self.get_subscriptions_by_user(user_id)
        found = next(
            (s for s in subscriptions.items if s.community_id == community_id), None
        )
        self._cache.set_user_subscription(user_id, community_id, found)
        return found

    async def get_follower_count(self, community_id: str) -> int:
        cached = self._cache.get_count(community_id)
        if cached is not None:
            return cached
        count = len(await self.get_subscriptions_by_community(community_id))
        self._cache.set_count(community_id, count)
        return count
