"""Communityサービスのアクション."""

from __future__ import annotations

from learnflow.http.results import RequestResult, RequestSuccess
from learnflow.services.base import BaseActions
from learnflow.services.community.models import (
    CommunityRequest,
    CreatePostRequest,
    CreateReactionRequest,
    CreateSubscriptionRequest,
)


class CommunityActions(BaseActions):
    """/communities へのHTTP呼び出し."""

    async def create_community(self, request: CommunityRequest) -> RequestResult:
        return await self._client.post("/communities", request.to_payload())

    async def get_communities(self) -> RequestResult:
        return await self._client.get("/communities")

    async def get_community_by_id(self, community_id: str) -> RequestResult:
        return await self._client.get(f"/communities/{community_id}")

    async def update_community(
        self, community_id: str, request: CommunityRequest
    ) -> RequestResult:
        return await self._client.put(f"/communities/{community_id}", request.to_payload())

    async def delete_community(self, community_id: str) -> RequestResult:
        return await self._client.delete(f"/communities/{community_id}")

    async def get_communities_by_creator(self, user_id: str) -> RequestResult:
        return await self._client.get(f"/communities/creator/{user_id}")


class PostActions(BaseActions):
    """/posts へのHTTP呼び出し."""

    async def get_all_posts(self) -> RequestResult:
        return await self._client.get("/posts")

    async def get_posts_by_community(
        self, community_id: str, page: int = 0, size: int = 20
    ) -> RequestResult:
        return await self._client.get(
            f"/posts/community/{community_id}", params={"page": page, "size": size}
        )

    async def get_posts_by_user(self, user_id: str) -> RequestResult:
        """ユーザーの投稿.

        専用エンドポイントがないため、全投稿を authorId で絞り込む。
        """
        result = await self._client.get("/posts")
        if isinstance(result, RequestSuccess) and isinstance(result.data, list):
            posts = [
                p for p in result.data if isinstance(p, dict) and p.get("authorId") == user_id
            ]
            return RequestSuccess(data=posts, status=result.status)
        return result

    async def get_feed_posts(self, user_id: str, limit: int = 20, offset: int = 0) -> RequestResult:
        return await self._client.get(
            f"/posts/feed/{user_id}", params={"limit": limit, "offset": offset}
        )

    async def create_post(self, request: CreatePostRequest) -> RequestResult:
        return await self._client.post("/posts", request.to_payload())

    async def delete_post(self, post_id: str) -> RequestResult:
        return await self._client.delete(f"/posts/{post_id}")


class ReactionActions(BaseActions):
    """/reactions へのHTTP呼び出し."""

    async def create_reaction(
        self, user_id: str, post_id: str, request: CreateReactionRequest
    ) -> RequestResult:
        return await self._client.post(
            f"/reactions/user/{user_id}/post/{post_id}", request.to_payload()
        )

    async def delete_reaction(self, user_id: str, post_id: str) -> RequestResult:
        return await self._client.delete(f"/reactions/user/{user_id}/post/{post_id}")

    async def get_reactions_by_post(self, post_id: str) -> RequestResult:
        """投稿のリアクション一覧.

        このエンドポイントは未リアクションの投稿に400を返すため、空リストとして扱う。
        """
        result = await self._client.get(f"/reactions/post/{post_id}")
        if result.status == 400:
            return RequestSuccess(data=[], status=200)
        return result

    async def get_reaction_counts(self, post_id: str) -> RequestResult:
        return await self._client.get(f"/reactions/post/{post_id}/counts")

    async def get_user_reaction(self, user_id: str, post_id: str) -> RequestResult:
        return await self._client.get(f"/reactions/user/{user_id}/post/{post_id}")


class SubscriptionActions(BaseActions):
    """/subscriptions へのHTTP呼び出し."""

    async def create_subscription(self, request: CreateSubscriptionRequest) -> RequestResult:
        return await self._client.post("/subscriptions", request.to_payload())

    async def delete_subscription(self, subscription_id: str) -> RequestResult:
        return await self._client.delete(f"/subscriptions/{subscription_id}")

    async def get_subscriptions_by_user(
        self, user_id: str, page: int = 0, size: int = 20
    ) -> RequestResult:
        return await self._client.get(
            f"/subscriptions/user/{user_id}", params={"page": page, "size": size}
        )

    async def get_subscriptions_by_community(self, community_id: str) -> RequestResult:
        return await self._client.get(f"/subscriptions/community/{community_id}")
