"""コミュニティドメイン 単体テスト."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from learnflow.core.constants import ReactionType
from learnflow.core.exceptions import CommunityError
from learnflow.services import LearnFlowServices
from learnflow.services.community.assembler import (
    to_community,
    to_post,
    to_reaction_count,
    to_subscription_page,
)
from learnflow.services.community.cache import MISSING, ReactionCache, TTLCache
from learnflow.services.community.models import CommunityRequest, CreatePostRequest


def _post(post_id: str = "post-1", author_id: str = "user-1") -> dict[str, Any]:
    return {
        "id": post_id,
        "communityId": "comm-1",
        "authorId": author_id,
        "content": "Hello",
        "reactions": {"reactionCounts": {"like": 2}, "userReaction": "like"},
        "comments": [{"id": "cm-1", "authorId": "user-2", "content": "Hi"}],
    }


class FakeClock:
    """手動で進める時計."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """TTLCache テスト."""

    def test_expiry(self) -> None:
        """期限切れのエントリは MISSING."""
        clock = FakeClock()
        cache: TTLCache[int] = TTLCache(10, clock)
        cache.set("a", 1)

        clock.now = 10
        assert cache.get("a") == 1
        clock.now = 10.5
        assert cache.get("a") is MISSING
        assert len(cache) == 0

    def test_cached_none(self) -> None:
        """Noneのキャッシュと未登録を区別."""
        cache: TTLCache[int | None] = TTLCache(10)
        cache.set("a", None)

        assert cache.get("a") is None
        assert cache.get("b") is MISSING

    def test_invalidate_post(self) -> None:
        """投稿の件数と全ユーザーのリアクションを無効化."""
        cache = ReactionCache(60)
        cache.set_counts("p1", to_reaction_count({"counts": {"like": 1}}, "p1"))
        cache.set_user_reaction("u1", "p1", None)
        cache.set_user_reaction("u2", "p1", None)
        cache.set_user_reaction("u1", "p2", None)

        cache.invalidate_post("p1")

        assert cache.get_counts("p1") is None
        assert cache.get_user_reaction("u1", "p1") is MISSING
        assert cache.get_user_reaction("u2", "p1") is MISSING
        assert cache.get_user_reaction("u1", "p2") is None


class TestCommunityAssembler:
    """コミュニティアセンブラー テスト."""

    def test_community_id_alias_and_icon(self) -> None:
        """communityId を受け付け、imageUrl をアイコンにも使う."""
        community = to_community(
            {"communityId": "c1", "name": "Pythonistas", "imageUrl": "https://img/x.png"}
        )

        assert community.id == "c1"
        assert community.icon_url == "https://img/x.png"
        assert community.image_url == "https://img/x.png"
        assert community.is_private is False

    def test_post_embeds_reactions_and_comments(self) -> None:
        """投稿のリアクションとコメント."""
        post = to_post(_post())

        assert post.reactions.reaction_counts == {"like": 2}
        assert post.reactions.user_reaction == "like"
        assert post.comments[0].author_id == "user-2"

    def test_reaction_count_normalized(self) -> None:
        """全種別を揃え、大文字キーも受け付け、合計を補う."""
        counts = to_reaction_count({"counts": {"LIKE": 2, "wow": 1}}, "p1")

        assert counts.counts == {"like": 2, "love": 0, "haha": 0, "wow": 1}
        assert counts.total_count == 3
        assert counts.post_id == "p1"

    def test_subscription_page_from_list(self) -> None:
        """配列の購読一覧もページとして扱う."""
        page = to_subscription_page([{"id": "s1", "userId": "u1", "communityId": "c1"}])

        assert page.total_elements == 1
        assert page.has_next is False


class TestCommunityController:
    """CommunityController テスト."""

    @pytest.mark.asyncio
    async def test_create_community(self, services: LearnFlowServices, backend) -> None:
        """コミュニティ作成."""
        backend.on("community", "POST", "/communities", {"id": "c1", "name": "Py"}, 201)

        community = await services.communities.create_community(CommunityRequest(name="Py"))

        assert community.id == "c1"
        assert backend.body(backend.requests[0]) == {"name": "Py", "description": ""}


class TestPostController:
    """PostController テスト."""

    @pytest.mark.asyncio
    async def test_posts_by_user_filters(self, services: LearnFlowServices, backend) -> None:
        """ユーザーの投稿は全投稿を authorId で絞り込む."""
        backend.on(
            "community",
            "GET",
            "/posts",
            [_post("p1", "user-1"), _post("p2", "user-2"), _post("p3", "user-1")],
        )

        posts = await services.posts.get_posts_by_user("user-1")

        assert [p.id for p in posts] == ["p1", "p3"]

    @pytest.mark.asyncio
    async def test_posts_by_community_paginated(
        self, services: LearnFlowServices, backend
    ) -> None:
        """コミュニティの投稿はページ単位."""
        backend.on(
            "community",
            "GET",
            "/posts/community/comm-1",
            {"content": [_post()], "number": 0, "size": 20, "totalElements": 21, "totalPages": 2},
        )

        page = await services.posts.get_posts_by_community("comm-1")

        assert page.has_next is True
        params = backend.requests[0].url.params
        assert (params["page"], params["size"]) == ("0", "20")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [[_post()], {"content": [_post()], "totalElements": 1, "totalPages": 1}],
    )
    async def test_feed_list_or_page(
        self, services: LearnFlowServices, backend, payload: Any
    ) -> None:
        """フィードは配列とページのどちらも受け付ける."""
        backend.on("community", "GET", "/posts/feed/user-1", payload)

        posts = await services.posts.get_feed_posts("user-1", limit=10)

        assert [p.id for p in posts] == ["post-1"]
        assert backend.requests[0].url.params["limit"] == "10"

    @pytest.mark.asyncio
    async def test_create_post(self, services: LearnFlowServices, backend) -> None:
        """投稿作成."""
        backend.on("community", "POST", "/posts", _post(), 201)

        post = await services.posts.create_post(
            CreatePostRequest(community_id="comm-1", content="Hello")
        )

        assert post.id == "post-1"
        assert backend.body(backend.requests[0]) == {"communityId": "comm-1", "content": "Hello"}


class TestReactionController:
    """ReactionController テスト."""

    @pytest.mark.asyncio
    async def test_requires_session_user(self, services: LearnFlowServices, backend) -> None:
        """未サインインは401の CommunityError."""
        with pytest.raises(CommunityError) as exc_info:
            await services.reactions.create_reaction("post-1", ReactionType.LIKE)

        assert exc_info.value.status_code == 401
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_create_reaction_normalizes_type(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """種別は小文字で送り、ユーザーのリアクションをキャッシュ."""
        backend.on("community", "POST", "/reactions/user/user-1/post/post-1", {}, 201)

        reaction = await services.reactions.create_reaction("post-1", "LOVE")

        assert reaction.reaction_type == ReactionType.LOVE
        assert backend.body(backend.requests[0]) == {"reactionType": "love"}
        assert await services.reactions.get_user_reaction("post-1") == reaction
        assert len(backend.requests) == 1

    @pytest.mark.asyncio
    async def test_delete_without_reaction(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """リアクションがなければ False."""
        assert await services.reactions.delete_reaction("post-1") is False

    @pytest.mark.asyncio
    async def test_delete_reaction(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """削除後はユーザーのリアクションが None."""
        backend.on("community", "DELETE", "/reactions/user/user-1/post/post-1", status=204)

        assert await services.reactions.delete_reaction("post-1") is True
        assert await services.reactions.get_user_reaction("post-1") is None

    @pytest.mark.asyncio
    async def test_user_reaction_not_found(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """未リアクションは None."""
        assert await services.reactions.get_user_reaction("post-1") is None

    @pytest.mark.asyncio
    async def test_reactions_by_post_400_is_empty(
        self, services: LearnFlowServices, backend
    ) -> None:
        """一覧の400は空リスト."""
        backend.on("community", "GET", "/reactions/post/post-1", {"message": "none"}, 400)

        assert await services.reactions.get_reactions_by_post("post-1") == []

    @pytest.mark.asyncio
    async def test_counts_cached_until_change(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """件数はキャッシュし、リアクション作成で無効化."""
        backend.on(
            "community", "GET", "/reactions/post/post-1/counts", {"counts": {"like": 1}}
        )
        backend.on("community", "POST", "/reactions/user/user-1/post/post-1", {}, 201)

        first = await services.reactions.get_reaction_counts("post-1")
        await services.reactions.get_reaction_counts("post-1")
        await services.reactions.create_reaction("post-1", ReactionType.LIKE)
        await services.reactions.get_reaction_counts("post-1")

        assert first.total_count == 1
        assert len(backend.calls("GET", "/counts")) == 2


class TestSubscriptionController:
    """SubscriptionController テスト."""

    @staticmethod
    def _subscription(community_id: str = "comm-1") -> dict[str, Any]:
        return {"id": f"sub-{community_id}", "userId": "user-1", "communityId": community_id}

    @pytest.mark.asyncio
    async def test_user_subscription_lookup_is_cached(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """ユーザーの購読一覧から探し、結果をキャッシュ."""
        backend.on(
            "community",
            "GET",
            "/subscriptions/user/user-1",
            {"content": [self._subscription("comm-2"), self._subscription("comm-1")]},
        )

        found = await services.subscriptions.get_user_subscription_for_community("comm-1")
        again = await services.subscriptions.get_user_subscription_for_community("comm-1")

        assert found is not None and found.id == "sub-comm-1"
        assert again == found
        assert len(backend.requests) == 1

    @pytest.mark.asyncio
    async def test_not_signed_in(self, services: LearnFlowServices, backend) -> None:
        """未サインインは None（問い合わせない）."""
        assert await services.subscriptions.get_user_subscription_for_community("c") is None
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_follower_count(
        self, services: LearnFlowServices, backend, signed_in: str
    ) -> None:
        """フォロワー数は購読一覧の件数で、フォローで無効化."""
        subscribers = [self._subscription()]

        def list_subscribers(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=subscribers)

        def subscribe(_request: httpx.Request) -> httpx.Response:
            created = {"id": "sub-new", "userId": "user-1", "communityId": "comm-1"}
            subscribers.append(created)
            return httpx.Response(201, json=created)

        backend.on("community", "GET", "/subscriptions/community/comm-1", handler=list_subscribers)
        backend.on("community", "POST", "/subscriptions", handler=subscribe)

        assert await services.subscriptions.get_follower_count("comm-1") == 1
        assert await services.subscriptions.get_follower_count("comm-1") == 1
        await services.subscriptions.create_subscription("comm-1")
        assert await services.subscriptions.get_follower_count("comm-1") == 2
