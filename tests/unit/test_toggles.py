"""楽観的更新・トグル テスト."""

from __future__ import annotations

import asyncio

import pytest

from learnflow.core.constants import ReactionType
from learnflow.core.exceptions import CommunityError, GuideError
from learnflow.editor import (
    CommunityFollowToggle,
    GuideLikeToggle,
    MutationOutcome,
    MutationSequencer,
    NotificationLevel,
    Notifier,
    OptimisticMutation,
    PostReactionToggle,
)
from learnflow.services.community.models import Subscription


class FakeLikes:
    """いいねAPIのスタブ."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.like_gate: asyncio.Event | None = None
        self.fail: set[str] = set()

    async def like_guide(self, guide_id: str) -> None:
        if self.like_gate is not None:
            await self.like_gate.wait()
        self.calls.append("like")
        if "like" in self.fail:
            raise GuideError("like failed", 500)

    async def unlike_guide(self, guide_id: str) -> None:
        self.calls.append("unlike")
        if "unlike" in self.fail:
            raise GuideError("unlike failed", 500)


class FakeSubscriptions:
    """購読APIのスタブ（サーバー側の購読を保持）."""

    def __init__(self, existing: Subscription | None = None) -> None:
        self.server: dict[str, Subscription] = {}
        if existing is not None:
            self.server[existing.id] = existing
        self.deleted: list[str] = []
        self.fail = False
        self.create_gate: asyncio.Event | None = None
        self._next_id = 0

    async def create_subscription(self, community_id: str) -> Subscription:
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.fail:
            raise CommunityError("follow failed", 500)
        self._next_id += 1
        subscription = Subscription(
            id=f"sub-{self._next_id}", user_id="user-1", community_id=community_id
        )
        self.server[subscription.id] = subscription
        return subscription

    async def delete_subscription(
        self, subscription_id: str, community_id: str | None = None
    ) -> None:
        if self.fail:
            raise CommunityError("unfollow failed", 500)
        self.server.pop(subscription_id, None)
        self.deleted.append(subscription_id)

    async def get_user_subscription_for_community(self, community_id: str) -> Subscription | None:
        return next(iter(self.server.values()), None)


class FakeReactions:
    """リアクションAPIのスタブ."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []
        self.fail = False

    async def create_reaction(self, post_id: str, reaction_type: str) -> None:
        self.calls.append(("create", reaction_type))
        if self.fail:
            raise CommunityError("reaction failed", 500)

    async def delete_reaction(self, post_id: str) -> bool:
        self.calls.append(("delete", None))
        if self.fail:
            raise CommunityError("reaction failed", 500)
        return True


class TestOptimisticMutation:
    """OptimisticMutation テスト."""

    @pytest.mark.asyncio
    async def test_commit(self) -> None:
        """成功時はローカル更新を維持."""
        state = {"value": 0}
        mutation = OptimisticMutation()

        async def commit() -> str:
            return "ok"

        result = await mutation.run(
            key="k",
            apply=lambda: state.update(value=1),
            revert=lambda: state.update(value=0),
            commit=commit,
            error_message="failed",
        )

        assert result.committed
        assert result.value == "ok"
        assert state["value"] == 1

    @pytest.mark.asyncio
    async def test_revert_on_failure(self) -> None:
        """失敗時は元に戻してエラー通知."""
        state = {"value": 0}
        notifier = Notifier()
        mutation = OptimisticMutation(notifier=notifier)

        async def commit() -> None:
            raise GuideError("boom", 500)

        result = await mutation.run(
            key="k",
            apply=lambda: state.update(value=1),
            revert=lambda: state.update(value=0),
            commit=commit,
            error_message="failed",
        )

        assert result.outcome == MutationOutcome.REVERTED
        assert state["value"] == 0
        assert notifier.messages(NotificationLevel.ERROR) == ["failed"]

    def test_sequencer(self) -> None:
        """最新のシーケンス番号だけが最新."""
        sequencer = MutationSequencer()
        first = sequencer.next("a")
        second = sequencer.next("a")

        assert not sequencer.is_latest("a", first)
        assert sequencer.is_latest("a", second)
        assert sequencer.latest("b") == 0

    def test_release_prunes_settled_key(self) -> None:
        """最新の操作が完了したらキーを破棄し、古い番号は最新にならない."""
        sequencer = MutationSequencer()
        first = sequencer.next("a")
        second = sequencer.next("a")

        sequencer.release("a", first)
        assert sequencer.is_latest("a", second)

        sequencer.release("a", second)
        assert sequencer.latest("a") == 0
        assert not sequencer.is_latest("a", first)
        assert sequencer.next("a") > second

    @pytest.mark.asyncio
    async def test_run_releases_key(self) -> None:
        """完了した操作のキーは残らない."""
        sequencer = MutationSequencer()
        mutation = OptimisticMutation(sequencer)

        async def commit() -> None:
            return None

        for n in range(3):
            await mutation.run(
                key=f"guide-like:g{n}",
                apply=lambda: None,
                revert=lambda: None,
                commit=commit,
                error_message="failed",
            )

        assert all(sequencer.latest(f"guide-like:g{n}") == 0 for n in range(3))


class TestGuideLikeToggle:
    """GuideLikeToggle テスト."""

    @pytest.mark.asyncio
    async def test_like(self) -> None:
        """いいねで件数+1."""
        notifier = Notifier()
        toggle = GuideLikeToggle(FakeLikes(), "g1", liked=False, likes_count=5, notifier=notifier)

        result = await toggle.toggle()

        assert result.committed
        assert (toggle.liked, toggle.likes_count) == (True, 6)
        assert notifier.messages(NotificationLevel.SUCCESS) == ["Guide liked!"]

    @pytest.mark.asyncio
    async def test_failure_reverts(self) -> None:
        """失敗したら元の状態に戻す."""
        api = FakeLikes()
        api.fail.add("unlike")
        notifier = Notifier()
        toggle = GuideLikeToggle(api, "g1", liked=True, likes_count=3, notifier=notifier)

        await toggle.toggle()

        assert (toggle.liked, toggle.likes_count) == (True, 3)
        assert notifier.messages(NotificationLevel.ERROR) == ["Failed to like guide"]

    @pytest.mark.asyncio
    async def test_last_intent_wins(self) -> None:
        """いいね直後のいいね解除は、先の操作が後から失敗しても解除のまま."""
        api = FakeLikes()
        api.like_gate = asyncio.Event()
        api.fail.add("like")
        notifier = Notifier()
        toggle = GuideLikeToggle(api, "g1", liked=False, likes_count=5, notifier=notifier)

        like = asyncio.create_task(toggle.toggle())
        await asyncio.sleep(0)
        assert (toggle.liked, toggle.likes_count) == (True, 6)

        unlike = await toggle.toggle()
        api.like_gate.set()
        stale = await like

        assert unlike.committed
        assert stale.outcome == MutationOutcome.STALE
        assert (toggle.liked, toggle.likes_count) == (False, 5)
        assert notifier.messages(NotificationLevel.ERROR) == []

    @pytest.mark.asyncio
    async def test_count_not_negative(self) -> None:
        """件数は0未満にならない."""
        toggle = GuideLikeToggle(FakeLikes(), "g1", liked=True, likes_count=0)

        await toggle.toggle()

        assert toggle.likes_count == 0


class TestCommunityFollowToggle:
    """CommunityFollowToggle テスト."""

    @pytest.mark.asyncio
    async def test_follow_then_unfollow_uses_subscription_id(self) -> None:
        """フォロー解除は作成時の購読IDで行う."""
        api = FakeSubscriptions()
        toggle = CommunityFollowToggle(api, "comm-1", follower_count=10)

        await toggle.toggle()
        assert toggle.following is True
        assert toggle.follower_count == 11
        assert toggle.subscription is not None

        await toggle.toggle()
        assert api.deleted == ["sub-1"]
        assert (toggle.following, toggle.follower_count) == (False, 10)
        assert toggle.subscription is None

    @pytest.mark.asyncio
    async def test_unfollow_looks_up_subscription(self) -> None:
        """購読が不明ならユーザーの購読を探して解除."""
        existing = Subscription(id="sub-9", user_id="user-1", community_id="comm-1")
        api = FakeSubscriptions(existing)
        toggle = CommunityFollowToggle(api, "comm-1", follower_count=1)
        toggle.following = True

        await toggle.toggle()

        assert api.deleted == ["sub-9"]

    @pytest.mark.asyncio
    async def test_follow_failure(self) -> None:
        """フォロー失敗は元に戻して通知."""
        api = FakeSubscriptions()
        api.fail = True
        notifier = Notifier()
        toggle = CommunityFollowToggle(api, "comm-1", follower_count=2, notifier=notifier)

        await toggle.toggle()

        assert (toggle.following, toggle.follower_count) == (False, 2)
        assert notifier.messages() == ["Failed to follow community"]

    @pytest.mark.asyncio
    async def test_unfollow_while_follow_in_flight(self) -> None:
        """作成中にフォロー解除すると、作成完了後にその購読を削除する."""
        api = FakeSubscriptions()
        api.create_gate = asyncio.Event()
        notifier = Notifier()
        toggle = CommunityFollowToggle(api, "comm-1", follower_count=10, notifier=notifier)

        follow = asyncio.create_task(toggle.toggle())
        await asyncio.sleep(0)
        unfollow_task = asyncio.create_task(toggle.toggle())
        await asyncio.sleep(0)
        assert (toggle.following, toggle.follower_count) == (False, 10)

        api.create_gate.set()
        unfollow = await unfollow_task
        stale = await follow

        assert unfollow.committed
        assert stale.outcome == MutationOutcome.STALE
        assert api.server == {}
        assert api.deleted == ["sub-1"]
        assert (toggle.following, toggle.follower_count) == (False, 10)
        assert toggle.subscription is None
        assert notifier.messages(NotificationLevel.ERROR) == []

    @pytest.mark.asyncio
    async def test_follow_unfollow_follow_keeps_one_subscription(self) -> None:
        """フォロー・解除・フォローの連続操作後、サーバーの購読は1件だけ."""
        api = FakeSubscriptions()
        api.create_gate = asyncio.Event()
        toggle = CommunityFollowToggle(api, "comm-1", follower_count=0)

        tasks = []
        for _ in range(3):
            tasks.append(asyncio.create_task(toggle.toggle()))
            await asyncio.sleep(0)
        api.create_gate.set()
        results = await asyncio.gather(*tasks)

        assert results[-1].committed
        assert toggle.following is True
        assert toggle.follower_count == 1
        assert toggle.subscription is not None
        assert list(api.server) == [toggle.subscription.id]
        assert len(api.deleted) == 1


class TestPostReactionToggle:
    """PostReactionToggle テスト."""

    @pytest.mark.asyncio
    async def test_select_new_reaction(self) -> None:
        """新しいリアクションで件数+1."""
        api = FakeReactions()
        toggle = PostReactionToggle(api, "post-1", counts={"LIKE": 2})

        await toggle.select(ReactionType.LIKE)

        assert toggle.counts["like"] == 3
        assert toggle.user_reaction == "like"
        assert api.calls == [("create", "like")]

    @pytest.mark.asyncio
    async def test_switch_reaction(self) -> None:
        """別の種別を選ぶと1件を移し替える."""
        toggle = PostReactionToggle(
            FakeReactions(), "post-1", counts={"like": 1, "wow": 0}, user_reaction="like"
        )

        await toggle.select("WOW")

        assert toggle.counts["like"] == 0
        assert toggle.counts["wow"] == 1
        assert toggle.total_count == 1

    @pytest.mark.asyncio
    async def test_same_reaction_removes(self) -> None:
        """同じ種別は取り消し、件数は0未満にならない."""
        api = FakeReactions()
        toggle = PostReactionToggle(api, "post-1", counts={}, user_reaction="love")

        await toggle.select("love")

        assert toggle.user_reaction is None
        assert toggle.counts["love"] == 0
        assert api.calls == [("delete", None)]

    @pytest.mark.asyncio
    async def test_failure_reverts(self) -> None:
        """失敗したら件数と選択を元に戻す."""
        api = FakeReactions()
        api.fail = True
        notifier = Notifier()
        toggle = PostReactionToggle(
            api, "post-1", counts={"haha": 4}, user_reaction="haha", notifier=notifier
        )

        await toggle.select("like")

        assert toggle.counts == {"like": 0, "love": 0, "haha": 4, "wow": 0}
        assert toggle.user_reaction == "haha"
        assert notifier.messages() == ["Failed to update reaction"]
