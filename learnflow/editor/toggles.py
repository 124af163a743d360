"""いいね・フォロー・リアクションのトグル.

いずれも OptimisticMutation で表示状態を先に切り替え、失敗時に元へ戻す。
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from learnflow.core.constants import ReactionType
from learnflow.core.exceptions import LearnFlowError
from learnflow.editor.optimistic import MutationResult, MutationSequencer, OptimisticMutation
from learnflow.editor.notifications import Notifier


if TYPE_CHECKING:
    from learnflow.services.community.controller import ReactionController, SubscriptionController
    from learnflow.services.community.models import Subscription
    from learnflow.services.learning.guides.controller import GuideController


logger = logging.getLogger(__name__)


class GuideLikeToggle:
    """ガイドのいいね.

    Attributes:
        liked: 現在ユーザーがいいね済みか
        likes_count: いいね数
    """

    def __init__(
        self,
        controller: GuideController,
        guide_id: str,
        liked: bool = False,
        likes_count: int = 0,
        sequencer: MutationSequencer | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._controller = controller
        self.guide_id = guide_id
        self.liked = liked
        self.likes_count = likes_count
        self._mutation = OptimisticMutation(sequencer, notifier)

    async def toggle(self) -> MutationResult:
        previous = (self.liked, self.likes_count)
        liking = not self.liked

        def apply() -> None:
            self.liked = liking
            self.likes_count = self.likes_count + 1 if liking else max(0, self.likes_count - 1)

        def revert() -> None:
            self.liked, self.likes_count = previous

        async def commit() -> None:
            if liking:
                await self._controller.like_guide(self.guide_id)
            else:
                await self._controller.unlike_guide(self.guide_id)

        return await self._mutation.run(
            key=f"guide-like:{self.guide_id}",
            apply=apply,
            revert=revert,
            commit=commit,
            error_message="Failed to like guide",
            success_message="Guide liked!" if liking else "Like removed",
        )


class CommunityFollowToggle:
    """コミュニティのフォロー.

    フォロー解除には作成時に返された購読IDを使う。
    作成中にフォロー解除された場合は、作成の完了を待ってその購読を削除する。
    """

    def __init__(
        self,
        controller: SubscriptionController,
        community_id: str,
        subscription: Subscription | None = None,
        follower_count: int = 0,
        sequencer: MutationSequencer | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._controller = controller
        self.community_id = community_id
        self.subscription = subscription
        self.following = subscription is not None
        self.follower_count = follower_count
        self._mutation = OptimisticMutation(sequencer, notifier)
        self._pending_create: asyncio.Future[Subscription] | None = None

    async def toggle(self) -> MutationResult:
        previous = (self.following, self.follower_count)
        following = not self.following

        def apply() -> None:
            self.following = following
            self.follower_count = (
                self.follower_count + 1 if following else max(0, self.follower_count - 1)
            )

        def revert() -> None:
            self.following, self.follower_count = previous

        async def commit() -> Subscription | None:
            if following:
                return await self._create()
            created = await self._await_pending_create()
            subscription = created or self.subscription or (
                await self._controller.get_user_subscription_for_community(self.community_id)
            )
            if subscription is not None:
                await self._controller.delete_subscription(subscription.id, self.community_id)
            else:
                logger.info("購読が見つからないため解除済みとみなす: %s", self.community_id)
            return None

        result = await self._mutation.run(
            key=f"community-follow:{self.community_id}",
            apply=apply,
            revert=revert,
            commit=commit,
            error_message=(
                "Failed to follow community" if following else "Failed to unfollow community"
            ),
        )
        if result.committed:
            self.subscription = result.value
        return result

    async def _create(self) -> Subscription:
        create = asyncio.ensure_future(self._controller.create_subscription(self.community_id))
        self._pending_create = create
        try:
            return await create
        finally:
            if self._pending_create is create:
                self._pending_create = None

    async def _await_pending_create(self) -> Subscription | None:
        """作成中の購読があれば完了を待って返す（失敗ならNone）."""
        pending = self._pending_create
        if pending is None:
            return None
        try:
            return await pending
        except LearnFlowError:
            return None


class PostReactionToggle:
    """投稿へのリアクション.

    現在と同じ種別を選ぶと取り消し、別の種別を選ぶと1件を移し替える。
    件数は0未満にならない。
    """

    def __init__(
        self,
        controller: ReactionController,
        post_id: str,
        counts: dict[str, int] | None = None,
        user_reaction: ReactionType | str | None = None,
        sequencer: MutationSequencer | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._controller = controller
        self.post_id = post_id
        self.counts: dict[str, int] = {t.value: 0 for t in ReactionType}
        for key, value in (counts or {}).items():
            self.counts[key.lower()] = value
        self.user_reaction: str | None = _reaction_value(user_reaction)
        self._mutation = OptimisticMutation(sequencer, notifier)

    @property
    def total_count(self) -> int:
        return sum(self.counts.values())

    async def select(self, reaction_type: ReactionType | str) -> MutationResult:
        """リアクションを選択（同じ種別なら取り消し）."""
        selected = _reaction_value(reaction_type)
        previous_counts = dict(self.counts)
        previous_reaction = self.user_reaction
        removing = selected == self.user_reaction

        def apply() -> None:
            if self.user_reaction:
                current = self.counts.get(self.user_reaction, 0)
                self.counts[self.user_reaction] = max(0, current - 1)
            if removing:
                self.user_reaction = None
            else:
                self.counts[selected] = self.counts.get(selected, 0) + 1
                self.user_reaction = selected

        def revert() -> None:
            self.counts = previous_counts
            self.user_reaction = previous_reaction

        async def commit() -> None:
            if removing:
                await self._controller.delete_reaction(self.post_id)
            else:
                await self._controller.create_reaction(self.post_id, selected)

        return await self._mutation.run(
            key=f"post-reaction:{self.post_id}",
            apply=apply,
            revert=revert,
            commit=commit,
            error_message="Failed to update reaction",
        )


def _reaction_value(reaction_type: ReactionType | str | None) -> str | None:
    if reaction_type is None:
        return None
    if isinstance(reaction_type, ReactionType):
        return reaction_type.value
    return ReactionType(reaction_type.lower()).value
