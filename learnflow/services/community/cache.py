"""リアクション・購読のTTLキャッシュ.

同じ投稿やコミュニティの件数を何度も取りにいかないためのインメモリキャッシュ。
変更系の操作後は該当エントリを無効化する。

使用例:
    >>> cache = ReactionCache(ttl_seconds=300)
    >>> cache.set_counts("post-1", counts)
    >>> cache.get_counts("post-1")
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from learnflow.services.community.models import Reaction, ReactionCount, Subscription


T = TypeVar("T")

# get() で「キャッシュなし」と「Noneをキャッシュ済み」を区別する
MISSING: Any = object()


class TTLCache(Generic[T]):
    """有効期限付きの辞書キャッシュ.

    Attributes:
        ttl_seconds: エントリの有効期間（秒）
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """初期化.

        Args:
            ttl_seconds: 有効期間（秒）
            clock: 現在時刻関数（テスト用に差し替え可能）
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, T]] = {}

    def get(self, key: str) -> T:
        """値を取得（期限切れ・未登録は MISSING）."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        stored_at, value = entry
        if self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return MISSING
        return value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = (self._clock(), value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def delete_suffix(self, suffix: str) -> None:
        """キー末尾が一致するエントリを削除."""
        for key in [k for k in self._entries if k.endswith(suffix)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def _pair_key(user_id: str, entity_id: str) -> str:
    return f"{user_id}:{entity_id}"


class ReactionCache:
    """投稿ごとのリアクション件数と、ユーザーのリアクションをキャッシュ."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._counts: TTLCache[ReactionCount] = TTLCache(ttl_seconds, clock)
        self._user_reactions: TTLCache[Reaction | None] = TTLCache(ttl_seconds, clock)

    def get_counts(self, post_id: str) -> ReactionCount | None:
        value = self._counts.get(post_id)
        return None if value is MISSING else value

    def set_counts(self, post_id: str, counts: ReactionCount) -> None:
        self._counts.set(post_id, counts)

    def get_user_reaction(self, user_id: str, post_id: str) -> Reaction | None | Any:
        """ユーザーのリアクションを取得.

        Returns:
            キャッシュ済みのリアクション（未リアクションならNone）、
            キャッシュがなければ MISSING
        """
        return self._user_reactions.get(_pair_key(user_id, post_id))

    def set_user_reaction(self, user_id: str, post_id: str, reaction: Reaction | None) -> None:
        self._user_reactions.set(_pair_key(user_id, post_id), reaction)

    def invalidate_post(self, post_id: str) -> None:
        """投稿の件数と全ユーザーのリアクションを無効化."""
        self._counts.delete(post_id)
        self._user_reactions.delete_suffix(f":{post_id}")

    def clear(self) -> None:
        self._counts.clear()
        self._user_reactions.clear()


class SubscriptionCache:
    """コミュニティのフォロワー数と、ユーザーの購読をキャッシュ."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._counts: TTLCache[int] = TTLCache(ttl_seconds, clock)
        self._user_subscriptions: TTLCache[Subscription | None] = TTLCache(ttl_seconds, clock)

    def get_count(self, community_id: str) -> int | None:
        value = self._counts.get(community_id)
        return None if value is MISSING else value

    def set_count(self, community_id: str, count: int) -> None:
        self._counts.set(community_id, count)

    def get_user_subscription(self, user_id: str, community_id: str) -> Subscription | None | Any:
        """ユーザーの購読を取得（キャッシュなしは MISSING）."""
        return self._user_subscriptions.get(_pair_key(user_id, community_id))

    def set_user_subscription(
        self, user_id: str, community_id: str, subscription: Subscription | None
    ) -> None:
        self._user_subscriptions.set(_pair_key(user_id, community_id), subscription)

    def invalidate_community(self, community_id: str) -> None:
        self._counts.delete(community_id)
        self._user_subscriptions.delete_suffix(f":{community_id}")

    def clear(self) -> None:
        self._counts.clear()
        self._user_subscriptions.clear()
