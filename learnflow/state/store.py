# -*- coding: utf-8 -*-
"""ガイドエディタ状態ストア.

Redux風の状態管理でエディタの状態（ガイド、ページ、選択中ページ、
操作中フラグ）を保持する。ストアはモジュールグローバルではなく、
ページマネージャーごとに生成され、close() でリセットされる。

不変条件:
- pages は ID で重複排除され、orderNumber 昇順に並ぶ
- active_page_id は存在するページのIDか None

使用例:
    >>> from learnflow.state.store import GuideEditorStore
    >>> from learnflow.state.actions import initialize
    >>>
    >>> store = GuideEditorStore()
    >>> unsubscribe = store.subscribe(lambda state: print(state["active_page_id"]))
    >>> store.dispatch(initialize(guide))
    >>> store.get_state("flags.is_saving")
    False
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from learnflow.state.actions import Action, ActionType, EditorFlag
from learnflow.state.actions import restore_snapshot as restore_snapshot_action
from learnflow.state.selectors import select


if TYPE_CHECKING:
    from learnflow.services.learning.guides.models import ChallengeRef, Guide, Page


logger = logging.getLogger(__name__)


@dataclass
class StateSnapshot:
    """状態スナップショット.

    Attributes:
        id: スナップショットID
        state: 状態のコピー
        timestamp: タイムスタンプ
        label: ラベル
    """

    id: str = field(default_factory=lambda: f"snap-{uuid.uuid4().hex[:8]}")
    state: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    label: str = ""


@dataclass
class StateSubscription:
    """状態購読.

    Attributes:
        id: 購読ID
        callback: コールバック関数
        selector: セレクター（特定パスのみ監視）
    """

    id: str = field(default_factory=lambda: f"sub-{uuid.uuid4().hex[:8]}")
    callback: Callable[[dict[str, Any]], Any] = field(default=lambda _: None)
    selector: str | None = None


def normalize_pages(pages: list[Page]) -> list[Page]:
    """ページをIDで重複排除（後勝ち）し、orderNumber 昇順に並べる."""
    by_id: dict[str, Page] = {}
    for page in pages:
        by_id[page.id] = page
    return sorted(by_id.values(), key=lambda p: p.order_number)


def _unique_challenges(challenges: list[ChallengeRef]) -> list[ChallengeRef]:
    seen: set[str] = set()
    unique: list[ChallengeRef] = []
    for challenge in challenges:
        if challenge.id not in seen:
            seen.add(challenge.id)
            unique.append(challenge)
    return unique


class GuideEditorStore:
    """ガイドエディタ状態ストア.

    主な機能:
    - アクションによる状態変更
    - サブスクリプションによる変更通知
    - スナップショットと復元（並べ替え失敗時のロールバック用）

    Example:
        >>> store = GuideEditorStore()
        >>> snapshot_id = store.create_snapshot("before-reorder")
        >>> store.dispatch(set_pages(reordered))
        >>> store.restore_snapshot(snapshot_id)
    """

    def __init__(self, max_history: int = 100) -> None:
        """初期化.

        Args:
            max_history: 最大履歴数
        """
        self._state: dict[str, Any] = self._create_initial_state()
        self._subscriptions: dict[str, StateSubscription] = {}
        self._action_history: list[Action] = []
        self._snapshots: dict[str, StateSnapshot] = {}
        self._max_history = max_history
        self._lock = threading.RLock()

    @staticmethod
    def _create_initial_state() -> dict[str, Any]:
        return {
            "guide": None,
            "pages": [],
            "related_challenges": [],
            "active_page_id": None,
            "flags": {flag.value: False for flag in EditorFlag},
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "version": 1,
            },
        }

    def get_state(self, path: str | None = None, default: Any = None) -> Any:
        """状態を取得.

        Args:
            path: ドット区切りのパス（Noneの場合は全状態）
            default: デフォルト値

        Returns:
            状態（のコピー）
        """
        with self._lock:
            if path is None:
                return copy.deepcopy(self._state)
            return copy.deepcopy(select(self._state, path, default))

    def dispatch(self, action: Action) -> None:
        """アクションをディスパッチ.

        Args:
            action: アクション
        """
        with self._lock:
            logger.debug("ディスパッチ: %s", action.type.value)

            self._reduce(action)

            self._action_history.append(action)
            if len(self._action_history) > self._max_history:
                self._action_history.pop(0)

            self._notify_subscribers()

    def _reduce(self, action: Action) -> None:
        """リデューサー - アクションに基づいて状態を更新."""
        payload = action.payload

        if action.type == ActionType.INITIALIZE:
            guide: Guide = payload["guide"]
            pages = normalize_pages(guide.pages)
            self._state["guide"] = guide
            self._state["pages"] = pages
            self._state["related_challenges"] = _unique_challenges(guide.challenges)
            self._state["active_page_id"] = pages[0].id if pages else None

        elif action.type == ActionType.APPLY_GUIDE_RESPONSE:
            guide = payload["guide"]
            self._state["guide"] = guide
            self._state["related_challenges"] = _unique_challenges(guide.challenges)
            self._set_pages(guide.pages)

        elif action.type == ActionType.SET_PAGES:
            self._set_pages(payload.get("pages", []))

        elif action.type == ActionType.SET_ACTIVE_PAGE:
            page_id = payload.get("page_id")
            if page_id is None:
                self._state["active_page_id"] = None
            elif any(p.id == page_id for p in self._state["pages"]):
                self._state["active_page_id"] = page_id
            else:
                logger.debug("存在しないページは選択しない: %s", page_id)

        elif action.type == ActionType.SET_CHALLENGES:
            self._state["related_challenges"] = _unique_challenges(
                payload.get("challenges", [])
            )

        elif action.type == ActionType.SET_FLAG:
            flag = payload.get("flag")
            if flag in self._state["flags"]:
                self._state["flags"][flag] = bool(payload.get("value"))

        elif action.type == ActionType.RESTORE_SNAPSHOT:
            snapshot = self._snapshots.get(payload.get("snapshot_id", ""))
            if snapshot:
                version = self._state["metadata"]["version"]
                self._state = copy.deepcopy(snapshot.state)
                self._state["metadata"]["version"] = version
                logger.info("スナップショットを復元: %s", snapshot.id)

        elif action.type == ActionType.RESET:
            self._state = self._create_initial_state()

        self._state["metadata"]["version"] += 1
        self._state["metadata"]["last_action"] = action.type.value
        self._state["metadata"]["last_updated"] = datetime.now().isoformat()

    def _set_pages(self, pages: list[Page]) -> None:
        """ページを置き換え、選択中ページを維持（消えた場合は先頭ページ）."""
        normalized = normalize_pages(pages)
        self._state["pages"] = normalized
        active_id = self._state["active_page_id"]
        if not any(p.id == active_id for p in normalized):
            self._state["active_page_id"] = normalized[0].id if normalized else None

    def _notify_subscribers(self) -> None:
        for subscription in list(self._subscriptions.values()):
            try:
                if subscription.selector:
                    value = select(self._state, subscription.selector)
                    subscription.callback({subscription.selector: copy.deepcopy(value)})
                else:
                    subscription.callback(copy.deepcopy(self._state))
            except Exception as e:
                logger.error("購読者への通知でエラー: %s", e)

    def subscribe(
        self,
        callback: Callable[[dict[str, Any]], Any],
        selector: str | None = None,
    ) -> Callable[[], None]:
        """状態変更を購読.

        Args:
            callback: コールバック関数
            selector: 監視するパス（Noneの場合は全状態）

        Returns:
            購読解除関数
        """
        subscription = StateSubscription(callback=callback, selector=selector)

        with self._lock:
            self._subscriptions[subscription.id] = subscription

        def unsubscribe() -> None:
            with self._lock:
                self._subscriptions.pop(subscription.id, None)

        return unsubscribe

    def create_snapshot(self, label: str = "") -> str:
        """現在の状態のスナップショットを作成.

        Returns:
            スナップショットID
        """
        with self._lock:
            snapshot = StateSnapshot(state=copy.deepcopy(self._state), label=label)
            self._snapshots[snapshot.id] = snapshot
            return snapshot.id

    def restore_snapshot(self, snapshot_id: str) -> bool:
        """スナップショットから状態を復元し、購読者に通知.

        Returns:
            成功したかどうか
        """
        with self._lock:
            if snapshot_id not in self._snapshots:
                return False
            self.dispatch(restore_snapshot_action(snapshot_id))
            return True

    def discard_snapshot(self, snapshot_id: str) -> None:
        with self._lock:
            self._snapshots.pop(snapshot_id, None)

    def get_action_history(self, limit: int = 50) -> list[Action]:
        with self._lock:
            return self._action_history[-limit:]

    def reset(self) -> None:
        """状態・履歴・スナップショットをリセット."""
        with self._lock:
            self._state = self._create_initial_state()
            self._action_history.clear()
            self._snapshots.clear()
            logger.info("エディタ状態をリセットしました")

    def get_stats(self) -> dict[str, Any]:
        """統計情報を取得."""
        with self._lock:
            return {
                "state_version": self._state["metadata"]["version"],
                "page_count": len(self._state["pages"]),
                "subscription_count": len(self._subscriptions),
                "action_history_count": len(self._action_history),
                "snapshot_count": len(self._snapshots),
            }


__all__ = [
    "GuideEditorStore",
    "StateSnapshot",
    "StateSubscription",
    "normalize_pages",
]
