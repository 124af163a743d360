"""楽観的更新.

ローカル状態を先に更新し、サーバー呼び出しが失敗したら元に戻す。
同じエンティティへの操作はシーケンス番号で順序付けし、最新でない操作の
完了（成功・失敗とも）は破棄する。最後のユーザー操作が勝つ。

使用例:
    >>> mutation = OptimisticMutation(sequencer, notifier)
    >>> result = await mutation.run(
    ...     key=f"guide-like:{guide_id}",
    ...     apply=lambda: set_liked(True),
    ...     revert=lambda: set_liked(False),
    ...     commit=lambda: controller.like_guide(guide_id),
    ...     error_message="Failed to like guide",
    ... )
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from learnflow.core.exceptions import LearnFlowError
from learnflow.editor.notifications import Notifier


logger = logging.getLogger(__name__)


class MutationSequencer:
    """エンティティごとの最新シーケンス番号.

    番号は全エンティティで共通の単調増加カウンタから発行する。
    最新の操作が完了したキーは release() で破棄する。番号は再利用されないため、
    破棄後に完了した古い操作も最新とは判定されない。
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def next(self, key: str) -> int:
        """新しいシーケンス番号を発行（これが最新になる）."""
        sequence = next(self._counter)
        self._latest[key] = sequence
        return sequence

    def is_latest(self, key: str, sequence: int) -> bool:
        return self._latest.get(key) == sequence

    def latest(self, key: str) -> int:
        return self._latest.get(key, 0)

    def release(self, key: str, sequence: int) -> None:
        """操作の完了を記録（最新の操作ならキーを破棄）."""
        if self._latest.get(key) == sequence:
            del self._latest[key]


class MutationOutcome(str, Enum):
    """楽観的更新の結果."""

    COMMITTED = "committed"
    REVERTED = "reverted"
    STALE = "stale"


@dataclass
class MutationResult:
    outcome: MutationOutcome
    value: Any = None
    error: Exception | None = None

    @property
    def committed(self) -> bool:
        return self.outcome == MutationOutcome.COMMITTED


class OptimisticMutation:
    """楽観的更新ヘルパー.

    いいね・フォロー・リアクションで共通に使う。自動リトライはしない。
    """

    def __init__(
        self,
        sequencer: MutationSequencer | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """初期化.

        Args:
            sequencer: シーケンサー（同じエンティティを扱う操作間で共有する）
            notifier: 失敗を伝える通知先
        """
        self.sequencer = sequencer or MutationSequencer()
        self.notifier = notifier or Notifier()

    async def run(
        self,
        key: str,
        apply: Callable[[], None],
        revert: Callable[[], None],
        commit: Callable[[], Awaitable[Any]],
        error_message: str,
        success_message: str | None = None,
    ) -> MutationResult:
        """ローカル更新 → サーバー反映 → 失敗時は元に戻す.

        Args:
            key: エンティティキー
            apply: ローカル状態を更新する関数
            revert: apply を取り消す関数
            commit: サーバー呼び出し
            error_message: 失敗時の通知メッセージ
            success_message: 成功時の通知メッセージ

        Returns:
            MutationResult
        """
        sequence = self.sequencer.next(key)
        apply()
        try:
            return await self._settle(
                key, sequence, revert, commit, error_message, success_message
            )
        finally:
            self.sequencer.release(key, sequence)

    async def _settle(
        self,
        key: str,
        sequence: int,
        revert: Callable[[], None],
        commit: Callable[[], Awaitable[Any]],
        error_message: str,
        success_message: str | None,
    ) -> MutationResult:
        try:
            value = await commit()
        except LearnFlowError as e:
            if not self.sequencer.is_latest(key, sequence):
                logger.debug("古い操作の失敗を破棄: %s #%d", key, sequence)
                return MutationResult(MutationOutcome.STALE, error=e)
            revert()
            logger.warning("楽観的更新を取り消し: %s (%s)", key, e)
            self.notifier.error(error_message)
            return MutationResult(MutationOutcome.REVERTED, error=e)

        if not self.sequencer.is_latest(key, sequence):
            logger.debug("古い操作の完了を破棄: %s #%d", key, sequence)
            return MutationResult(MutationOutcome.STALE, value=value)

        if success_message:
            self.notifier.success(success_message)
        return MutationResult(MutationOutcome.COMMITTED, value=value)
