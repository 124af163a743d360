"""自動保存.

最後の変更から一定時間（設定 autosave_delay_seconds、既定3秒）入力がなければ保存する。
前回保存した内容と同じなら保存しない。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from learnflow.config import get_settings
from learnflow.core.exceptions import LearnFlowError


logger = logging.getLogger(__name__)


class AutoSaveStatus(str, Enum):
    """自動保存の状態."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class AutoSaver:
    """デバウンス付き自動保存.

    Example:
        >>> saver = AutoSaver(lambda code: controller.update_solution(sid, code), delay=3.0)
        >>> saver.schedule("print('hi')")
        >>> await saver.save_now()
        >>> saver.close()
    """

    def __init__(
        self,
        save: Callable[[str], Awaitable[Any]],
        delay: float | None = None,
        initial_content: str = "",
    ) -> None:
        """初期化.

        Args:
            save: 保存処理
            delay: 待機時間（秒、省略時は設定の autosave_delay_seconds）
            initial_content: 保存済みとみなす初期内容
        """
        self._save = save
        self._delay = delay if delay is not None else get_settings().autosave_delay_seconds
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._pending: str | None = None
        self.last_saved_content = initial_content
        self.status = AutoSaveStatus.IDLE
        self.last_error: Exception | None = None

    @property
    def has_pending(self) -> bool:
        """未保存の変更があるか."""
        return self._pending is not None and self._pending != self.last_saved_content

    def schedule(self, content: str) -> None:
        """変更を記録し、待機後に保存する（待機中のタイマーはやり直し）."""
        self._pending = content
        self._cancel_timer()
        if content == self.last_saved_content:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._background_save())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _background_save(self) -> None:
        try:
            await self._save_pending()
        except LearnFlowError as e:
            logger.warning("自動保存に失敗: %s", e)

    async def _save_pending(self) -> bool:
        content = self._pending
        if content is None or content == self.last_saved_content:
            return False
        self.status = AutoSaveStatus.SAVING
        try:
            await self._save(content)
        except LearnFlowError as e:
            self.status = AutoSaveStatus.ERROR
            self.last_error = e
            raise
        self.last_saved_content = content
        self.last_error = None
        self.status = AutoSaveStatus.SAVED
        return True

    async def save_now(self, content: str | None = None) -> bool:
        """待機中のタイマーを取り消して即座に保存.

        Args:
            content: 保存内容（省略時は最後に schedule した内容）

        Returns:
            保存した場合True（変更がなければFalse）

        Raises:
            LearnFlowError: 保存処理の失敗
        """
        if content is not None:
            self._pending = content
        self._cancel_timer()
        return await self._save_pending()

    async def wait(self) -> None:
        """実行中の自動保存の完了を待つ."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def close(self) -> None:
        """待機中・実行中の保存を取り消す."""
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
