"""デバウンス付き検索.

入力が止まってから一定時間（設定 search_debounce_seconds、既定300ミリ秒）後に、最新のクエリだけを送る。
実行中の検索は取り消さないが、結果にはシーケンス番号を付け、
最新クエリの結果だけを公開する。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from learnflow.config import get_settings
from learnflow.core.exceptions import LearnFlowError
from learnflow.editor.optimistic import MutationSequencer


logger = logging.getLogger(__name__)

T = TypeVar("T")

SEARCH_KEY = "search"


class DebouncedSearch(Generic[T]):
    """デバウンス付き検索.

    Example:
        >>> search = DebouncedSearch(topics.search_topics_by_name, delay=0.3)
        >>> search.update("Pyth")
        >>> await search.wait()
        >>> search.results
    """

    def __init__(
        self,
        search: Callable[[str], Awaitable[list[T]]],
        on_results: Callable[[list[T]], None] | None = None,
        delay: float | None = None,
    ) -> None:
        """初期化.

        Args:
            search: 検索処理
            on_results: 結果公開時のコールバック
            delay: 待機時間（秒、省略時は設定の search_debounce_seconds）
        """
        self._search = search
        self._on_results = on_results
        self._delay = delay if delay is not None else get_settings().search_debounce_seconds
        self._sequencer = MutationSequencer()
        self._timer: asyncio.TimerHandle | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self.query = ""
        self.results: list[T] = []
        self.error: Exception | None = None
        self.sent_queries: list[str] = []

    def update(self, query: str) -> None:
        """クエリを更新.

        空白のみのクエリは送らず、結果を空にする。
        """
        self.query = query
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if not query.strip():
            self._sequencer.next(SEARCH_KEY)
            self._publish([])
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire, query)

    def _fire(self, query: str) -> None:
        self._timer = None
        sequence = self._sequencer.next(SEARCH_KEY)
        task = asyncio.ensure_future(self._run(query, sequence))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, query: str, sequence: int) -> None:
        self.sent_queries.append(query)
        try:
            results = await self._search(query)
        except LearnFlowError as e:
            if self._sequencer.is_latest(SEARCH_KEY, sequence):
                logger.warning("検索に失敗: %r (%s)", query, e)
                self.error = e
            return

        if not self._sequencer.is_latest(SEARCH_KEY, sequence):
            logger.debug("古い検索結果を破棄: %r", query)
            return
        self.error = None
        self._publish(results)

    def _publish(self, results: list[T]) -> None:
        self.results = results
        if self._on_results is not None:
            self._on_results(results)

    @property
    def pending(self) -> bool:
        return self._timer is not None or bool(self._in_flight)

    async def wait(self) -> None:
        """待機中・実行中の検索がすべて終わるまで待つ."""
        while self.pending:
            if self._in_flight:
                await asyncio.gather(*self._in_flight, return_exceptions=True)
            else:
                await asyncio.sleep(self._delay / 2 or 0.001)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for task in list(self._in_flight):
            task.cancel()
