# -*- coding: utf-8 -*-
"""ガイドページマネージャー.

ガイドの順序付きページの作成・編集・保存・削除・並べ替えを扱う。
状態は GuideEditorStore に保持し、サーバーの応答（ガイド全体）を正とする。

編集状態:
    CLEAN → (編集) → DIRTY → (保存) → SAVING → CLEAN
    保存に失敗した場合は DIRTY に戻り、編集内容は残る。

並べ替え:
    ローカルで移動して 1..N に振り直し、すぐに公開してから、orderNumber が
    変わったページだけを更新する。1件でも失敗したら並べ替え前の
    スナップショットに戻し、成功済みのページは元の orderNumber に戻す。

使用例:
    >>> manager = GuidePagesManager(services.guides, confirm=ask_user)
    >>> await manager.load(guide_id)
    >>> manager.edit("# Intro\\n\\nHello")
    >>> await manager.save_page()
    >>> await manager.reorder(2, 0)
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from learnflow.core.constants import DEFAULT_PAGE_CONTENT
from learnflow.core.exceptions import LearnFlowError
from learnflow.editor.notifications import Notifier
from learnflow.editor.optimistic import MutationSequencer
from learnflow.state.actions import (
    EditorFlag,
    apply_guide_response,
    initialize,
    set_active_page,
    set_flag,
    set_pages,
)
from learnflow.state.selectors import (
    select_active_page,
    select_max_order_number,
    select_pages,
    select_related_challenges,
)
from learnflow.state.store import GuideEditorStore


if TYPE_CHECKING:
    from learnflow.services.learning.guides.controller import GuideController
    from learnflow.services.learning.guides.models import ChallengeRef, Guide, Page


logger = logging.getLogger(__name__)

UNSAVED_CHANGES_MESSAGE = "You have unsaved changes. Continue without saving?"
DELETE_PAGE_MESSAGE = "Are you sure you want to delete this page?"

LOAD_ERROR = "There was an error loading the guide. Please try again."
CREATE_ERROR = "There was an error creating the page. Please try again."
SAVE_ERROR = "There was an error saving the page. Please try again."
DELETE_ERROR = "There was an error deleting the page. Please try again."
REORDER_ERROR = "There was an error reordering the pages. Changes were reverted."

ConfirmCallback = Callable[[str], bool]


def _always_confirm(_message: str) -> bool:
    return True


class GuidePagesManager:
    """ガイドページマネージャー.

    Attributes:
        store: エディタ状態ストア
        guide_id: 編集中のガイドID
    """

    def __init__(
        self,
        controller: GuideController,
        store: GuideEditorStore | None = None,
        confirm: ConfirmCallback | None = None,
        notifier: Notifier | None = None,
        sequencer: MutationSequencer | None = None,
    ) -> None:
        """初期化.

        Args:
            controller: ガイドコントローラー
            store: 状態ストア（省略時は新規作成）
            confirm: 確認ダイアログ（メッセージを受け取り、続行ならTrue）
            notifier: 通知先
            sequencer: ページ保存のシーケンサー
        """
        self._controller = controller
        self.store = store or GuideEditorStore()
        self._confirm = confirm or _always_confirm
        self.notifier = notifier or Notifier()
        self._sequencer = sequencer or MutationSequencer()
        self.guide_id: str | None = None
        self._draft: str | None = None

    # =========================================================================
    # 状態
    # =========================================================================

    @property
    def pages(self) -> list[Page]:
        return self.store.get_state("pages", [])

    @property
    def active_page(self) -> Page | None:
        return select_active_page(self.store.get_state())

    @property
    def active_page_id(self) -> str | None:
        return self.store.get_state("active_page_id")

    @property
    def related_challenges(self) -> list[ChallengeRef]:
        """ガイドに紐づくチャレンジ（IDで重複排除済み）."""
        return select_related_challenges(self.store.get_state())

    @property
    def content(self) -> str:
        """エディタに表示する内容（下書き、なければ保存済み内容）."""
        if self._draft is not None:
            return self._draft
        page = self.active_page
        return page.content if page else ""

    @property
    def is_dirty(self) -> bool:
        """選択中ページに未保存の変更があるか."""
        page = self.active_page
        if page is None or self._draft is None:
            return False
        return self._draft != page.content

    @contextmanager
    def _flag(self, flag: EditorFlag) -> Iterator[None]:
        self.store.dispatch(set_flag(flag, True))
        try:
            yield
        finally:
            self.store.dispatch(set_flag(flag, False))

    def _require_guide_id(self) -> str:
        if self.guide_id is None:
            raise RuntimeError("No guide loaded")
        return self.guide_id

    def _confirm_discard(self) -> bool:
        if not self.is_dirty:
            return True
        return self._confirm(UNSAVED_CHANGES_MESSAGE)

    def _fail(self, message: str, operation: str, error: Exception) -> None:
        logger.error("%s 失敗 (guide=%s): %s", operation, self.guide_id, error)
        self.notifier.error(message)

    # =========================================================================
    # 操作
    # =========================================================================

    async def load(self, guide_id: str) -> bool:
        """ガイドを取得して初期化（先頭ページを選択）.

        Returns:
            成功した場合True
        """
        try:
            guide = await self._controller.get_guide_by_id(guide_id)
        except LearnFlowError as e:
            self._fail(LOAD_ERROR, "load", e)
            return False
        self.guide_id = guide_id
        self._draft = None
        self.store.dispatch(initialize(guide))
        return True

    def select_page(self, page_id: str) -> bool:
        """ページを選択.

        未保存の変更がある場合は破棄の確認を求め、拒否されたら何もしない。

        Returns:
            選択が変わった（または既に選択中）場合True
        """
        if page_id == self.active_page_id:
            return True
        if not any(p.id == page_id for p in self.pages):
            logger.debug("存在しないページ: %s", page_id)
            return False
        if not self._confirm_discard():
            return False
        self._draft = None
        self.store.dispatch(set_active_page(page_id))
        return True

    def edit(self, content: str) -> None:
        """選択中ページの下書きを更新."""
        self._draft = content

    async def create_page(self) -> Page | None:
        """末尾にページを作成して選択.

        Returns:
            作成されたページ（失敗・キャンセル時はNone）
        """
        guide_id = self._require_guide_id()
        if not self._confirm_discard():
            return None

        order_number = select_max_order_number(self.store.get_state()) + 1
        with self._flag(EditorFlag.IS_PAGE_OPERATION_PENDING):
            try:
                guide = await self._controller.create_page(
                    guide_id, DEFAULT_PAGE_CONTENT, order_number
                )
            except LearnFlowError as e:
                self._fail(CREATE_ERROR, "create_page", e)
                return None

            self.store.dispatch(apply_guide_response(guide))
            created = next(
                (p for p in select_pages(self.store.get_state()) if p.order_number == order_number),
                None,
            )
            if created is not None:
                self._draft = None
                self.store.dispatch(set_active_page(created.id))
            else:
                logger.warning("作成したページが応答に含まれていません (order=%d)", order_number)
            return created

    async def save_page(self) -> bool:
        """選択中ページの下書きを保存（変更がなければ何もしない）.

        Returns:
            保存を反映した場合True
        """
        guide_id = self._require_guide_id()
        page = self.active_page
        if page is None or not self.is_dirty:
            return False

        content = self._draft or ""
        key = f"page:{page.id}"
        sequence = self._sequencer.next(key)
        try:
            with self._flag(EditorFlag.IS_SAVING):
                try:
                    guide = await self._controller.update_page(
                        guide_id, page.id, content, page.order_number
                    )
                except LearnFlowError as e:
                    if self._sequencer.is_latest(key, sequence):
                        self._fail(SAVE_ERROR, "save_page", e)
                    return False

                if not self._sequencer.is_latest(key, sequence):
                    logger.debug("古い保存応答を破棄: %s", page.id)
                    return False

                self.store.dispatch(apply_guide_response(guide))
                if self._draft == content:
                    self._draft = None
                return True
        finally:
            self._sequencer.release(key, sequence)

    async def delete_page(self, page_id: str) -> bool:
        """ページを削除（確認必須）.

        選択中のページを削除した場合は、残りの先頭ページ（なければNone）を選択する。

        Returns:
            削除した場合True
        """
        guide_id = self._require_guide_id()
        if not self._confirm(DELETE_PAGE_MESSAGE):
            return False

        was_active = page_id == self.active_page_id
        with self._flag(EditorFlag.IS_PAGE_OPERATION_PENDING):
            try:
                guide = await self._controller.delete_page(guide_id, page_id)
            except LearnFlowError as e:
                self._fail(DELETE_ERROR, "delete_page", e)
                return False

            remaining = [p for p in guide.pages if p.id != page_id]
            self.store.dispatch(apply_guide_response(dataclasses.replace(guide, pages=remaining)))
            if was_active:
                self._draft = None
                pages = select_pages(self.store.get_state())
                self.store.dispatch(set_active_page(pages[0].id if pages else None))
            return True

    async def reorder(self, from_index: int, to_index: int) -> bool:
        """ページを並べ替え.

        Args:
            from_index: 移動元の位置
            to_index: 移動先の位置

        Returns:
            サーバーに反映できた場合True（範囲外・同位置はFalse）
        """
        guide_id = self._require_guide_id()
        original = self.pages
        count = len(original)
        if from_index == to_index or not (0 <= from_index < count and 0 <= to_index < count):
            return False

        moved = list(original)
        moved.insert(to_index, moved.pop(from_index))
        reordered = [
            dataclasses.replace(page, order_number=index)
            for index, page in enumerate(moved, start=1)
        ]
        old_orders = {page.id: page.order_number for page in original}
        changed = [p for p in reordered if p.order_number != old_orders[p.id]]

        snapshot_id = self.store.create_snapshot("reorder")
        try:
            with self._flag(EditorFlag.IS_REORDERING):
                self.store.dispatch(set_pages(reordered))
                results = await self._gather(
                    self._controller.update_page(guide_id, p.id, p.content, p.order_number)
                    for p in changed
                )
                failures = [r for r in results if isinstance(r, Exception)]
                if not failures:
                    await self._refresh(guide_id)
                    return True

                self.store.restore_snapshot(snapshot_id)
                self._fail(REORDER_ERROR, "reorder", failures[0])
                confirmed = [p for p, r in zip(changed, results) if not isinstance(r, Exception)]
                await self._compensate(guide_id, confirmed, old_orders)
                return False
        finally:
            self.store.discard_snapshot(snapshot_id)

    @staticmethod
    async def _gather(calls: Iterable[Awaitable[Any]]) -> list[Any]:
        results = await asyncio.gather(*calls, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
        return list(results)

    async def _compensate(
        self, guide_id: str, confirmed: list[Page], old_orders: dict[str, int]
    ) -> None:
        """成功済みのページを元の orderNumber に戻す（失敗したらガイドを再取得）."""
        if not confirmed:
            return
        results = await self._gather(
            self._controller.update_page(guide_id, p.id, p.content, old_orders[p.id])
            for p in confirmed
        )
        errors = [r for r in results if isinstance(r, Exception)]
        if errors:
            logger.error("並べ替えの巻き戻しに失敗、ガイドを再取得します: %s", errors[0])
            await self._refresh(guide_id)

    async def _refresh(self, guide_id: str) -> None:
        """サーバーのガイドを取得して反映（失敗時は現在の状態を維持）."""
        try:
            guide: Guide = await self._controller.get_guide_by_id(guide_id)
        except LearnFlowError as e:
            logger.warning("ガイドの再取得に失敗、ローカルの状態を維持: %s", e)
            return
        self.store.dispatch(apply_guide_response(guide))

    def close(self) -> None:
        """エディタを閉じて状態をリセット."""
        self._draft = None
        self.guide_id = None
        self.store.reset()
