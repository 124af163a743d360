"""ガイドエディタ.

基本情報（タイトル・説明・カバー画像・トピック）の更新と公開を扱い、
ページ操作は GuidePagesManager に委譲する。
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from learnflow.core.constants import GuideStatus
from learnflow.core.exceptions import LearnFlowError
from learnflow.editor.notifications import Notifier
from learnflow.editor.page_manager import ConfirmCallback, GuidePagesManager
from learnflow.services.learning.guides.models import UpdateGuideRequest
from learnflow.state.actions import EditorFlag, apply_guide_response, set_flag
from learnflow.state.selectors import select_guide, select_pages


if TYPE_CHECKING:
    from learnflow.services.learning.guides.controller import GuideController
    from learnflow.services.learning.guides.models import Guide


logger = logging.getLogger(__name__)

UPDATE_SUCCESS = "Guide updated successfully!"
UPDATE_ERROR = "Error updating guide. Please try again."
PUBLISH_SUCCESS = "Guide published successfully!"
PUBLISH_ERROR = "Error publishing guide. Please try again."


class GuideEditor:
    """ガイドエディタ.

    Attributes:
        pages: ページマネージャー
        store: エディタ状態ストア（ページマネージャーと共有）
    """

    def __init__(
        self,
        controller: GuideController,
        confirm: ConfirmCallback | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """初期化.

        Args:
            controller: ガイドコントローラー
            confirm: 確認ダイアログ
            notifier: 通知先
        """
        self._controller = controller
        self.notifier = notifier or Notifier()
        self.pages = GuidePagesManager(controller, confirm=confirm, notifier=self.notifier)
        self.store = self.pages.store

    @property
    def guide(self) -> Guide | None:
        return select_guide(self.store.get_state())

    async def load(self, guide_id: str) -> bool:
        return await self.pages.load(guide_id)

    def _apply_keeping_pages(self, guide: Guide) -> None:
        # 基本情報の更新応答にページが含まれない場合は現在のページを維持
        if not guide.pages:
            guide = dataclasses.replace(guide, pages=select_pages(self.store.get_state()))
        self.store.dispatch(apply_guide_response(guide))

    async def update_basic_info(
        self,
        title: str,
        description: str = "",
        cover_image: str = "",
        topic_ids: list[str] | None = None,
    ) -> bool:
        """基本情報を更新.

        Returns:
            成功した場合True
        """
        guide_id = self.pages.guide_id
        if guide_id is None:
            raise RuntimeError("No guide loaded")

        request = UpdateGuideRequest(
            title=title,
            description=description,
            cover_image=cover_image,
            topic_ids=topic_ids or [],
        )
        self.store.dispatch(set_flag(EditorFlag.IS_SAVING, True))
        try:
            guide = await self._controller.update_guide(guide_id, request)
        except LearnFlowError as e:
            logger.error("ガイド更新失敗 (guide=%s): %s", guide_id, e)
            self.notifier.error(UPDATE_ERROR)
            return False
        finally:
            self.store.dispatch(set_flag(EditorFlag.IS_SAVING, False))

        self._apply_keeping_pages(guide)
        self.notifier.success(UPDATE_SUCCESS)
        return True

    async def publish(self) -> bool:
        """ガイドを公開.

        Returns:
            成功した場合True
        """
        guide_id = self.pages.guide_id
        if guide_id is None:
            raise RuntimeError("No guide loaded")

        self.store.dispatch(set_flag(EditorFlag.IS_PUBLISHING, True))
        try:
            guide = await self._controller.update_guide_status(guide_id, GuideStatus.PUBLISHED)
        except LearnFlowError as e:
            logger.error("ガイド公開失敗 (guide=%s): %s", guide_id, e)
            self.notifier.error(PUBLISH_ERROR)
            return False
        finally:
            self.store.dispatch(set_flag(EditorFlag.IS_PUBLISHING, False))

        self._apply_keeping_pages(guide)
        self.notifier.success(PUBLISH_SUCCESS)
        return True

    def close(self) -> None:
        """エディタを閉じて状態をリセット."""
        self.pages.close()
