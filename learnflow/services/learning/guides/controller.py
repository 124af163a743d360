"""ガイドコントローラー.

ガイド本体とページのCRUD。ページの作成・更新・削除はガイド全体を返すため、
呼び出し側はレスポンスをそのまま状態に反映できる。
"""

from __future__ import annotations

from learnflow.core.constants import GuideStatus
from learnflow.core.exceptions import GuideError
from learnflow.services.base import BaseController, Paginated
from learnflow.services.learning.guides.actions import GuideActions
from learnflow.services.learning.guides.assembler import (
    to_guide,
    to_guide_page,
    to_page,
    to_pages,
)
from learnflow.services.learning.guides.models import (
    CreateGuideRequest,
    Guide,
    Page,
    PageRequest,
    SearchGuidesRequest,
    UpdateGuideRequest,
    UpdateGuideStatusRequest,
)


class GuideController(BaseController):
    """ガイドとページの操作.

    Raises:
        GuideError: サービスが2xx以外を返した場合
    """

    error_class = GuideError

    def __init__(self, actions: GuideActions) -> None:
        """初期化.

        Args:
            actions: ガイドアクション
        """
        self._actions = actions

    async def get_all_guides(self) -> list[Guide]:
        """全ガイドを取得（先頭ページの内容）."""
        return (await self.get_guides_paginated()).items

    async def get_guides_paginated(
        self,
        page: int | None = None,
        size: int | None = None,
        sort: str | None = None,
    ) -> Paginated[Guide]:
        result = await self._actions.get_guides(page, size, sort)
        return to_guide_page(self._unwrap(result, "get_guides_paginated"))

    async def get_teachers_guides(
        self,
        teacher_id: str,
        page: int | None = None,
        size: int | None = None,
    ) -> Paginated[Guide]:
        result = await self._actions.get_teachers_guides(teacher_id, page, size)
        return to_guide_page(self._unwrap(result, "get_teachers_guides"))

    async def search_guides(self, request: SearchGuidesRequest) -> Paginated[Guide]:
        """条件でガイドを検索.

        Args:
            request: タイトル・著者・トピック・最小いいね数

        Returns:
            一致したガイド
        """
        result = await self._actions.search_guides(request)
        return to_guide_page(self._unwrap(result, "search_guides"))

    async def create_guide(self, request: CreateGuideRequest) -> Guide:
        result = await self._actions.create_guide(request)
        return to_guide(self._unwrap(result, "create_guide"))

    async def get_guide_by_id(self, guide_id: str) -> Guide:
        result = await self._actions.get_guide_by_id(guide_id)
        return to_guide(self._unwrap(result, "get_guide_by_id"))

    async def update_guide(self, guide_id: str, request: UpdateGuideRequest) -> Guide:
        result = await self._actions.update_guide(guide_id, request)
        return to_guide(self._unwrap(result, "update_guide"))

    async def delete_guide(self, guide_id: str) -> None:
        result = await self._actions.delete_guide(guide_id)
        self._unwrap(result, "delete_guide")

    async def update_guide_status(self, guide_id: str, status: GuideStatus) -> Guide:
        result = await self._actions.update_guide_status(
            guide_id, UpdateGuideStatusRequest(status=status)
        )
        return to_guide(self._unwrap(result, "update_guide_status"))

    async def like_guide(self, guide_id: str) -> None:
        result = await self._actions.like_guide(guide_id)
        self._unwrap(result, "like_guide")

    async def unlike_guide(self, guide_id: str) -> None:
        result = await self._actions.unlike_guide(guide_id)
        self._unwrap(result, "unlike_guide")

    # =========================================================================
    # ページ
    # =========================================================================

    async def get_guide_pages(self, guide_id: str) -> list[Page]:
        result = await self._actions.get_guide_pages(guide_id)
        return to_pages(self._unwrap(result, "get_guide_pages"))

    async def create_page(self, guide_id: str, content: str, order_number: int) -> Guide:
        """ページを作成.

        Args:
            guide_id: ガイドID
            content: Markdown本文
            order_number: 表示順（1始まり）

        Returns:
            作成後のガイド全体
        """
        result = await self._actions.create_page(
            guide_id, PageRequest(content=content, order_number=order_number)
        )
        return to_guide(self._unwrap(result, "create_page"))

    async def get_page_by_id(self, guide_id: str, page_id: str) -> Page:
        result = await self._actions.get_page_by_id(guide_id, page_id)
        data = self._unwrap(result, "get_page_by_id")
        if isinstance(data, dict) and "pages" in data:
            for page in to_guide(data).pages:
                if page.id == page_id:
                    return page
            raise GuideError(f"Page not found: {page_id}", 404, result)
        return to_page(data)

    async def update_page(
        self, guide_id: str, page_id: str, content: str, order_number: int
    ) -> Guide:
        result = await self._actions.update_page(
            guide_id, page_id, PageRequest(content=content, order_number=order_number)
        )
        return to_guide(self._unwrap(result, "update_page"))

    async def delete_page(self, guide_id: str, page_id: str) -> Guide:
        result = await self._actions.delete_page(guide_id, page_id)
        return to_guide(self._unwrap(result, "delete_page"))
