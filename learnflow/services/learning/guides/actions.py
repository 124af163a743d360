"""ガイドアクション（Learningサービス /guides）.

全レスポンスは Learning エンベロープで包まれており、ServiceClient が展開する。
"""

from __future__ import annotations

from typing import Any

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.learning.guides.models import (
    CreateGuideRequest,
    PageRequest,
    SearchGuidesRequest,
    UpdateGuideRequest,
    UpdateGuideStatusRequest,
)


def _page_params(page: int | None, size: int | None, sort: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if page is not None:
        params["page"] = page
    if size is not None:
        params["size"] = size
    if sort:
        params["sort"] = sort
    return params


class GuideActions(BaseActions):
    """/guides へのHTTP呼び出し."""

    async def get_guides(
        self,
        page: int | None = None,
        size: int | None = None,
        sort: str | None = None,
    ) -> RequestResult:
        return await self._client.get("/guides", params=_page_params(page, size, sort))

    async def get_teachers_guides(
        self,
        teacher_id: str,
        page: int | None = None,
        size: int | None = None,
        sort: str | None = None,
    ) -> RequestResult:
        return await self._client.get(
            f"/guides/teachers/{teacher_id}", params=_page_params(page, size, sort)
        )

    async def search_guides(self, request: SearchGuidesRequest) -> RequestResult:
        return await self._client.get("/guides/search", params=request.to_payload())

    async def create_guide(self, request: CreateGuideRequest) -> RequestResult:
        return await self._client.post("/guides", request.to_payload())

    async def get_guide_by_id(self, guide_id: str) -> RequestResult:
        return await self._client.get(f"/guides/{guide_id}")

    async def update_guide(self, guide_id: str, request: UpdateGuideRequest) -> RequestResult:
        return await self._client.put(f"/guides/{guide_id}", request.to_payload())

    async def delete_guide(self, guide_id: str) -> RequestResult:
        return await self._client.delete(f"/guides/{guide_id}")

    async def update_guide_status(
        self, guide_id: str, request: UpdateGuideStatusRequest
    ) -> RequestResult:
        return await self._client.put(f"/guides/{guide_id}/status", request.to_payload())

    async def like_guide(self, guide_id: str) -> RequestResult:
        return await self._client.post(f"/guides/{guide_id}/likes")

    async def unlike_guide(self, guide_id: str) -> RequestResult:
        return await self._client.delete(f"/guides/{guide_id}/likes")

    # ページ

    async def get_guide_pages(self, guide_id: str) -> RequestResult:
        return await self._client.get(f"/guides/{guide_id}/pages")

    async def create_page(self, guide_id: str, request: PageRequest) -> RequestResult:
        return await self._client.post(f"/guides/{guide_id}/pages", request.to_payload())

    async def get_page_by_id(self, guide_id: str, page_id: str) -> RequestResult:
        return await self._client.get(f"/guides/{guide_id}/pages/{page_id}")

    async def update_page(
        self, guide_id: str, page_id: str, request: PageRequest
    ) -> RequestResult:
        return await self._client.put(
            f"/guides/{guide_id}/pages/{page_id}", request.to_payload()
        )

    async def delete_page(self, guide_id: str, page_id: str) -> RequestResult:
        return await self._client.delete(f"/guides/{guide_id}/pages/{page_id}")
