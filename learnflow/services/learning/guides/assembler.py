"""ガイドアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.services.base import Paginated, to_paginated, validate_wire, validate_wire_list
from learnflow.services.learning.guides.models import (
    ChallengeRef,
    Guide,
    GuideResponse,
    Page,
    PageResponse,
    TopicRef,
)


def _to_page(response: PageResponse) -> Page:
    return Page(
        id=response.id,
        content=response.content,
        order_number=response.order_number,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def _from_response(response: GuideResponse) -> Guide:
    pages = sorted((_to_page(p) for p in response.pages), key=lambda p: p.order_number)
    return Guide(
        id=response.id,
        title=response.title,
        description=response.description,
        cover_image=response.cover_image,
        status=response.status,
        likes_count=response.likes_count,
        liked_by_requester=response.liked_by_requester,
        pages_count=response.pages_count or len(pages),
        author_ids=list(response.author_ids),
        topics=[TopicRef(id=t.id, name=t.name) for t in response.topics],
        pages=pages,
        challenges=[
            ChallengeRef(id=c.id, name=c.name, language=c.language or "Unknown")
            for c in response.challenges
        ],
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def to_guide(payload: Any) -> Guide:
    """ペイロードをGuideに変換（ページは orderNumber 昇順）."""
    return _from_response(validate_wire(GuideResponse, payload, "guide"))


def to_guides(payload: Any) -> list[Guide]:
    """配列ペイロードをGuideリストに変換."""
    return [_from_response(r) for r in validate_wire_list(GuideResponse, payload, "guide")]


def to_guide_page(payload: Any) -> Paginated[Guide]:
    """ページネーション付きペイロードを変換."""
    return to_paginated(payload, to_guides, "guide")


def to_pages(payload: Any) -> list[Page]:
    """ページ配列、またはページを含むガイドをページリストに変換.

    GET /guides/{id}/pages はガイド全体を返すことがある。
    """
    if isinstance(payload, dict):
        return to_guide(payload).pages
    pages = [_to_page(p) for p in validate_wire_list(PageResponse, payload, "page")]
    return sorted(pages, key=lambda p: p.order_number)


def to_page(payload: Any) -> Page:
    """ペイロードをPageに変換."""
    return _to_page(validate_wire(PageResponse, payload, "page"))
