"""ガイドのワイヤーモデルとエンティティ.

ガイドは順序付きページ（orderNumber は1始まりで連番）を持つ。
ページ操作のレスポンスはページ単体ではなく、ガイド全体を返す。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import Field

from learnflow.core.constants import GuideStatus
from learnflow.services.base import RequestModel, WireModel


# =============================================================================
# レスポンス
# =============================================================================


class TopicRefResponse(WireModel):
    id: str
    name: str


class ChallengeRefResponse(WireModel):
    id: str
    name: str
    language: str | None = None


class PageResponse(WireModel):
    """ガイドページ."""

    id: str
    content: str = ""
    order_number: int = Field(ge=1)
    created_at: str | None = None
    updated_at: str | None = None


class GuideResponse(WireModel):
    """ガイド."""

    id: str
    title: str
    description: str = ""
    cover_image: str | None = None
    status: GuideStatus = GuideStatus.DRAFT
    likes_count: int = Field(default=0, ge=0)
    liked_by_requester: bool = False
    pages_count: int = 0
    author_ids: list[str] = Field(default_factory=list)
    topics: list[TopicRefResponse] = Field(default_factory=list)
    pages: list[PageResponse] = Field(default_factory=list)
    challenges: list[ChallengeRefResponse] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


# =============================================================================
# リクエスト
# =============================================================================


class CreateGuideRequest(RequestModel):
    title: str = Field(min_length=1)
    description: str = ""
    cover_image: str = ""
    author_ids: list[str] = Field(default_factory=list)
    topic_ids: list[str] = Field(default_factory=list)


class UpdateGuideRequest(RequestModel):
    title: str = Field(min_length=1)
    description: str = ""
    cover_image: str = ""
    topic_ids: list[str] = Field(default_factory=list)


class UpdateGuideStatusRequest(RequestModel):
    status: GuideStatus


class PageRequest(RequestModel):
    """ページ作成・更新ボディ."""

    content: str
    order_number: int = Field(ge=1)


class SearchGuidesRequest(RequestModel):
    """ガイド検索条件.

    likes は最小いいね数。
    """

    title: str | None = None
    author_ids: list[str] | None = None
    topic_ids: list[str] | None = None
    likes: int | None = Field(default=None, ge=0)
    page: int | None = Field(default=None, ge=0)
    size: int | None = Field(default=None, gt=0)


# =============================================================================
# エンティティ
# =============================================================================


@dataclass
class TopicRef:
    id: str
    name: str


@dataclass
class ChallengeRef:
    id: str
    name: str
    language: str = "Unknown"


@dataclass
class Page:
    """ガイドページ."""

    id: str
    content: str
    order_number: int
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class Guide:
    """ガイド.

    pages は orderNumber 昇順で保持する。
    """

    id: str
    title: str
    description: str = ""
    cover_image: str | None = None
    status: GuideStatus = GuideStatus.DRAFT
    likes_count: int = 0
    liked_by_requester: bool = False
    pages_count: int = 0
    author_ids: list[str] = field(default_factory=list)
    topics: list[TopicRef] = field(default_factory=list)
    pages: list[Page] = field(default_factory=list)
    challenges: list[ChallengeRef] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
