"""トピックのワイヤーモデルとエンティティ."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from learnflow.services.base import RequestModel, WireModel


class TopicResponse(WireModel):
    """GET /topics 系のレスポンス要素."""

    id: str
    name: str
    created_at: str | None = None
    updated_at: str | None = None


class TopicRequest(RequestModel):
    """POST /topics, PUT /topics/{id} のボディ."""

    name: str = Field(min_length=1, max_length=100)


@dataclass
class Topic:
    """トピック."""

    id: str
    name: str
    created_at: str | None = None
    updated_at: str | None = None
