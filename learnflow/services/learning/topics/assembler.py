"""トピックアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.services.base import validate_wire, validate_wire_list
from learnflow.services.learning.topics.models import Topic, TopicResponse


def _from_response(response: TopicResponse) -> Topic:
    return Topic(
        id=response.id,
        name=response.name,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def to_topic(payload: Any) -> Topic:
    """ペイロードをTopicに変換."""
    return _from_response(validate_wire(TopicResponse, payload, "topic"))


def to_topics(payload: Any) -> list[Topic]:
    """配列ペイロードをTopicリストに変換."""
    return [_from_response(r) for r in validate_wire_list(TopicResponse, payload, "topic")]
