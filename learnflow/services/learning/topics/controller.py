"""トピックコントローラー."""

from __future__ import annotations

from learnflow.core.exceptions import TopicError
from learnflow.services.base import BaseController
from learnflow.services.learning.topics.actions import TopicActions
from learnflow.services.learning.topics.assembler import to_topic, to_topics
from learnflow.services.learning.topics.models import Topic, TopicRequest


class TopicController(BaseController):
    """トピックのCRUDと名前検索.

    Raises:
        TopicError: サービスが2xx以外を返した場合
    """

    error_class = TopicError

    def __init__(self, actions: TopicActions) -> None:
        """初期化.

        Args:
            actions: トピックアクション
        """
        self._actions = actions

    async def get_all_topics(self) -> list[Topic]:
        result = await self._actions.get_all_topics()
        return to_topics(self._unwrap(result, "get_all_topics"))

    async def create_topic(self, name: str) -> Topic:
        result = await self._actions.create_topic(TopicRequest(name=name))
        return to_topic(self._unwrap(result, "create_topic"))

    async def get_topic_by_id(self, topic_id: str) -> Topic:
        result = await self._actions.get_topic_by_id(topic_id)
        return to_topic(self._unwrap(result, "get_topic_by_id"))

    async def update_topic(self, topic_id: str, name: str) -> Topic:
        result = await self._actions.update_topic(topic_id, TopicRequest(name=name))
        return to_topic(self._unwrap(result, "update_topic"))

    async def delete_topic(self, topic_id: str) -> None:
        result = await self._actions.delete_topic(topic_id)
        self._unwrap(result, "delete_topic")

    async def search_topics_by_name(self, name: str) -> list[Topic]:
        """名前の部分一致でトピックを検索.

        Args:
            name: 検索文字列

        Returns:
            一致したトピック
        """
        result = await self._actions.search_topics_by_name(name)
        return to_topics(self._unwrap(result, "search_topics_by_name"))
