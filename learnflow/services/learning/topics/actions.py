"""トピックアクション（Learningサービス /topics）."""

from __future__ import annotations

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.learning.topics.models import TopicRequest


class TopicActions(BaseActions):
    """/topics へのHTTP呼び出し."""

    async def get_all_topics(self) -> RequestResult:
        return await self._client.get("/topics")

    async def create_topic(self, request: TopicRequest) -> RequestResult:
        return await self._client.post("/topics", request.to_payload())

    async def get_topic_by_id(self, topic_id: str) -> RequestResult:
        return await self._client.get(f"/topics/{topic_id}")

    async def update_topic(self, topic_id: str, request: TopicRequest) -> RequestResult:
        return await self._client.put(f"/topics/{topic_id}", request.to_payload())

    async def delete_topic(self, topic_id: str) -> RequestResult:
        return await self._client.delete(f"/topics/{topic_id}")

    async def search_topics_by_name(self, name: str) -> RequestResult:
        return await self._client.get("/topics/search", params={"name": name})
