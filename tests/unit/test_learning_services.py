"""Learningサービス（トピック・ガイド・コース）単体テスト."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from learnflow.core.constants import CourseDifficulty, GuideStatus
from learnflow.core.exceptions import AssemblerValidationError, CourseError, GuideError, TopicError
from learnflow.services import LearnFlowServices
from learnflow.services.learning.courses.models import CourseRequest, CourseStatus
from learnflow.services.learning.guides.assembler import to_guide, to_pages
from learnflow.services.learning.guides.models import SearchGuidesRequest


def _guide(guide_id: str = "g1", pages: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "id": guide_id,
        "title": "Python basics",
        "description": "Intro",
        "status": "DRAFT",
        "likesCount": 2,
        "authorIds": ["user-1"],
        "topics": [{"id": "t1", "name": "Python"}],
        "pages": pages if pages is not None else [],
        "challenges": [{"id": "c1", "name": "FizzBuzz"}],
    }


class TestTopicController:
    """TopicController テスト."""

    @pytest.mark.asyncio
    async def test_create_then_search(self, services: LearnFlowServices, backend) -> None:
        """作成したトピックが部分一致検索に含まれる."""
        topics: list[dict[str, Any]] = []

        def create(request: httpx.Request) -> httpx.Response:
            topic = {"id": f"t{len(topics) + 1}", **backend.body(request)}
            topics.append(topic)
            return httpx.Response(201, json={"data": topic, "statusCode": 201, "success": True})

        def search(request: httpx.Request) -> httpx.Response:
            name = request.url.params["name"].lower()
            found = [t for t in topics if name in t["name"].lower()]
            return httpx.Response(200, json={"data": found, "statusCode": 200, "success": True})

        backend.on("learning", "POST", "/topics", handler=create)
        backend.on("learning", "GET", "/topics/search", handler=search)

        created = await services.topics.create_topic("Python")
        found = await services.topics.search_topics_by_name("Pyth")

        assert created.name == "Python"
        assert [t.id for t in found] == [created.id]

    @pytest.mark.asyncio
    async def test_get_all_topics(self, services: LearnFlowServices, backend) -> None:
        """全トピックを取得."""
        backend.on_learning("GET", "/topics", [{"id": "t1", "name": "Python"}])

        topics = await services.topics.get_all_topics()

        assert topics[0].name == "Python"

    @pytest.mark.asyncio
    async def test_error(self, services: LearnFlowServices, backend) -> None:
        """2xx以外は TopicError."""
        backend.on_learning("DELETE", "/topics/t1", "Topic in use", 409)

        with pytest.raises(TopicError) as exc_info:
            await services.topics.delete_topic("t1")

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Topic in use"


class TestGuideController:
    """GuideController テスト."""

    @pytest.mark.asyncio
    async def test_get_guide_sorts_pages(self, services: LearnFlowServices, backend) -> None:
        """ページは orderNumber 昇順."""
        pages = [
            {"id": "p2", "content": "B", "orderNumber": 2},
            {"id": "p1", "content": "A", "orderNumber": 1},
        ]
        backend.on_learning("GET", "/guides/g1", _guide(pages=pages))

        guide = await services.guides.get_guide_by_id("g1")

        assert [p.id for p in guide.pages] == ["p1", "p2"]
        assert guide.pages_count == 2
        assert guide.topics[0].name == "Python"
        assert guide.challenges[0].language == "Unknown"

    @pytest.mark.asyncio
    async def test_create_page(self, services: LearnFlowServices, backend) -> None:
        """ページ作成はガイド全体を返す."""
        backend.on_learning(
            "POST",
            "/guides/g1/pages",
            _guide(pages=[{"id": "p1", "content": "# New Page", "orderNumber": 1}]),
            201,
        )

        guide = await services.guides.create_page("g1", "# New Page", 1)

        assert guide.pages[0].content == "# New Page"
        body = backend.body(backend.calls("POST", "/guides/g1/pages")[0])
        assert body == {"content": "# New Page", "orderNumber": 1}

    @pytest.mark.asyncio
    async def test_update_status(self, services: LearnFlowServices, backend) -> None:
        """公開状態の更新."""
        backend.on_learning("PUT", "/guides/g1/status", {**_guide(), "status": "PUBLISHED"})

        guide = await services.guides.update_guide_status("g1", GuideStatus.PUBLISHED)

        assert guide.status == GuideStatus.PUBLISHED
        assert backend.body(backend.calls("PUT", "/status")[0]) == {"status": "PUBLISHED"}

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, services: LearnFlowServices, backend) -> None:
        """いいね・いいね解除."""
        backend.on_learning("POST", "/guides/g1/likes", None)
        backend.on_learning("DELETE", "/guides/g1/likes", None)

        await services.guides.like_guide("g1")
        await services.guides.unlike_guide("g1")

        assert len(backend.calls("POST", "/likes")) == 1
        assert len(backend.calls("DELETE", "/likes")) == 1

    @pytest.mark.asyncio
    async def test_search_guides(self, services: LearnFlowServices, backend) -> None:
        """検索条件をクエリで送る."""
        backend.on_learning(
            "GET",
            "/guides/search",
            {"content": [_guide()], "totalElements": 1, "totalPages": 1, "last": True},
        )

        result = await services.guides.search_guides(SearchGuidesRequest(title="Python", likes=1))

        assert result.total_elements == 1
        assert result.has_next is False
        params = backend.calls("GET", "/guides/search")[0].url.params
        assert params["title"] == "Python"
        assert params["likes"] == "1"

    @pytest.mark.asyncio
    async def test_page_not_found(self, services: LearnFlowServices, backend) -> None:
        """ガイド全体の応答に該当ページがなければ404."""
        backend.on_learning("GET", "/guides/g1/pages/p9", _guide(pages=[]))

        with pytest.raises(GuideError) as exc_info:
            await services.guides.get_page_by_id("g1", "p9")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_transport_failure(self, services: LearnFlowServices, backend) -> None:
        """通信失敗は status_code 503 の GuideError."""

        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        backend.on("learning", "GET", "/guides/g1", handler=fail)

        with pytest.raises(GuideError) as exc_info:
            await services.guides.get_guide_by_id("g1")

        assert exc_info.value.status_code == 503


class TestGuideAssembler:
    """ガイドアセンブラー テスト."""

    def test_invalid_payload(self) -> None:
        """必須項目の欠落は AssemblerValidationError."""
        with pytest.raises(AssemblerValidationError) as exc_info:
            to_guide({"title": "No id"})

        assert exc_info.value.entity == "guide"

    def test_pages_from_list_or_guide(self) -> None:
        """ページ配列とガイド全体のどちらも受け付ける."""
        pages = [{"id": "p2", "orderNumber": 2}, {"id": "p1", "orderNumber": 1}]

        assert [p.id for p in to_pages(pages)] == ["p1", "p2"]
        assert [p.id for p in to_pages(_guide(pages=pages))] == ["p1", "p2"]

    def test_order_number_must_be_positive(self) -> None:
        """orderNumber は1以上."""
        with pytest.raises(AssemblerValidationError):
            to_pages([{"id": "p0", "orderNumber": 0}])


class TestCourseController:
    """CourseController テスト."""

    @staticmethod
    def _course(**overrides: Any) -> dict[str, Any]:
        return {
            "id": "course-1",
            "title": "Backend",
            "difficulty": "INTERMEDIATE",
            "completionScore": 80,
            "topics": [{"id": "t1", "name": "Python"}],
            "guides": [
                {"id": "g2", "title": "Second", "position": 1},
                {"id": "g1", "title": "First", "position": 0},
            ],
            **overrides,
        }

    @pytest.mark.asyncio
    async def test_create_course(self, services: LearnFlowServices, backend) -> None:
        """コース作成."""
        backend.on_learning("POST", "/courses", self._course(), 201)

        course = await services.courses.create_course(
            CourseRequest(
                title="Backend",
                difficulty=CourseDifficulty.INTERMEDIATE,
                completion_score=80,
            )
        )

        assert course.difficulty == CourseDifficulty.INTERMEDIATE
        assert course.guide_ids == ["g1", "g2"]
        assert course.topic_ids == ["t1"]
        body = backend.body(backend.calls("POST", "/courses")[0])
        assert body["completionScore"] == 80

    @pytest.mark.asyncio
    async def test_reorder_guide(self, services: LearnFlowServices, backend) -> None:
        """コース内ガイドの並べ替え."""
        backend.on_learning("PUT", "/courses/course-1/guides/g1/reorder", self._course())

        await services.courses.reorder_course_guide("course-1", "g1", 1)

        body = backend.body(backend.calls("PUT", "/reorder")[0])
        assert body == {"newPosition": 1}

    @pytest.mark.asyncio
    async def test_update_status(self, services: LearnFlowServices, backend) -> None:
        """公開状態は PATCH で更新."""
        backend.on_learning("PATCH", "/courses/course-1/status", self._course(status="PUBLISHED"))

        course = await services.courses.update_course_status("course-1", CourseStatus.PUBLISHED)

        assert course.status == CourseStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_not_found(self, services: LearnFlowServices, backend) -> None:
        """2xx以外は CourseError."""
        with pytest.raises(CourseError) as exc_info:
            await services.courses.get_course_by_id("missing")

        assert exc_info.value.status_code == 404
