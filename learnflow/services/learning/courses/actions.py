"""コースアクション（Learningサービス /courses）."""

from __future__ import annotations

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.learning.courses.models import (
    CourseRequest,
    ReorderCourseGuideRequest,
    UpdateCourseAuthorsRequest,
    UpdateCourseStatusRequest,
)


class CourseActions(BaseActions):
    """/courses へのHTTP呼び出し."""

    async def get_courses(self) -> RequestResult:
        return await self._client.get("/courses")

    async def create_course(self, request: CourseRequest) -> RequestResult:
        return await self._client.post("/courses", request.to_payload())

    async def get_course_by_id(self, course_id: str) -> RequestResult:
        return await self._client.get(f"/courses/{course_id}")

    async def update_course(self, course_id: str, request: CourseRequest) -> RequestResult:
        return await self._client.put(f"/courses/{course_id}", request.to_payload())

    async def delete_course(self, course_id: str) -> RequestResult:
        return await self._client.delete(f"/courses/{course_id}")

    async def add_guide_to_course(self, course_id: str, guide_id: str) -> RequestResult:
        return await self._client.post(f"/courses/{course_id}/guides/{guide_id}")

    async def delete_guide_from_course(self, course_id: str, guide_id: str) -> RequestResult:
        return await self._client.delete(f"/courses/{course_id}/guides/{guide_id}")

    async def reorder_course_guide(
        self, course_id: str, guide_id: str, request: ReorderCourseGuideRequest
    ) -> RequestResult:
        return await self._client.put(
            f"/courses/{course_id}/guides/{guide_id}/reorder", request.to_payload()
        )

    async def update_course_authors(
        self, course_id: str, request: UpdateCourseAuthorsRequest
    ) -> RequestResult:
        return await self._client.put(f"/courses/{course_id}/authors", request.to_payload())

    async def update_course_status(
        self, course_id: str, request: UpdateCourseStatusRequest
    ) -> RequestResult:
        return await self._client.patch(f"/courses/{course_id}/status", request.to_payload())
