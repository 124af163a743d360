"""コースコントローラー."""

from __future__ import annotations

from learnflow.core.exceptions import CourseError
from learnflow.services.base import BaseController
from learnflow.services.learning.courses.actions import CourseActions
from learnflow.services.learning.courses.assembler import to_course, to_courses
from learnflow.services.learning.courses.models import (
    Course,
    CourseRequest,
    CourseStatus,
    ReorderCourseGuideRequest,
    UpdateCourseAuthorsRequest,
    UpdateCourseStatusRequest,
)


class CourseController(BaseController):
    """コースとコース内ガイドの操作.

    Raises:
        CourseError: サービスが2xx以外を返した場合
    """

    error_class = CourseError

    def __init__(self, actions: CourseActions) -> None:
        """初期化.

        Args:
            actions: コースアクション
        """
        self._actions = actions

    async def get_courses(self) -> list[Course]:
        result = await self._actions.get_courses()
        return to_courses(self._unwrap(result, "get_courses"))

    async def create_course(self, request: CourseRequest) -> Course:
        result = await self._actions.create_course(request)
        return to_course(self._unwrap(result, "create_course"))

    async def get_course_by_id(self, course_id: str) -> Course:
        result = await self._actions.get_course_by_id(course_id)
        return to_course(self._unwrap(result, "get_course_by_id"))

    async def update_course(self, course_id: str, request: CourseRequest) -> Course:
        result = await self._actions.update_course(course_id, request)
        return to_course(self._unwrap(result, "update_course"))

    async def delete_course(self, course_id: str) -> None:
        result = await self._actions.delete_course(course_id)
        self._unwrap(result, "delete_course")

    async def add_guide_to_course(self, course_id: str, guide_id: str) -> Course:
        result = await self._actions.add_guide_to_course(course_id, guide_id)
        return to_course(self._unwrap(result, "add_guide_to_course"))

    async def delete_guide_from_course(self, course_id: str, guide_id: str) -> Course:
        result = await self._actions.delete_guide_from_course(course_id, guide_id)
        return to_course(self._unwrap(result, "delete_guide_from_course"))

    async def reorder_course_guide(
        self, course_id: str, guide_id: str, new_position: int
    ) -> Course:
        """コース内でガイドを移動.

        Args:
            course_id: コースID
            guide_id: 移動するガイドID
            new_position: 移動先の位置

        Returns:
            更新後のコース
        """
        result = await self._actions.reorder_course_guide(
            course_id, guide_id, ReorderCourseGuideRequest(new_position=new_position)
        )
        return to_course(self._unwrap(result, "reorder_course_guide"))

    async def update_course_authors(self, course_id: str, author_ids: list[str]) -> Course:
        result = await self._actions.update_course_authors(
            course_id, UpdateCourseAuthorsRequest(author_ids=author_ids)
        )
        return to_course(self._unwrap(result, "update_course_authors"))

    async def update_course_status(self, course_id: str, status: CourseStatus) -> Course:
        result = await self._actions.update_course_status(
            course_id, UpdateCourseStatusRequest(status=status)
        )
        return to_course(self._unwrap(result, "update_course_status"))
