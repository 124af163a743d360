"""コースアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.services.base import validate_wire, validate_wire_list
from learnflow.services.learning.courses.models import (
    Course,
    CourseGuideRef,
    CourseResponse,
)


def _from_response(response: CourseResponse) -> Course:
    ordered = sorted(
        enumerate(response.guides),
        key=lambda item: (item[1].position if item[1].position is not None else item[0]),
    )
    return Course(
        id=response.id,
        title=response.title,
        description=response.description,
        teacher_id=response.teacher_id,
        status=response.status,
        difficulty=response.difficulty,
        total_guides=response.total_guides or len(response.guides),
        rating=response.rating,
        total_likes=response.total_likes,
        completion_score=response.completion_score,
        cover=response.cover,
        author_ids=list(response.author_ids),
        topic_ids=[t.id for t in response.topics],
        guides=[CourseGuideRef(id=g.id, title=g.title, position=g.position) for _, g in ordered],
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def to_course(payload: Any) -> Course:
    """ペイロードをCourseに変換."""
    return _from_response(validate_wire(CourseResponse, payload, "course"))


def to_courses(payload: Any) -> list[Course]:
    """配列ペイロードをCourseリストに変換."""
    return [_from_response(r) for r in validate_wire_list(CourseResponse, payload, "course")]
