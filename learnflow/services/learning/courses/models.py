"""コースのワイヤーモデルとエンティティ."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import Field

from learnflow.core.constants import CourseDifficulty
from learnflow.services.base import RequestModel, WireModel


class CourseStatus(str, Enum):
    """コース公開状態."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class CourseTopicResponse(WireModel):
    id: str
    name: str


class CourseGuideResponse(WireModel):
    """コース内のガイド参照."""

    id: str
    title: str = ""
    position: int | None = None


class CourseResponse(WireModel):
    id: str
    title: str
    description: str = ""
    teacher_id: str | None = None
    status: CourseStatus = CourseStatus.DRAFT
    difficulty: CourseDifficulty = CourseDifficulty.BEGINNER
    total_guides: int = 0
    rating: float = 0.0
    total_likes: int = 0
    completion_score: int = 0
    cover: str | None = None
    author_ids: list[str] = Field(default_factory=list)
    topics: list[CourseTopicResponse] = Field(default_factory=list)
    guides: list[CourseGuideResponse] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class CourseRequest(RequestModel):
    """コース作成・更新ボディ."""

    title: str = Field(min_length=1)
    description: str = ""
    difficulty: CourseDifficulty = CourseDifficulty.BEGINNER
    completion_score: int = Field(default=0, ge=0)
    cover: str | None = None


class ReorderCourseGuideRequest(RequestModel):
    new_position: int = Field(ge=0)


class UpdateCourseAuthorsRequest(RequestModel):
    author_ids: list[str]


class UpdateCourseStatusRequest(RequestModel):
    status: CourseStatus


@dataclass
class CourseGuideRef:
    id: str
    title: str = ""
    position: int | None = None


@dataclass
class Course:
    """コース.

    guides はコース内の表示順。
    """

    id: str
    title: str
    description: str = ""
    teacher_id: str | None = None
    status: CourseStatus = CourseStatus.DRAFT
    difficulty: CourseDifficulty = CourseDifficulty.BEGINNER
    total_guides: int = 0
    rating: float = 0.0
    total_likes: int = 0
    completion_score: int = 0
    cover: str | None = None
    author_ids: list[str] = field(default_factory=list)
    topic_ids: list[str] = field(default_factory=list)
    guides: list[CourseGuideRef] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def guide_ids(self) -> list[str]:
        """表示順のガイドID."""
        return [g.id for g in self.guides]
