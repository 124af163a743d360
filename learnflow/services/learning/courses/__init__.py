"""コースドメイン."""

from learnflow.services.learning.courses.actions import CourseActions
from learnflow.services.learning.courses.controller import CourseController
from learnflow.services.learning.courses.models import (
    Course,
    CourseGuideRef,
    CourseRequest,
    CourseStatus,
)


__all__ = [
    "Course",
    "CourseActions",
    "CourseController",
    "CourseGuideRef",
    "CourseRequest",
    "CourseStatus",
]
