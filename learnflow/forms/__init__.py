"""フォーム検証."""

from learnflow.forms.forms import (
    ChallengeForm,
    CourseForm,
    FormModel,
    GuideForm,
    UsernameForm,
    validate_form,
)


__all__ = [
    "ChallengeForm",
    "CourseForm",
    "FormModel",
    "GuideForm",
    "UsernameForm",
    "validate_form",
]
