"""ガイドドメイン."""

from learnflow.services.learning.guides.actions import GuideActions
from learnflow.services.learning.guides.controller import GuideController
from learnflow.services.learning.guides.models import (
    ChallengeRef,
    CreateGuideRequest,
    Guide,
    Page,
    SearchGuidesRequest,
    TopicRef,
    UpdateGuideRequest,
)


__all__ = [
    "ChallengeRef",
    "CreateGuideRequest",
    "Guide",
    "GuideActions",
    "GuideController",
    "Page",
    "SearchGuidesRequest",
    "TopicRef",
    "UpdateGuideRequest",
]
