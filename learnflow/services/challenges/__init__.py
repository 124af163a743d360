"""Challengesサービス."""

from learnflow.services.challenges.actions import (
    ChallengeActions,
    CodeVersionActions,
    SolutionActions,
    VersionTestActions,
)
from learnflow.services.challenges.controller import (
    ChallengeController,
    CodeVersionController,
    SolutionController,
    VersionTestController,
)
from learnflow.services.challenges.models import (
    Challenge,
    ChallengeStar,
    ChallengeTag,
    CodeVersion,
    CreateChallengeRequest,
    Solution,
    SubmissionResult,
    UpdateChallengeRequest,
    VersionTest,
    VersionTestRequest,
)


__all__ = [
    "Challenge",
    "ChallengeActions",
    "ChallengeController",
    "ChallengeStar",
    "ChallengeTag",
    "CodeVersion",
    "CodeVersionActions",
    "CodeVersionController",
    "CreateChallengeRequest",
    "Solution",
    "SolutionActions",
    "SolutionController",
    "SubmissionResult",
    "UpdateChallengeRequest",
    "VersionTest",
    "VersionTestActions",
    "VersionTestController",
    "VersionTestRequest",
]
