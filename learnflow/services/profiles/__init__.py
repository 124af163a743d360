"""Profileサービス（プロフィール・ランキング・競技プロフィール）."""

from learnflow.services.profiles.actions import LeaderboardActions, ProfileActions
from learnflow.services.profiles.controller import LeaderboardController, ProfileController
from learnflow.services.profiles.models import (
    CompetitiveProfile,
    LeaderboardEntry,
    Profile,
    UpdateProfileRequest,
    UserSearchResult,
    UsersByRank,
)


__all__ = [
    "CompetitiveProfile",
    "LeaderboardActions",
    "LeaderboardController",
    "LeaderboardEntry",
    "Profile",
    "ProfileActions",
    "ProfileController",
    "UpdateProfileRequest",
    "UserSearchResult",
    "UsersByRank",
]
