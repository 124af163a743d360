"""プロフィール・ランキングのアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.services.base import validate_wire, validate_wire_list
from learnflow.services.profiles.models import (
    CompetitiveProfile,
    CompetitiveProfileResponse,
    LeaderboardEntry,
    LeaderboardEntryResponse,
    Profile,
    ProfileResponse,
    SearchUserResponse,
    UserSearchResult,
    UsersByRank,
    UsersByRankResponse,
)


def _profile(response: ProfileResponse) -> Profile:
    return Profile(
        id=response.id,
        username=response.username,
        profile_url=response.profile_url,
        first_name=response.first_name,
        last_name=response.last_name,
    )


def to_profile(payload: Any) -> Profile:
    """ペイロードをProfileに変換."""
    return _profile(validate_wire(ProfileResponse, payload, "profile"))


def to_profiles(payload: Any) -> list[Profile]:
    return [_profile(r) for r in validate_wire_list(ProfileResponse, payload, "profile")]


def to_user_search_results(payload: Any) -> list[UserSearchResult]:
    return [
        UserSearchResult(
            id=r.id, username=r.username, user_id=r.user_id, profile_url=r.profile_url
        )
        for r in validate_wire_list(SearchUserResponse, payload, "user search result")
    ]


def _entry(response: LeaderboardEntryResponse) -> LeaderboardEntry:
    return LeaderboardEntry(
        id=response.id,
        user_id=response.user_id,
        total_points=max(0, response.total_points),
        position=response.position,
        is_top500=response.is_top500,
        current_rank=response.current_rank.upper() if response.current_rank else None,
    )


def to_leaderboard_entry(payload: Any) -> LeaderboardEntry:
    return _entry(validate_wire(LeaderboardEntryResponse, payload, "leaderboard entry"))


def to_leaderboard(payload: Any) -> list[LeaderboardEntry]:
    """ランキング配列を順位の昇順で返す.

    ``{"entries": [...]}`` で包まれた形も受け付ける。
    """
    if isinstance(payload, dict) and "entries" in payload:
        payload = payload["entries"]
    entries = validate_wire_list(LeaderboardEntryResponse, payload, "leaderboard entry")
    return sorted((_entry(r) for r in entries), key=lambda e: e.position)


def _competitive(response: CompetitiveProfileResponse) -> CompetitiveProfile:
    return CompetitiveProfile(
        id=response.id,
        user_id=response.user_id,
        total_points=max(0, response.total_points),
        current_rank=response.current_rank.upper(),
        next_rank=response.next_rank.upper() if response.next_rank else None,
        points_needed_for_next_rank=max(0, response.points_needed_for_next_rank),
    )


def to_competitive_profile(payload: Any) -> CompetitiveProfile:
    return _competitive(
        validate_wire(CompetitiveProfileResponse, payload, "competitive profile")
    )


def to_users_by_rank(payload: Any) -> UsersByRank:
    response = validate_wire(UsersByRankResponse, payload, "users by rank")
    return UsersByRank(
        profiles=[_competitive(p) for p in response.profiles],
        total_users=response.total_users,
    )
