"""プロフィール・ランキングのワイヤーモデルとエンティティ."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import AliasChoices, Field, field_validator

from learnflow.forms.forms import USERNAME_MAX_LENGTH
from learnflow.services.base import RequestModel, WireModel


# =============================================================================
# プロフィール
# =============================================================================


class ProfileResponse(WireModel):
    """GET /profiles 系のレスポンス要素.

    未サインインの閲覧では氏名が省略される。
    """

    id: str
    username: str
    profile_url: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class SearchUserResponse(WireModel):
    """GET /profiles/search?username= のレスポンス要素."""

    id: str = Field(validation_alias=AliasChoices("id", "profileId"))
    user_id: str | None = None
    username: str
    profile_url: str | None = None


class UpdateProfileRequest(RequestModel):
    """PUT /profiles/{id} のボディ."""

    id: str
    username: str = Field(max_length=USERNAME_MAX_LENGTH, pattern=r"^[a-zA-Z0-9]+$")
    profile_url: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


@dataclass
class Profile:
    """ユーザープロフィール."""

    id: str
    username: str
    profile_url: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        """氏名（なければユーザー名）."""
        full_name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full_name or self.username


@dataclass
class UserSearchResult:
    """ユーザー名検索の結果."""

    id: str
    username: str
    user_id: str | None = None
    profile_url: str | None = None


# =============================================================================
# ランキング
# =============================================================================


class LeaderboardEntryResponse(WireModel):
    """GET /leaderboard 系のレスポンス要素."""

    id: str
    user_id: str
    total_points: int = 0
    position: int
    is_top500: bool = Field(
        default=False, validation_alias=AliasChoices("isTop500", "top500")
    )
    current_rank: str | None = None


class CompetitiveProfileResponse(WireModel):
    """GET /competitive/profiles 系のレスポンス要素."""

    id: str
    user_id: str
    total_points: int = 0
    current_rank: str
    next_rank: str | None = None
    points_needed_for_next_rank: int = 0


class UsersByRankResponse(WireModel):
    """GET /competitive/profiles/rank/{rank} のレスポンス."""

    profiles: list[CompetitiveProfileResponse] = Field(default_factory=list)
    total_users: int = 0


@dataclass
class LeaderboardEntry:
    """ランキングの1行.

    Attributes:
        position: 順位（1始まり）
        is_top500: 上位500位以内か
        current_rank: 競技ランク
    """

    id: str
    user_id: str
    total_points: int
    position: int
    is_top500: bool = False
    current_rank: str | None = None


@dataclass
class CompetitiveProfile:
    """ユーザーの競技プロフィール."""

    id: str
    user_id: str
    total_points: int
    current_rank: str
    next_rank: str | None = None
    points_needed_for_next_rank: int = 0


@dataclass
class UsersByRank:
    """ランク別のユーザー一覧."""

    profiles: list[CompetitiveProfile] = field(default_factory=list)
    total_users: int = 0
