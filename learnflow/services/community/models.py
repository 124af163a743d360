"""コミュニティ・投稿・リアクション・購読のモデル."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from learnflow.core.constants import ReactionType
from learnflow.services.base import RequestModel, WireModel


# =============================================================================
# コミュニティ
# =============================================================================


class CommunityResponse(WireModel):
    """コミュニティ.

    ID は ``communityId`` または ``id`` のどちらかで届く。
    """

    id: str = Field(validation_alias=AliasChoices("communityId", "id"))
    owner_id: str | None = None
    owner_profile_id: str | None = None
    name: str
    description: str = ""
    icon_url: str | None = None
    image_url: str | None = None
    banner_url: str | None = None
    is_private: bool | None = None
    follower_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommunityRequest(RequestModel):
    """コミュニティ作成・更新ボディ."""

    name: str = Field(min_length=1)
    description: str = ""
    image_url: str | None = None


@dataclass
class Community:
    id: str
    name: str
    description: str = ""
    owner_id: str | None = None
    owner_profile_id: str | None = None
    icon_url: str | None = None
    image_url: str | None = None
    banner_url: str | None = None
    is_private: bool = False
    follower_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# 投稿
# =============================================================================


class CommentResponse(WireModel):
    id: str
    author_id: str
    author_profile_id: str | None = None
    content: str = ""
    image_url: str | None = None
    created_at: str | None = None


class PostReactionsResponse(WireModel):
    reaction_counts: dict[str, int] | None = None
    user_reaction: str | None = None


class PostResponse(WireModel):
    id: str
    community_id: str
    author_id: str
    author_profile_id: str | None = None
    author_name: str | None = None
    author_profile_url: str | None = None
    content: str = ""
    image_url: str | None = None
    created_at: str | None = None
    comments: list[CommentResponse] | None = None
    reactions: PostReactionsResponse | None = None


class CreatePostRequest(RequestModel):
    community_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    title: str | None = None
    image_url: str | None = None


@dataclass
class Comment:
    id: str
    author_id: str
    author_profile_id: str | None = None
    content: str = ""
    image_url: str | None = None
    created_at: str | None = None


@dataclass
class PostReactions:
    """投稿のリアクション集計.

    Attributes:
        reaction_counts: 種別 → 件数
        user_reaction: 現在ユーザーのリアクション（なければNone）
    """

    reaction_counts: dict[str, int] = field(default_factory=dict)
    user_reaction: str | None = None


@dataclass
class Post:
    id: str
    community_id: str
    author_id: str
    content: str = ""
    author_profile_id: str | None = None
    author_name: str | None = None
    author_profile_url: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    comments: list[Comment] = field(default_factory=list)
    reactions: PostReactions = field(default_factory=PostReactions)


# =============================================================================
# リアクション
# =============================================================================


class ReactionResponse(WireModel):
    reaction_id: str | None = Field(
        default=None, validation_alias=AliasChoices("reactionId", "id")
    )
    post_id: str
    user_id: str
    reaction_type: ReactionType
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("reaction_type", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class ReactionCountResponse(WireModel):
    post_id: str | None = None
    counts: dict[str, int] = Field(default_factory=dict)
    total_count: int | None = None


class CreateReactionRequest(RequestModel):
    reaction_type: ReactionType


@dataclass
class Reaction:
    post_id: str
    user_id: str
    reaction_type: ReactionType
    reaction_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class ReactionCount:
    """リアクション件数.

    counts は全種別（like/love/haha/wow）を必ず含む。
    """

    post_id: str | None
    counts: dict[str, int]
    total_count: int


# =============================================================================
# 購読（フォロー）
# =============================================================================


class SubscriptionResponse(WireModel):
    id: str
    user_id: str
    community_id: str
    created_at: str | None = None


class CreateSubscriptionRequest(RequestModel):
    community_id: str


@dataclass
class Subscription:
    id: str
    user_id: str
    community_id: str
    created_at: str | None = None
