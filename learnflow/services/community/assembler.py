"""コミュニティドメインのアセンブラー."""

from __future__ import annotations

from typing import Any

from learnflow.core.constants import ReactionType
from learnflow.services.base import Paginated, to_paginated, validate_wire, validate_wire_list
from learnflow.services.community.models import (
    Comment,
    Community,
    CommunityResponse,
    Post,
    PostReactions,
    PostResponse,
    Reaction,
    ReactionCount,
    ReactionCountResponse,
    ReactionResponse,
    Subscription,
    SubscriptionResponse,
)


def _community(response: CommunityResponse) -> Community:
    icon_url = response.icon_url or response.image_url
    return Community(
        id=response.id,
        name=response.name,
        description=response.description,
        owner_id=response.owner_id,
        owner_profile_id=response.owner_profile_id,
        icon_url=icon_url,
        image_url=icon_url,
        banner_url=response.banner_url,
        is_private=bool(response.is_private),
        follower_count=response.follower_count or 0,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def to_community(payload: Any) -> Community:
    """ペイロードをCommunityに変換.

    iconUrl がなければ imageUrl を使い、両方に同じ値を入れる。
    """
    return _community(validate_wire(CommunityResponse, payload, "community"))


def to_communities(payload: Any) -> list[Community]:
    return [_community(r) for r in validate_wire_list(CommunityResponse, payload, "community")]


def _post(response: PostResponse) -> Post:
    reactions = response.reactions
    return Post(
        id=response.id,
        community_id=response.community_id,
        author_id=response.author_id,
        content=response.content,
        author_profile_id=response.author_profile_id,
        author_name=response.author_name,
        author_profile_url=response.author_profile_url,
        image_url=response.image_url,
        created_at=response.created_at,
        comments=[
            Comment(
                id=c.id,
                author_id=c.author_id,
                author_profile_id=c.author_profile_id,
                content=c.content,
                image_url=c.image_url,
                created_at=c.created_at,
            )
            for c in response.comments or []
        ],
        reactions=PostReactions(
            reaction_counts=dict(reactions.reaction_counts or {}) if reactions else {},
            user_reaction=(reactions.user_reaction or None) if reactions else None,
        ),
    )


def to_post(payload: Any) -> Post:
    return _post(validate_wire(PostResponse, payload, "post"))


def to_posts(payload: Any) -> list[Post]:
    return [_post(r) for r in validate_wire_list(PostResponse, payload, "post")]


def to_post_page(payload: Any) -> Paginated[Post]:
    return to_paginated(payload, to_posts, "post")


def to_reaction(payload: Any) -> Reaction:
    """ペイロードをReactionに変換（種別は小文字に正規化）."""
    response = validate_wire(ReactionResponse, payload, "reaction")
    return Reaction(
        post_id=response.post_id,
        user_id=response.user_id,
        reaction_type=response.reaction_type,
        reaction_id=response.reaction_id,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def to_reactions(payload: Any) -> list[Reaction]:
    return [to_reaction(item) for item in (payload or [])]


def to_reaction_count(payload: Any, post_id: str | None = None) -> ReactionCount:
    """件数を正規化.

    全種別を揃え（欠落は0、大文字キーも受け付ける）、
    totalCount がなければ合計を使う。
    """
    response = validate_wire(ReactionCountResponse, payload, "reaction count")
    counts: dict[str, int] = {}
    for reaction_type in ReactionType:
        key = reaction_type.value
        counts[key] = response.counts.get(key, response.counts.get(key.upper(), 0)) or 0
    total = response.total_count or sum(counts.values())
    return ReactionCount(post_id=response.post_id or post_id, counts=counts, total_count=total)


def _subscription(response: SubscriptionResponse) -> Subscription:
    return Subscription(
        id=response.id,
        user_id=response.user_id,
        community_id=response.community_id,
        created_at=response.created_at,
    )


def to_subscription(payload: Any) -> Subscription:
    return _subscription(validate_wire(SubscriptionResponse, payload, "subscription"))


def to_subscriptions(payload: Any) -> list[Subscription]:
    return [
        _subscription(r)
        for r in validate_wire_list(SubscriptionResponse, payload, "subscription")
    ]


def to_subscription_page(payload: Any) -> Paginated[Subscription]:
    """購読一覧を変換. 配列で返るサービスにも対応する."""
    if isinstance(payload, list):
        items = to_subscriptions(payload)
        return Paginated(
            items=items,
            size=len(items),
            total_elements=len(items),
            total_pages=1 if items else 0,
        )
    return to_paginated(payload, to_subscriptions, "subscription")
