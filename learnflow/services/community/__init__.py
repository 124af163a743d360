"""Communityサービス."""

from learnflow.services.community.actions import (
    CommunityActions,
    PostActions,
    ReactionActions,
    SubscriptionActions,
)
from learnflow.services.community.cache import ReactionCache, SubscriptionCache, TTLCache
from learnflow.services.community.controller import (
    CommunityController,
    PostController,
    ReactionController,
    SubscriptionController,
)
from learnflow.services.community.models import (
    Comment,
    Community,
    CommunityRequest,
    CreatePostRequest,
    Post,
    PostReactions,
    Reaction,
    ReactionCount,
    Subscription,
)


__all__ = [
    "Comment",
    "Community",
    "CommunityActions",
    "CommunityController",
    "CommunityRequest",
    "CreatePostRequest",
    "Post",
    "PostActions",
    "PostController",
    "PostReactions",
    "Reaction",
    "ReactionActions",
    "ReactionCache",
    "ReactionController",
    "ReactionCount",
    "Subscription",
    "SubscriptionActions",
    "SubscriptionCache",
    "SubscriptionController",
    "TTLCache",
]
