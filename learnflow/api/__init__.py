"""ローカルHTTP API."""

from learnflow.api.community import CommunityApi, create_community_app


__all__ = ["CommunityApi", "create_community_app"]
