"""ドメインサービス.

``LearnFlowServices`` は ServiceRegistry から全コントローラーを組み立てる。

使用例:
    >>> async with ServiceRegistry() as registry:
    ...     services = LearnFlowServices(registry)
    ...     await services.auth.sign_in("alice@example.com", "secret")
    ...     guides = await services.guides.get_all_guides()
"""

from __future__ import annotations

from learnflow.http.client import ServiceRegistry
from learnflow.services.challenges import (
    ChallengeActions,
    ChallengeController,
    CodeVersionActions,
    CodeVersionController,
    SolutionActions,
    SolutionController,
    VersionTestActions,
    VersionTestController,
)
from learnflow.services.community import (
    CommunityActions,
    CommunityController,
    PostActions,
    PostController,
    ReactionActions,
    ReactionCache,
    ReactionController,
    SubscriptionActions,
    SubscriptionCache,
    SubscriptionController,
)
from learnflow.services.iam import AuthActions, AuthController
from learnflow.services.learning.courses import CourseActions, CourseController
from learnflow.services.learning.guides import GuideActions, GuideController
from learnflow.services.learning.topics import TopicActions, TopicController
from learnflow.services.profiles import (
    LeaderboardActions,
    LeaderboardController,
    ProfileActions,
    ProfileController,
)


class LearnFlowServices:
    """全ドメインのコントローラー.

    Attributes:
        registry: サービスクライアントのレジストリ
        auth: 認証
        topics / guides / courses: Learningサービス
        challenges / code_versions / version_tests / solutions: Challengesサービス
        communities / posts / reactions / subscriptions: Communityサービス
        profiles / leaderboard: Profileサービス
    """

    def __init__(self, registry: ServiceRegistry | None = None) -> None:
        """初期化.

        Args:
            registry: レジストリ（省略時は設定から生成）
        """
        self.registry = registry or ServiceRegistry()
        ttl = self.registry.settings.cache_ttl_seconds

        self.auth = AuthController(AuthActions(self.registry.iam), self.registry.tokens)

        self.topics = TopicController(TopicActions(self.registry.learning))
        self.guides = GuideController(GuideActions(self.registry.learning))
        self.courses = CourseController(CourseActions(self.registry.learning))

        self.challenges = ChallengeController(ChallengeActions(self.registry.challenges))
        self.code_versions = CodeVersionController(CodeVersionActions(self.registry.challenges))
        self.version_tests = VersionTestController(VersionTestActions(self.registry.challenges))
        self.solutions = SolutionController(SolutionActions(self.registry.challenges))

        self.communities = CommunityController(CommunityActions(self.registry.community))
        self.posts = PostController(PostActions(self.registry.community))
        self.reactions = ReactionController(
            ReactionActions(self.registry.community),
            ReactionCache(ttl),
            self.auth.current_user_id,
        )
        self.subscriptions = SubscriptionController(
            SubscriptionActions(self.registry.community),
            SubscriptionCache(ttl),
            self.auth.current_user_id,
        )

        self.profiles = ProfileController(
            ProfileActions(self.registry.profiles), self.auth.current_user_id
        )
        self.leaderboard = LeaderboardController(LeaderboardActions(self.registry.profiles))

    async def aclose(self) -> None:
        """HTTP接続をクローズ."""
        await self.registry.aclose()


__all__ = ["LearnFlowServices"]
