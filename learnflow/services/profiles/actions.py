"""プロフィール・ランキングアクション（Profileサービス）."""

from __future__ import annotations

from learnflow.http.results import RequestResult
from learnflow.services.base import BaseActions
from learnflow.services.profiles.models import UpdateProfileRequest


class ProfileActions(BaseActions):
    """/profiles へのHTTP呼び出し."""

    async def get_profile_by_user_id(self, user_id: str) -> RequestResult:
        return await self._client.get(f"/profiles/user/{user_id}")

    async def get_profile_by_id(self, profile_id: str) -> RequestResult:
        return await self._client.get(f"/profiles/{profile_id}")

    async def update_profile(
        self, profile_id: str, request: UpdateProfileRequest
    ) -> RequestResult:
        return await self._client.put(f"/profiles/{profile_id}", request.to_payload())

    async def get_all_profiles(self) -> RequestResult:
        return await self._client.get("/profiles")

    async def search_profiles(self, query: str) -> RequestResult:
        return await self._client.get("/profiles/search", params={"q": query})

    async def search_users_by_username(self, username: str) -> RequestResult:
        return await self._client.get("/profiles/search", params={"username": username})


class LeaderboardActions(BaseActions):
    """/leaderboard と /competitive/profiles へのHTTP呼び出し."""

    async def get_leaderboard(self, limit: int, offset: int) -> RequestResult:
        return await self._client.get("/leaderboard", params={"limit": limit, "offset": offset})

    async def get_user_position(self, user_id: str) -> RequestResult:
        return await self._client.get(f"/leaderboard/user/{user_id}")

    async def get_top500(self) -> RequestResult:
        return await self._client.get("/leaderboard/top500")

    async def recalculate_leaderboard(self) -> RequestResult:
        return await self._client.post("/leaderboard/recalculate")

    async def get_competitive_profile(self, user_id: str) -> RequestResult:
        return await self._client.get(f"/competitive/profiles/user/{user_id}")

    async def sync_competitive_profile(self, user_id: str) -> RequestResult:
        return await self._client.post(f"/competitive/profiles/user/{user_id}/sync")

    async def get_users_by_rank(self, rank: str, offset: int) -> RequestResult:
        return await self._client.get(
            f"/competitive/profiles/rank/{rank}", params={"offset": offset}
        )
