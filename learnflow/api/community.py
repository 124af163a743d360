"""コミュニティのローカルHTTP API.

投稿の作成・削除と、現在ユーザーのリアクション作成・削除を公開する。
必須項目の検証はルートで行い、エラーは ``{"error": message}`` で返す。

使用例:
    >>> api = CommunityApi(services.posts, services.reactions, services.auth.current_user_id)
    >>> app = create_community_app(api)
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from pydantic.alias_generators import to_camel

from learnflow.core.exceptions import LearnFlowError
from learnflow.services.community.controller import (
    PostController,
    ReactionController,
    UserIdProvider,
)
from learnflow.services.community.models import CreatePostRequest


logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel(key): _camelize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_camelize(item) for item in value]
    return value


def to_json(entity: Any) -> Any:
    """エンティティ（dataclass）をcamelCaseのJSON互換値に変換."""
    return jsonable_encoder(_camelize(dataclasses.asdict(entity)))


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


class CommunityApi:
    """コミュニティAPIの状態保持."""

    def __init__(
        self,
        posts: PostController,
        reactions: ReactionController,
        user_id_provider: UserIdProvider,
    ) -> None:
        self.posts = posts
        self.reactions = reactions
        self._user_id_provider = user_id_provider

    def create_router(self) -> APIRouter:
        router = APIRouter(prefix="/api/community", tags=["community"])

        @router.post("/posts")
        async def create_post(request: Request) -> Response:
            body = await _read_body(request)
            if not body.get("content"):
                return _error("Missing required field: content", 400)
            if not body.get("communityId"):
                return _error("Missing required field: communityId", 400)

            try:
                post = await self.posts.create_post(CreatePostRequest.model_validate(body))
            except (LearnFlowError, ValueError) as e:
                logger.error("投稿作成失敗: %s", e)
                return _error("Failed to create post", 500)
            return JSONResponse(to_json(post), status_code=201)

        @router.delete("/posts/{post_id}")
        async def delete_post(post_id: str) -> Response:
            try:
                await self.posts.delete_post(post_id)
            except LearnFlowError as e:
                logger.error("投稿削除失敗 (post=%s): %s", post_id, e)
                return _error("Failed to delete post", 500)
            return Response(status_code=204)

        @router.post("/reactions")
        async def create_reaction(request: Request) -> Response:
            if not self._user_id_provider():
                return _error("Unauthorized", 401)

            body = await _read_body(request)
            post_id = body.get("postId")
            reaction_type = body.get("reactionType")
            if not post_id or not reaction_type:
                return _error("postId and reactionType are required", 400)

            try:
                await self.reactions.create_reaction(post_id, str(reaction_type))
            except ValueError:
                return _error(f"Invalid reactionType: {reaction_type}", 400)
            except LearnFlowError as e:
                logger.error("リアクション作成失敗 (post=%s): %s", post_id, e)
                return _error("Internal server error", 500)
            return JSONResponse({"success": True}, status_code=201)

        @router.delete("/reactions")
        async def delete_reaction(request: Request) -> Response:
            if not self._user_id_provider():
                return _error("Unauthorized", 401)

            body = await _read_body(request)
            post_id = body.get("postId")
            if not post_id:
                return _error("postId is required", 400)

            try:
                deleted = await self.reactions.delete_reaction(post_id)
            except LearnFlowError as e:
                logger.error("リアクション削除失敗 (post=%s): %s", post_id, e)
                return _error("Internal server error", 500)
            if not deleted:
                return _error("No reaction found for this user on this post", 404)
            return JSONResponse({"success": True}, status_code=200)

        return router


def create_community_app(api: CommunityApi) -> FastAPI:
    """コミュニティAPIだけを載せたFastAPIアプリを作成."""
    app = FastAPI(title="LearnFlow Community API", version="1.0.0")
    app.include_router(api.create_router())
    return app
