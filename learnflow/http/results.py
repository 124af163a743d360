# -*- coding: utf-8 -*-
"""サービス呼び出し結果の型.

アクションは例外を投げず、必ず以下のいずれかを返す:

- RequestSuccess: 成功（data にペイロード、status にHTTPステータス）
- RequestFailure: 失敗（message にエラーメッセージ、status にHTTPステータス）

呼び出し側は is_success() で2xxかどうかを判定する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


T = TypeVar("T")


@dataclass
class RequestSuccess(Generic[T]):
    """成功結果.

    Attributes:
        data: レスポンスペイロード
        status: HTTPステータス
    """

    data: T
    status: int = 200


@dataclass
class RequestFailure:
    """失敗結果.

    Attributes:
        message: エラーメッセージ
        status: HTTPステータス（通信失敗時は503）
    """

    message: str
    status: int = 500

    @property
    def data(self) -> str:
        """エラーメッセージ（成功結果と同じ参照名）."""
        return self.message


RequestResult = RequestSuccess[Any] | RequestFailure


def is_success(result: RequestResult) -> bool:
    """結果が2xx成功かを判定.

    Args:
        result: アクションの結果

    Returns:
        2xxの成功結果ならTrue
    """
    return isinstance(result, RequestSuccess) and 200 <= result.status < 300


class LearningEnvelope(BaseModel):
    """Learningサービスのレスポンスエンベロープ.

    ``{"data": ..., "statusCode": 200, "success": true}`` 形式。
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    status_code: int = Field(default=200, alias="statusCode")
    success: bool = True


class PageEnvelope(BaseModel):
    """ページネーション付きレスポンス.

    ``{"content": [...], "totalElements": n, ...}`` 形式。
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[Any] = Field(default_factory=list)
    page: int = Field(default=0, validation_alias=AliasChoices("page", "number"))
    size: int = 0
    total_elements: int = Field(default=0, alias="totalElements")
    total_pages: int = Field(default=0, alias="totalPages")
    has_next: bool | None = Field(default=None, alias="hasNext")
    last: bool | None = None

    @model_validator(mode="after")
    def _derive_has_next(self) -> PageEnvelope:
        if self.has_next is None:
            if self.last is not None:
                self.has_next = not self.last
            else:
                self.has_next = self.page + 1 < self.total_pages
        return self
