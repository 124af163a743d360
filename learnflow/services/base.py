# -*- coding: utf-8 -*-
"""サービス層の共通基盤.

全ドメインが同じ3層構成を取る:

- アクション: HTTP呼び出しを1回だけ行い、RequestSuccess / RequestFailure を返す
- アセンブラー: ワイヤーペイロードを検証し、エンティティに変換する
- コントローラー: 2xx以外で型付き例外を送出し、アセンブル済みエンティティを返す

このモジュールは、各層で共有されるモデル基底クラスとヘルパーを提供する。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from learnflow.core.exceptions import AssemblerValidationError, ControllerError
from learnflow.http.results import (
    PageEnvelope,
    RequestFailure,
    RequestResult,
    is_success,
)


if TYPE_CHECKING:
    from learnflow.http.client import ServiceClient


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class WireModel(BaseModel):
    """サービスのワイヤー形式（camelCase）モデル基底."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class RequestModel(WireModel):
    """リクエストボディモデル基底."""

    def to_payload(self) -> dict[str, Any]:
        """送信用のcamelCase辞書に変換（None項目は除外）."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def validate_wire(model: type[M], payload: Any, entity: str) -> M:
    """ペイロードを検証.

    Args:
        model: ワイヤーモデル
        payload: サービスから受け取ったデータ
        entity: エンティティ名（エラーメッセージ用）

    Returns:
        検証済みモデル

    Raises:
        AssemblerValidationError: 必須項目の欠落や型不一致
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise AssemblerValidationError(entity, e.errors()) from e


def validate_wire_list(model: type[M], payload: Any, entity: str) -> list[M]:
    """配列ペイロードを検証.

    Raises:
        AssemblerValidationError: 配列でない、または要素が不正
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise AssemblerValidationError(
            entity, [{"loc": ("<root>",), "msg": "expected a list"}]
        )
    return [validate_wire(model, item, entity) for item in payload]


class BaseActions:
    """アクション基底.

    アクションは例外を投げない。通信失敗とHTTPエラーは
    ServiceClient が RequestFailure に変換する。
    """

    def __init__(self, client: ServiceClient) -> None:
        """初期化.

        Args:
            client: サービスクライアント
        """
        self._client = client


class BaseController:
    """コントローラー基底.

    Attributes:
        error_class: 2xx以外の結果で送出する例外クラス
    """

    error_class: ClassVar[type[ControllerError]] = ControllerError

    def _unwrap(self, result: RequestResult, operation: str) -> Any:
        """成功結果のデータを取り出す.

        Args:
            result: アクションの結果
            operation: 操作名（ログ用）

        Returns:
            レスポンスデータ

        Raises:
            ControllerError: ステータスが2xx以外
        """
        if is_success(result):
            return result.data

        if isinstance(result, RequestFailure):
            message = result.message or "Unknown error"
        else:
            message = f"Unexpected status {result.status}"
        logger.error("%s 失敗 (status=%s): %s", operation, result.status, message)
        raise self.error_class(message, result.status, result)


@dataclass
class Paginated(Generic[T]):
    """ページネーション結果.

    Attributes:
        items: 要素
        page: ページ番号（0始まり）
        size: ページサイズ
        total_elements: 総件数
        total_pages: 総ページ数
        has_next: 次ページの有無
    """

    items: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    has_next: bool = False


def to_paginated(
    payload: Any,
    convert: Callable[[Any], list[T]],
    entity: str,
) -> Paginated[T]:
    """ページネーション付きペイロードを変換.

    Args:
        payload: ``{"content": [...], "totalElements": ...}`` 形式のデータ
        convert: content 配列を変換する関数
        entity: エンティティ名

    Returns:
        Paginated
    """
    envelope = validate_wire(PageEnvelope, payload, entity)
    return Paginated(
        items=convert(envelope.content),
        page=envelope.page,
        size=envelope.size,
        total_elements=envelope.total_elements,
        total_pages=envelope.total_pages,
        has_next=bool(envelope.has_next),
    )
