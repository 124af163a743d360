# -*- coding: utf-8 -*-
"""ガイドエディタの状態アクション定義.

エディタ状態の変更はすべてアクションとして表現し、
GuideEditorStore.dispatch() で適用する。

使用例:
    >>> from learnflow.state.actions import set_active_page
    >>>
    >>> store.dispatch(set_active_page("page-2"))
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from learnflow.services.learning.guides.models import ChallengeRef, Guide, Page


class ActionType(str, Enum):
    """アクション種別."""

    # ガイド
    INITIALIZE = "INITIALIZE"
    APPLY_GUIDE_RESPONSE = "APPLY_GUIDE_RESPONSE"

    # ページ
    SET_PAGES = "SET_PAGES"
    SET_ACTIVE_PAGE = "SET_ACTIVE_PAGE"

    # 関連チャレンジ
    SET_CHALLENGES = "SET_CHALLENGES"

    # 操作中フラグ
    SET_FLAG = "SET_FLAG"

    # スナップショット
    RESTORE_SNAPSHOT = "RESTORE_SNAPSHOT"

    RESET = "RESET"


class EditorFlag(str, Enum):
    """操作中フラグ."""

    IS_SAVING = "is_saving"
    IS_PUBLISHING = "is_publishing"
    IS_REORDERING = "is_reordering"
    IS_PAGE_OPERATION_PENDING = "is_page_operation_pending"


@dataclass
class Action:
    """状態変更アクション.

    Attributes:
        id: アクションID
        type: アクション種別
        payload: ペイロード
        timestamp: タイムスタンプ
    """

    id: str = field(default_factory=lambda: f"action-{uuid.uuid4().hex[:8]}")
    type: ActionType = ActionType.RESET
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


def create_action(action_type: ActionType, payload: dict[str, Any] | None = None) -> Action:
    """アクションを作成.

    Args:
        action_type: アクション種別
        payload: ペイロード

    Returns:
        Action
    """
    return Action(type=action_type, payload=payload or {})


def initialize(guide: Guide) -> Action:
    """取得したガイドでエディタを初期化するアクション（先頭ページを選択）."""
    return create_action(ActionType.INITIALIZE, {"guide": guide})


def apply_guide_response(guide: Guide) -> Action:
    """サーバーが返したガイド全体を反映するアクション."""
    return create_action(ActionType.APPLY_GUIDE_RESPONSE, {"guide": guide})


def set_pages(pages: list[Page]) -> Action:
    return create_action(ActionType.SET_PAGES, {"pages": pages})


def set_active_page(page_id: str | None) -> Action:
    return create_action(ActionType.SET_ACTIVE_PAGE, {"page_id": page_id})


def set_challenges(challenges: list[ChallengeRef]) -> Action:
    return create_action(ActionType.SET_CHALLENGES, {"challenges": challenges})


def set_flag(flag: EditorFlag, value: bool) -> Action:
    return create_action(ActionType.SET_FLAG, {"flag": flag.value, "value": value})


def restore_snapshot(snapshot_id: str) -> Action:
    return create_action(ActionType.RESTORE_SNAPSHOT, {"snapshot_id": snapshot_id})


def reset() -> Action:
    return create_action(ActionType.RESET)


__all__ = [
    "Action",
    "ActionType",
    "EditorFlag",
    "apply_guide_response",
    "create_action",
    "initialize",
    "reset",
    "restore_snapshot",
    "set_active_page",
    "set_challenges",
    "set_flag",
    "set_pages",
]
