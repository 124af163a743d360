"""エディタ状態セレクター.

使用例:
    >>> from learnflow.state.selectors import select, select_active_page
    >>>
    >>> select(state, "flags.is_saving")
    False
    >>> select_active_page(state)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from learnflow.services.learning.guides.models import ChallengeRef, Guide, Page


@dataclass
class StateSelector:
    """ドット区切りのパスで状態の一部を選択.

    Attributes:
        path: 選択パス（例: "flags.is_saving"）
        default: デフォルト値
    """

    path: str
    default: Any = None

    def __call__(self, state: dict[str, Any]) -> Any:
        return select(state, self.path, self.default)


def select(state: dict[str, Any], path: str, default: Any = None) -> Any:
    """状態からパスで値を選択.

    Args:
        state: 状態辞書
        path: ドット区切りのパス（リストは数値インデックス）
        default: デフォルト値

    Returns:
        選択された値、またはデフォルト値

    Example:
        >>> select({"flags": {"is_saving": True}}, "flags.is_saving")
        True
    """
    if not path:
        return state

    current: Any = state
    for part in path.split("."):
        if isinstance(current, dict):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return default
        else:
            return default

    return current


def select_guide(state: dict[str, Any]) -> Guide | None:
    return state.get("guide")


def select_pages(state: dict[str, Any]) -> list[Page]:
    return state.get("pages", [])


def select_active_page_id(state: dict[str, Any]) -> str | None:
    return state.get("active_page_id")


def select_active_page(state: dict[str, Any]) -> Page | None:
    """選択中のページ（なければNone）."""
    active_id = select_active_page_id(state)
    if active_id is None:
        return None
    return next((p for p in select_pages(state) if p.id == active_id), None)


def select_related_challenges(state: dict[str, Any]) -> list[ChallengeRef]:
    return state.get("related_challenges", [])


def select_max_order_number(state: dict[str, Any]) -> int:
    """ページの最大 orderNumber（ページがなければ0）."""
    return max((p.order_number for p in select_pages(state)), default=0)


def select_is_busy(state: dict[str, Any]) -> bool:
    """いずれかの操作が実行中か."""
    return any(state.get("flags", {}).values())


__all__ = [
    "StateSelector",
    "select",
    "select_active_page",
    "select_active_page_id",
    "select_guide",
    "select_is_busy",
    "select_max_order_number",
    "select_pages",
    "select_related_challenges",
]
