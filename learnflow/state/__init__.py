"""ガイドエディタ状態管理.

- actions: 状態変更アクション
- selectors: 状態セレクター
- store: GuideEditorStore
"""

from learnflow.state.actions import (
    Action,
    ActionType,
    EditorFlag,
    apply_guide_response,
    create_action,
    initialize,
    set_active_page,
    set_challenges,
    set_flag,
    set_pages,
)
from learnflow.state.selectors import (
    StateSelector,
    select,
    select_active_page,
    select_active_page_id,
    select_guide,
    select_is_busy,
    select_max_order_number,
    select_pages,
    select_related_challenges,
)
from learnflow.state.store import GuideEditorStore, StateSnapshot, normalize_pages


__all__ = [
    "Action",
    "ActionType",
    "EditorFlag",
    "GuideEditorStore",
    "StateSelector",
    "StateSnapshot",
    "apply_guide_response",
    "create_action",
    "initialize",
    "normalize_pages",
    "select",
    "select_active_page",
    "select_active_page_id",
    "select_guide",
    "select_is_busy",
    "select_max_order_number",
    "select_pages",
    "select_related_challenges",
    "set_active_page",
    "set_challenges",
    "set_flag",
    "set_pages",
]
