"""エディタとUIロジック.

- page_manager: ガイドページの作成・保存・削除・並べ替え
- guide_editor: ガイド基本情報と公開
- optimistic: 楽観的更新とシーケンサー
- toggles: いいね・フォロー・リアクション
- autosave: 自動保存
- search: デバウンス付き検索
- notifications: ユーザー通知
"""

from learnflow.editor.autosave import AutoSaver, AutoSaveStatus
from learnflow.editor.guide_editor import GuideEditor
from learnflow.editor.notifications import Notification, NotificationLevel, Notifier
from learnflow.editor.optimistic import (
    MutationOutcome,
    MutationResult,
    MutationSequencer,
    OptimisticMutation,
)
from learnflow.editor.page_manager import GuidePagesManager
from learnflow.editor.search import DebouncedSearch
from learnflow.editor.toggles import CommunityFollowToggle, GuideLikeToggle, PostReactionToggle


__all__ = [
    "AutoSaveStatus",
    "AutoSaver",
    "CommunityFollowToggle",
    "DebouncedSearch",
    "GuideEditor",
    "GuideLikeToggle",
    "GuidePagesManager",
    "MutationOutcome",
    "MutationResult",
    "MutationSequencer",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "OptimisticMutation",
    "PostReactionToggle",
]
