"""ユーザー通知（トースト・アラート相当）.

エディタやトグルは失敗や成功を Notifier 経由で伝える。UI層は sink を渡して
表示し、テストは notifications を参照する。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """通知レベル."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass
class Notification:
    level: NotificationLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)


class Notifier:
    """通知の記録と配信.

    Example:
        >>> notifier = Notifier(sink=lambda n: print(n.message))
        >>> notifier.error("Error saving page. Please try again.")
    """

    def __init__(
        self,
        sink: Callable[[Notification], None] | None = None,
        max_items: int = 50,
    ) -> None:
        """初期化.

        Args:
            sink: 表示用コールバック
            max_items: 保持する通知の最大数
        """
        self._sink = sink
        self._max_items = max_items
        self.notifications: list[Notification] = []

    def notify(self, level: NotificationLevel, message: str) -> None:
        notification = Notification(level=level, message=message)
        self.notifications.append(notification)
        if len(self.notifications) > self._max_items:
            self.notifications.pop(0)
        logger.debug("通知 [%s]: %s", level.value, message)
        if self._sink is not None:
            self._sink(notification)

    def success(self, message: str) -> None:
        self.notify(NotificationLevel.SUCCESS, message)

    def info(self, message: str) -> None:
        self.notify(NotificationLevel.INFO, message)

    def error(self, message: str) -> None:
        self.notify(NotificationLevel.ERROR, message)

    def messages(self, level: NotificationLevel | None = None) -> list[str]:
        """記録済みメッセージ（レベル指定で絞り込み）."""
        return [
            n.message for n in self.notifications if level is None or n.level == level
        ]

    def clear(self) -> None:
        self.notifications.clear()
