"""設定管理モジュール.

このモジュールは、LearnFlowクライアントの設定管理を提供します。
"""

from learnflow.config.settings import LearnFlowSettings, get_settings


__all__ = ["LearnFlowSettings", "get_settings"]
