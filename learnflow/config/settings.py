# -*- coding: utf-8 -*-
"""LearnFlow設定.

このモジュールは、学習プラットフォームクライアントの設定を管理します。

使用例:
    ```python
    from learnflow.config import get_settings

    settings = get_settings()
    print(settings.learning_base_url)  # "http://localhost:8085/api/v1"
    ```

環境変数:
    - LEARNFLOW_IAM_BASE_URL: IAMサービスURL
    - LEARNFLOW_API_GATEWAY_BASE_URL: APIゲートウェイURL
    - LEARNFLOW_LEARNING_BASE_URL: Learningサービス URL
    - LEARNFLOW_CHALLENGES_BASE_URL: Challengesサービス URL
    - LEARNFLOW_COMMUNITY_BASE_URL: Communityサービス URL
    - LEARNFLOW_PROFILE_BASE_URL: Profileサービス URL
    - LEARNFLOW_HTTP_TIMEOUT: HTTPタイムアウト（秒）
    - LEARNFLOW_LOG_LEVEL: ログレベル（DEBUG/INFO/WARNING/ERROR）
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LearnFlowSettings(BaseSettings):
    """LearnFlow設定.

    環境変数または.envファイルから設定を読み込みます。

    Attributes:
        iam_base_url: IAMサービスのベースURL
        api_gateway_base_url: APIゲートウェイのベースURL
        learning_base_url: Learningサービスのベース URL
        challenges_base_url: Challengesサービスのベース URL
        community_base_url: Communityサービスのベース URL
        profile_base_url: Profileサービス（プロフィール・ランキング）のベース URL
        http_timeout: HTTPタイムアウト（秒）
        search_debounce_seconds: 検索デバウンス時間
        autosave_delay_seconds: 自動保存の待機時間
        cache_ttl_seconds: リアクション・購読キャッシュのTTL
        log_level: ログレベル
        debug: デバッグモード
    """

    # サービスURL
    iam_base_url: str = Field(
        default="http://192.168.0.118:8081/api/v1", description="IAMサービスURL"
    )
    api_gateway_base_url: str = Field(
        default="http://localhost:8080/api/v1", description="APIゲートウェイURL"
    )
    learning_base_url: str = Field(
        default="http://localhost:8085/api/v1", description="Learningサービス URL"
    )
    challenges_base_url: str = Field(
        default="http://192.168.0.118:8083/api/v1", description="Challengesサービス URL"
    )
    community_base_url: str = Field(
        default="http://192.168.0.118:8086/api/v1", description="Communityサービス URL"
    )
    profile_base_url: str = Field(
        default="http://192.168.0.118:8082/api/v1", description="Profileサービス URL"
    )

    # HTTP設定
    http_timeout: float = Field(default=10.0, gt=0, description="HTTPタイムアウト（秒）")
    route_through_gateway: bool = Field(
        default=True,
        description="Learning/Challenges/Community/ProfileをAPIゲートウェイ経由で呼ぶか",
    )

    # UI挙動
    search_debounce_seconds: float = Field(
        default=0.3, ge=0.0, description="検索デバウンス時間（秒）"
    )
    autosave_delay_seconds: float = Field(
        default=3.0, ge=0.0, description="自動保存の待機時間（秒）"
    )
    cache_ttl_seconds: float = Field(
        default=300.0, ge=0.0, description="キャッシュTTL（秒）"
    )

    # ログ設定
    log_level: str = Field(default="INFO", description="ログレベル")
    debug: bool = Field(default=False, description="デバッグモード")

    # Pydantic設定
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEARNFLOW_",
        case_sensitive=False,
    )

    @field_validator(
        "iam_base_url",
        "api_gateway_base_url",
        "learning_base_url",
        "challenges_base_url",
        "community_base_url",
        "profile_base_url",
    )
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def configure_logging(self) -> None:
        """ログ設定を適用."""
        level = "DEBUG" if self.debug else self.log_level.upper()
        logging.basicConfig(
            level=getattr(logging, level, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


@lru_cache
def get_settings() -> LearnFlowSettings:
    """設定シングルトンを取得.

    この関数は設定をキャッシュし、アプリケーション全体で同じインスタンスを返します。

    Returns:
        LearnFlow設定
    """
    settings = LearnFlowSettings()
    settings.configure_logging()
    return settings
