"""HTTPクライアント層.

モジュール:
- session: 認証トークンストア
- client: サービスクライアントとレジストリ
- results: 呼び出し結果の型
"""

from learnflow.http.client import ServiceClient, ServiceRegistry
from learnflow.http.results import (
    LearningEnvelope,
    PageEnvelope,
    RequestFailure,
    RequestResult,
    RequestSuccess,
    is_success,
)
from learnflow.http.session import AuthTokens, SessionTokenStore


__all__ = [
    "AuthTokens",
    "LearningEnvelope",
    "PageEnvelope",
    "RequestFailure",
    "RequestResult",
    "RequestSuccess",
    "ServiceClient",
    "ServiceRegistry",
    "SessionTokenStore",
    "is_success",
]
