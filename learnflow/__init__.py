"""LearnFlow - 学習プラットフォームクライアント.

IAM / Learning / Challenges / Community 各マイクロサービスへの
コントローラー層と、ガイドエディタのクライアント状態管理を提供する。

モジュール:
- config: 設定とログ
- core: 定数・例外
- http: セッショントークンとサービスクライアント
- services: ドメイン別のアクション・アセンブラー・コントローラー
- state: ガイドエディタ状態ストア
- editor: ページマネージャー・楽観的更新・自動保存
- forms: フォーム検証
- api: ローカル API ルーター
"""

__version__ = "0.1.0"
