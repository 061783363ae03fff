# backend/fgpe_mail/notifications/__init__.py

"""
保証申請ステータス通知用のモジュール群。

構成イメージ:
- schemas: リクエスト / メッセージ / 送信結果のスキーマ
- templates: ステータスに応じた件名・本文・パンくずの生成と HTML レンダリング
- transport: メール送信インターフェースと実装（Resend / ログ出力のみ）
- factory: アプリ全体で共有するトランスポートとサービスの生成
- service: 検証 → テンプレート生成 → 送信 のオーケストレーション
- router: /send-email エンドポイント
"""
