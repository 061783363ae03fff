# backend/fgpe_mail/__init__.py
"""
FGPE メール通知 API のアプリケーションパッケージ。

This package contains:
- main: FastAPI application entrypoint
- notifications: 保証申請ステータス通知（テンプレート生成・送信・ルーター）
- resend_api: Resend メール配信 API クライアント
- utils: 環境変数などの共通ユーティリティ
"""
