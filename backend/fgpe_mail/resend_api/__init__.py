# backend/fgpe_mail/resend_api/__init__.py

"""
Resend メール配信 API 連携用モジュール群。

- config: API キー・送信元アドレス・タイムアウト等の設定値
- client: Resend REST API（POST /emails）の薄い HTTP クライアント
"""
