# backend/fgpe_mail/notifications/factory.py

"""
通知サービスの簡易ファクトリ。

- 設定（EMAIL_TRANSPORT）に応じたトランスポートを 1度だけ生成する
- router からは Depends(get_notification_service) で利用する
"""

from __future__ import annotations

from functools import lru_cache

from .config import TransportKind, get_notification_settings
from .service import NotificationService
from .transport import EmailTransport, LoggingEmailTransport, ResendEmailTransport


@lru_cache()
def get_email_transport() -> EmailTransport:
    """
    アプリ全体で共有するトランスポートを返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    settings = get_notification_settings()
    if settings.transport == TransportKind.LOG:
        return LoggingEmailTransport()
    return ResendEmailTransport()


def get_notification_service() -> NotificationService:
    """
    NotificationService を生成する（FastAPI の依存関係として使う）。

    トランスポートは最初の送信時に生成する（RESEND_API_KEY 未設定などはハンドラ内の 500 になる）。
    """
    settings = get_notification_settings()
    return NotificationService(
        transport_factory=get_email_transport,
        sender_address=settings.sender_address,
        portal_url=settings.portal_url,
    )
