# backend/fgpe_mail/notifications/config.py

"""
通知送信に関する設定値。
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from fgpe_mail.utils.config import get_env

from .templates import DEFAULT_PORTAL_URL


class TransportKind(str, Enum):
    """
    使用するメールトランスポート。

    - RESEND: Resend API で実際に送信する
    - LOG: ログ出力のみ（ローカル動作確認用）
    """

    RESEND = "resend"
    LOG = "log"


class SendEmailMode(str, Enum):
    """/send-email に割り当てるリクエスト形式。"""

    TEMPLATED = "templated"
    RAW = "raw"


@dataclass(frozen=True)
class NotificationSettings:
    """通知送信の設定値コンテナ。"""

    sender_address: str
    transport: TransportKind
    send_email_mode: SendEmailMode
    portal_url: str


@lru_cache()
def get_notification_settings() -> NotificationSettings:
    """
    環境変数から通知設定を読み込む。

    任意:
      - EMAIL_FROM_ADDRESS (デフォルト: onboarding@resend.dev)
      - EMAIL_TRANSPORT    (resend / log, デフォルト: resend)
      - SEND_EMAIL_MODE    (templated / raw, デフォルト: templated)
      - FGPE_PORTAL_URL    (デフォルト: https://portail.fgpe.gov.gn)

    :raises ValueError: EMAIL_TRANSPORT / SEND_EMAIL_MODE が未知の値の場合。
    """
    sender_address = get_env(
        "EMAIL_FROM_ADDRESS",
        default="onboarding@resend.dev",
        required=False,
    )
    transport = TransportKind(
        get_env("EMAIL_TRANSPORT", default="resend", required=False).lower()
    )
    send_email_mode = SendEmailMode(
        get_env("SEND_EMAIL_MODE", default="templated", required=False).lower()
    )
    portal_url = get_env(
        "FGPE_PORTAL_URL",
        default=DEFAULT_PORTAL_URL,
        required=False,
    )

    return NotificationSettings(
        sender_address=sender_address,
        transport=transport,
        send_email_mode=send_email_mode,
        portal_url=portal_url,
    )
