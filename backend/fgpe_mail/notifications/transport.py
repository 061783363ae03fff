# backend/fgpe_mail/notifications/transport.py

"""
メール送信インターフェースと実装。

- EmailMessage を受け取り EmailSendResult を返す send() インターフェース
- Resend API で送信する ResendEmailTransport
- ログ出力のみ行う LoggingEmailTransport（ローカル動作確認用）

プロバイダがエラーを返した場合は例外ではなく EmailSendResult.error で返す。
接続エラーなど想定外の失敗は例外のまま呼び出し元に伝える。
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Protocol

from fgpe_mail.resend_api.client import ResendAPIError, ResendClient

from .schemas import EmailMessage, EmailSendError, EmailSendResult

logger = logging.getLogger(__name__)


class EmailTransport(Protocol):
    """
    メール送信の最小インターフェース。

    実装例:
    - ResendEmailTransport: Resend API 経由で送信
    - LoggingEmailTransport: ログ出力のみ
    """

    def send(self, message: EmailMessage) -> EmailSendResult:  # pragma: no cover - Protocol
        ...


class ResendEmailTransport:
    """
    ResendClient を使ってメールを送信するトランスポート。
    """

    def __init__(self, client: Optional[ResendClient] = None) -> None:
        self.client = client or ResendClient()

    def send(self, message: EmailMessage) -> EmailSendResult:
        """
        メールを送信し、Resend の 4xx/5xx はエラーオブジェクトに変換して返す。

        :raises ResendConnectionError: 接続エラーやタイムアウト時。
        """
        payload = message.model_dump(by_alias=True)

        try:
            data = self.client.send_email(payload)
        except ResendAPIError as exc:
            return EmailSendResult(
                error=EmailSendError(
                    name=exc.name,
                    message=exc.message,
                    status_code=exc.status_code,
                )
            )

        return EmailSendResult(data=data)


class LoggingEmailTransport:
    """
    EmailMessage を logger に記録するだけのトランスポート。

    - 実際の外部サービスへの送信は行わない
    - 本文（html）は出力しない
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, message: EmailMessage) -> EmailSendResult:
        email_id = f"log-{uuid.uuid4()}"
        self._logger.info(
            "[email][dry-run] id=%s from=%s to=%s subject=%s",
            email_id,
            message.from_address,
            message.to,
            message.subject,
        )
        return EmailSendResult(data={"id": email_id})
