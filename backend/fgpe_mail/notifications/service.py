# backend/fgpe_mail/notifications/service.py

"""
通知送信のサービス層。

- テンプレート版: requestData のステータスから件名と HTML を生成して送信
- 生パススルー版: 受け取った {to, subject, html} をそのまま送信

どちらも送信は注入されたトランスポートを 1回呼ぶだけで、リトライはしない。
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .schemas import (
    EmailMessage,
    EmailSendResult,
    RawEmailRequest,
    StatusNotificationRequest,
)
from .templates import DEFAULT_PORTAL_URL, render_email, subject_for
from .transport import EmailTransport

logger = logging.getLogger(__name__)


class NotificationService:
    """
    検証 → テンプレート生成 → 送信 をまとめるサービス。
    """

    def __init__(
        self,
        transport: Optional[EmailTransport] = None,
        sender_address: str = "",
        portal_url: str = DEFAULT_PORTAL_URL,
        *,
        transport_factory: Optional[Callable[[], EmailTransport]] = None,
    ) -> None:
        """
        :param transport: 送信に使うトランスポート。
        :param transport_factory: transport 未指定時、最初の送信で呼び出して生成する。
            設定不足などの生成エラーは、入力検証の後の送信時に発生する。
        """
        if transport is None and transport_factory is None:
            raise ValueError("Either transport or transport_factory is required.")

        self._transport = transport
        self._transport_factory = transport_factory
        self.sender_address = sender_address
        self.portal_url = portal_url

    @property
    def transport(self) -> EmailTransport:
        if self._transport is None:
            self._transport = self._transport_factory()
        return self._transport

    def build_status_message(self, request: StatusNotificationRequest) -> EmailMessage:
        """
        ステータス通知メールを組み立てる。

        :raises EmailRequestValidationError: 必須パラメータが欠けている場合。
        """
        request.validate_required()
        request_data = request.request_data

        return EmailMessage(
            from_address=self.sender_address,
            to=request.email,
            subject=subject_for(request_data.status),
            html=render_email(
                request_data,
                request.previous_status,
                portal_url=self.portal_url,
            ),
        )

    def send_status_notification(self, request: StatusNotificationRequest) -> EmailSendResult:
        """
        ステータス変更通知を送信する。

        :raises EmailRequestValidationError: 必須パラメータが欠けている場合。
        """
        message = self.build_status_message(request)
        return self._deliver(message)

    def send_raw(self, request: RawEmailRequest) -> EmailSendResult:
        """
        件名・本文を生成せず、そのまま送信する。

        :raises EmailRequestValidationError: to / subject / html のいずれかが欠けている場合。
        """
        request.validate_required()
        message = EmailMessage(
            from_address=self.sender_address,
            to=request.to,
            subject=request.subject,
            html=request.html,
        )
        return self._deliver(message)

    def _deliver(self, message: EmailMessage) -> EmailSendResult:
        result = self.transport.send(message)

        if result.ok:
            logger.info("Email sent successfully to %s: %s", message.to, result.data)
        else:
            logger.error(
                "Email provider returned an error for %s: %s",
                message.to,
                result.error.model_dump(by_alias=True),
            )

        return result
