# backend/fgpe_mail/notifications/router.py

"""
/send-email エンドポイント。

- テンプレート版: {email, requestData, previousStatus?} からステータス通知を生成して送信
- 生パススルー版: {to, subject, html} をそのまま送信

SEND_EMAIL_MODE で /send-email に割り当てる版を選び、もう一方は
/send-email/raw または /send-email/templated で引き続き利用できる。
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from .config import SendEmailMode
from .factory import get_notification_service
from .schemas import EmailRequestValidationError, RawEmailRequest, StatusNotificationRequest
from .service import NotificationService

logger = logging.getLogger(__name__)

SEND_EMAIL_PATH = "/send-email"


def send_templated_email(
    body: Optional[StatusNotificationRequest] = Body(None),
    service: NotificationService = Depends(get_notification_service),
) -> JSONResponse:
    """
    ステータス変更通知を送信するエンドポイント。

    - 必須パラメータ欠落 → 400 {"error": "..."}
    - 送信成功 → 200 {"data": {...}}
    - プロバイダのエラー → 500 {"error": {name, message, statusCode}}
    - 想定外の例外 → 500 {"error": "<例外メッセージ>"}
    """
    try:
        result = service.send_status_notification(
            body if body is not None else StatusNotificationRequest()
        )
    except EmailRequestValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while sending status notification email.")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": result.error.model_dump(by_alias=True)},
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content={"data": result.data})


def send_raw_email(
    body: Optional[RawEmailRequest] = Body(None),
    service: NotificationService = Depends(get_notification_service),
) -> JSONResponse:
    """
    件名・本文をそのまま送信するエンドポイント。

    レスポンスは {"success": bool, "message": str, "data"?: {...}} 形式。
    """
    try:
        result = service.send_raw(body if body is not None else RawEmailRequest())
    except EmailRequestValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": str(exc)},
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while sending raw email.")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": str(exc)},
        )

    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": result.error.message},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "message": "Email envoyé avec succès",
            "data": result.data,
        },
    )


def raw_email_path(mode: SendEmailMode) -> str:
    """生パススルー版が割り当てられるパス。"""
    if mode == SendEmailMode.RAW:
        return SEND_EMAIL_PATH
    return f"{SEND_EMAIL_PATH}/raw"


def build_router(mode: SendEmailMode = SendEmailMode.TEMPLATED) -> APIRouter:
    """
    SEND_EMAIL_MODE に応じて /send-email の割り当てを決めたルーターを生成する。
    """
    router = APIRouter(tags=["email"])

    if mode == SendEmailMode.RAW:
        primary, alternate, alternate_path = (
            send_raw_email,
            send_templated_email,
            f"{SEND_EMAIL_PATH}/templated",
        )
    else:
        primary, alternate, alternate_path = (
            send_templated_email,
            send_raw_email,
            f"{SEND_EMAIL_PATH}/raw",
        )

    router.add_api_route(
        SEND_EMAIL_PATH,
        primary,
        methods=["POST"],
        summary="メール送信",
    )
    router.add_api_route(
        alternate_path,
        alternate,
        methods=["POST"],
        summary="メール送信（代替形式）",
    )

    return router
