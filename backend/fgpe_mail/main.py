# backend/fgpe_mail/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- GET /            稼働確認用のプレーンテキスト
- GET /health      簡易ヘルスチェック
- POST /send-email 保証申請ステータス通知メールの送信
"""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from fgpe_mail.notifications.config import SendEmailMode, get_notification_settings
from fgpe_mail.notifications.router import build_router, raw_email_path
from fgpe_mail.utils.config import get_app_settings

load_dotenv()

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "FGPE Email API is running"
INVALID_BODY_MESSAGE = "Corps de requête invalide"


def configure_logging() -> None:
    """LOG_LEVEL に従ってルートロガーを設定する。"""
    logging.basicConfig(
        level=get_app_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    JSON として解釈できないボディは 422 ではなく 400 として返す。

    生パススルー版のパスでは {"success": false, "message": ...} 形式にそろえる。
    """
    logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())

    if request.url.path == request.app.state.raw_email_path:
        content = {"success": False, "message": INVALID_BODY_MESSAGE}
    else:
        content = {"error": INVALID_BODY_MESSAGE}

    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


def create_app(send_email_mode: Optional[SendEmailMode] = None) -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    :param send_email_mode: /send-email に割り当てる形式。省略時は SEND_EMAIL_MODE に従う。
    """
    configure_logging()

    if send_email_mode is None:
        send_email_mode = get_notification_settings().send_email_mode

    app = FastAPI(title="FGPE Email API")
    app.state.raw_email_path = raw_email_path(send_email_mode)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    # ルーター登録
    app.include_router(build_router(send_email_mode))

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    def liveness() -> str:
        return LIVENESS_TEXT

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    logger.info("FGPE Email API configured (send-email mode: %s)", send_email_mode.value)
    return app


def run() -> None:
    """uvicorn でサーバを起動する（PORT 環境変数、デフォルト 3000）。"""
    port = get_app_settings().port
    logger.info("FGPE Email API running at http://localhost:%s", port)
    uvicorn.run("fgpe_mail.main:app", host="0.0.0.0", port=port)


# uvicorn 実行時のエントリーポイント
app = create_app()
