# backend/fgpe_mail/resend_api/client.py

"""
Resend API との通信を担当するクライアントモジュール。
"""

from typing import Any, Dict, Optional

import httpx

from .config import ResendConfig, get_resend_config


class ResendClientError(RuntimeError):
    """Resend クライアント全般の例外。"""


class ResendConnectionError(ResendClientError):
    """接続エラー・タイムアウト時の例外。"""


class ResendAPIError(ResendClientError):
    """
    Resend が 4xx/5xx を返した場合の例外。

    Resend のエラーボディ {"statusCode", "name", "message"} をそのまま保持する。
    """

    def __init__(self, status_code: int, name: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.name = name
        self.message = message


class ResendClient:
    """
    Resend API の薄いラッパークライアント。

    - メール送信（POST /emails）のみを扱う
    """

    def __init__(self, config: Optional[ResendConfig] = None) -> None:
        self.config = config or get_resend_config()

    @property
    def timeout(self) -> int:
        return self.config.timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        """
        Resend API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて ResendAPIError を投げる。
        """
        if response.status_code < 400:
            return

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            body = {}

        raise ResendAPIError(
            status_code=int(body.get("statusCode") or response.status_code),
            name=str(body.get("name") or "application_error"),
            message=str(body.get("message") or response.text or "Resend API error"),
        )

    def send_email(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        メール 1通を Resend に送信する。

        :param payload: {from, to, subject, html} を含む辞書。
        :raises ResendAPIError: Resend が 4xx/5xx を返した場合。
        :raises ResendConnectionError: 接続エラーやタイムアウト時。
        :return: Resend からの JSON レスポンス（通常は {"id": ...}）。
        """
        url = f"{self.config.api_base_url}/emails"

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self.timeout,
            )
        except httpx.RequestError as exc:
            raise ResendConnectionError(f"Failed to call Resend API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError:
            # JSON でないレスポンスはそのままテキストで返す。
            return {"raw": response.text}

        if not isinstance(data, dict):
            return {"raw": data}
        return data
