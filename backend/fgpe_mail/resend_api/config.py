# backend/fgpe_mail/resend_api/config.py

"""
Resend 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from fgpe_mail.utils.config import get_env, get_env_int


@dataclass(frozen=True)
class ResendConfig:
    """Resend API 用の設定値コンテナ。"""

    api_key: str
    api_base_url: str
    timeout_seconds: int


@lru_cache()
def get_resend_config() -> ResendConfig:
    """
    環境変数から Resend 設定を読み込む。

    必須:
      - RESEND_API_KEY

    任意:
      - RESEND_API_BASE_URL    (デフォルト: https://api.resend.com)
      - RESEND_TIMEOUT_SECONDS (デフォルト: 10)
    """
    api_key = get_env("RESEND_API_KEY")

    api_base_url = get_env(
        "RESEND_API_BASE_URL",
        default="https://api.resend.com",
        required=False,
    )

    return ResendConfig(
        api_key=api_key,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=get_env_int("RESEND_TIMEOUT_SECONDS", default=10),
    )
