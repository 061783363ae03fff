# backend/fgpe_mail/notifications/schemas.py

"""
通知 API のスキーマ定義。

- 入力: 保証申請データ（requestData）と送信先、または生の {to, subject, html}
- 出力: Resend へ渡す EmailMessage と、その送信結果 EmailSendResult

JSON 側は camelCase（companyName など）、Python 側は snake_case で扱う。
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailRequestValidationError(ValueError):
    """必須パラメータが欠けている場合の例外（HTTP 400 に対応）。"""


class GuaranteeStatus(str, Enum):
    """
    保証申請のステータス。

    submitted → under_review → draft → approved と進み、
    under_review から rejected / cancelled に分岐する。
    """

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["GuaranteeStatus"]:
        """
        文字列をステータスに変換する。未知の値は None（unknown）を返し、例外は投げない。
        """
        try:
            return cls(value)
        except ValueError:
            return None


class GuaranteeRequest(BaseModel):
    """
    保証申請 1件分のデータ（requestData）。

    フィールドレベルの検証は行わない。status の必須チェックはハンドラ側で行う。
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="申請の参照番号")
    company_name: Optional[str] = Field(None, alias="companyName", description="企業名")
    loan_amount: Optional[Decimal] = Field(
        None, alias="loanAmount", description="融資額（GNF）"
    )
    guarantee_percentage: Optional[Decimal] = Field(
        None, alias="guaranteePercentage", description="保証率（0-100）"
    )
    guarantee_amount: Optional[Decimal] = Field(
        None, alias="guaranteeAmount", description="保証額（GNF）"
    )
    status: Optional[str] = Field(None, description="現在のステータス（未知の値も受け付ける）")


class StatusNotificationRequest(BaseModel):
    """
    テンプレート版 /send-email のリクエストボディ。

    previousStatus は受け付けるが、レンダリングには使わない。
    """

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = Field(None, description="送信先メールアドレス")
    request_data: Optional[GuaranteeRequest] = Field(None, alias="requestData")
    previous_status: Optional[str] = Field(None, alias="previousStatus")

    def validate_required(self) -> None:
        """
        email / requestData / requestData.status の存在を確認する。

        :raises EmailRequestValidationError: いずれかが欠けている場合。
        """
        if not self.email:
            raise EmailRequestValidationError("Le paramètre email est requis")
        if self.request_data is None:
            raise EmailRequestValidationError("Le paramètre requestData est requis")
        if not self.request_data.status:
            raise EmailRequestValidationError(
                "Le statut de la demande (requestData.status) est requis"
            )


class RawEmailRequest(BaseModel):
    """生パススルー版 /send-email のリクエストボディ。"""

    to: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None

    def validate_required(self) -> None:
        if not self.to or not self.subject or not self.html:
            raise EmailRequestValidationError(
                "Les paramètres to, subject et html sont requis"
            )


class EmailMessage(BaseModel):
    """
    トランスポートに渡すメール 1通分。

    ※ 本文（html）はログに出さないこと。
    """

    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    to: str
    subject: str
    html: str


class EmailSendError(BaseModel):
    """プロバイダが返したエラー内容（Resend のエラーボディ形式）。"""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "application_error"
    message: str
    status_code: Optional[int] = Field(None, alias="statusCode")


class EmailSendResult(BaseModel):
    """
    送信結果。data（成功）か error（プロバイダ側エラー）のどちらか一方を持つ。
    """

    data: Optional[Dict[str, Any]] = None
    error: Optional[EmailSendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BreadcrumbState(str, Enum):
    """パンくず 1ステップの表示状態。"""

    ACTIVE = "active"
    COMPLETED = "completed"
    PENDING = "pending"
    REJECTED = "rejected"


class BreadcrumbStep(BaseModel):
    """パンくず（進捗インジケータ）の 1ノード。"""

    index: int
    label: str
    state: BreadcrumbState
