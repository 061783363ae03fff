# backend/fgpe_mail/notifications/templates.py

"""
ステータス通知メールのテンプレートエンジン。

- ステータスごとの件名 / 説明文 / ラベル（固定のフランス語文言）
- 4ステップのパンくず（submitted → under_review → draft → approved）
- 金額のフォーマット（フランス式の桁区切り、通貨記号なし）
- Jinja2 テンプレートによる HTML 全体のレンダリング

すべて副作用のない純粋関数で、同じ入力には同じ出力を返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from typing import Dict, List, Optional, Tuple, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from .schemas import (
    BreadcrumbState,
    BreadcrumbStep,
    GuaranteeRequest,
    GuaranteeStatus,
)

StatusLike = Union[GuaranteeStatus, str, None]

CURRENCY = "GNF"
UNDEFINED_VALUE = "Non défini"
EMAIL_TITLE = "FGPE - Suivi de votre demande de garantie"
DEFAULT_PORTAL_URL = "https://portail.fgpe.gov.gn"

# 桁区切り（fr-FR）
GROUP_SEPARATOR = " "
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3

FOOTER_LINES = (
    "Fonds de Garantie des Prêts aux Entreprises (FGPE)",
    "Kaloum, Conakry - République de Guinée",
    "contact@fgpe.gov.gn",
)

SUBJECTS: Dict[GuaranteeStatus, str] = {
    GuaranteeStatus.SUBMITTED: "Votre demande de garantie a été soumise avec succès",
    GuaranteeStatus.UNDER_REVIEW: "Votre demande de garantie est en cours d'examen",
    GuaranteeStatus.DRAFT: (
        "Votre demande de garantie a été approuvée par le comité d'évaluation"
    ),
    GuaranteeStatus.APPROVED: "Félicitations ! Votre demande de garantie a été approuvée",
    GuaranteeStatus.REJECTED: "Votre demande de garantie n'a pas été retenue",
    GuaranteeStatus.CANCELLED: "Votre demande de garantie a été annulée",
}
DEFAULT_SUBJECT = "Mise à jour de votre demande de garantie"

DESCRIPTIONS: Dict[GuaranteeStatus, str] = {
    GuaranteeStatus.SUBMITTED: (
        "Nous avons bien reçu votre demande de garantie. Elle a été enregistrée "
        "et sera examinée par nos équipes dans les meilleurs délais."
    ),
    GuaranteeStatus.UNDER_REVIEW: (
        "Votre demande de garantie est actuellement en cours d'examen par nos "
        "analystes. Nous pourrions vous contacter si des informations "
        "complémentaires sont nécessaires."
    ),
    GuaranteeStatus.DRAFT: (
        "Bonne nouvelle : votre demande de garantie a été approuvée par le comité "
        "d'évaluation. Elle est en attente de la validation finale."
    ),
    GuaranteeStatus.APPROVED: (
        "Félicitations ! Votre demande de garantie a été approuvée. Notre équipe "
        "vous contactera prochainement pour la suite de la procédure."
    ),
    GuaranteeStatus.REJECTED: (
        "Après examen attentif, nous sommes au regret de vous informer que votre "
        "demande de garantie n'a pas été retenue. Vous pouvez nous contacter "
        "pour obtenir plus d'informations."
    ),
    GuaranteeStatus.CANCELLED: (
        "Votre demande de garantie a été annulée. Si vous pensez qu'il s'agit "
        "d'une erreur, veuillez nous contacter."
    ),
}
DEFAULT_DESCRIPTION = (
    "Le statut de votre demande de garantie a été mis à jour. Connectez-vous à "
    "votre espace pour consulter les détails."
)

STATUS_LABELS: Dict[GuaranteeStatus, str] = {
    GuaranteeStatus.SUBMITTED: "Soumise",
    GuaranteeStatus.UNDER_REVIEW: "En cours d'examen",
    GuaranteeStatus.DRAFT: "Approuvée par le comité",
    GuaranteeStatus.APPROVED: "Approuvée",
    GuaranteeStatus.REJECTED: "Rejetée",
    GuaranteeStatus.CANCELLED: "Annulée",
}

# パンくずの通常ステップ（順序が意味を持つ）
BREADCRUMB_STAGES = (
    GuaranteeStatus.SUBMITTED,
    GuaranteeStatus.UNDER_REVIEW,
    GuaranteeStatus.DRAFT,
    GuaranteeStatus.APPROVED,
)
BREADCRUMB_LABELS: Dict[GuaranteeStatus, str] = {
    GuaranteeStatus.SUBMITTED: "Soumise",
    GuaranteeStatus.UNDER_REVIEW: "En examen",
    GuaranteeStatus.DRAFT: "Comité",
    GuaranteeStatus.APPROVED: "Approuvée",
}
TERMINAL_LABELS: Dict[GuaranteeStatus, str] = {
    GuaranteeStatus.REJECTED: "Rejetée",
    GuaranteeStatus.CANCELLED: "Annulée",
}
# 終端ステータスの場合、ここまでは完了扱い
LAST_STAGE_BEFORE_TERMINAL = GuaranteeStatus.UNDER_REVIEW


def _coerce_status(status: StatusLike) -> Optional[GuaranteeStatus]:
    if isinstance(status, GuaranteeStatus):
        return status
    return GuaranteeStatus.parse(status)


def subject_for(status: StatusLike) -> str:
    """ステータスに対応するメール件名。未知のステータスは汎用の件名。"""
    return SUBJECTS.get(_coerce_status(status), DEFAULT_SUBJECT)


def description_for(status: StatusLike) -> str:
    """本文冒頭の説明文。未知のステータスは汎用の説明文。"""
    return DESCRIPTIONS.get(_coerce_status(status), DEFAULT_DESCRIPTION)


def status_label_for(status: StatusLike) -> str:
    """
    ステータスの短いラベル。

    件名・説明文と異なり、未知のステータスは汎用文言ではなく元の値をそのまま返す。
    """
    known = _coerce_status(status)
    if known is not None:
        return STATUS_LABELS[known]
    if status is None:
        return ""
    return str(status)


def format_amount(value: Union[Decimal, int, float]) -> str:
    """
    金額をフランス式の桁区切りで整形する（例: 1000000 → "1 000 000"）。

    - 小数は最大 3 桁、末尾の 0 は落とす
    - 通貨記号は付けない（呼び出し側で "GNF" を付ける）
    - 未定義の金額は呼び出し側で "Non défini" に置き換えること
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    # 桁数の多い金額でも quantize が InvalidOperation にならない精度にする
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + MAX_FRACTION_DIGITS + 2)
        amount = amount.quantize(
            Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP
        )

    text = f"{amount:,.{MAX_FRACTION_DIGITS}f}"
    integer_part, _, fraction_part = text.partition(".")
    integer_part = integer_part.replace(",", GROUP_SEPARATOR)
    fraction_part = fraction_part.rstrip("0")

    if fraction_part:
        return f"{integer_part}{DECIMAL_SEPARATOR}{fraction_part}"
    return integer_part


def breadcrumb_for(current_status: StatusLike) -> List[BreadcrumbStep]:
    """
    4ステップの進捗インジケータを生成する。

    - 通常: 現在より前 = completed, 現在 = active, 後 = pending
    - rejected / cancelled: under_review まで completed、残りは pending、
      5番目のノードとして state=rejected の終端ノードを追加
    - 未知のステータス: すべて pending（active なし）
    """
    status = _coerce_status(current_status)

    if status in TERMINAL_LABELS:
        reached_index = BREADCRUMB_STAGES.index(LAST_STAGE_BEFORE_TERMINAL)
        steps = [
            BreadcrumbStep(
                index=index,
                label=BREADCRUMB_LABELS[stage],
                state=(
                    BreadcrumbState.COMPLETED
                    if index <= reached_index
                    else BreadcrumbState.PENDING
                ),
            )
            for index, stage in enumerate(BREADCRUMB_STAGES)
        ]
        steps.append(
            BreadcrumbStep(
                index=len(BREADCRUMB_STAGES),
                label=TERMINAL_LABELS[status],
                state=BreadcrumbState.REJECTED,
            )
        )
        return steps

    current_index = BREADCRUMB_STAGES.index(status) if status in BREADCRUMB_STAGES else -1

    steps: List[BreadcrumbStep] = []
    for index, stage in enumerate(BREADCRUMB_STAGES):
        if current_index < 0 or index > current_index:
            state = BreadcrumbState.PENDING
        elif index < current_index:
            state = BreadcrumbState.COMPLETED
        else:
            state = BreadcrumbState.ACTIVE
        steps.append(BreadcrumbStep(index=index, label=BREADCRUMB_LABELS[stage], state=state))

    return steps


@dataclass(frozen=True)
class EmailViewModel:
    """HTML テンプレートに渡す表示用の値（すべて整形済み文字列）。"""

    title: str
    description: str
    breadcrumb: List[BreadcrumbStep]
    reference: str
    company_name: str
    loan_amount: str
    guarantee_percentage: Optional[str]
    guarantee_amount: Optional[str]
    status_label: str
    portal_url: str
    footer_lines: Tuple[str, ...]


def _format_money(value: Optional[Decimal]) -> str:
    if value is None:
        return UNDEFINED_VALUE
    return f"{format_amount(value)} {CURRENCY}"


def build_view_model(
    request_data: GuaranteeRequest,
    *,
    portal_url: str = DEFAULT_PORTAL_URL,
) -> EmailViewModel:
    """GuaranteeRequest から表示用の値を組み立てる。"""
    percentage = request_data.guarantee_percentage
    guarantee_amount = request_data.guarantee_amount

    return EmailViewModel(
        title=EMAIL_TITLE,
        description=description_for(request_data.status),
        breadcrumb=breadcrumb_for(request_data.status),
        reference=request_data.id or UNDEFINED_VALUE,
        company_name=request_data.company_name or UNDEFINED_VALUE,
        loan_amount=_format_money(request_data.loan_amount),
        guarantee_percentage=(
            f"{format_amount(percentage)} %" if percentage is not None else None
        ),
        guarantee_amount=(
            _format_money(guarantee_amount) if guarantee_amount is not None else None
        ),
        status_label=status_label_for(request_data.status),
        portal_url=portal_url,
        footer_lines=FOOTER_LINES,
    )


@lru_cache()
def _get_environment() -> Environment:
    return Environment(
        loader=PackageLoader("fgpe_mail.notifications", "html_templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_email(
    request_data: GuaranteeRequest,
    previous_status: StatusLike = None,  # noqa: ARG001 - 受け付けるが表示には使わない
    *,
    portal_url: str = DEFAULT_PORTAL_URL,
) -> str:
    """
    通知メールの HTML 全体を生成する。

    previous_status は API 互換のため受け付けるだけで、出力には影響しない。
    """
    view = build_view_model(request_data, portal_url=portal_url)
    template = _get_environment().get_template("status_update.html")
    return template.render(view=view)
