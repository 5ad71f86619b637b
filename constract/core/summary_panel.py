"""위험 진단 패널 (한 줄 요약 5종) 생성."""
from typing import Any, Dict, Optional

from .models import PLACEHOLDER, ExtractedFields, SummaryPanel
from .scoring import calculate_jeonse_ratio, jeonse_ratio_level


def format_krw(amount: int) -> str:
    """원 단위 금액 → '2억 4,000만원' 형식"""
    if amount <= 0:
        return "0원"
    eok, rest = divmod(amount, 100_000_000)
    man = rest // 10_000
    parts = []
    if eok:
        parts.append(f"{eok:,}억")
    if man:
        parts.append(f"{man:,}만")
    if not parts:
        return f"{amount:,}원"
    return " ".join(parts) + "원"


def _jeonse_ratio_text(fields: ExtractedFields) -> str:
    if not fields.deposit or not fields.market_price:
        return PLACEHOLDER
    ratio = calculate_jeonse_ratio(fields.deposit, fields.market_price)
    return f"{ratio:.1f}% ({jeonse_ratio_level(ratio)})"


def _mortgage_text(fields: ExtractedFields, registry_text: str) -> str:
    if fields.mortgage_amount:
        return format_krw(fields.mortgage_amount)
    if "저당" in registry_text:
        return "근저당 설정 있음 (금액 확인 필요)"
    if registry_text:
        return "근저당 없음"
    return PLACEHOLDER


def _seizure_text(registry_text: str) -> str:
    if "압류" in registry_text or "가처분" in registry_text:
        return "압류/가압류 있음 (위험)"
    if registry_text:
        return "압류/가압류 없음"
    return PLACEHOLDER


def _owner_match_text(fields: ExtractedFields, owner_match_status: Optional[str]) -> str:
    if owner_match_status == "match":
        return "일치"
    if owner_match_status == "mismatch":
        return "불일치 (위험)"
    if fields.landlord and fields.owner:
        return "일치" if fields.landlord == fields.owner else "불일치 (위험)"
    return PLACEHOLDER


def _special_terms_text(contract_text: str) -> str:
    if "특약" in contract_text:
        return "특약 포함 (검토 필요)"
    return PLACEHOLDER


def build_summary_panel(
    fields: ExtractedFields,
    contract_text: str = "",
    registry_text: str = "",
    owner_match_status: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SummaryPanel:
    """
    추출 데이터와 정규화된 원문으로 요약 패널 생성

    Args:
        fields: 추출 필드
        contract_text: 정규화된 계약서 텍스트
        registry_text: 정규화된 등기부 텍스트
        owner_match_status: 교차 검증 결과 ("match" | "mismatch" | "unknown")
        overrides: AI 응답의 summary_panel 등 우선 적용할 값 (빈 값은 무시)
    """
    panel = {
        "jeonse_ratio": _jeonse_ratio_text(fields),
        "mortgage_total": _mortgage_text(fields, registry_text),
        "seizure_status": _seizure_text(registry_text),
        "owner_match": _owner_match_text(fields, owner_match_status),
        "special_terms_check": _special_terms_text(contract_text),
    }
    for key, value in (overrides or {}).items():
        if key in panel and value not in (None, ""):
            panel[key] = str(value)
    return SummaryPanel(**panel)
