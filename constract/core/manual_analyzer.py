"""
수동 입력 분석

문서 없이 사용자가 입력한 금액/체크 항목으로 위험도를 계산한다 (LLM/OCR 미사용).

- 전세가율 = 보증금 / 시세 * 100  (70% 이상 미통과, 80% 이상 critical)
- 선순위 비율 = (근저당 + 선순위 보증금) / 시세 * 100
- 총 채무 비율 = (근저당 + 선순위 보증금 + 보증금) / 시세 * 100
- 점수 = 100 - 이슈 감점 (통과 가점 없음)

금액이 숫자가 아니면 0으로 처리한다. 시세가 0이면 전세가율도 0%가 되어
실제보다 안전하게 표시될 수 있다.
"""
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from constract.ingest.field_extractor import parse_amount

from .fraud_patterns import FRAUD_PATTERNS, get_pattern
from .models import (
    AnalysisResult,
    AnalysisSource,
    ExtractedFields,
    FraudCheck,
    Issue,
    ManualMetrics,
    RiskLevel,
    Severity,
)
from .scoring import (
    JEONSE_RATIO_CAUTION,
    JEONSE_RATIO_WARNING,
    band_level,
    calculate_jeonse_ratio,
    calculate_score,
    estimate_price_from_official,
)
from .summary_panel import build_summary_panel, format_krw

logger = logging.getLogger(__name__)


PRIOR_RATIO_PASS = 50
PRIOR_RATIO_CRITICAL = 60
PRIOR_RATIO_HIGH = 40
LIABILITY_RATIO_EXCEEDED = 100
LIABILITY_RATIO_HIGH = 80

MANUAL_BASE_RECOMMENDATIONS = (
    "인터넷등기소에서 등기부등본을 직접 발급하여 최신 정보를 확인하세요.",
    "잔금 당일에도 등기부등본을 재확인하세요.",
    "입주 당일 전입신고와 확정일자를 받으세요.",
)


class ManualInput(BaseModel):
    """수동 입력 폼 (snake_case / camelCase 키 모두 허용)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    deposit: int = 0
    market_price: int = Field(default=0, validation_alias=AliasChoices("market_price", "marketPrice"))
    mortgage_amount: int = Field(default=0, validation_alias=AliasChoices("mortgage_amount", "mortgageAmount"))
    prior_deposits: int = Field(default=0, validation_alias=AliasChoices("prior_deposits", "priorDeposits"))
    official_price: int = Field(default=0, validation_alias=AliasChoices("official_price", "officialPrice"))
    verified_owner: Optional[bool] = Field(default=None, validation_alias=AliasChoices("verified_owner", "verifiedOwner"))
    has_insurance: Optional[bool] = Field(default=None, validation_alias=AliasChoices("has_insurance", "hasInsurance"))
    is_proxy: Optional[bool] = Field(default=None, validation_alias=AliasChoices("is_proxy", "isProxy"))

    @field_validator("deposit", "market_price", "mortgage_amount", "prior_deposits", "official_price", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> int:
        return parse_amount(value)

    @field_validator("verified_owner", "has_insurance", "is_proxy", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> Optional[bool]:
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "yes", "y"):
                return True
            if lowered in ("false", "0", "no", "n"):
                return False
            return None
        return bool(value)


def _ratio(amount: int, price: int) -> float:
    return (amount / price) * 100 if price > 0 else 0.0


def analyze_manual_input(form_fields: Union[ManualInput, Mapping[str, Any]]) -> AnalysisResult:
    """
    수동 입력 데이터 분석

    Args:
        form_fields: ManualInput 또는 폼 필드 dict (금액은 숫자 문자열)

    Returns:
        AnalysisResult (source=manual, fraud_checks 8개)
    """
    form = form_fields if isinstance(form_fields, ManualInput) else ManualInput.model_validate(dict(form_fields))

    deposit = form.deposit
    market_price = form.market_price
    if market_price <= 0 and form.official_price > 0:
        market_price = estimate_price_from_official(form.official_price)
        logger.info(f"시세 미입력 - 공시지가 기준 추정 시세 사용: {market_price:,}원")

    issues = []
    checks = {}

    # 1. 전세가율
    jeonse_ratio = calculate_jeonse_ratio(deposit, market_price)
    pattern = get_pattern("empty_shell_jeonse")
    checks[pattern.id] = FraudCheck(
        id=pattern.id,
        title=pattern.name,
        description=f"전세가율 {jeonse_ratio:.1f}%",
        passed=jeonse_ratio < JEONSE_RATIO_CAUTION,
        risk_level=(
            RiskLevel.CRITICAL if jeonse_ratio >= JEONSE_RATIO_WARNING
            else RiskLevel.HIGH if jeonse_ratio >= JEONSE_RATIO_CAUTION
            else RiskLevel.LOW
        ),
    )
    if jeonse_ratio >= JEONSE_RATIO_WARNING:
        issues.append(Issue(
            type="전세가율 과도",
            severity=Severity.CRITICAL,
            message=f"전세가율이 {jeonse_ratio:.1f}%로 매우 높습니다. 깡통전세 위험이 있습니다.",
        ))
    elif jeonse_ratio >= JEONSE_RATIO_CAUTION:
        issues.append(Issue(
            type="전세가율 주의",
            severity=Severity.HIGH,
            message=f"전세가율이 {jeonse_ratio:.1f}%입니다. 시세 하락 시 보증금 회수가 어려울 수 있습니다.",
        ))

    # 2. 소유자-임대인 일치
    pattern = get_pattern("owner_mismatch")
    owner = form.verified_owner
    checks[pattern.id] = FraudCheck(
        id=pattern.id,
        title=pattern.name,
        description="일치 확인됨" if owner is True else "불일치" if owner is False else "미확인",
        passed=owner is True,
        risk_level=RiskLevel.CRITICAL if owner is False else RiskLevel.HIGH if owner is None else RiskLevel.LOW,
    )
    if owner is False:
        issues.append(Issue(
            type="소유자 불일치",
            severity=Severity.CRITICAL,
            message="등기부상 소유자와 임대인이 일치하지 않습니다. 대리인 계약 사기 위험이 있습니다.",
        ))

    # 3. 보증보험
    pattern = get_pattern("missing_guarantee_insurance")
    insurance = form.has_insurance
    checks[pattern.id] = FraudCheck(
        id=pattern.id,
        title=pattern.name,
        description="가입" if insurance is True else "미가입" if insurance is False else "미확인",
        passed=insurance is True,
        risk_level=RiskLevel.HIGH if insurance is False else RiskLevel.MEDIUM,
    )
    if insurance is False:
        issues.append(Issue(
            type="보증보험 미가입",
            severity=Severity.HIGH,
            message="전세보증보험에 가입되어 있지 않습니다. HUG/SGI 보험 가입을 권장합니다.",
        ))

    # 4. 선순위 권리
    total_prior = form.mortgage_amount + form.prior_deposits
    prior_ratio = _ratio(total_prior, market_price)
    total_liability = total_prior + deposit
    liability_ratio = _ratio(total_liability, market_price)

    pattern = get_pattern("excessive_senior_liens")
    checks[pattern.id] = FraudCheck(
        id=pattern.id,
        title=pattern.name,
        description=f"선순위 {prior_ratio:.1f}%",
        passed=prior_ratio < PRIOR_RATIO_PASS,
        risk_level=(
            RiskLevel.CRITICAL if prior_ratio >= PRIOR_RATIO_CRITICAL
            else RiskLevel.HIGH if prior_ratio >= PRIOR_RATIO_HIGH
            else RiskLevel.LOW
        ),
    )
    if liability_ratio >= LIABILITY_RATIO_EXCEEDED:
        issues.append(Issue(
            type="채무 초과",
            severity=Severity.CRITICAL,
            message="근저당과 선순위 임차보증금 합계가 시세를 초과합니다. 경매 시 보증금 전액 회수가 불가능합니다.",
        ))
    elif liability_ratio >= LIABILITY_RATIO_HIGH:
        issues.append(Issue(
            type="채무 비율 과다",
            severity=Severity.HIGH,
            message=f"총 채무 비율이 {liability_ratio:.1f}%입니다. 시세 하락 시 회수 위험이 있습니다.",
        ))

    # 5. 대리인 계약
    pattern = get_pattern("proxy_contract_fraud")
    checks[pattern.id] = FraudCheck(
        id=pattern.id,
        title=pattern.name,
        description="대리인 계약" if form.is_proxy else "본인 계약",
        passed=form.is_proxy is not True,
        risk_level=RiskLevel.CRITICAL if form.is_proxy else RiskLevel.LOW,
    )
    if form.is_proxy:
        issues.append(Issue(
            type="대리인 계약",
            severity=Severity.CRITICAL,
            message="대리인을 통한 계약입니다. 위임장 공증 확인과 실소유자 영상통화를 반드시 하세요.",
        ))

    # 6~8. 입력으로 판단할 수 없는 항목 (안내 문구만)
    for pattern_id, description in (
        ("double_contract", "전입신고 필요"),
        ("organized_fraud_ring", "중개사 자격 확인 요망"),
        ("lien_escalation", "잔금일 재확인 필요"),
    ):
        pattern = get_pattern(pattern_id)
        checks[pattern.id] = FraudCheck(
            id=pattern.id,
            title=pattern.name,
            description=description,
            passed=True,
            risk_level=RiskLevel.LOW,
        )

    # 카탈로그 순서로 정렬
    fraud_checks = [checks[p.id] for p in FRAUD_PATTERNS]

    score = calculate_score(issues)
    level = band_level(score)

    recommendations = list(MANUAL_BASE_RECOMMENDATIONS)
    if jeonse_ratio >= JEONSE_RATIO_CAUTION:
        recommendations.append("전세가율이 높으므로 전세보증보험 가입을 필수로 하세요.")
    if form.is_proxy:
        recommendations.append("실소유자와 영상통화로 본인 확인을 하세요.")
        recommendations.append("위임장은 공증된 원본을 확인하세요.")
    if form.mortgage_amount > 0:
        recommendations.append("근저당 설정 금액과 배당순위를 법무사에게 확인하세요.")

    fields = ExtractedFields(
        deposit=deposit or None,
        market_price=market_price or None,
        mortgage_amount=form.mortgage_amount or None,
        has_insurance=insurance,
        is_proxy=form.is_proxy,
    )
    owner_status = "match" if owner is True else "mismatch" if owner is False else None
    summary_panel = build_summary_panel(
        fields,
        owner_match_status=owner_status,
        overrides={"mortgage_total": format_krw(form.mortgage_amount)} if form.mortgage_amount > 0 else None,
    )

    logger.info(f"수동 입력 분석 완료: ratio={jeonse_ratio:.1f}%, score={score}, level={level.value}")

    return AnalysisResult(
        overall_score=score,
        overall_risk_level=level,
        fraud_checks=fraud_checks,
        issues=issues,
        recommendations=recommendations,
        extracted_data=fields,
        summary_panel=summary_panel,
        source=AnalysisSource.MANUAL,
        input_data=ManualMetrics(
            deposit=deposit,
            market_price=market_price,
            jeonse_ratio=round(jeonse_ratio, 1),
            mortgage_amount=form.mortgage_amount,
            prior_deposits=form.prior_deposits,
            total_liability=total_liability,
            liability_ratio=round(liability_ratio, 1),
        ),
    )
