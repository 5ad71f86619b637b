"""
LLM 응답 → AnalysisResult 변환

HTTP 호출과 분리된 순수 함수. LLM 응답 스키마가 바뀌어도 이 모듈만 테스트하면 된다.

- riskScore (0~100, 높을수록 위험) → overall_score = 100 - riskScore (높을수록 안전)
- fraudChecks 맵 / matchedPatterns → 카탈로그 순서의 FraudCheck 8개
- 이슈 심각도 critical/high 외에는 warning 으로 통일
"""
import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from constract.ingest.field_extractor import parse_amount, parse_korean_amount

from .exceptions import MalformedResponseError
from .fraud_patterns import FRAUD_PATTERNS, find_pattern_by_label
from .models import (
    AnalysisResult,
    AnalysisSource,
    ContractStage,
    DocumentVerification,
    ExtractedFields,
    FraudCheck,
    GlossaryTerm,
    GraphEntity,
    GraphRelation,
    Issue,
    MatchedPattern,
    PersonalizedGuide,
    Severity,
    VerificationItem,
)
from .rule_analyzer import BASE_RECOMMENDATIONS
from .scoring import band_level
from .summary_panel import build_summary_panel

logger = logging.getLogger(__name__)


MATCH_CONFIDENCE_THRESHOLD = 0.5

SEVERITY_MAP = {
    "critical": Severity.CRITICAL,
    "high": Severity.HIGH,
}


# ===========================
# 값 변환 헬퍼
# ===========================
def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _as_amount(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    amount = None
    if isinstance(value, str):
        amount = parse_korean_amount(value)
    if amount is None:
        amount = parse_amount(value)
    return amount if amount > 0 else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "예", "가입", "o"):
            return True
        if lowered in ("false", "no", "아니오", "미가입", "x"):
            return False
    return None


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def parse_risk_score(payload: Mapping[str, Any]) -> int:
    """필수 필드 riskScore 읽기 (0~100 정수로 보정)"""
    raw = payload.get("riskScore")
    if raw is None or isinstance(raw, bool):
        raise MalformedResponseError("riskScore 필드 없음")
    try:
        score = float(raw)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"riskScore가 숫자가 아님: {raw!r}") from e
    if math.isnan(score) or math.isinf(score):
        raise MalformedResponseError(f"riskScore가 유효하지 않음: {raw!r}")
    return int(max(0, min(100, round(score))))


# ===========================
# 섹션별 변환
# ===========================
def format_extracted_fields(data: Mapping[str, Any]) -> ExtractedFields:
    return ExtractedFields(
        landlord=_as_str(data.get("landlord")),
        tenant=_as_str(data.get("tenant")),
        owner=_as_str(data.get("owner")),
        deposit=_as_amount(data.get("deposit")),
        market_price=_as_amount(data.get("marketPrice")),
        mortgage_amount=_as_amount(data.get("mortgageAmount")),
        address=_as_str(data.get("address")),
        contract_date=_as_str(data.get("contractDate")),
        start_date=_as_str(data.get("startDate")),
        end_date=_as_str(data.get("endDate")),
        has_insurance=_as_bool(data.get("hasInsurance")),
        is_proxy=_as_bool(data.get("isProxy")),
    )


def format_matched_patterns(items: List[Any]) -> List[MatchedPattern]:
    matched = []
    for item in items:
        item = _as_dict(item)
        label = item.get("id") or item.get("patternId") or item.get("name")
        pattern = find_pattern_by_label(label) if label else None
        if pattern is None:
            logger.debug(f"카탈로그에 없는 사기 유형 무시: {label!r}")
            continue
        matched.append(MatchedPattern(
            pattern_id=pattern.id,
            name=pattern.name,
            confidence=max(0.0, min(1.0, _as_float(item.get("confidence")))),
            reasoning=_as_str(item.get("reasoning")) or "",
        ))
    return matched


def _is_detected(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    value = _as_dict(value)
    return _as_bool(value.get("detected")) is True


def format_fraud_checks(
    checks_map: Mapping[str, Any],
    matched_patterns: List[MatchedPattern],
) -> List[FraudCheck]:
    """
    LLM의 자유 형식 fraudChecks 맵을 카탈로그에 매핑

    맵 키는 id / 이름 / 별칭 어느 것이든 허용. 언급되지 않은 유형은 통과.
    """
    detected_ids = set()
    for label, value in checks_map.items():
        pattern = find_pattern_by_label(label)
        if pattern is not None and _is_detected(value):
            detected_ids.add(pattern.id)

    reasoning = {}
    for match in matched_patterns:
        if match.confidence >= MATCH_CONFIDENCE_THRESHOLD:
            detected_ids.add(match.pattern_id)
            if match.reasoning:
                reasoning[match.pattern_id] = match.reasoning

    return [
        FraudCheck(
            id=pattern.id,
            title=pattern.name,
            description=reasoning.get(pattern.id, pattern.description),
            passed=pattern.id not in detected_ids,
            risk_level=pattern.risk_level,
        )
        for pattern in FRAUD_PATTERNS
    ]


def format_issues(items: List[Any]) -> List[Issue]:
    issues = []
    for item in items:
        if not isinstance(item, dict):
            continue
        severity = str(item.get("severity", "")).strip().lower()
        issues.append(Issue(
            type=_as_str(item.get("type")) or "기타",
            severity=SEVERITY_MAP.get(severity, Severity.WARNING),
            message=_as_str(item.get("message")) or "",
        ))
    return issues


def _verification_item(data: Any) -> VerificationItem:
    data = _as_dict(data)
    status = str(data.get("status", "unknown")).lower()
    return VerificationItem(
        status=status if status in ("match", "mismatch") else "unknown",
        contract_value=_as_str(data.get("contractValue")),
        registry_value=_as_str(data.get("registryValue")),
        message=_as_str(data.get("message")),
    )


def format_document_verification(data: Any) -> Optional[DocumentVerification]:
    data = _as_dict(data)
    if not data:
        return None
    return DocumentVerification(
        owner_match=_verification_item(data.get("ownerMatch")),
        address_match=_verification_item(data.get("addressMatch")),
        area_match=_verification_item(data.get("areaMatch")),
    )


def format_personalized_guide(data: Any) -> Optional[PersonalizedGuide]:
    data = _as_dict(data)
    if not data:
        return None

    def strings(value: Any) -> List[str]:
        return [s for s in (_as_str(v) for v in _as_list(value)) if s]

    return PersonalizedGuide(
        checklist=strings(data.get("checklist")),
        warnings=strings(data.get("warnings")),
        next_steps=strings(data.get("nextSteps")),
    )


def format_entities(items: List[Any]) -> List[GraphEntity]:
    entities = []
    for item in items:
        item = _as_dict(item)
        entity_id = _as_str(item.get("id"))
        if not entity_id:
            continue
        entities.append(GraphEntity(
            id=entity_id,
            type=_as_str(item.get("type")) or "person",
            name=_as_str(item.get("name")) or "",
            value=_as_str(item.get("value")),
        ))
    return entities


def format_relations(items: List[Any]) -> List[GraphRelation]:
    relations = []
    for item in items:
        item = _as_dict(item)
        source, target = _as_str(item.get("source")), _as_str(item.get("target"))
        if not source or not target:
            continue
        relations.append(GraphRelation(
            source=source,
            target=target,
            type=_as_str(item.get("type")) or "",
            label=_as_str(item.get("label")) or "",
        ))
    return relations


def format_glossary(items: List[Any]) -> List[GlossaryTerm]:
    terms = []
    for item in items:
        item = _as_dict(item)
        term, definition = _as_str(item.get("term")), _as_str(item.get("definition"))
        if term and definition:
            terms.append(GlossaryTerm(term=term, definition=definition))
    return terms


# ===========================
# 통합 변환
# ===========================
def format_ai_result(
    payload: Mapping[str, Any],
    stage: Optional[ContractStage] = None,
    contract_text: str = "",
    registry_text: str = "",
) -> AnalysisResult:
    """
    LLM JSON 응답을 AnalysisResult로 변환

    Args:
        payload: 파싱된 LLM 응답
        stage: 분석 요청 단계
        contract_text: 정규화된 계약서 텍스트 (요약 패널 보조)
        registry_text: 정규화된 등기부 텍스트 (요약 패널 보조)

    Raises:
        MalformedResponseError: riskScore 누락/비정상
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("응답이 JSON 객체가 아님")

    risk_score = parse_risk_score(payload)
    overall_score = 100 - risk_score

    fields = format_extracted_fields(_as_dict(payload.get("extractedData")))
    matched_patterns = format_matched_patterns(_as_list(payload.get("matchedPatterns")))
    fraud_checks = format_fraud_checks(_as_dict(payload.get("fraudChecks")), matched_patterns)
    verification = format_document_verification(payload.get("documentVerification"))

    recommendations = [r for r in (_as_str(v) for v in _as_list(payload.get("recommendations"))) if r]

    summary_panel = build_summary_panel(
        fields,
        contract_text=contract_text,
        registry_text=registry_text,
        owner_match_status=verification.owner_match.status if verification else None,
        overrides=_as_dict(payload.get("summary_panel")),
    )

    return AnalysisResult(
        overall_score=overall_score,
        overall_risk_level=band_level(overall_score),
        fraud_checks=fraud_checks,
        issues=format_issues(_as_list(payload.get("issues"))),
        recommendations=recommendations or list(BASE_RECOMMENDATIONS),
        extracted_data=fields,
        summary_panel=summary_panel,
        source=AnalysisSource.AI,
        stage=stage,
        matched_patterns=matched_patterns,
        entities=format_entities(_as_list(payload.get("entities"))),
        relations=format_relations(_as_list(payload.get("relations"))),
        document_verification=verification,
        personalized_guide=format_personalized_guide(payload.get("personalizedGuide")),
        glossary=format_glossary(_as_list(payload.get("glossary"))),
    )
