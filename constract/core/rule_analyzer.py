"""
규칙 기반 분석기 (Rule-Based Analyzer)

외부 API 없이 키워드/정규식만으로 AnalysisResult를 생성한다.
AI 분석 실패 시의 복구 경로이므로 문자열 입력에 대해 예외를 던지지 않는다.

1. 사기 유형별 키워드 매칭 → FraudCheck (키워드가 하나도 없으면 passed)
2. 독립 규칙 → Issue (고액 보증금, 근저당, 대리인 계약, 미통과 critical 유형)
3. 점수 = 100 - 이슈 감점 + 통과 항목 가점
4. 기본 권장사항 3개 (+ 대리인 이슈 시 1개)
"""
import logging
from typing import List, Optional

from constract.ingest.field_extractor import extract_fields
from constract.ingest.text_normalizer import normalize_text

from .fraud_patterns import FRAUD_PATTERNS
from .models import (
    AnalysisResult,
    AnalysisSource,
    ContractStage,
    ExtractedFields,
    FraudCheck,
    Issue,
    RiskLevel,
    Severity,
)
from .scoring import band_level, calculate_score
from .summary_panel import build_summary_panel

logger = logging.getLogger(__name__)


HIGH_DEPOSIT_THRESHOLD = 300_000_000  # 3억
LIEN_KEYWORDS = ("근저당", "저당")
PROXY_KEYWORDS = ("대리", "위임")
PROXY_ISSUE_MARKERS = ("대리", "proxy")

BASE_RECOMMENDATIONS = (
    "인터넷등기소에서 등기부등본을 직접 발급하여 최신 정보를 확인하세요.",
    "잔금 당일에도 등기부등본을 재확인하세요.",
    "전세보증보험 가입 가능 여부를 HUG/SGI에 문의하세요.",
)
PROXY_RECOMMENDATION = "실소유자와 영상통화로 본인 확인을 하고, 위임장은 공증된 원본을 확인하세요."


# ===========================
# 단계별 규칙
# ===========================
def evaluate_fraud_checks(contract_text: str, registry_text: str) -> List[FraudCheck]:
    """
    카탈로그 순서대로 사기 유형 점검

    passed = 어떤 키워드도 계약서/등기부에 등장하지 않음
    """
    checks = []
    for pattern in FRAUD_PATTERNS:
        mentioned = any(
            keyword.lower() in contract_text or keyword.lower() in registry_text
            for keyword in pattern.keywords
        )
        checks.append(FraudCheck(
            id=pattern.id,
            title=pattern.name,
            description=pattern.description,
            passed=not mentioned,
            risk_level=pattern.risk_level,
        ))
    return checks


def extract_issues(
    contract_text: str,
    registry_text: str,
    fields: ExtractedFields,
    fraud_checks: List[FraudCheck],
) -> List[Issue]:
    """사기 유형 점검과 별개인 규칙 기반 이슈 추출"""
    issues = []

    # 고액 보증금
    if fields.deposit is not None and fields.deposit > HIGH_DEPOSIT_THRESHOLD:
        issues.append(Issue(
            type="고액 보증금",
            severity=Severity.HIGH,
            message="보증금이 3억원 이상입니다. 전세보증보험 가입을 반드시 확인하세요.",
        ))

    # 선순위 근저당
    if any(keyword in registry_text for keyword in LIEN_KEYWORDS):
        issues.append(Issue(
            type="근저당 설정",
            severity=Severity.WARNING,
            message="등기부에 근저당이 설정되어 있습니다. 설정 금액과 선순위를 확인하세요.",
        ))

    # 대리인 계약
    if any(keyword in contract_text for keyword in PROXY_KEYWORDS):
        issues.append(Issue(
            type="대리인 계약",
            severity=Severity.CRITICAL,
            message="대리인 계약으로 보입니다. 반드시 위임장 공증과 실소유자 확인이 필요합니다.",
        ))

    # 통과하지 못한 critical 유형
    for check in fraud_checks:
        if not check.passed and check.risk_level == RiskLevel.CRITICAL:
            issues.append(Issue(
                type=check.title,
                severity=Severity.WARNING,
                message=f"{check.description} 관련 항목이 발견되었습니다. 직접 확인이 필요합니다.",
            ))

    return issues


def generate_recommendations(issues: List[Issue]) -> List[str]:
    recommendations = list(BASE_RECOMMENDATIONS)
    if any(marker in issue.type.lower() for issue in issues for marker in PROXY_ISSUE_MARKERS):
        recommendations.append(PROXY_RECOMMENDATION)
    return recommendations


# ===========================
# 분석기
# ===========================
class RuleBasedAnalyzer:
    """키워드/정규식 기반 분석기"""

    name = "rules"

    def run(
        self,
        contract_text: Optional[str],
        registry_text: Optional[str] = "",
        stage: Optional[ContractStage] = None,
    ) -> AnalysisResult:
        """동기 분석 (원문 텍스트 입력, 내부에서 정규화)"""
        contract = normalize_text(contract_text)
        registry = normalize_text(registry_text)

        fraud_checks = evaluate_fraud_checks(contract, registry)
        fields = extract_fields(contract, registry)
        issues = extract_issues(contract, registry, fields, fraud_checks)

        score = calculate_score(issues, fraud_checks)
        level = band_level(score)

        logger.info(
            f"규칙 기반 분석 완료: score={score}, level={level.value}, "
            f"issues={len(issues)}, failed_checks={sum(not c.passed for c in fraud_checks)}"
        )

        return AnalysisResult(
            overall_score=score,
            overall_risk_level=level,
            fraud_checks=fraud_checks,
            issues=issues,
            recommendations=generate_recommendations(issues),
            extracted_data=fields,
            summary_panel=build_summary_panel(fields, contract, registry),
            source=AnalysisSource.RULES,
            stage=stage,
        )

    async def analyze(
        self,
        contract_text: str,
        registry_text: str = "",
        stage: ContractStage = ContractStage.PRE_CONTRACT,
    ) -> AnalysisResult:
        return self.run(contract_text, registry_text, stage)


def analyze_with_rules(contract_text: Optional[str], registry_text: Optional[str] = "") -> AnalysisResult:
    """규칙 기반 분석 단축 함수"""
    return RuleBasedAnalyzer().run(contract_text, registry_text)
