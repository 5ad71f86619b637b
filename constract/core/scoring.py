"""
점수 / 위험 수준 계산

모든 분석 경로(AI, 규칙, 수동 입력)가 같은 구간 함수를 사용한다.

- 0~39: critical
- 40~59: high
- 60~79: medium
- 80~100: low
"""
from typing import Iterable, Optional

from .models import FraudCheck, Issue, RiskLevel, Severity


BASE_SCORE = 100
PASSED_CHECK_BONUS = 2
OTHER_SEVERITY_PENALTY = 5

SEVERITY_PENALTY = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.WARNING: 10,
}

# 전세가율 위험 기준 (%)
JEONSE_RATIO_CAUTION = 70
JEONSE_RATIO_WARNING = 80
JEONSE_RATIO_DANGER = 90

# 공시지가 → 매매가 추정 배율
OFFICIAL_PRICE_MULTIPLIER = 1.5


def band_level(score: float) -> RiskLevel:
    """안전 점수 → 위험 수준"""
    if score < 40:
        return RiskLevel.CRITICAL
    if score < 60:
        return RiskLevel.HIGH
    if score < 80:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def clamp_score(score: float) -> int:
    return int(max(0, min(100, round(score))))


def calculate_score(issues: Iterable[Issue], fraud_checks: Iterable[FraudCheck] = ()) -> int:
    """
    100점에서 시작하는 안전 점수

    - 이슈별 감점: critical 25 / high 15 / warning 10 / 기타 5
    - 통과한 점검 항목마다 2점 가점
    - 0~100 범위로 제한
    """
    score = BASE_SCORE
    for issue in issues:
        score -= SEVERITY_PENALTY.get(issue.severity, OTHER_SEVERITY_PENALTY)
    for check in fraud_checks:
        if check.passed:
            score += PASSED_CHECK_BONUS
    return clamp_score(score)


def calculate_jeonse_ratio(deposit: Optional[int], price: Optional[int]) -> float:
    """
    전세가율 = 보증금 / 시세 * 100

    시세가 없거나 0 이하이면 0.0
    """
    if not deposit or price is None or price <= 0:
        return 0.0
    return (deposit / price) * 100


def jeonse_ratio_level(ratio: float) -> str:
    """전세가율 표시용 등급 (안전 / 주의 / 위험)"""
    if ratio >= JEONSE_RATIO_DANGER:
        return "위험"
    if ratio >= JEONSE_RATIO_WARNING:
        return "주의"
    return "안전"


def estimate_price_from_official(official_price: int) -> int:
    """공시지가로 매매가 추정 (공시지가의 150%)"""
    return int(official_price * OFFICIAL_PRICE_MULTIPLIER)
