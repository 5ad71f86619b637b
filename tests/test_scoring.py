"""점수 / 위험 수준 계산 테스트."""
import pytest

from constract.core.models import FraudCheck, Issue, RiskLevel, Severity
from constract.core.scoring import (
    band_level,
    calculate_jeonse_ratio,
    calculate_score,
    estimate_price_from_official,
    jeonse_ratio_level,
)


@pytest.mark.parametrize(
    "score, level",
    [
        (0, RiskLevel.CRITICAL),
        (39, RiskLevel.CRITICAL),
        (40, RiskLevel.HIGH),
        (59, RiskLevel.HIGH),
        (60, RiskLevel.MEDIUM),
        (79, RiskLevel.MEDIUM),
        (80, RiskLevel.LOW),
        (100, RiskLevel.LOW),
    ],
)
def test_band_level_boundaries(score, level):
    assert band_level(score) == level


def _issue(severity):
    return Issue(type="테스트", severity=severity, message="")


def _check(passed):
    return FraudCheck(id="x", title="x", description="x", passed=passed, risk_level=RiskLevel.HIGH)


def test_calculate_score_penalties():
    issues = [_issue(Severity.CRITICAL), _issue(Severity.HIGH), _issue(Severity.WARNING)]
    assert calculate_score(issues) == 50


def test_calculate_score_passed_bonus_is_clamped():
    assert calculate_score([], [_check(True)] * 8) == 100
    assert calculate_score([_issue(Severity.HIGH)], [_check(True), _check(False)]) == 87


def test_calculate_score_never_negative():
    assert calculate_score([_issue(Severity.CRITICAL)] * 10) == 0


def test_jeonse_ratio():
    assert calculate_jeonse_ratio(280_000_000, 350_000_000) == pytest.approx(80.0)
    assert calculate_jeonse_ratio(100, 0) == 0.0
    assert calculate_jeonse_ratio(None, 100) == 0.0


def test_jeonse_ratio_level():
    assert jeonse_ratio_level(79.9) == "안전"
    assert jeonse_ratio_level(80) == "주의"
    assert jeonse_ratio_level(95) == "위험"


def test_estimate_price_from_official():
    assert estimate_price_from_official(200_000_000) == 300_000_000


def test_jeonse_ratio_with_negative_price():
    assert calculate_jeonse_ratio(280_000_000, -350_000_000) == 0.0
