"""수동 입력 분석 테스트."""
import pytest

from constract.core.manual_analyzer import ManualInput, analyze_manual_input
from constract.core.models import AnalysisSource, RiskLevel, Severity


def _check(result, check_id):
    return next(c for c in result.fraud_checks if c.id == check_id)


def test_high_jeonse_ratio_scenario():
    result = analyze_manual_input({"deposit": "280000000", "marketPrice": "350000000"})

    assert result.source == AnalysisSource.MANUAL
    assert result.input_data.jeonse_ratio == pytest.approx(80.0)
    assert _check(result, "empty_shell_jeonse").passed is False
    assert [i.severity for i in result.issues] == [Severity.CRITICAL, Severity.HIGH]
    # 전세가율 critical 25 + 총 채무 비율 80% high 15
    assert result.overall_score == 60
    assert result.overall_risk_level == RiskLevel.MEDIUM
    assert len(result.fraud_checks) == 8


def test_invalid_amounts_degrade_to_zero():
    result = analyze_manual_input({"deposit": "abc", "market_price": "시세 모름"})

    assert result.input_data.deposit == 0
    assert result.input_data.jeonse_ratio == 0.0
    assert _check(result, "empty_shell_jeonse").passed is True
    assert result.overall_score == 100


def test_amounts_with_commas():
    form = ManualInput.model_validate({"deposit": "150,000,000", "marketPrice": "300,000,000"})
    assert form.deposit == 150_000_000
    assert form.market_price == 300_000_000


def test_official_price_estimates_market_price():
    result = analyze_manual_input({"deposit": 150_000_000, "officialPrice": "200000000"})

    assert result.input_data.market_price == 300_000_000
    assert result.input_data.jeonse_ratio == pytest.approx(50.0)


def test_flags_create_issues():
    result = analyze_manual_input({
        "deposit": "200000000",
        "marketPrice": "400000000",
        "mortgageAmount": "100000000",
        "verifiedOwner": False,
        "hasInsurance": "false",
        "isProxy": True,
    })

    types = [issue.type for issue in result.issues]
    assert types == ["소유자 불일치", "보증보험 미가입", "대리인 계약"]
    assert _check(result, "owner_mismatch").passed is False
    assert _check(result, "proxy_contract_fraud").passed is False
    # 선순위 25% → 통과
    assert _check(result, "excessive_senior_liens").passed is True
    assert result.input_data.total_liability == 300_000_000
    assert result.input_data.liability_ratio == pytest.approx(75.0)
    assert result.overall_score == 35
    assert result.overall_risk_level == RiskLevel.CRITICAL
    assert result.summary_panel.mortgage_total == "1억원"
    assert "실소유자와 영상통화로 본인 확인을 하세요." in result.recommendations


def test_liability_exceeds_market_price():
    result = analyze_manual_input({
        "deposit": "200000000",
        "marketPrice": "300000000",
        "mortgageAmount": "100000000",
        "priorDeposits": "50000000",
    })

    assert any(issue.type == "채무 초과" for issue in result.issues)
    assert _check(result, "excessive_senior_liens").passed is False  # 선순위 50%
    assert _check(result, "excessive_senior_liens").risk_level == RiskLevel.HIGH


def test_placeholder_checks_always_pass():
    result = analyze_manual_input({})
    for check_id in ("double_contract", "organized_fraud_ring", "lien_escalation"):
        assert _check(result, check_id).passed is True
