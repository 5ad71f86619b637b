"""결과 모델 불변성 테스트."""
import asyncio

import pytest
from pydantic import ValidationError

from constract.core.models import FraudCheck, Issue, RiskLevel, Severity
from constract.core.orchestrator import NO_REGISTRY_RECOMMENDATION, AnalysisOrchestrator
from constract.core.result_formatter import format_ai_result
from constract.core.rule_analyzer import analyze_with_rules


def test_result_collections_cannot_be_extended():
    result = analyze_with_rules("", "")
    extra = FraudCheck(id="x", title="x", description="x", passed=True, risk_level=RiskLevel.LOW)

    with pytest.raises(AttributeError):
        result.fraud_checks.append(extra)
    with pytest.raises(AttributeError):
        result.issues.append(Issue(type="x", severity=Severity.WARNING, message="x"))
    with pytest.raises(AttributeError):
        result.recommendations.append("x")
    assert len(result.fraud_checks) == 8


def test_result_fields_cannot_be_reassigned():
    result = analyze_with_rules("", "")
    with pytest.raises(ValidationError):
        result.overall_score = 0


def test_ai_display_collections_are_tuples():
    result = format_ai_result({
        "riskScore": 20,
        "personalizedGuide": {"checklist": ["위임장 확인"]},
        "glossary": [{"term": "근저당", "definition": "담보 설정"}],
    })
    assert isinstance(result.matched_patterns, tuple)
    assert isinstance(result.glossary, tuple)
    assert isinstance(result.personalized_guide.checklist, tuple)


def test_finalized_result_does_not_alter_original(sample_contract):
    rule_result = analyze_with_rules(sample_contract, "")
    finalized = asyncio.run(AnalysisOrchestrator().analyze(sample_contract, ""))

    assert finalized.recommendations[0] == NO_REGISTRY_RECOMMENDATION
    assert finalized.recommendations[1:] == rule_result.recommendations
    assert NO_REGISTRY_RECOMMENDATION not in rule_result.recommendations
