"""분석 오케스트레이터 테스트 (AI 실패 시 규칙 기반 폴백)."""
import asyncio
import json
import logging

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from constract.core.ai_analyzer import AiAssistedAnalyzer
from constract.core.models import AnalysisSource, ContractStage, RiskLevel
from constract.core.orchestrator import (
    NO_REGISTRY_RECOMMENDATION,
    AnalysisOrchestrator,
    create_orchestrator,
)
from constract.core.settings import Settings


def _run(orchestrator, *args, **kwargs):
    return asyncio.run(orchestrator.analyze(*args, **kwargs))


def test_rules_only_without_ai(rules_only_orchestrator, sample_contract, sample_registry):
    result = _run(rules_only_orchestrator, sample_contract, sample_registry)

    assert result.source == AnalysisSource.RULES
    assert result.no_registry is False
    assert result.overall_risk_level is not None


def test_falls_back_when_llm_fails(failing_llm, sample_contract, sample_registry):
    orchestrator = AnalysisOrchestrator(ai_analyzer=AiAssistedAnalyzer(failing_llm))
    result = _run(orchestrator, sample_contract, sample_registry, ContractStage.POST_CONTRACT)

    assert failing_llm.calls == 1
    assert result.source == AnalysisSource.RULES
    assert result.stage == ContractStage.POST_CONTRACT
    assert len(result.fraud_checks) == 8


@pytest.mark.parametrize("content", ["JSON 아님", "{\"issues\": []}", "{\"riskScore\": \"높음\"}"])
def test_falls_back_on_malformed_response(content, sample_contract, sample_registry):
    orchestrator = AnalysisOrchestrator(ai_analyzer=AiAssistedAnalyzer(FakeListChatModel(responses=[content])))
    result = _run(orchestrator, sample_contract, sample_registry)

    assert result.source == AnalysisSource.RULES


def test_uses_ai_result_when_valid(sample_contract, sample_registry):
    llm = FakeListChatModel(responses=[json.dumps({"riskScore": 15})])
    result = _run(AnalysisOrchestrator(ai_analyzer=AiAssistedAnalyzer(llm)), sample_contract, sample_registry)

    assert result.source == AnalysisSource.AI
    assert result.overall_score == 85
    assert result.overall_risk_level == RiskLevel.LOW


@pytest.mark.parametrize("registry", ["", None, "   "])
def test_missing_registry_adds_recommendation(rules_only_orchestrator, sample_contract, registry):
    result = _run(rules_only_orchestrator, sample_contract, registry)

    assert result.no_registry is True
    assert result.recommendations[0] == NO_REGISTRY_RECOMMENDATION


def test_empty_documents(rules_only_orchestrator):
    result = _run(rules_only_orchestrator, None, None)

    assert result.overall_score == 100
    assert result.overall_risk_level == RiskLevel.LOW
    assert result.issues == ()


def test_create_orchestrator_without_credentials():
    config = Settings(_env_file=None, openai_api_key=None, anthropic_api_key=None)
    assert create_orchestrator(config).ai_enabled is False


def test_create_orchestrator_with_credentials():
    config = Settings(_env_file=None, primary_llm="openai", openai_api_key="sk-test")
    assert create_orchestrator(config).ai_enabled is True


def test_create_orchestrator_ignores_other_provider_key():
    config = Settings(_env_file=None, primary_llm="claude", openai_api_key="sk-test", anthropic_api_key="")
    assert create_orchestrator(config).ai_enabled is False


def test_fallback_logs_completion_once(failing_llm, sample_contract, caplog):
    orchestrator = AnalysisOrchestrator(ai_analyzer=AiAssistedAnalyzer(failing_llm))
    with caplog.at_level(logging.INFO, logger="constract"):
        _run(orchestrator, sample_contract, "")

    completed = [r for r in caplog.records if r.getMessage().startswith("규칙 기반 분석 완료")]
    assert len(completed) == 1
    assert any(r.levelno == logging.WARNING for r in caplog.records)
