"""AI 분석기 테스트 (네트워크 없음)."""
import asyncio
import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from constract.core.ai_analyzer import AiAssistedAnalyzer, ensure_text, parse_llm_json
from constract.core.exceptions import AIServiceError, MalformedResponseError
from constract.core.models import AnalysisSource, RiskLevel


AI_RESPONSE = {
    "riskScore": 30,
    "fraudChecks": {"깡통전세": {"detected": True, "reason": "전세가율 80%"}},
    "issues": [{"type": "전세가율 과도", "severity": "critical", "message": "전세가율이 높습니다."}],
    "recommendations": ["전세보증보험 가입 필수"],
}


def test_parse_llm_json_strips_code_fence():
    content = "분석 결과입니다.\n```json\n{\"riskScore\": 10}\n```"
    assert parse_llm_json(content) == {"riskScore": 10}


def test_parse_llm_json_falls_back_to_outer_braces():
    content = "결과: {\"riskScore\": 55, \"issues\": []} 이상입니다."
    assert parse_llm_json(content)["riskScore"] == 55


@pytest.mark.parametrize("content", ["", "JSON 아님", "[1, 2, 3]", "{잘못된 json}"])
def test_parse_llm_json_rejects_invalid(content):
    with pytest.raises(MalformedResponseError):
        parse_llm_json(content)


def test_ensure_text_joins_content_blocks():
    assert ensure_text([{"type": "text", "text": "{\"a\":"}, " 1}"]) == "{\"a\": 1}"


def test_analyze_with_fake_llm(sample_contract, sample_registry):
    llm = FakeListChatModel(responses=[json.dumps(AI_RESPONSE, ensure_ascii=False)])
    result = asyncio.run(AiAssistedAnalyzer(llm).analyze(sample_contract, sample_registry))

    assert result.source == AnalysisSource.AI
    assert result.overall_score == 70
    assert result.overall_risk_level == RiskLevel.MEDIUM
    assert result.fraud_checks[0].passed is False
    assert result.recommendations == ("전세보증보험 가입 필수",)


def test_llm_failure_raises_ai_service_error(failing_llm):
    with pytest.raises(AIServiceError):
        asyncio.run(AiAssistedAnalyzer(failing_llm).analyze("계약서"))
    assert failing_llm.calls == 1


def test_missing_risk_score_raises():
    llm = FakeListChatModel(responses=["{\"issues\": []}"])
    with pytest.raises(MalformedResponseError):
        asyncio.run(AiAssistedAnalyzer(llm).analyze("계약서"))
