"""
AI 분석기 (AI-Assisted Analyzer)

LLM에 계약서/등기부 원문을 보내 구조화된 JSON 위험 분석을 받는다.
외부 서비스 어댑터 + 응답 정규화만 담당하며, 실패 시 규칙 기반으로 직접 전환하지 않는다.
(전환은 AnalysisOrchestrator 책임)
"""
import json
import logging
import re
from typing import Any, Dict, List

from langchain_core.language_models import BaseChatModel

from constract.ingest.text_normalizer import normalize_text

from .exceptions import AIServiceError, MalformedResponseError
from .models import AnalysisResult, ContractStage
from .prompts import build_analysis_messages
from .result_formatter import format_ai_result

logger = logging.getLogger(__name__)


CODE_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


# ===========================
# 응답 파싱
# ===========================
def ensure_text(content: Any) -> str:
    """
    LangChain 응답의 content를 문자열로 변환

    content가 str 대신 list[str | dict] 조각으로 올 수 있다.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: List[str] = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict):
                text = item.get("text") or item.get("content") or ""
                if text:
                    parts.append(str(text))
            else:
                parts.append(str(item))
        return "".join(parts)
    return str(content)


def strip_code_fences(content: str) -> str:
    """```json ... ``` 마크다운 코드 블록 제거"""
    match = CODE_FENCE_PATTERN.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()


def parse_llm_json(content: str) -> Dict[str, Any]:
    """
    LLM 응답 문자열 → dict

    1. 코드 블록 제거 후 json.loads
    2. 실패 시 가장 바깥쪽 { ... } 구간만 잘라 한 번 더 시도

    Raises:
        MalformedResponseError: 두 번 모두 실패하거나 JSON 객체가 아닌 경우
    """
    text = strip_code_fences(content or "")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise MalformedResponseError("응답에서 JSON 객체를 찾을 수 없음")
        try:
            parsed = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"JSON 파싱 실패: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError(f"JSON 객체가 아님: {type(parsed).__name__}")
    return parsed


# ===========================
# 분석기
# ===========================
class AiAssistedAnalyzer:
    """LLM 기반 분석기 (단일 호출, 재시도 없음)"""

    name = "ai"

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def analyze(
        self,
        contract_text: str,
        registry_text: str = "",
        stage: ContractStage = ContractStage.PRE_CONTRACT,
    ) -> AnalysisResult:
        """
        LLM 분석 실행

        Raises:
            AIServiceError: LLM 호출 실패
            MalformedResponseError: 응답 JSON 파싱 실패 또는 riskScore 누락
        """
        contract_text = contract_text or ""
        registry_text = registry_text or ""
        messages = build_analysis_messages(contract_text, registry_text, stage)

        logger.info(f"AI 분석 요청: stage={stage.value}, contract={len(contract_text)}자, registry={len(registry_text)}자")
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            raise AIServiceError(f"LLM 호출 실패: {e}") from e

        content = ensure_text(response.content)
        payload = parse_llm_json(content)
        result = format_ai_result(
            payload,
            stage=stage,
            contract_text=normalize_text(contract_text),
            registry_text=normalize_text(registry_text),
        )

        logger.info(f"✅ AI 분석 완료: score={result.overall_score}, level={result.overall_risk_level.value}")
        return result
