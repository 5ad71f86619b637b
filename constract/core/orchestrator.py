"""
분석 오케스트레이터

1. AI 분석기가 있으면 먼저 시도
2. 어떤 예외든 (호출 실패, JSON 파싱 실패, 검증 실패) 로그 후 규칙 기반으로 전환
3. 자격증명이 없으면 AI 분석기 없이 바로 규칙 기반

문서 분석은 문자열 입력에 대해 예외를 던지지 않는다.
"""
import logging
from typing import Any, Mapping, Optional, Union

from .ai_analyzer import AiAssistedAnalyzer
from .base import RiskAnalyzer
from .llm_factory import create_llm
from .manual_analyzer import ManualInput, analyze_manual_input
from .models import AnalysisResult, ContractStage
from .rule_analyzer import RuleBasedAnalyzer
from .settings import Settings

logger = logging.getLogger(__name__)


NO_REGISTRY_RECOMMENDATION = "등기부등본을 추가로 분석하면 더 정확한 결과를 얻을 수 있습니다."


class AnalysisOrchestrator:
    """AI 우선, 규칙 기반 폴백 분석 진입점"""

    def __init__(
        self,
        ai_analyzer: Optional[RiskAnalyzer] = None,
        rule_analyzer: Optional[RuleBasedAnalyzer] = None,
    ):
        self.ai_analyzer = ai_analyzer
        self.rule_analyzer = rule_analyzer or RuleBasedAnalyzer()

    @property
    def ai_enabled(self) -> bool:
        return self.ai_analyzer is not None

    async def analyze(
        self,
        contract_text: Optional[str],
        registry_text: Optional[str] = "",
        stage: ContractStage = ContractStage.PRE_CONTRACT,
    ) -> AnalysisResult:
        """
        계약서 + 등기부 텍스트 분석

        Args:
            contract_text: OCR 추출 계약서 텍스트
            registry_text: OCR 추출 등기부등본 텍스트 (없으면 빈 문자열)
            stage: 계약 단계

        Returns:
            AnalysisResult (AI 또는 규칙 기반)
        """
        contract_text = contract_text or ""
        registry_text = registry_text or ""

        if self.ai_analyzer is not None:
            try:
                result = await self.ai_analyzer.analyze(contract_text, registry_text, stage)
                return self._finalize(result, registry_text)
            except Exception as e:
                logger.warning(f"AI 분석 실패, 규칙 기반 분석으로 전환: {type(e).__name__}: {e}")

        result = self.rule_analyzer.run(contract_text, registry_text, stage)
        return self._finalize(result, registry_text)

    def analyze_manual_input(self, form_fields: Union[ManualInput, Mapping[str, Any]]) -> AnalysisResult:
        """수동 입력 분석 (LLM 미사용)"""
        return analyze_manual_input(form_fields)

    @staticmethod
    def _finalize(result: AnalysisResult, registry_text: str) -> AnalysisResult:
        if registry_text.strip():
            return result
        return result.model_copy(update={
            "no_registry": True,
            "recommendations": (NO_REGISTRY_RECOMMENDATION, *result.recommendations),
        })


def create_orchestrator(config: Settings) -> AnalysisOrchestrator:
    """
    설정으로부터 오케스트레이터 생성

    API 키가 없으면 AI 분석기 없이 규칙 기반만 사용한다.
    """
    llm = create_llm(config)
    ai_analyzer = AiAssistedAnalyzer(llm) if llm is not None else None
    logger.info(f"분석 오케스트레이터 생성: ai_enabled={ai_analyzer is not None}, provider={config.primary_llm}")
    return AnalysisOrchestrator(ai_analyzer=ai_analyzer)
